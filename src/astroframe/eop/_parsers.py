"""Parsers for IERS Earth Orientation Parameter data files.

Three layouts are supported:

- IERS C04 series (``eopc04`` files): whitespace delimited columns
  ``year month day MJD x y UT1-UTC LOD dPsi|dX dEps|dY`` followed by error
  columns.  The C04 20 series adds an hour column after the day and orders
  the values ``x y UT1-UTC dX dY xrt yrt LOD``; both are recognized.  Header
  lines are skipped.
- IERS standard format (``finals2000A.*``), also known as Bulletin A/B
  format, with fixed column ranges.
- NCEP prediction files (``eop_pred_ncep.final``): whitespace delimited
  ``MJD x y UT1-UTC LOD dPsi dEps``.

Every parser returns :class:`~astroframe.eop._types.EOPRecord` values with
angles in arcseconds and times in seconds, or ``None`` for lines that do
not hold a record.
"""

from __future__ import annotations

import math
from pathlib import Path

from astroframe.eop._types import EOPRecord
from astroframe.errors import InvalidInputError

# Column ranges for IERS standard format (0-indexed Python slices)
_MJD_RANGE = slice(6, 15)
_PM_X_RANGE = slice(17, 27)
_PM_Y_RANGE = slice(36, 46)
_UT1_UTC_RANGE = slice(58, 68)
_LOD_RANGE = slice(78, 86)
_DX_RANGE = slice(96, 106)
_DY_RANGE = slice(115, 125)
_STANDARD_LINE_LENGTH = 187

_C04_MIN_FIELDS = 10
_C04_20_MIN_FIELDS = 13
_NCEP_MIN_FIELDS = 7


def parse_c04_line(line: str) -> EOPRecord | None:
    """Parse a single line of an IERS C04 series file.

    Args:
        line: A line of the file.

    Returns:
        The record, or ``None`` for header, blank or malformed lines.

    Examples:
        ```python
        from astroframe.eop import parse_c04_line
        rec = parse_c04_line(
            "2000   1   1  51544   0.043282   0.377909   0.3554880   0.0009830"
            "  -0.050471  -0.002427   0.000075   0.000069  0.0000040  0.0000064"
            "   0.000336   0.000337"
        )
        rec.mjd  # 51544
        ```
    """
    fields = line.split()
    if len(fields) < _C04_MIN_FIELDS:
        return None
    try:
        int(fields[0])
        int(fields[1])
        int(fields[2])
        fourth = float(fields[3])
        if fourth < 24.0:
            # C04 20: the fourth column is the hour
            if len(fields) < _C04_20_MIN_FIELDS:
                return None
            mjd = int(float(fields[4]))
            pm_x, pm_y, ut1_utc, dx, dy = (float(v) for v in fields[5:10])
            lod = float(fields[12])
            return EOPRecord(mjd, pm_x, pm_y, ut1_utc, lod, dx, dy)
        mjd = int(fourth)
        values = [float(v) for v in fields[4:10]]
    except ValueError:
        return None
    return EOPRecord(mjd, *values)


def parse_c04_file(filepath: str | Path) -> list[EOPRecord]:
    """Parse an entire IERS C04 series file.

    Args:
        filepath: Path to the file.

    Returns:
        Records in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        InvalidInputError: If no valid lines were parsed.
    """
    records = []
    with open(filepath, encoding="iso-8859-1") as f:
        for line in f:
            record = parse_c04_line(line)
            if record is not None:
                records.append(record)

    if not records:
        raise InvalidInputError(f"No valid EOP data found in {filepath}")
    return records


def _optional(text: str, scale: float) -> float:
    try:
        return float(text.strip()) * scale
    except ValueError:
        return math.nan


def parse_finals_line(line: str) -> EOPRecord | None:
    """Parse a single line of an IERS standard format file.

    Lines shorter than 187 characters are padded with spaces (prediction
    lines may have trailing whitespace trimmed). Lines longer than 187
    characters or lines where required fields (MJD, PM_X, PM_Y, UT1-UTC)
    cannot be parsed are skipped (returns None).

    Args:
        line: A single line from the IERS standard format file.

    Returns:
        The record, with LOD, dX and dY set to NaN where the columns are
        blank, or ``None``.
    """
    line = line.rstrip("\r\n")
    if len(line) > _STANDARD_LINE_LENGTH:
        return None

    # Pad shorter lines to 187 chars
    line = line.ljust(_STANDARD_LINE_LENGTH)

    try:
        mjd = int(float(line[_MJD_RANGE].strip()))
        pm_x = float(line[_PM_X_RANGE].strip())
        pm_y = float(line[_PM_Y_RANGE].strip())
        ut1_utc = float(line[_UT1_UTC_RANGE].strip())
    except ValueError:
        return None

    lod = _optional(line[_LOD_RANGE], 1.0e-3)  # ms -> s
    dx = _optional(line[_DX_RANGE], 1.0e-3)  # mas -> arcsec
    dy = _optional(line[_DY_RANGE], 1.0e-3)  # mas -> arcsec
    return EOPRecord(mjd, pm_x, pm_y, ut1_utc, lod, dx, dy)


def parse_ncep_prediction_line(line: str) -> EOPRecord | None:
    """Parse a single line of the NCEP prediction file.

    Args:
        line: A line of ``eop_pred_ncep.final``.

    Returns:
        The record (dPsi/dEps series), or ``None``.
    """
    fields = line.split()
    if len(fields) < _NCEP_MIN_FIELDS:
        return None
    try:
        mjd = int(float(fields[0]))
        values = [float(v) for v in fields[1:7]]
    except ValueError:
        return None
    return EOPRecord(mjd, *values)
