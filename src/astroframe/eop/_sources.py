"""Record sources backing the Earth orientation store.

- :class:`FileEOPSource`: an IERS file on disk.  The file is indexed once
  (day number to byte offset) and each lookup then reads only the lines
  of the requested window.
- :class:`TableEOPSource`: records held in memory, used for tests and for
  data assembled by the caller.

Both count the lookups they serve in :attr:`reads`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Optional

from astroframe.eop._parsers import parse_c04_line
from astroframe.eop._types import EOPRecord
from astroframe.errors import DataUnavailableError, InvalidInputError

logger = logging.getLogger(__name__)

LineParser = Callable[[str], Optional[EOPRecord]]


class FileEOPSource:
    """Daily EOP records read lazily from a file.

    Args:
        filepath: Path to the data file.
        parser: Line parser. Defaults to the IERS C04 layout.

    Raises:
        FileNotFoundError: If the file does not exist.
        InvalidInputError: If the file holds no records.

    Examples:
        ```python
        from astroframe.eop import FileEOPSource
        source = FileEOPSource("eopc04_IAU2000.62-now")
        source.records(51543, 51545)
        ```
    """

    def __init__(self, filepath: str | Path, parser: LineParser = parse_c04_line) -> None:
        self._filepath = Path(filepath)
        self._parser = parser
        self._offsets: dict[int, int] = {}
        self.reads = 0

        with open(self._filepath, "rb") as f:
            offset = 0
            for raw in f:
                record = parser(raw.decode("iso-8859-1"))
                if record is not None:
                    self._offsets[record.mjd] = offset
                offset += len(raw)

        if not self._offsets:
            raise InvalidInputError(f"No valid EOP data found in {self._filepath}")
        logger.debug("Indexed %d EOP records in %s", len(self._offsets), self._filepath)

    @property
    def filepath(self) -> Path:
        return self._filepath

    def first_mjd(self) -> int:
        return min(self._offsets)

    def last_mjd(self) -> int:
        return max(self._offsets)

    def records(self, mjd_start: int, mjd_end: int) -> dict[int, EOPRecord]:
        """Records for the days ``mjd_start..mjd_end`` inclusive, keyed by MJD.

        Days without a record are absent from the result.

        Raises:
            DataUnavailableError: If no day of the window is covered.
        """
        wanted = [m for m in range(mjd_start, mjd_end + 1) if m in self._offsets]
        if not wanted:
            raise DataUnavailableError(
                f"No EOP records between MJD {mjd_start} and {mjd_end} in {self._filepath}"
            )

        self.reads += 1
        out: dict[int, EOPRecord] = {}
        with open(self._filepath, "rb") as f:
            for mjd in wanted:
                f.seek(self._offsets[mjd])
                record = self._parser(f.readline().decode("iso-8859-1"))
                if record is not None:
                    out[record.mjd] = record
        return out


class TableEOPSource:
    """Daily EOP records held in memory.

    Args:
        records: Records in any order. Later duplicates of a day win.

    Raises:
        InvalidInputError: If *records* is empty.
    """

    def __init__(self, records: Iterable[EOPRecord]) -> None:
        self._records = {r.mjd: r for r in records}
        if not self._records:
            raise InvalidInputError("An EOP table needs at least one record")
        self.reads = 0

    def first_mjd(self) -> int:
        return min(self._records)

    def last_mjd(self) -> int:
        return max(self._records)

    def records(self, mjd_start: int, mjd_end: int) -> dict[int, EOPRecord]:
        """Records for the days ``mjd_start..mjd_end`` inclusive, keyed by MJD.

        Raises:
            DataUnavailableError: If no day of the window is covered.
        """
        out = {m: self._records[m] for m in range(mjd_start, mjd_end + 1) if m in self._records}
        if not out:
            raise DataUnavailableError(f"No EOP records between MJD {mjd_start} and {mjd_end}")
        self.reads += 1
        return out
