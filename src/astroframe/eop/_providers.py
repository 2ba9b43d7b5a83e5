"""Factory functions for creating EOP record sources.

- :func:`load_source_from_file`: Open an IERS C04 or standard format file.
- :func:`load_cached_source`: Open a file from the local cache,
  downloading fresh data from IERS when stale.
"""

from __future__ import annotations

import logging
from pathlib import Path

from astroframe.eop._download import C04_FILENAMES, download_eop_file
from astroframe.eop._parsers import parse_c04_line, parse_finals_line
from astroframe.eop._sources import FileEOPSource
from astroframe.eop._types import EOPSeries
from astroframe.errors import DataUnavailableError
from astroframe.utils.caching import eop_cache_path, is_file_stale

logger = logging.getLogger(__name__)

_DEFAULT_MAX_AGE_DAYS: float = 7.0
"""Default maximum age for cached EOP data in days."""


def load_source_from_file(filepath: str | Path, *, standard_format: bool = False) -> FileEOPSource:
    """Open an EOP file as a record source.

    Args:
        filepath: Path to the file.
        standard_format: ``True`` for the fixed-column IERS standard format
            (``finals2000A.*``), ``False`` for the C04 layout.

    Returns:
        The record source.

    Raises:
        FileNotFoundError: If the file does not exist.
        InvalidInputError: If the file holds no records.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"EOP file not found: {filepath}")
    parser = parse_finals_line if standard_format else parse_c04_line
    return FileEOPSource(filepath, parser=parser)


def load_cached_source(
    series: EOPSeries,
    filepath: str | Path | None = None,
    *,
    max_age_days: float = _DEFAULT_MAX_AGE_DAYS,
) -> FileEOPSource:
    """Open the C04 file of *series* from a local cache, downloading when stale.

    Checks whether the cached file at *filepath* exists and is younger than
    *max_age_days*.  If the file is missing or stale, a fresh copy is
    downloaded from IERS.  If the download fails and an older copy exists,
    the older copy is used and a warning is logged.

    Args:
        series: Series to load.
        filepath: Path to the cached file.  When ``None`` (the default),
            uses ``<cache_dir>/eop/<canonical filename>``.
        max_age_days: Maximum acceptable age of the cached file in days.
            Defaults to 7.

    Returns:
        Record source reading the cached file.

    Raises:
        DataUnavailableError: If the download fails and there is no cached
            copy to fall back on.

    Examples:
        ```python
        from astroframe.eop import EOPSeries, load_cached_source
        source = load_cached_source(EOPSeries.IAU2000)
        ```
    """
    if filepath is None:
        filepath = eop_cache_path(C04_FILENAMES[series])
    else:
        filepath = Path(filepath)

    if is_file_stale(filepath, max_age_days):
        try:
            download_eop_file(series, filepath)
        except Exception as exc:
            if not filepath.exists():
                raise DataUnavailableError(
                    f"Could not download {series.value} EOP data and no cached copy exists at {filepath}"
                ) from exc
            logger.warning(
                "Failed to download EOP data; falling back to cached file %s.",
                filepath,
                exc_info=True,
            )

    return load_source_from_file(filepath)
