"""Download IERS Earth Orientation Parameter files.

Provides a helper to fetch the IERS C04 series for either family of
nutation corrections.  Network errors are propagated to the caller so
that higher-level code (e.g. :func:`load_cached_source`) can decide on
fallback behaviour.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from astroframe.eop._types import EOPSeries

logger = logging.getLogger(__name__)

IERS_C04_URLS: dict[EOPSeries, str] = {
    EOPSeries.IAU1980: "https://hpiers.obspm.fr/iers/eop/eopc04_14/eopc04.62-now",
    EOPSeries.IAU2000: "https://hpiers.obspm.fr/iers/eop/eopc04_14/eopc04_IAU2000.62-now",
}
"""Default URL of the IERS C04 14 file of each series (fixed MJD-in-fourth-column layout)."""

C04_FILENAMES: dict[EOPSeries, str] = {
    EOPSeries.IAU1980: "IERS_EOP_iau1980.txt",
    EOPSeries.IAU2000: "IERS_EOP_iau2000.txt",
}
"""Canonical filenames used for cached EOP data."""

_DEFAULT_TIMEOUT: float = 120.0
"""Default HTTP timeout in seconds."""


def download_eop_file(
    series: EOPSeries,
    filepath: str | Path,
    *,
    url: str | None = None,
    timeout: float = _DEFAULT_TIMEOUT,
) -> Path:
    """Download the IERS C04 file of *series* to *filepath*.

    Creates parent directories if they do not exist.  On success the
    downloaded text is written to *filepath* and the resolved path is
    returned.

    Args:
        series: Series to fetch.
        filepath: Destination path for the downloaded file.
        url: URL to fetch.  Defaults to the entry of :data:`IERS_C04_URLS`.
        timeout: HTTP timeout in seconds.  Defaults to 120.

    Returns:
        Resolved :class:`~pathlib.Path` to the written file.

    Raises:
        httpx.HTTPStatusError: If the server returns a non-2xx status.
        httpx.TransportError: On network-level failures (DNS, timeout, etc.).
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    url = url or IERS_C04_URLS[series]

    logger.info("Downloading EOP data from %s", url)
    with httpx.Client(timeout=timeout, follow_redirects=True) as client:
        response = client.get(url)
        response.raise_for_status()

    filepath.write_text(response.text, encoding="utf-8")
    logger.info("EOP data written to %s", filepath)
    return filepath.resolve()
