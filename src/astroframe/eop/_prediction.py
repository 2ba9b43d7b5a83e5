"""Earth orientation predictions from the IERS/USNO prediction feeds.

Two feeds are known:

- NCEP predictions (``eop_pred_ncep.final``) for the IAU 1980 series,
  giving dPsi/dEps directly.
- USNO ``finals2000A.daily`` for the IAU 2000 series, giving dX/dY which
  are converted with :func:`~astroframe.eop.dxdy_to_dpsideps`.

Feed contents are kept in a :class:`PredictionCache` for six hours, keyed
by feed id, so repeated predictions do not hit the network.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable
from typing import NamedTuple

import httpx

from astroframe._types import Frame
from astroframe.constants import JD_MJD_OFFSET
from astroframe.eop._conversion import dxdy_to_dpsideps
from astroframe.eop._parsers import parse_finals_line, parse_ncep_prediction_line
from astroframe.eop._sources import LineParser
from astroframe.eop._types import EOPCorrections, EOPRecord, EOPSeries
from astroframe.time import utc_to_tt

logger = logging.getLogger(__name__)

PREDICTION_TTL_SECONDS: float = 6.0 * 3600.0
"""Lifetime of downloaded feed contents in seconds."""

_DEFAULT_TIMEOUT: float = 60.0
"""Default HTTP timeout in seconds."""


class PredictionFeed(NamedTuple):
    """A prediction feed.

    Attributes:
        id: Cache key.
        url: Location of the feed.
        series: Series family of the values in the feed.
        parser: Line parser returning an :class:`EOPRecord`.
        prefix_offset: Column at which a record line starts with its date.
        prefix_format: Format of the date prefix, with a ``{mjd}`` field.
    """

    id: str
    url: str
    series: EOPSeries
    parser: LineParser
    prefix_offset: int
    prefix_format: str

    def record_prefix(self, mjd: int) -> str:
        return self.prefix_format.format(mjd=mjd)

    def matches(self, line: str, mjd: int) -> bool:
        """``True`` if *line* is the record of day *mjd*."""
        return line[self.prefix_offset:].startswith(self.record_prefix(mjd))


NCEP_FEED = PredictionFeed(
    id="eop_pred_ncep",
    url="https://hpiers.obspm.fr/prediction/eop_pred_ncep.final",
    series=EOPSeries.IAU1980,
    parser=parse_ncep_prediction_line,
    prefix_offset=0,
    prefix_format="{mjd}.0000 ",
)

FINALS2000A_FEED = PredictionFeed(
    id="finals2000A",
    url="https://maia.usno.navy.mil/ser7/finals2000A.daily",
    series=EOPSeries.IAU2000,
    parser=parse_finals_line,
    prefix_offset=7,
    prefix_format="{mjd}.00 ",
)

DEFAULT_FEEDS: dict[EOPSeries, PredictionFeed] = {
    EOPSeries.IAU1980: NCEP_FEED,
    EOPSeries.IAU2000: FINALS2000A_FEED,
}
"""Feed used for each series when none is given."""


class PredictionCache:
    """In-memory store of feed contents with a time to live.

    Args:
        ttl_seconds: Lifetime of an entry.
        clock: Monotonic clock in seconds.
    """

    def __init__(
        self,
        ttl_seconds: float = PREDICTION_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, list[str]]] = {}

    def get(self, key: str) -> list[str] | None:
        """Cached lines for *key*, or ``None`` when absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, lines = entry
        if self._clock() - stored_at >= self._ttl:
            logger.debug("Prediction cache entry %s expired", key)
            del self._entries[key]
            return None
        return lines

    def put(self, key: str, lines: list[str]) -> None:
        self._entries[key] = (self._clock(), lines)

    def clear(self) -> None:
        self._entries.clear()


_default_cache = PredictionCache()


def _download_feed(feed: PredictionFeed, timeout: float) -> list[str]:
    logger.info("Downloading EOP prediction from %s", feed.url)
    with httpx.Client(timeout=timeout, follow_redirects=True) as client:
        response = client.get(feed.url)
        response.raise_for_status()
    return response.text.splitlines()


def _feed_lines(feed: PredictionFeed, cache: PredictionCache, timeout: float) -> list[str]:
    lines = cache.get(feed.id)
    if lines is None:
        lines = _download_feed(feed, timeout)
        cache.put(feed.id, lines)
    else:
        logger.debug("Prediction cache hit for %s", feed.id)
    return lines


def _zero_if_nan(value: float) -> float:
    return 0.0 if math.isnan(value) else value


def _interpolate(current: EOPRecord, following: EOPRecord | None, factor: float) -> EOPRecord:
    if following is None:
        following = current
    values = [
        _zero_if_nan(a) + (_zero_if_nan(b) - _zero_if_nan(a)) * factor
        for a, b in zip(current[1:], following[1:])
    ]
    return EOPRecord(current.mjd, *values)


def fetch_prediction(
    jd_utc: float,
    feed: PredictionFeed,
    *,
    frame: Frame = Frame.ICRF,
    cache: PredictionCache | None = None,
    timeout: float = _DEFAULT_TIMEOUT,
) -> EOPCorrections | None:
    """Predicted Earth orientation corrections for a date.

    The record of the day is linearly interpolated with the following one.
    Values of the IAU 2000 feed are converted from dX/dY to dPsi/dEps.

    Args:
        jd_utc: Julian date, UTC.
        feed: Feed to read.
        frame: Frame for the dX/dY conversion.
        cache: Cache of feed contents. Defaults to a module-wide cache.
        timeout: HTTP timeout in seconds.

    Returns:
        Corrections flagged ``predicted=True``, or ``None`` when the feed
        holds no record for the date.

    Raises:
        httpx.HTTPError: If the feed cannot be downloaded.
    """
    cache = _default_cache if cache is None else cache
    lines = _feed_lines(feed, cache, timeout)

    mjd = int(jd_utc - JD_MJD_OFFSET)
    current = following = None
    for i, line in enumerate(lines):
        if feed.matches(line, mjd):
            current = feed.parser(line)
            if i + 1 < len(lines):
                following = feed.parser(lines[i + 1])
            break
    if current is None:
        logger.debug("No prediction for MJD %d in %s", mjd, feed.id)
        return None

    jd0 = int(jd_utc - 0.5) + 0.5
    record = _interpolate(current, following, jd_utc - jd0)

    dpsi, deps = record.dpsi_or_dx, record.deps_or_dy
    if feed.series is EOPSeries.IAU2000:
        dpsi, deps = dxdy_to_dpsideps(dpsi, deps, utc_to_tt(jd_utc), frame)

    return EOPCorrections(
        dpsi=float(dpsi),
        deps=float(deps),
        pm_x=record.pm_x,
        pm_y=record.pm_y,
        ut1_utc=record.ut1_utc,
        predicted=True,
    )


def clear_prediction_cache() -> None:
    """Drop the contents of the module-wide prediction cache."""
    _default_cache.clear()
