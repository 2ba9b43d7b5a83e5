"""Earth orientation store: lookup, interpolation and caching of corrections.

:class:`EarthOrientationStore` turns daily IERS records into the
corrections needed by a reduction at an exact instant.  Five records around
the date are interpolated with a Lagrange polynomial; results are memoized
in an explicit :class:`EOPCache` so that repeated computations for nearly
the same instant do not touch the record source again.

Conditions that degrade the result without invalidating it (a date outside
the data, a missing record) are reported through a
:class:`~astroframe.diagnostics.Diagnostics` sink and zero corrections are
returned instead.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping

import httpx

from astroframe._types import Frame, ReductionMethod
from astroframe.constants import JD_MJD_OFFSET
from astroframe.diagnostics import Diagnostics
from astroframe.eop._conversion import dxdy_to_dpsideps
from astroframe.eop._interpolation import lagrange_interpolate
from astroframe.eop._prediction import PredictionCache, PredictionFeed, fetch_prediction
from astroframe.eop._tides import ray_tidal_corrections
from astroframe.eop._types import (
    ZERO_CORRECTIONS,
    EOPCacheEntry,
    EOPCorrections,
    EOPRecord,
    EOPRecordSource,
    EOPSeries,
)
from astroframe.errors import DataUnavailableError
from astroframe.time import mjd_to_date, utc_to_tt

logger = logging.getLogger(__name__)

UT1_UTC_NOT_AVAILABLE = "UT1-UTC not available"
"""Warning emitted when the record of the requested day is missing."""

_WINDOW_HALF_WIDTH = 2
"""Records on each side of the day used for interpolation."""


class EOPCache:
    """Memo of the last Earth orientation lookup.

    An entry answers a lookup made less than :attr:`TOLERANCE_DAYS` from
    its date with the same reduction method.  Every miss overwrites it.

    Examples:
        ```python
        from astroframe.eop import EOPCache
        cache = EOPCache()
        cache.lookup(2451545.0, ReductionMethod.IAU_2006)  # None
        ```
    """

    TOLERANCE_DAYS = 0.25

    def __init__(self) -> None:
        self._entry: EOPCacheEntry | None = None

    @property
    def entry(self) -> EOPCacheEntry | None:
        return self._entry

    def lookup(self, jd_utc: float, method: ReductionMethod) -> EOPCorrections | None:
        """Cached corrections valid for *jd_utc* and *method*, or ``None``."""
        entry = self._entry
        if entry is None or entry.method is not method:
            return None
        if abs(jd_utc - entry.jd_utc) >= self.TOLERANCE_DAYS:
            return None
        return entry.corrections

    def store(self, corrections: EOPCorrections, jd_utc: float, method: ReductionMethod) -> None:
        self._entry = EOPCacheEntry(corrections, float(jd_utc), method)

    def clear(self) -> None:
        self._entry = None


def _midnight_mjd(jd_utc: float) -> int:
    # MJD of the 0h UTC at or before the date
    return math.floor(jd_utc - 0.5) - int(JD_MJD_OFFSET - 0.5)


def _interpolate_field(records: list[EOPRecord], field: str, mjd: float) -> float | None:
    # records with a blank (NaN) value are left out of the fit
    usable = [r for r in records if not math.isnan(getattr(r, field))]
    if not usable:
        return None
    xs = [float(r.mjd) for r in usable]
    ys = [getattr(r, field) for r in usable]
    return float(lagrange_interpolate(xs, ys, mjd))


def _extrapolate_field(records: list[EOPRecord], field: str, mjd: float) -> float | None:
    usable = [r for r in records if not math.isnan(getattr(r, field))]
    if not usable:
        return None
    if len(usable) == 1:
        return getattr(usable[0], field)
    r0, r1 = usable[-2:]
    a, b = getattr(r0, field), getattr(r1, field)
    return b + (b - a) * (mjd - r1.mjd) / (r1.mjd - r0.mjd)


class EarthOrientationStore:
    """Earth orientation corrections backed by IERS record sources.

    Args:
        sources: Record source of each series. A series may be missing, in
            which case lookups for its methods return zero corrections.
        cache: Memo of the last lookup. A fresh one is created if omitted.
        diagnostics: Sink for warnings. A fresh one is created if omitted.
        prediction_feeds: Feed consulted for each series when a prediction
            is requested past the end of its source. Series without a feed
            are extrapolated linearly from their last two records.
        prediction_cache: Cache of feed contents.

    Examples:
        ```python
        from astroframe import ReductionMethod
        from astroframe.eop import EarthOrientationStore, EOPSeries, load_cached_source
        store = EarthOrientationStore({EOPSeries.IAU2000: load_cached_source(EOPSeries.IAU2000)})
        eop = store.obtain_eop(2451545.0, ReductionMethod.IAU_2006)
        eop.ut1_utc
        ```
    """

    def __init__(
        self,
        sources: Mapping[EOPSeries, EOPRecordSource],
        *,
        cache: EOPCache | None = None,
        diagnostics: Diagnostics | None = None,
        prediction_feeds: Mapping[EOPSeries, PredictionFeed] | None = None,
        prediction_cache: PredictionCache | None = None,
    ) -> None:
        self._sources = dict(sources)
        self._cache = EOPCache() if cache is None else cache
        self._diagnostics = Diagnostics() if diagnostics is None else diagnostics
        self._feeds = dict(prediction_feeds or {})
        self._prediction_cache = prediction_cache

    @property
    def cache(self) -> EOPCache:
        return self._cache

    @property
    def diagnostics(self) -> Diagnostics:
        return self._diagnostics

    def source_for(self, method: ReductionMethod) -> EOPRecordSource:
        """Record source of the series matching *method*.

        Raises:
            DataUnavailableError: If no source is configured for the series.
        """
        series = EOPSeries.for_method(method)
        try:
            return self._sources[series]
        except KeyError:
            raise DataUnavailableError(f"No {series.value} EOP source configured") from None

    def _window(self, source: EOPRecordSource, mjd0: int) -> dict[int, EOPRecord]:
        try:
            return source.records(mjd0 - _WINDOW_HALF_WIDTH, mjd0 + _WINDOW_HALF_WIDTH)
        except DataUnavailableError:
            return {}

    def _finish(self, corrections: EOPCorrections, jd_utc: float, method: ReductionMethod) -> EOPCorrections:
        self._cache.store(corrections, jd_utc, method)
        return corrections

    def _field(self, records: list[EOPRecord], field: str, mjd: float, *, extrapolate: bool = False) -> float:
        estimate = (_extrapolate_field if extrapolate else _interpolate_field)(records, field, mjd)
        if estimate is None:
            self._diagnostics.warn("EOP %s not available around MJD %d. Using 0.", field, math.floor(mjd))
            return 0.0
        return estimate

    def obtain_eop(
        self,
        jd_utc: float,
        method: ReductionMethod,
        *,
        correct_for_eop: bool = True,
        correct_for_tides: bool = False,
        allow_prediction: bool = False,
        frame: Frame = Frame.ICRF,
    ) -> EOPCorrections:
        """Earth orientation corrections at an instant.

        Args:
            jd_utc: Julian date, UTC.
            method: Reduction method. Selects the series and whether polar
                motion and pole offsets are used.
            correct_for_eop: ``False`` to return zero corrections. The cache
                is cleared and the zeros are not cached.
            correct_for_tides: Add the Ray et al. (1994) ocean tide model to
                polar motion and UT1-UTC.
            allow_prediction: Past the end of the data, extrapolate or use
                the prediction feed instead of returning zeros.
            frame: Frame for the dX/dY to dPsi/dEps conversion.

        Returns:
            The corrections. All zero (with a warning) when the date is not
            covered by the data.
        """
        if not correct_for_eop:
            # uncorrected lookups leave nothing behind for corrected ones
            self._cache.clear()
            return ZERO_CORRECTIONS

        cached = self._cache.lookup(jd_utc, method)
        if cached is not None:
            logger.debug("EOP cache hit for JD %.5f", jd_utc)
            return cached
        logger.debug("EOP cache miss for JD %.5f", jd_utc)

        try:
            source = self.source_for(method)
        except DataUnavailableError as exc:
            self._diagnostics.warn("Earth Orientation Parameters (EOP) file not available: %s", exc)
            return self._finish(ZERO_CORRECTIONS, jd_utc, method)

        mjd0 = _midnight_mjd(jd_utc)
        window = self._window(source, mjd0)

        if mjd0 not in window:
            if allow_prediction and mjd0 > source.last_mjd():
                corrections = self._predict(jd_utc, method, source, frame)
                return self._finish(self._restrict(corrections, method), jd_utc, method)

            self._diagnostics.warn(UT1_UTC_NOT_AVAILABLE)
            ut1_utc = 0.0
            if window:
                records = [window[m] for m in sorted(window)]
                ut1_utc = self._field(records, "ut1_utc", jd_utc - JD_MJD_OFFSET)
            return self._finish(EOPCorrections(ut1_utc=ut1_utc), jd_utc, method)

        records = [window[m] for m in sorted(window)]
        mjd = jd_utc - JD_MJD_OFFSET
        ut1_utc = self._field(records, "ut1_utc", mjd)

        if not method.uses_polar_motion:
            return self._finish(EOPCorrections(ut1_utc=ut1_utc), jd_utc, method)

        offset_1 = self._field(records, "dpsi_or_dx", mjd)
        offset_2 = self._field(records, "deps_or_dy", mjd)
        pm_x = self._field(records, "pm_x", mjd)
        pm_y = self._field(records, "pm_y", mjd)

        jd_tt = utc_to_tt(jd_utc)
        if correct_for_tides:
            dx, dy, dut1 = ray_tidal_corrections(jd_tt - JD_MJD_OFFSET)
            pm_x += float(dx)
            pm_y += float(dy)
            ut1_utc += float(dut1)

        if method.is_iau2000_family:
            dpsi, deps = dxdy_to_dpsideps(offset_1, offset_2, jd_tt, frame)
            offset_1, offset_2 = float(dpsi), float(deps)

        corrections = EOPCorrections(offset_1, offset_2, pm_x, pm_y, ut1_utc)
        return self._finish(corrections, jd_utc, method)

    @staticmethod
    def _restrict(corrections: EOPCorrections, method: ReductionMethod) -> EOPCorrections:
        if method.uses_polar_motion:
            return corrections
        return EOPCorrections(ut1_utc=corrections.ut1_utc, predicted=corrections.predicted)

    def _predict(
        self,
        jd_utc: float,
        method: ReductionMethod,
        source: EOPRecordSource,
        frame: Frame,
    ) -> EOPCorrections:
        series = EOPSeries.for_method(method)
        feed = self._feeds.get(series)
        if feed is not None:
            try:
                predicted = fetch_prediction(jd_utc, feed, frame=frame, cache=self._prediction_cache)
            except httpx.HTTPError as exc:
                self._diagnostics.warn("EOP prediction from %s not available: %s", feed.id, exc)
            else:
                if predicted is not None:
                    return predicted
                self._diagnostics.warn("EOP prediction from %s does not cover JD %.5f", feed.id, jd_utc)

        return self._extrapolate(jd_utc, method, source, frame)

    def _extrapolate(
        self,
        jd_utc: float,
        method: ReductionMethod,
        source: EOPRecordSource,
        frame: Frame,
    ) -> EOPCorrections:
        last = source.last_mjd()
        tail = source.records(last - 2 * _WINDOW_HALF_WIDTH, last)
        records = [tail[m] for m in sorted(tail)]
        self._diagnostics.warn("EOP extrapolated past the last record (MJD %d)", last)

        mjd = jd_utc - JD_MJD_OFFSET
        pm_x, pm_y, ut1_utc, offset_1, offset_2 = (
            self._field(records, field, mjd, extrapolate=True)
            for field in ("pm_x", "pm_y", "ut1_utc", "dpsi_or_dx", "deps_or_dy")
        )

        if method.is_iau2000_family:
            dpsi, deps = dxdy_to_dpsideps(offset_1, offset_2, utc_to_tt(jd_utc), frame)
            offset_1, offset_2 = float(dpsi), float(deps)
        return EOPCorrections(offset_1, offset_2, pm_x, pm_y, ut1_utc, predicted=True)

    def force_eop(
        self,
        jd_utc: float,
        method: ReductionMethod,
        *,
        ut1_utc: float,
        pm_x: float,
        pm_y: float,
        dx: float,
        dy: float,
        dx_dy_are_nutation: bool = True,
        frame: Frame = Frame.ICRF,
    ) -> EOPCorrections:
        """Overwrite the cached corrections with caller-supplied values.

        The values answer lookups within a quarter of a day of *jd_utc* made
        with *method*, until another date or method is requested.

        Args:
            jd_utc: Julian date, UTC.
            method: Reduction method the values apply to.
            ut1_utc: UT1-UTC [s].
            pm_x: Polar motion x [arcsec].
            pm_y: Polar motion y [arcsec].
            dx: dPsi, or dX when *dx_dy_are_nutation* is ``False`` [arcsec].
            dy: dEps, or dY when *dx_dy_are_nutation* is ``False`` [arcsec].
            dx_dy_are_nutation: ``True`` if *dx*, *dy* are dPsi/dEps.
            frame: Frame for the dX/dY conversion.

        Returns:
            The stored corrections.
        """
        dpsi, deps = dx, dy
        if not dx_dy_are_nutation:
            dpsi, deps = dxdy_to_dpsideps(dx, dy, utc_to_tt(jd_utc), frame)
        corrections = EOPCorrections(float(dpsi), float(deps), pm_x, pm_y, ut1_utc)
        return self._finish(corrections, jd_utc, method)

    def clear(self) -> None:
        """Reset the cache so that the next lookup reads the source."""
        self._cache.clear()

    def lod(self, jd_utc: float, method: ReductionMethod) -> float:
        """Length of day excess [s] at the midnight closest to *jd_utc*.

        Returns 0 with a warning when the record is unavailable.
        """
        mjd = round(jd_utc - JD_MJD_OFFSET)
        try:
            record = self.source_for(method).records(mjd, mjd).get(mjd)
        except DataUnavailableError:
            record = None
        if record is None or math.isnan(record.lod):
            self._diagnostics.warn("Could not read the LOD record for MJD %d. Returning 0 as LOD.", mjd)
            return 0.0
        return record.lod

    def first_record_date(self, method: ReductionMethod) -> tuple[int, int, int]:
        """Calendar date ``(year, month, day)`` of the first record."""
        return mjd_to_date(self.source_for(method).first_mjd())

    def last_record_date(self, method: ReductionMethod) -> tuple[int, int, int]:
        """Calendar date ``(year, month, day)`` of the last record."""
        return mjd_to_date(self.source_for(method).last_mjd())

    def ut1_minus_utc(self, jd_utc: float, method: ReductionMethod) -> float:
        """UT1-UTC [s] interpolated from whatever records surround the date.

        Unlike :meth:`obtain_eop` this neither needs the record of the day
        nor touches the cache. Returns 0 with a warning without data.
        """
        try:
            source = self.source_for(method)
        except DataUnavailableError:
            window = {}
        else:
            window = self._window(source, _midnight_mjd(jd_utc))
        if not window:
            self._diagnostics.warn(UT1_UTC_NOT_AVAILABLE)
            return 0.0
        records = [window[m] for m in sorted(window)]
        return self._field(records, "ut1_utc", jd_utc - JD_MJD_OFFSET)
