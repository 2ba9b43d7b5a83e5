"""Earth Orientation Parameters (EOP).

Provides lookup of polar motion, UT1-UTC and celestial pole offsets from
IERS daily series, interpolated at an exact instant, with optional ocean
tide corrections and predictions past the end of the data.

Typical usage::

    from astroframe import ReductionMethod
    from astroframe.eop import EarthOrientationStore, EOPSeries, load_cached_source
    store = EarthOrientationStore({EOPSeries.IAU1980: load_cached_source(EOPSeries.IAU1980)})
    eop = store.obtain_eop(2451545.0, ReductionMethod.IAU_1976)
"""

from astroframe.eop._conversion import dxdy_to_dpsideps
from astroframe.eop._download import C04_FILENAMES, IERS_C04_URLS, download_eop_file
from astroframe.eop._interpolation import lagrange_interpolate
from astroframe.eop._parsers import (
    parse_c04_file,
    parse_c04_line,
    parse_finals_line,
    parse_ncep_prediction_line,
)
from astroframe.eop._prediction import (
    DEFAULT_FEEDS,
    FINALS2000A_FEED,
    NCEP_FEED,
    PREDICTION_TTL_SECONDS,
    PredictionCache,
    PredictionFeed,
    clear_prediction_cache,
    fetch_prediction,
)
from astroframe.eop._providers import load_cached_source, load_source_from_file
from astroframe.eop._sources import FileEOPSource, TableEOPSource
from astroframe.eop._store import UT1_UTC_NOT_AVAILABLE, EarthOrientationStore, EOPCache
from astroframe.eop._tides import ray_tidal_corrections
from astroframe.eop._types import (
    ZERO_CORRECTIONS,
    EOPCacheEntry,
    EOPCorrections,
    EOPRecord,
    EOPRecordSource,
    EOPSeries,
)

__all__ = [
    "C04_FILENAMES",
    "DEFAULT_FEEDS",
    "EOPCache",
    "EOPCacheEntry",
    "EOPCorrections",
    "EOPRecord",
    "EOPRecordSource",
    "EOPSeries",
    "EarthOrientationStore",
    "FINALS2000A_FEED",
    "FileEOPSource",
    "IERS_C04_URLS",
    "NCEP_FEED",
    "PREDICTION_TTL_SECONDS",
    "PredictionCache",
    "PredictionFeed",
    "TableEOPSource",
    "UT1_UTC_NOT_AVAILABLE",
    "ZERO_CORRECTIONS",
    "clear_prediction_cache",
    "download_eop_file",
    "dxdy_to_dpsideps",
    "fetch_prediction",
    "lagrange_interpolate",
    "load_cached_source",
    "load_source_from_file",
    "parse_c04_file",
    "parse_c04_line",
    "parse_finals_line",
    "parse_ncep_prediction_line",
    "ray_tidal_corrections",
]
