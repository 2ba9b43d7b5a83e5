"""Shared utility functions for astroframe.

Provides angle conversion helpers and filesystem cache management.
"""

from astroframe.utils._angle import dms_to_radians, hms_to_radians, to_radians
from astroframe.utils.caching import (
    eop_cache_path,
    file_age_seconds,
    get_cache_dir,
    get_eop_cache_dir,
    is_file_stale,
)

__all__ = [
    "dms_to_radians",
    "eop_cache_path",
    "file_age_seconds",
    "get_cache_dir",
    "get_eop_cache_dir",
    "hms_to_radians",
    "is_file_stale",
    "to_radians",
]
