"""Local cache for downloaded Earth orientation files.

IERS publishes its series as plain text that changes once a day, so the
library keeps one copy per file under a cache root and refreshes it after a
few days.  The root is ``$ASTROFRAME_CACHE`` or ``~/.cache/astroframe``.
"""

from __future__ import annotations

import os
import time
from pathlib import Path

from astroframe.constants import SECONDS_PER_DAY

_ENV_VAR = "ASTROFRAME_CACHE"
_DEFAULT_ROOT = Path(".cache") / "astroframe"


def get_cache_dir(subdirectory: str | None = None) -> Path:
    """Return the cache root (or a subdirectory of it), creating it if needed.

    Args:
        subdirectory: Optional relative path below the root, e.g. ``"eop"``.

    Returns:
        The directory.
    """
    env = os.environ.get(_ENV_VAR)
    root = Path(env) if env is not None else Path.home() / _DEFAULT_ROOT
    if subdirectory is not None:
        root = root / subdirectory
    root.mkdir(parents=True, exist_ok=True)
    return root


def get_eop_cache_dir() -> Path:
    """Return the directory holding cached EOP series (``<cache>/eop``)."""
    return get_cache_dir("eop")


def eop_cache_path(filename: str) -> Path:
    """Path of *filename* inside the EOP cache directory."""
    return get_eop_cache_dir() / filename


def file_age_seconds(filepath: str | Path) -> float:
    """Seconds since *filepath* was last modified.

    Raises:
        FileNotFoundError: If *filepath* does not exist.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"No such file: '{filepath}'")
    return max(0.0, time.time() - filepath.stat().st_mtime)


def is_file_stale(filepath: str | Path, max_age_days: float) -> bool:
    """Whether a cached series must be downloaded again.

    Args:
        filepath: Cached file.
        max_age_days: Age in days after which the copy is out of date.

    Returns:
        ``True`` if the file is missing or older than *max_age_days*.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        return True
    return file_age_seconds(filepath) > max_age_days * SECONDS_PER_DAY
