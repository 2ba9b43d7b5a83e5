"""Tests for astroframe.utils angle helpers and cache management."""

import math
import os
import time
from pathlib import Path

import jax.numpy as jnp
import pytest

from astroframe.utils import (
    dms_to_radians,
    eop_cache_path,
    file_age_seconds,
    get_cache_dir,
    get_eop_cache_dir,
    hms_to_radians,
    is_file_stale,
    to_radians,
)

# ---------------------------------------------------------------------------
# Angle helpers
# ---------------------------------------------------------------------------


class TestAngles:
    def test_hms(self):
        assert hms_to_radians(6) == pytest.approx(math.pi / 2.0, abs=1e-15)
        assert hms_to_radians(12, 51, 26.27549) == pytest.approx(math.radians(192.85948121), abs=1e-10)

    def test_dms(self):
        assert dms_to_radians(27, 7, 41.7043) == pytest.approx(math.radians(27.12825119), abs=1e-10)

    def test_negative_sign_applies_to_whole_value(self):
        assert dms_to_radians(-3, 42) == pytest.approx(-math.radians(3.7), abs=1e-15)
        assert hms_to_radians(-1, 30) == pytest.approx(-math.radians(22.5), abs=1e-15)

    def test_to_radians(self):
        assert float(to_radians(180.0, True)) == pytest.approx(math.pi)
        assert float(to_radians(1.5, False)) == 1.5

    def test_to_radians_array(self):
        out = to_radians(jnp.array([90.0, -90.0]), True)
        assert out.shape == (2,)
        assert float(out[1]) == pytest.approx(-math.pi / 2.0)


# ---------------------------------------------------------------------------
# get_cache_dir
# ---------------------------------------------------------------------------


class TestGetCacheDir:
    """Tests for get_cache_dir()."""

    def test_default_path(self, monkeypatch, tmp_path):
        """Default cache lives under ~/.cache/astroframe."""
        monkeypatch.delenv("ASTROFRAME_CACHE", raising=False)
        monkeypatch.setattr(Path, "home", staticmethod(lambda: tmp_path))
        result = get_cache_dir()
        assert result == tmp_path / ".cache" / "astroframe"
        assert result.is_dir()

    def test_env_override(self, monkeypatch, tmp_path):
        custom = tmp_path / "custom_cache"
        monkeypatch.setenv("ASTROFRAME_CACHE", str(custom))
        result = get_cache_dir()
        assert result == custom
        assert result.is_dir()

    def test_subdirectory_creation(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ASTROFRAME_CACHE", str(tmp_path / "cache"))
        result = get_cache_dir("a/b")
        assert result == tmp_path / "cache" / "a" / "b"
        assert result.is_dir()

    def test_idempotent(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ASTROFRAME_CACHE", str(tmp_path / "cache"))
        assert get_cache_dir("sub") == get_cache_dir("sub")

    def test_eop_cache_dir(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ASTROFRAME_CACHE", str(tmp_path))
        result = get_eop_cache_dir()
        assert result == tmp_path / "eop"
        assert result.is_dir()

    def test_eop_cache_path(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ASTROFRAME_CACHE", str(tmp_path))
        assert eop_cache_path("IERS_EOP_iau2000.txt") == tmp_path / "eop" / "IERS_EOP_iau2000.txt"


# ---------------------------------------------------------------------------
# File age
# ---------------------------------------------------------------------------


class TestFileAge:
    def test_recent_file(self, tmp_path):
        f = tmp_path / "recent.txt"
        f.write_text("hello")
        assert 0 <= file_age_seconds(f) < 5

    def test_old_file(self, tmp_path):
        """Backdating mtime makes the file appear old."""
        f = tmp_path / "old.txt"
        f.write_text("hello")
        old_time = time.time() - 3600
        os.utime(f, (old_time, old_time))
        assert 3590 < file_age_seconds(str(f)) < 3700

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            file_age_seconds(tmp_path / "nope.txt")


class TestIsFileStale:
    def test_missing_file_is_stale(self, tmp_path):
        assert is_file_stale(tmp_path / "missing.txt", max_age_days=9999) is True

    def test_old_file_is_stale(self, tmp_path):
        f = tmp_path / "old.txt"
        f.write_text("data")
        old_time = time.time() - 3 * 86400
        os.utime(f, (old_time, old_time))
        assert is_file_stale(f, max_age_days=2.0) is True

    def test_fresh_file_not_stale(self, tmp_path):
        f = tmp_path / "fresh.txt"
        f.write_text("data")
        assert is_file_stale(f, max_age_days=1.0) is False
