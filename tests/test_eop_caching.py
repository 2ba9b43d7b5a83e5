"""Tests for EOP downloads, the on-disk cache and the prediction feeds."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from astroframe._types import Frame
from astroframe.constants import JD_MJD_OFFSET
from astroframe.eop import (
    C04_FILENAMES,
    DEFAULT_FEEDS,
    FINALS2000A_FEED,
    IERS_C04_URLS,
    NCEP_FEED,
    EOPSeries,
    PredictionCache,
    download_eop_file,
    dxdy_to_dpsideps,
    fetch_prediction,
    load_cached_source,
)
from astroframe.errors import DataUnavailableError
from astroframe.time import utc_to_tt

from eop_samples import C04_HEADER, c04_line, finals_line, ncep_line


def _c04_text(first: int = 51540, count: int = 20) -> str:
    return C04_HEADER + "\n".join(c04_line(m) for m in range(first, first + count)) + "\n"


def _mock_response(mock_client_cls, text: str):
    response = mock_client_cls.return_value.__enter__.return_value.get.return_value
    response.text = text
    response.raise_for_status.return_value = None
    return response


# ---------------------------------------------------------------------------
# download_eop_file
# ---------------------------------------------------------------------------


class TestDownloadEOPFile:
    """Tests for download_eop_file."""

    def test_writes_text(self, tmp_path: Path) -> None:
        dest = tmp_path / "eop.txt"
        with patch("astroframe.eop._download.httpx.Client") as mock_client_cls:
            _mock_response(mock_client_cls, _c04_text())
            result = download_eop_file(EOPSeries.IAU2000, dest)

        assert result == dest.resolve()
        assert dest.read_text(encoding="utf-8") == _c04_text()
        client = mock_client_cls.return_value.__enter__.return_value
        client.get.assert_called_once_with(IERS_C04_URLS[EOPSeries.IAU2000])

    def test_creates_parent_dirs(self, tmp_path: Path) -> None:
        dest = tmp_path / "deep" / "nested" / "eop.txt"
        assert not dest.parent.exists()
        with patch("astroframe.eop._download.httpx.Client") as mock_client_cls:
            _mock_response(mock_client_cls, "mock eop data\n")
            download_eop_file(EOPSeries.IAU1980, dest)
        assert dest.exists()

    def test_custom_url(self, tmp_path: Path) -> None:
        with patch("astroframe.eop._download.httpx.Client") as mock_client_cls:
            _mock_response(mock_client_cls, "data\n")
            download_eop_file(EOPSeries.IAU1980, tmp_path / "x.txt", url="https://example.org/eop")
        client = mock_client_cls.return_value.__enter__.return_value
        client.get.assert_called_once_with("https://example.org/eop")

    def test_http_error_propagates(self, tmp_path: Path) -> None:
        dest = tmp_path / "eop.txt"
        with patch("astroframe.eop._download.httpx.Client") as mock_client_cls:
            response = _mock_response(mock_client_cls, "")
            response.raise_for_status.side_effect = httpx.HTTPStatusError(
                "404", request=httpx.Request("GET", "https://example.org"), response=httpx.Response(404)
            )
            with pytest.raises(httpx.HTTPStatusError):
                download_eop_file(EOPSeries.IAU1980, dest)
        assert not dest.exists()

    def test_default_urls(self) -> None:
        assert set(IERS_C04_URLS) == set(EOPSeries)
        for url in IERS_C04_URLS.values():
            assert url.startswith("https://")
            assert "/eopc04_14/" in url

    @pytest.mark.ci
    def test_download_success(self, tmp_path: Path) -> None:
        """Actual download from IERS produces a non-empty file."""
        dest = tmp_path / C04_FILENAMES[EOPSeries.IAU2000]
        result = download_eop_file(EOPSeries.IAU2000, dest)
        assert result.exists()
        assert len(result.read_text(encoding="utf-8").splitlines()) > 1000


# ---------------------------------------------------------------------------
# load_cached_source
# ---------------------------------------------------------------------------


class TestLoadCachedSource:
    """Tests for load_cached_source."""

    def test_fresh_file_reused(self, tmp_path: Path) -> None:
        dest = tmp_path / "eop.txt"
        dest.write_text(_c04_text(), encoding="utf-8")
        with patch("astroframe.eop._providers.download_eop_file") as mock_dl:
            source = load_cached_source(EOPSeries.IAU1980, dest, max_age_days=7.0)
            mock_dl.assert_not_called()
        assert source.first_mjd() == 51540

    def test_stale_file_triggers_download(self, tmp_path: Path) -> None:
        dest = tmp_path / "eop.txt"
        dest.write_text(_c04_text(), encoding="utf-8")
        old_time = dest.stat().st_mtime - 30 * 86400
        os.utime(dest, (old_time, old_time))

        with patch("astroframe.eop._providers.download_eop_file") as mock_dl:
            mock_dl.return_value = dest
            load_cached_source(EOPSeries.IAU2000, dest, max_age_days=7.0)
            mock_dl.assert_called_once_with(EOPSeries.IAU2000, dest)

    def test_missing_file_triggers_download(self, tmp_path: Path) -> None:
        dest = tmp_path / "eop.txt"

        def fake_download(series: EOPSeries, fp: Path) -> Path:
            fp.write_text(_c04_text(60000), encoding="utf-8")
            return fp

        with patch("astroframe.eop._providers.download_eop_file", side_effect=fake_download) as mock_dl:
            source = load_cached_source(EOPSeries.IAU1980, dest)
            mock_dl.assert_called_once()
        assert source.last_mjd() == 60019

    def test_download_failure_falls_back_to_stale_copy(self, tmp_path: Path, caplog) -> None:
        dest = tmp_path / "eop.txt"
        dest.write_text(_c04_text(), encoding="utf-8")
        old_time = dest.stat().st_mtime - 30 * 86400
        os.utime(dest, (old_time, old_time))
        with patch(
            "astroframe.eop._providers.download_eop_file",
            side_effect=httpx.ConnectError("network error"),
        ):
            source = load_cached_source(EOPSeries.IAU1980, dest, max_age_days=7.0)
        assert source.first_mjd() == 51540
        assert "falling back to cached file" in caplog.text

    def test_download_failure_without_copy_raises(self, tmp_path: Path) -> None:
        dest = tmp_path / "eop.txt"
        with patch(
            "astroframe.eop._providers.download_eop_file",
            side_effect=httpx.ConnectError("network error"),
        ):
            with pytest.raises(DataUnavailableError, match="no cached copy"):
                load_cached_source(EOPSeries.IAU2000, dest)

    def test_default_filepath(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.setenv("ASTROFRAME_CACHE", str(tmp_path))
        expected = tmp_path / "eop" / C04_FILENAMES[EOPSeries.IAU2000]
        expected.parent.mkdir(parents=True)
        expected.write_text(_c04_text(), encoding="utf-8")
        with patch("astroframe.eop._providers.download_eop_file") as mock_dl:
            source = load_cached_source(EOPSeries.IAU2000)
            mock_dl.assert_not_called()
        assert source.filepath == expected


# ---------------------------------------------------------------------------
# PredictionCache
# ---------------------------------------------------------------------------


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestPredictionCache:
    def test_miss(self):
        assert PredictionCache().get("feed") is None

    def test_hit_before_expiry(self):
        clock = FakeClock()
        cache = PredictionCache(ttl_seconds=60.0, clock=clock)
        cache.put("feed", ["a", "b"])
        clock.now += 59.0
        assert cache.get("feed") == ["a", "b"]

    def test_expired(self):
        clock = FakeClock()
        cache = PredictionCache(ttl_seconds=60.0, clock=clock)
        cache.put("feed", ["a"])
        clock.now += 60.0
        assert cache.get("feed") is None

    def test_clear(self):
        cache = PredictionCache()
        cache.put("feed", ["a"])
        cache.clear()
        assert cache.get("feed") is None


# ---------------------------------------------------------------------------
# fetch_prediction
# ---------------------------------------------------------------------------

JD = 60000 + JD_MJD_OFFSET + 0.25

NCEP_TEXT = "\n".join(
    [
        "MJD x y UT1-UTC LOD dPsi dEps",
        ncep_line(59999, 0.100, 0.300, -0.0100, 0.0010, -0.050, -0.006),
        ncep_line(60000, 0.102, 0.298, -0.0120, 0.0012, -0.054, -0.002),
        ncep_line(60001, 0.106, 0.294, -0.0160, 0.0014, -0.058, -0.010),
    ]
)


class TestFetchPrediction:
    def test_default_feeds(self):
        assert DEFAULT_FEEDS[EOPSeries.IAU1980] is NCEP_FEED
        assert DEFAULT_FEEDS[EOPSeries.IAU2000] is FINALS2000A_FEED

    def test_interpolates_between_days(self):
        with patch("astroframe.eop._prediction.httpx.Client") as mock_client_cls:
            _mock_response(mock_client_cls, NCEP_TEXT)
            eop = fetch_prediction(JD, NCEP_FEED, cache=PredictionCache())

        assert eop.predicted is True
        assert eop.pm_x == pytest.approx(0.102 + 0.25 * 0.004, abs=1e-12)
        assert eop.pm_y == pytest.approx(0.298 - 0.25 * 0.004, abs=1e-12)
        assert eop.ut1_utc == pytest.approx(-0.0120 - 0.25 * 0.004, abs=1e-12)
        assert eop.dpsi == pytest.approx(-0.054 - 0.25 * 0.004, abs=1e-12)
        assert eop.deps == pytest.approx(-0.002 - 0.25 * 0.008, abs=1e-12)

    def test_last_line_held_constant(self):
        jd = 60001 + JD_MJD_OFFSET + 0.5
        with patch("astroframe.eop._prediction.httpx.Client") as mock_client_cls:
            _mock_response(mock_client_cls, NCEP_TEXT)
            eop = fetch_prediction(jd, NCEP_FEED, cache=PredictionCache())
        assert eop.ut1_utc == pytest.approx(-0.0160, abs=1e-12)

    def test_date_not_in_feed(self):
        with patch("astroframe.eop._prediction.httpx.Client") as mock_client_cls:
            _mock_response(mock_client_cls, NCEP_TEXT)
            assert fetch_prediction(JD + 30.0, NCEP_FEED, cache=PredictionCache()) is None

    def test_feed_downloaded_once(self):
        cache = PredictionCache()
        with patch("astroframe.eop._prediction.httpx.Client") as mock_client_cls:
            _mock_response(mock_client_cls, NCEP_TEXT)
            fetch_prediction(JD, NCEP_FEED, cache=cache)
            fetch_prediction(JD + 0.5, NCEP_FEED, cache=cache)
        client = mock_client_cls.return_value.__enter__.return_value
        client.get.assert_called_once_with(NCEP_FEED.url)

    def test_http_error_propagates(self):
        with patch("astroframe.eop._prediction.httpx.Client") as mock_client_cls:
            client = mock_client_cls.return_value.__enter__.return_value
            client.get.side_effect = httpx.ConnectError("offline")
            with pytest.raises(httpx.HTTPError):
                fetch_prediction(JD, NCEP_FEED, cache=PredictionCache())

    def test_finals_feed_converts_pole_offsets(self):
        text = "\n".join(
            [
                finals_line(60000.0, 0.10, 0.30, -0.010, 1.0, 0.20, -0.10),
                finals_line(60001.0, 0.11, 0.31, -0.012, 1.0, 0.24, -0.14),
            ]
        )
        with patch("astroframe.eop._prediction.httpx.Client") as mock_client_cls:
            _mock_response(mock_client_cls, text)
            eop = fetch_prediction(JD, FINALS2000A_FEED, frame=Frame.ICRF, cache=PredictionCache())

        dx = (0.20 + 0.25 * 0.04) * 1e-3
        dy = (-0.10 - 0.25 * 0.04) * 1e-3
        dpsi, deps = dxdy_to_dpsideps(dx, dy, utc_to_tt(JD))
        assert eop.dpsi == pytest.approx(float(dpsi), abs=1e-12)
        assert eop.deps == pytest.approx(float(deps), abs=1e-12)
        assert eop.pm_x == pytest.approx(0.1025, abs=1e-12)

    def test_feed_record_prefix(self):
        assert NCEP_FEED.matches(ncep_line(60000, 0, 0, 0, 0, 0, 0), 60000)
        assert not NCEP_FEED.matches(ncep_line(60000, 0, 0, 0, 0, 0, 0), 6000)
        assert FINALS2000A_FEED.matches(finals_line(60000.0, 0.1, 0.2, 0.3), 60000)

    @pytest.mark.ci
    def test_live_feed(self):
        """The NCEP feed covers the coming days."""
        import time

        jd = time.time() / 86400.0 + 2440587.5 + 5.0
        eop = fetch_prediction(jd, NCEP_FEED, cache=PredictionCache())
        assert eop is not None
        assert abs(eop.ut1_utc) < 0.9
