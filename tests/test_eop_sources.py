"""Tests for the EOP record sources and the Lagrange interpolation."""

from __future__ import annotations

from pathlib import Path

import jax
import jax.numpy as jnp
import pytest

from astroframe.eop import (
    EOPRecord,
    EOPRecordSource,
    FileEOPSource,
    TableEOPSource,
    lagrange_interpolate,
    load_source_from_file,
    parse_finals_line,
)
from astroframe.errors import DataUnavailableError, InvalidInputError

from eop_samples import C04_HEADER, c04_line, finals_line


@pytest.fixture
def c04_file(tmp_path: Path) -> Path:
    path = tmp_path / "eopc04.62-now"
    lines = [c04_line(mjd, 0.3 + 1e-3 * (mjd - 51540)) for mjd in range(51540, 51560)]
    path.write_text(C04_HEADER + "\n".join(lines) + "\n", encoding="iso-8859-1")
    return path


# ---------------------------------------------------------------------------
# FileEOPSource
# ---------------------------------------------------------------------------


class TestFileEOPSource:
    def test_indexes_records(self, c04_file):
        source = FileEOPSource(c04_file)
        assert source.first_mjd() == 51540
        assert source.last_mjd() == 51559
        assert source.filepath == c04_file
        assert source.reads == 0

    def test_window(self, c04_file):
        source = FileEOPSource(c04_file)
        out = source.records(51543, 51546)
        assert sorted(out) == [51543, 51544, 51545, 51546]
        assert out[51545].ut1_utc == pytest.approx(0.305)
        assert source.reads == 1

    def test_partial_window(self, c04_file):
        source = FileEOPSource(c04_file)
        out = source.records(51557, 51562)
        assert sorted(out) == [51557, 51558, 51559]

    def test_uncovered_window_raises(self, c04_file):
        source = FileEOPSource(c04_file)
        with pytest.raises(DataUnavailableError, match="No EOP records between MJD 51600 and 51604"):
            source.records(51600, 51604)
        assert source.reads == 0

    def test_empty_file_raises(self, tmp_path):
        path = tmp_path / "header_only.txt"
        path.write_text(C04_HEADER, encoding="iso-8859-1")
        with pytest.raises(InvalidInputError, match="No valid EOP data found"):
            FileEOPSource(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FileEOPSource(tmp_path / "nope.txt")

    def test_satisfies_protocol(self, c04_file):
        assert isinstance(FileEOPSource(c04_file), EOPRecordSource)

    def test_finals_parser(self, tmp_path):
        path = tmp_path / "finals2000A.daily"
        lines = [finals_line(60300.0 + k, 0.1, 0.2, 0.01 * k, 1.0, 0.1, 0.2) for k in range(5)]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        source = FileEOPSource(path, parser=parse_finals_line)
        out = source.records(60301, 60302)
        assert out[60302].ut1_utc == pytest.approx(0.02)
        assert out[60302].dpsi_or_dx == pytest.approx(1e-4)


class TestLoadSourceFromFile:
    def test_c04(self, c04_file):
        source = load_source_from_file(c04_file)
        assert source.last_mjd() == 51559

    def test_standard_format(self, tmp_path):
        path = tmp_path / "finals.txt"
        path.write_text(finals_line(60300.0, 0.1, 0.2, 0.3) + "\n", encoding="utf-8")
        source = load_source_from_file(path, standard_format=True)
        assert source.first_mjd() == 60300

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="EOP file not found"):
            load_source_from_file(tmp_path / "nope.txt")


# ---------------------------------------------------------------------------
# TableEOPSource
# ---------------------------------------------------------------------------


def _rec(mjd: int, ut1_utc: float = 0.0) -> EOPRecord:
    return EOPRecord(mjd, 0.0, 0.0, ut1_utc, 0.0, 0.0, 0.0)


class TestTableEOPSource:
    def test_range(self):
        source = TableEOPSource([_rec(5), _rec(3), _rec(4)])
        assert (source.first_mjd(), source.last_mjd()) == (3, 5)

    def test_later_duplicate_wins(self):
        source = TableEOPSource([_rec(3, 0.1), _rec(3, 0.2)])
        assert source.records(3, 3)[3].ut1_utc == 0.2

    def test_window_counts_reads(self):
        source = TableEOPSource([_rec(m) for m in range(10)])
        assert sorted(source.records(8, 12)) == [8, 9]
        assert source.reads == 1

    def test_uncovered_window_raises(self):
        source = TableEOPSource([_rec(1)])
        with pytest.raises(DataUnavailableError):
            source.records(5, 9)

    def test_empty_raises(self):
        with pytest.raises(InvalidInputError, match="at least one record"):
            TableEOPSource([])

    def test_satisfies_protocol(self):
        assert isinstance(TableEOPSource([_rec(1)]), EOPRecordSource)


# ---------------------------------------------------------------------------
# Lagrange interpolation
# ---------------------------------------------------------------------------


class TestLagrangeInterpolate:
    def test_reproduces_cubic(self):
        xs = [0.0, 1.0, 2.0, 3.0, 4.0]
        ys = [x**3 - 2.0 * x + 1.0 for x in xs]
        assert float(lagrange_interpolate(xs, ys, 2.5)) == pytest.approx(2.5**3 - 5.0 + 1.0, abs=1e-12)

    def test_passes_through_nodes(self):
        xs = [51540.0, 51541.0, 51542.0]
        ys = [0.3, -0.1, 0.7]
        for x, y in zip(xs, ys):
            assert float(lagrange_interpolate(xs, ys, x)) == pytest.approx(y, abs=1e-12)

    def test_single_point_constant(self):
        assert float(lagrange_interpolate([3.0], [7.5], 10.0)) == 7.5

    def test_uneven_spacing(self):
        xs = [0.0, 1.0, 3.0, 4.0]
        ys = [2.0 * x + 1.0 for x in xs]
        assert float(lagrange_interpolate(xs, ys, 2.0)) == pytest.approx(5.0, abs=1e-12)

    def test_jit(self):
        xs = jnp.array([0.0, 1.0, 2.0])
        ys = jnp.array([1.0, 2.0, 5.0])
        result = jax.jit(lagrange_interpolate)(xs, ys, 1.5)
        assert float(result) == pytest.approx(3.25, abs=1e-12)

    def test_empty_raises(self):
        with pytest.raises(InvalidInputError):
            lagrange_interpolate([], [], 0.0)

    def test_mismatched_raises(self):
        with pytest.raises(InvalidInputError):
            lagrange_interpolate([0.0, 1.0], [1.0], 0.0)
