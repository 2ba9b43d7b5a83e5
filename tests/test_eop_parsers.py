"""Tests for the IERS EOP file parsers."""

from __future__ import annotations

import math
from pathlib import Path

import pytest

from astroframe.eop import (
    EOPRecord,
    parse_c04_file,
    parse_c04_line,
    parse_finals_line,
    parse_ncep_prediction_line,
)
from astroframe.errors import InvalidInputError

from eop_samples import C04_HEADER, C04_LINE, finals_line


# ---------------------------------------------------------------------------
# C04
# ---------------------------------------------------------------------------


class TestParseC04Line:
    def test_valid_line(self):
        rec = parse_c04_line(C04_LINE)
        assert rec == EOPRecord(51544, 0.043282, 0.377909, 0.3554880, 0.0009830, -0.050471, -0.002427)
        assert isinstance(rec.mjd, int)

    def test_header_lines_skipped(self):
        for line in C04_HEADER.splitlines():
            assert parse_c04_line(line) is None

    def test_blank_line(self):
        assert parse_c04_line("") is None

    def test_too_few_fields(self):
        assert parse_c04_line("2000   1   1  51544   0.043282") is None

    def test_non_integer_date(self):
        assert parse_c04_line("2000.5" + C04_LINE[4:]) is None

    def test_non_numeric_value(self):
        assert parse_c04_line(C04_LINE.replace("0.377909", "abc")) is None

    def test_c04_20_layout(self):
        line = (
            "2000   1   1   0.00  51544   0.043282   0.377909   0.3554880  -0.000128  -0.000181"
            "   0.000061  -0.000145   0.0009830   0.000075   0.000069   0.0000040"
        )
        rec = parse_c04_line(line)
        assert rec == EOPRecord(51544, 0.043282, 0.377909, 0.3554880, 0.0009830, -0.000128, -0.000181)

    def test_c04_20_layout_too_few_fields(self):
        assert parse_c04_line("2000   1   1   0.00  51544   0.043282   0.377909   0.3554880  -0.000128  -0.000181") is None


class TestParseC04File:
    def test_records_in_file_order(self, tmp_path: Path):
        second = C04_LINE.replace("   1  51544", "   2  51545")
        path = tmp_path / "eopc04.txt"
        path.write_text(C04_HEADER + C04_LINE + "\n" + second + "\n", encoding="iso-8859-1")
        records = parse_c04_file(path)
        assert [r.mjd for r in records] == [51544, 51545]

    def test_no_records_raises(self, tmp_path: Path):
        path = tmp_path / "empty.txt"
        path.write_text(C04_HEADER, encoding="iso-8859-1")
        with pytest.raises(InvalidInputError, match="No valid EOP data found"):
            parse_c04_file(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            parse_c04_file(tmp_path / "nope.txt")


# ---------------------------------------------------------------------------
# IERS standard format
# ---------------------------------------------------------------------------


class TestParseFinalsLine:
    def test_full_line(self):
        rec = parse_finals_line(finals_line(60304.0, 0.105, 0.253, 0.0123456, 1.2345, 0.250, -0.125))
        assert rec.mjd == 60304
        assert rec.pm_x == pytest.approx(0.105)
        assert rec.pm_y == pytest.approx(0.253)
        assert rec.ut1_utc == pytest.approx(0.0123456)
        assert rec.lod == pytest.approx(1.2345e-3)
        assert rec.dpsi_or_dx == pytest.approx(0.250e-3)
        assert rec.deps_or_dy == pytest.approx(-0.125e-3)

    def test_blank_optional_columns_are_nan(self):
        rec = parse_finals_line(finals_line(60304.0, 0.105, 0.253, 0.0123456))
        assert rec is not None
        assert math.isnan(rec.lod)
        assert math.isnan(rec.dpsi_or_dx)
        assert math.isnan(rec.deps_or_dy)

    def test_trailing_newline(self):
        rec = parse_finals_line(finals_line(60304.0, 0.1, 0.2, 0.3) + "\r\n")
        assert rec.mjd == 60304

    def test_overlong_line_skipped(self):
        assert parse_finals_line(finals_line(60304.0, 0.1, 0.2, 0.3).ljust(190, "x")) is None

    def test_missing_required_field(self):
        line = finals_line(60304.0, 0.1, 0.2, 0.3)
        assert parse_finals_line(line[:58]) is None

    def test_blank_line(self):
        assert parse_finals_line("") is None


# ---------------------------------------------------------------------------
# NCEP predictions
# ---------------------------------------------------------------------------


class TestParseNCEPLine:
    def test_valid_line(self):
        rec = parse_ncep_prediction_line("60300.0000  0.1234  0.2345  -0.0123  0.0010  -0.0500  -0.0060")
        assert rec == EOPRecord(60300, 0.1234, 0.2345, -0.0123, 0.0010, -0.0500, -0.0060)

    def test_short_line(self):
        assert parse_ncep_prediction_line("60300.0000  0.1234") is None

    def test_text_line(self):
        assert parse_ncep_prediction_line("MJD x y UT1-UTC LOD dPsi dEps") is None
