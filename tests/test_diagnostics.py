"""Tests for the warning collector."""

import logging

from astroframe.diagnostics import Diagnostics


class TestDiagnostics:
    def test_empty(self):
        diag = Diagnostics()
        assert len(diag) == 0
        assert diag.messages == []

    def test_warn_keeps_order(self):
        diag = Diagnostics()
        diag.warn("first")
        diag.warn("second")
        assert diag.messages == ["first", "second"]

    def test_format_args(self):
        diag = Diagnostics()
        diag.warn("UT1-UTC not available for JD %.1f", 2460000.5)
        assert diag.messages == ["UT1-UTC not available for JD 2460000.5"]

    def test_percent_without_args_is_literal(self):
        diag = Diagnostics()
        diag.warn("100% cached")
        assert diag.messages == ["100% cached"]

    def test_messages_is_copy(self):
        diag = Diagnostics()
        diag.warn("a")
        diag.messages.append("b")
        assert len(diag) == 1

    def test_drain(self):
        diag = Diagnostics()
        diag.warn("a")
        diag.warn("b")
        assert diag.drain() == ["a", "b"]
        assert len(diag) == 0

    def test_clear(self):
        diag = Diagnostics()
        diag.warn("a")
        diag.clear()
        assert diag.messages == []

    def test_contains_substring(self):
        diag = Diagnostics()
        diag.warn("EOP prediction from eop_pred_ncep not available: timeout")
        assert "not available" in diag
        assert "UT1" not in diag
        assert 3 not in diag

    def test_logged_at_warning(self, caplog):
        diag = Diagnostics()
        with caplog.at_level(logging.WARNING, logger="astroframe.diagnostics"):
            diag.warn("dX/dY missing")
        assert "dX/dY missing" in caplog.text
