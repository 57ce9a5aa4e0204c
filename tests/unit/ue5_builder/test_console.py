"""
Unit tests for console output sinks.
"""

import io
import pytest
from unittest.mock import patch

from ue5_builder.console import (
    ERROR,
    HIGHLIGHT,
    SUCCESS,
    ConsoleSink,
    MemorySink,
    color_supported,
    wait_for_acknowledgement,
)


class FakeTTY(io.StringIO):
    def isatty(self):
        return True


class TestConsoleSink:
    def test_plain_line(self):
        stream = io.StringIO()

        ConsoleSink(stream, use_color=True).line("Compiling project...")

        assert stream.getvalue() == "Compiling project...\n"

    def test_styled_with_color(self):
        stream = io.StringIO()

        ConsoleSink(stream, use_color=True).styled("failed", ERROR)

        assert stream.getvalue() == "\033[91mfailed\033[0m\n"

    def test_styled_without_color(self):
        stream = io.StringIO()
        sink = ConsoleSink(stream, use_color=False)

        sink.styled("ok", SUCCESS)

        assert stream.getvalue() == "ok\n"
        assert sink.highlight("Demo") == "Demo"

    def test_highlight(self):
        assert ConsoleSink(io.StringIO(), use_color=True).highlight("Demo") == "\033[96mDemo\033[0m"

    def test_color_autodetect_non_tty(self):
        assert ConsoleSink(io.StringIO()).use_color is False


class TestColorSupported:
    def test_no_color_env(self):
        assert color_supported(FakeTTY(), environ={"NO_COLOR": "1"}) is False

    def test_not_a_tty(self):
        assert color_supported(io.StringIO(), environ={}) is False

    def test_tty(self):
        with patch("ue5_builder.console.sys.platform", "linux"):
            assert color_supported(FakeTTY(), environ={}) is True


class TestMemorySink:
    def test_records_styles(self):
        sink = MemorySink()

        sink.line("plain")
        sink.styled("done", SUCCESS)

        assert sink.entries == [(None, "plain"), (SUCCESS, "done")]
        assert sink.lines == ["plain", "done"]
        assert sink.with_style(SUCCESS) == ["done"]
        assert sink.with_style(HIGHLIGHT) == []


class TestWaitForAcknowledgement:
    def test_reads_line(self, monkeypatch):
        monkeypatch.setattr("builtins.input", lambda: "")
        sink = MemorySink()

        wait_for_acknowledgement(sink)

        assert "Press Enter to exit..." in sink.lines

    def test_eof_tolerated(self, monkeypatch):
        def raise_eof():
            raise EOFError

        monkeypatch.setattr("builtins.input", raise_eof)

        wait_for_acknowledgement(MemorySink())

    def test_interrupt_tolerated(self, monkeypatch):
        def raise_interrupt():
            raise KeyboardInterrupt

        monkeypatch.setattr("builtins.input", raise_interrupt)

        wait_for_acknowledgement(MemorySink())
