#!/usr/bin/env python3
"""
UE5 Builder - Console Output

Operator-facing status lines go through an OutputSink so the pipeline can be
driven without a real terminal.
"""

import os
import sys
from typing import List, Optional, Protocol, TextIO, Tuple

INFO = "info"
WARNING = "warning"
ERROR = "error"
SUCCESS = "success"
HIGHLIGHT = "highlight"
TITLE = "title"

STYLES = (INFO, WARNING, ERROR, SUCCESS, HIGHLIGHT, TITLE)


class OutputSink(Protocol):
    def line(self, text: str) -> None:
        ...

    def styled(self, text: str, style: str) -> None:
        ...

    def highlight(self, text: str) -> str:
        ...


def _enable_windows_ansi() -> bool:
    """Try to enable ANSI escape sequences on Windows 10+ consoles."""
    try:
        import ctypes
        kernel32 = ctypes.windll.kernel32
        handle = kernel32.GetStdHandle(-11)
        mode = ctypes.c_ulong()
        if kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
            mode.value |= 0x0004  # ENABLE_VIRTUAL_TERMINAL_PROCESSING
            return bool(kernel32.SetConsoleMode(handle, mode))
    except (AttributeError, OSError):
        pass
    return False


def color_supported(stream: TextIO, environ: Optional[dict] = None) -> bool:
    """Colors only for interactive terminals, and never when NO_COLOR is set."""
    environ = os.environ if environ is None else environ
    if "NO_COLOR" in environ:
        return False
    isatty = getattr(stream, "isatty", None)
    if isatty is None or not isatty():
        return False
    if sys.platform == "win32":
        return _enable_windows_ansi()
    return True


class ConsoleSink:
    """Print status lines to a terminal with ANSI colors."""

    COLORS = {
        "reset": "\033[0m",
        INFO: "\033[94m",
        WARNING: "\033[93m",
        ERROR: "\033[91m",
        SUCCESS: "\033[92m",
        HIGHLIGHT: "\033[96m",
        TITLE: "\033[1;97m",
    }

    def __init__(self, stream: Optional[TextIO] = None, use_color: Optional[bool] = None):
        self.stream = stream if stream is not None else sys.stdout
        if use_color is None:
            use_color = color_supported(self.stream)
        self.use_color = use_color

    def _color(self, text: str, style: str) -> str:
        if not self.use_color or style not in self.COLORS:
            return text
        return f"{self.COLORS[style]}{text}{self.COLORS['reset']}"

    def line(self, text: str) -> None:
        print(text, file=self.stream, flush=True)

    def styled(self, text: str, style: str) -> None:
        self.line(self._color(text, style))

    def highlight(self, text: str) -> str:
        return self._color(text, HIGHLIGHT)


class MemorySink:
    """Records every line as (style, text); style is None for plain lines."""

    def __init__(self):
        self.entries: List[Tuple[Optional[str], str]] = []

    def line(self, text: str) -> None:
        self.entries.append((None, text))

    def styled(self, text: str, style: str) -> None:
        self.entries.append((style, text))

    def highlight(self, text: str) -> str:
        return text

    @property
    def lines(self) -> List[str]:
        return [text for _, text in self.entries]

    def with_style(self, style: str) -> List[str]:
        return [text for s, text in self.entries if s == style]


def wait_for_acknowledgement(sink: OutputSink, prompt: str = "Press Enter to exit...") -> None:
    """Keep the console window open until the operator presses Enter."""
    sink.line("")
    sink.line(prompt)
    try:
        input()
    except (EOFError, KeyboardInterrupt):
        pass
