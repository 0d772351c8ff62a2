"""Console formatting helpers for the unit-test runner: colours, indentation and dumps."""

from __future__ import annotations

import enum
import os

CASE_MAXSIZE = 64
MSG_MAXSIZE = 1024
DUMP_MAXSIZE = 1024

_COLORED_MAXSIZE = 256
_BYTES_PER_LINE = 16
_RESET = "\033[0m"


class Color(enum.Enum):
    """Colours used for highlighted console output."""

    DEFAULT = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    DEFAULT_INTENSIVE = 10
    RED_INTENSIVE = 11
    GREEN_INTENSIVE = 12
    YELLOW_INTENSIVE = 13

    @property
    def escape(self) -> str:
        """The ANSI escape sequence that switches to this colour."""
        return _ESCAPES.get(self, _RESET)


_ESCAPES = {
    Color.RED: "\033[0;31m",
    Color.GREEN: "\033[0;32m",
    Color.YELLOW: "\033[0;33m",
    Color.RED_INTENSIVE: "\033[1;31m",
    Color.GREEN_INTENSIVE: "\033[1;32m",
    Color.YELLOW_INTENSIVE: "\033[1;33m",
    Color.DEFAULT_INTENSIVE: "\033[1m",
}


class TestState(enum.IntEnum):
    """Life-cycle state of a unit test; the last four are final outcomes."""

    __test__ = False

    INITIAL = -4
    SELECTED = -3
    NEEDTORUN = -2
    EXCLUDED = -1
    SUCCESS = 0
    FAILED = 1
    SKIPPED = 2


def colored(text: str, color: Color, enabled: bool) -> str:
    """Return text (cut to 255 characters) wrapped in colour codes when enabled."""
    text = text[: _COLORED_MAXSIZE - 1]
    if not enabled:
        return text
    return f"{color.escape}{text}{_RESET}"


def line_indent(level: int, tap: bool = False) -> str:
    """Return the indentation for a nesting level; in TAP mode it starts with '#'."""
    n = level * 2
    if tap and n > 0:
        return "#" + " " * (n - 1)
    return " " * max(n, 0)


def basename(path: str) -> str:
    """Return the last component of a path."""
    start = path.rfind("/") + 1
    if os.name == "nt":
        start = max(start, path.rfind("\\") + 1)
    return path[start:]


def _printable(byte: int) -> str:
    return "." if byte < 32 or byte == 127 else chr(byte)


def dump_lines(title: str, data: bytes, maxsize: int = DUMP_MAXSIZE) -> list[tuple[int, str]]:
    """Return a hex dump as (depth, text) pairs.

    The title has depth 0; the hex rows and the truncation note have depth 1,
    meaning one indentation level deeper than the title.
    """
    data = bytes(data)
    truncated = max(len(data) - maxsize, 0)
    data = data[:maxsize]

    lines = [(0, title if title.endswith(":") else f"{title}:")]
    for start in range(0, len(data), _BYTES_PER_LINE):
        chunk = data[start : start + _BYTES_PER_LINE]
        hex_part = "".join(f" {byte:02x}" for byte in chunk)
        hex_part += "   " * (_BYTES_PER_LINE - len(chunk))
        text_part = "".join(_printable(byte) for byte in chunk)
        lines.append((1, f"{start:08x}: {hex_part}  {text_part}"))

    if truncated > 0:
        lines.append((1, f"           ... (and more {truncated} bytes)"))
    return lines


def message_lines(text: str, maxsize: int = MSG_MAXSIZE) -> list[str]:
    """Split a message (cut to maxsize - 1 characters) into lines to print.

    A trailing newline does not produce an extra empty line.
    """
    text = text[: max(maxsize - 1, 0)]
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines