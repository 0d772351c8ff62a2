"""Per-test console reporting: checks, cases, messages, dumps and the result line."""

from __future__ import annotations

import sys
import time
from typing import TextIO

from labkit.console import (
    CASE_MAXSIZE,
    Color,
    TestState,
    basename,
    colored,
    dump_lines,
    line_indent,
    message_lines,
)

_SKIP_REASON_MAXSIZE = 256
_COLORED_MAXSIZE = 256
_TEST_LINE_WIDTH = 48


class AbortTest(Exception):
    """Raised to stop the currently running test immediately."""


class Reporter:
    """Tracks the state of the running test and writes its progress to a stream.

    verbose_level: 0 silent, 1 one line per test, 2 also failed conditions,
    3 all conditions. timer: 0 off, 1 real time, 2 CPU time.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        verbose_level: int = 2,
        tap: bool = False,
        colorize: bool = False,
        timer: int = 0,
    ) -> None:
        self.stream = stream
        self.verbose_level = verbose_level
        self.tap = tap
        self.colorize = colorize
        self.timer = timer

        self.current_name: str | None = None
        self.current_index = 0
        self.failures = 0
        self.already_logged = 0
        self.check_count = 0
        self.skip_count = 0
        self.cond_failed = False
        self.skip_reason = ""
        self.case_name = ""
        self.case_already_logged = 0

        self._start = 0.0
        self._end = 0.0

    # -- output helpers ---------------------------------------------------

    def _write(self, text: str) -> None:
        (self.stream if self.stream is not None else sys.stdout).write(text)

    def _colored(self, text: str, color: Color) -> int:
        self._write(colored(text, color, self.colorize))
        return len(text[: _COLORED_MAXSIZE - 1])

    def _indent(self, level: int) -> None:
        self._write(line_indent(level, self.tap))

    def _clock(self) -> float:
        return time.process_time() if self.timer == 2 else time.perf_counter()

    @property
    def duration(self) -> float:
        """Seconds between start_test and result for the last test."""
        return self._end - self._start

    def _duration_text(self) -> str:
        return f"{self.duration:.6f} secs"

    # -- test life cycle --------------------------------------------------

    def start_test(self, name: str, index: int) -> None:
        """Reset the per-test state before running the named test."""
        self.current_name = name
        self.current_index = index
        self.failures = 0
        self.already_logged = 0
        self.check_count = 0
        self.skip_count = 0
        self.cond_failed = False
        self._start = self._end = self._clock()

    def begin_test_line(self, name: str) -> None:
        """Write the leading part of the test's line."""
        if self.tap:
            return
        if self.verbose_level >= 3:
            self._colored(f"Test {name}:\n", Color.DEFAULT_INTENSIVE)
            self.already_logged += 1
        elif self.verbose_level >= 1:
            n = self._colored(f"Test {name}... ", Color.DEFAULT_INTENSIVE)
            if n < _TEST_LINE_WIDTH:
                self._write(" " * (_TEST_LINE_WIDTH - n))
        else:
            self.already_logged = 1

    def finish_test_line(self, state: TestState) -> None:
        """Write the outcome that ends the test's line."""
        if self.tap:
            status = "ok" if state in (TestState.SUCCESS, TestState.SKIPPED) else "not ok"
            suffix = " # SKIP" if state == TestState.SKIPPED else ""
            self._write(f"{status} {self.current_index + 1} - {self.current_name}{suffix}\n")
            if state == TestState.SUCCESS and self.timer:
                self._write(f"# Duration: {self._duration_text()}\n")
            return

        if state == TestState.SUCCESS:
            color, text = Color.GREEN_INTENSIVE, "OK"
        elif state == TestState.SKIPPED:
            color, text = Color.YELLOW_INTENSIVE, "SKIPPED"
        else:
            color, text = Color.RED_INTENSIVE, "FAILED"
        self._write("[ ")
        self._colored(text, color)
        self._write(" ]")
        if state == TestState.SUCCESS and self.timer:
            self._write(f"  {self._duration_text()}")
        self._write("\n")

    # -- checks -----------------------------------------------------------

    def check(self, cond, message: str, file: str | None = None, line: int = 0) -> bool:
        """Record a condition; return whether it holds."""
        if self.skip_count:
            # The test was skipped; later checks are ignored.
            self.cond_failed = False
            return True

        cond = bool(cond)
        if cond:
            result_text, result_color, needed_level = "ok", Color.GREEN, 3
        else:
            if not self.already_logged and self.current_name is not None:
                self.finish_test_line(TestState.FAILED)
            self.failures += 1
            self.already_logged += 1
            result_text, result_color, needed_level = "failed", Color.RED, 2

        if self.verbose_level >= needed_level:
            if not self.case_already_logged and self.case_name:
                self._indent(1)
                self._colored(f"Case {self.case_name}:\n", Color.DEFAULT_INTENSIVE)
                self.already_logged += 1
                self.case_already_logged += 1

            self._indent(2 if self.case_name else 1)
            if file is not None:
                self._write(f"{basename(file)}:{line}: ")
            self._write(f"{message}... ")
            self._colored(result_text, result_color)
            self._write("\n")
            self.already_logged += 1

        self.check_count += 1
        self.cond_failed = not cond
        return cond

    def skip(self, reason: str, file: str | None = None, line: int = 0) -> None:
        """Mark the test as skipped; only allowed before any check."""
        reason = reason[: _SKIP_REASON_MAXSIZE - 1]
        if reason.endswith("."):
            reason = reason[:-1]
        self.skip_reason = reason

        if self.check_count > 0:
            self.check(False, "Cannot skip, already performed some checks", file, line)
            return

        if self.verbose_level >= 2:
            if not self.already_logged and self.current_name is not None:
                self.finish_test_line(TestState.SKIPPED)
            self.already_logged += 1

            self._indent(1)
            if file is not None:
                self._write(f"{basename(file)}:{line}: ")
            self._write(f"{reason}... ")
            self._colored("skipped", Color.YELLOW)
            self._write("\n")
            self.already_logged += 1

        self.skip_count += 1

    def case(self, name: str | None) -> None:
        """Start a named case within the test; None ends the current case."""
        if self.verbose_level < 2:
            return
        if self.case_name:
            self.case_already_logged = 0
            self.case_name = ""
        if name is None:
            return

        self.case_name = name[: CASE_MAXSIZE - 2]
        if self.verbose_level >= 3:
            self._indent(1)
            self._colored(f"Case {self.case_name}:\n", Color.DEFAULT_INTENSIVE)
            self.already_logged += 1
            self.case_already_logged += 1

    def _details_allowed(self) -> bool:
        return (
            self.verbose_level >= 2
            and self.current_name is not None
            and self.cond_failed
        )

    def message(self, text: str) -> None:
        """Write extra detail, but only right after a failed check."""
        if not self._details_allowed():
            return
        level = 3 if self.case_name else 2
        for text_line in message_lines(text):
            self._indent(level)
            self._write(f"{text_line}\n")

    def dump(self, title: str, data: bytes) -> None:
        """Write a hex dump of data, but only right after a failed check."""
        if not self._details_allowed():
            return
        base = 3 if self.case_name else 2
        for depth, text_line in dump_lines(title, data):
            self._indent(base + depth)
            self._write(f"{text_line}\n")

    def error(self, text: str) -> None:
        """Report that the test ended abnormally."""
        if self.verbose_level == 0:
            return
        if self.verbose_level >= 2:
            self._indent(1)
            if self.verbose_level >= 3:
                self._colored("ERROR: ", Color.RED_INTENSIVE)
            self._write(f"{text}\n")
        if self.verbose_level >= 3:
            self._write("\n")

    def abort(self) -> None:
        """Stop the running test at once."""
        raise AbortTest(self.current_name)

    def result(self) -> TestState:
        """Finish the current test, write its outcome and return it."""
        self._end = self._clock()

        if self.failures > 0:
            state = TestState.FAILED
        elif self.skip_count > 0:
            state = TestState.SKIPPED
        else:
            state = TestState.SUCCESS

        if not self.already_logged:
            self.finish_test_line(state)

        if self.verbose_level >= 3:
            self._indent(1)
            if state == TestState.SUCCESS:
                self._colored("SUCCESS: ", Color.GREEN_INTENSIVE)
                self._write("All conditions have passed.\n")
                if self.timer:
                    self._indent(1)
                    self._write(f"Duration: {self._duration_text()}\n")
            elif state == TestState.SKIPPED:
                self._colored("SKIPPED: ", Color.YELLOW_INTENSIVE)
                self._write(f"{self.skip_reason}.\n")
            else:
                self._colored("FAILED: ", Color.RED_INTENSIVE)
                plural = "" if self.failures == 1 else "s"
                verb = "has" if self.failures == 1 else "have"
                self._write(f"{self.failures} condition{plural} {verb} failed.\n")
            self._write("\n")

        self.case(None)
        self.current_name = None
        return state