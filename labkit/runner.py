"""Running a suite of unit tests with console, TAP and XUnit reporting."""

from __future__ import annotations

import os
import re
import signal
import sys
import time
from collections.abc import Callable, Collection, Sequence
from dataclasses import dataclass, field
from typing import TextIO

from labkit.cmdline import OptId, OptionSpec, iter_options
from labkit.console import Color, TestState, basename, colored
from labkit.reporter import AbortTest, Reporter
from labkit.xunit import TestResult, summary_lines, write_xml

_WORD_DELIMITERS = " \t-_/.,:;"
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")
_HELP_LIST_LIMIT = 16

_SUMMARY_COLORS = (
    ("Summary:", Color.DEFAULT_INTENSIVE),
    ("SUCCESS:", Color.GREEN_INTENSIVE),
    ("FAILED:", Color.RED_INTENSIVE),
)

_SIGNAL_NAMES = {
    getattr(signal, name): name
    for name in (
        "SIGINT",
        "SIGHUP",
        "SIGQUIT",
        "SIGABRT",
        "SIGKILL",
        "SIGSEGV",
        "SIGILL",
        "SIGTERM",
    )
    if hasattr(signal, name)
}

_OPTIONS = (
    OptionSpec("exclude", "X", "exclude"),
    OptionSpec("exclude", "s", "skip"),
    OptionSpec("exec", None, "exec", optional_arg=True),
    OptionSpec("no-exec", "E", "no-exec"),
    OptionSpec("time", "t", "time", optional_arg=True),
    OptionSpec("time", None, "timer", optional_arg=True),
    OptionSpec("no-summary", None, "no-summary"),
    OptionSpec("tap", None, "tap"),
    OptionSpec("list", "l", "list"),
    OptionSpec("verbose", "v", "verbose", optional_arg=True),
    OptionSpec("quiet", "q", "quiet"),
    OptionSpec("color", None, "color", optional_arg=True),
    OptionSpec("no-color", None, "no-color"),
    OptionSpec("help", "h", "help"),
    OptionSpec("worker", None, "worker", required_arg=True),
    OptionSpec("xml-output", "x", "xml-output", required_arg=True),
)


@dataclass(frozen=True)
class UnitTest:
    """A named test function; it receives the Reporter to record checks with."""

    __test__ = False

    name: str
    func: Callable[[Reporter], None]


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def name_contains_word(name: str, pattern: str) -> bool:
    """Whether pattern occurs in name bounded by word delimiters or the ends."""
    pos = name.find(pattern)
    while pos != -1:
        end = pos + len(pattern)
        starts = pos == 0 or name[pos - 1] in _WORD_DELIMITERS
        ends = end == len(name) or name[end] in _WORD_DELIMITERS
        if starts and ends:
            return True
        pos = name.find(pattern, pos + 1)
    return False


def select(names: Sequence[str], pattern: str) -> list[int]:
    """Indices of the names matched by pattern: exact, then by word, then by substring."""
    for i, name in enumerate(names):
        if name == pattern:
            return [i]
    by_word = [i for i, name in enumerate(names) if name_contains_word(name, pattern)]
    if by_word:
        return by_word
    return [i for i, name in enumerate(names) if pattern in name]


def _list_names(names: Sequence[str]) -> str:
    return "Unit tests:\n" + "".join(f"  {name}\n" for name in names)


def help_text(argv0: str, names: Sequence[str]) -> str:
    """Return the usage text; short suites also get their test names listed."""
    lines = [
        f"Usage: {argv0} [options] [test...]",
        "",
        "Run the specified unit tests; or if the option '--exclude' is used, run all",
        "tests in the suite but those listed.  By default, if no tests are specified",
        "on the command line, all unit tests in the suite are run.",
        "",
        "Options:",
        "  -X, --exclude         Execute all unit tests but the listed ones",
        "      --exec[=WHEN]     If supported, execute unit tests as child processes",
        "                          (WHEN is one of 'auto', 'always', 'never')",
        "  -E, --no-exec         Same as --exec=never",
        "  -t, --time            Measure test duration (real time)",
        "      --time=TIMER      Measure test duration, using given timer",
        "                          (TIMER is one of 'real', 'cpu')",
        "      --no-summary      Suppress printing of test results summary",
        "      --tap             Produce TAP-compliant output",
        "                          (Test Anything Protocol)",
        "  -x, --xml-output=FILE Enable XUnit output to the given file",
        "  -l, --list            List unit tests in the suite and exit",
        "  -v, --verbose         Make output more verbose",
        "      --verbose=LEVEL   Set verbose level to LEVEL:",
        "                          0 ... Be silent",
        "                          1 ... Output one line per test (and summary)",
        "                          2 ... As 1 and failed conditions (this is default)",
        "                          3 ... As 1 and all conditions (and extended summary)",
        "  -q, --quiet           Same as --verbose=0",
        "      --color[=WHEN]    Enable colorized output",
        "                          (WHEN is one of 'auto', 'always', 'never')",
        "      --no-color        Same as --color=never",
        "  -h, --help            Display this help and exit",
    ]
    text = "\n".join(lines) + "\n"
    if len(names) < _HELP_LIST_LIMIT:
        text += "\n" + _list_names(names)
    return text


def under_debugger() -> bool:
    """Whether the process is being traced, judged from /proc/self/status."""
    try:
        with open("/proc/self/status", encoding="ascii", errors="replace") as status:
            for line in status:
                if line.startswith("TracerPid:"):
                    return _atoi(line[len("TracerPid:"):]) != 0
    except OSError:
        pass
    return False


@dataclass
class Runner:
    """Runs the selected tests, writes progress and summary, and gives the exit code.

    selected holds test names; with exclude_mode they are the ones left out.
    no_exec None means: run in child processes unless only one test runs or a
    debugger is attached.
    """

    tests: Sequence[UnitTest]
    selected: Collection[str] = ()
    exclude_mode: bool = False
    no_exec: bool | None = None
    no_summary: bool = False
    tap: bool = False
    verbose_level: int = 2
    colorize: bool = False
    timer: int = 0
    worker: bool = False
    worker_index: int = 0
    xml_output: TextIO | None = None
    argv0: str = "test"
    stream: TextIO | None = None
    init: Callable[[str], None] | None = None
    fini: Callable[[str], None] | None = None
    results: list[TestResult] = field(default_factory=list, init=False)

    def _out(self) -> TextIO:
        return self.stream if self.stream is not None else sys.stdout

    def _flush(self) -> None:
        self._out().flush()
        sys.stderr.flush()

    def _clock(self) -> float:
        return time.process_time() if self.timer == 2 else time.perf_counter()

    def _initial_states(self) -> list[TestState]:
        if not self.selected:
            return [TestState.NEEDTORUN for _ in self.tests]
        chosen, other = TestState.NEEDTORUN, TestState.EXCLUDED
        if self.exclude_mode:
            chosen, other = other, chosen
        return [chosen if test.name in self.selected else other for test in self.tests]

    def run(self) -> int:
        """Run the tests and return the process exit code."""
        states = self._initial_states()
        to_run = states.count(TestState.NEEDTORUN)

        no_exec = self.no_exec
        if no_exec is None:
            no_exec = to_run <= 1 or under_debugger()

        verbose_level = self.verbose_level
        no_summary = self.no_summary
        if self.tap:
            verbose_level = min(verbose_level, 2)
            no_summary = True
            if not self.worker:
                self._out().write(f"1..{to_run}\n")

        reporter = Reporter(
            stream=self.stream,
            verbose_level=verbose_level,
            tap=self.tap,
            colorize=self.colorize,
            timer=self.timer,
        )

        durations = [0.0] * len(self.tests)
        index = self.worker_index
        for i, test in enumerate(self.tests):
            if states[i] != TestState.NEEDTORUN:
                continue
            start = self._clock()
            states[i] = self._run_test(test, index, reporter, no_exec)
            durations[i] = self._clock() - start
            index += 1

        self.results = [
            TestResult(test.name, state, duration)
            for test, state, duration in zip(self.tests, states, durations)
        ]

        if not no_summary:
            self._write_summary(verbose_level)
        if self.xml_output is not None:
            write_xml(self.xml_output, basename(self.argv0), self.results)
        return self._exit_code()

    def _run_test(self, test: UnitTest, index: int, reporter: Reporter, no_exec: bool) -> TestState:
        if no_exec or not hasattr(os, "fork"):
            return self._do_run(test, index, reporter)
        return self._run_forked(test, index, reporter)

    def _do_run(self, test: UnitTest, index: int, reporter: Reporter) -> TestState:
        reporter.start_test(test.name, index)
        try:
            if self.init is not None:
                self.init(test.name)
            reporter.begin_test_line(test.name)
            self._flush()
            try:
                test.func(reporter)
            except AbortTest:
                pass
        except Exception as exc:
            reporter.check(False, "Threw an exception")
            reporter.message(f"{type(exc).__name__}: {exc}")
        state = reporter.result()
        if self.fini is not None:
            self.fini(test.name)
        return state

    def _run_forked(self, test: UnitTest, index: int, reporter: Reporter) -> TestState:
        self._flush()
        pid = os.fork()
        if pid == 0:
            code = int(TestState.FAILED)
            try:
                code = int(self._do_run(test, index, reporter))
                self._flush()
            finally:
                os._exit(code)

        _, status = os.waitpid(pid, 0)
        if os.WIFEXITED(status):
            code = os.WEXITSTATUS(status)
            try:
                return TestState(code)
            except ValueError:
                reporter.error(f"Test ended in an unexpected way [{code}].")
        elif os.WIFSIGNALED(status):
            signum = os.WTERMSIG(status)
            name = _SIGNAL_NAMES.get(signum, f"signal {signum}")
            reporter.error(f"Test interrupted by {name}.")
        else:
            reporter.error(f"Test ended in an unexpected way [{status}].")
        return TestState.FAILED

    def _write_summary(self, verbose_level: int) -> None:
        out = self._out()
        for text in summary_lines(self.results, verbose_level):
            for prefix, color in _SUMMARY_COLORS:
                if text.startswith(prefix):
                    text = colored(prefix, color, self.colorize) + text[len(prefix):]
                    break
            out.write(f"{text}\n")

    def _exit_code(self) -> int:
        excluded = sum(1 for r in self.results if r.state == TestState.EXCLUDED)
        if self.worker and excluded + 1 == len(self.results):
            return next(int(r.state) for r in self.results if r.state != TestState.EXCLUDED)
        return 1 if any(r.state == TestState.FAILED for r in self.results) else 0


class _Exit(Exception):
    def __init__(self, code: int) -> None:
        super().__init__(code)
        self.code = code


def _fail(*lines: str) -> None:
    for line in lines:
        print(line, file=sys.stderr)
    raise _Exit(2)


def _apply_options(runner: Runner, args: Sequence[str]) -> None:
    argv0 = runner.argv0
    names = [test.name for test in runner.tests]
    try_help = f"Try '{argv0} --help' for more information."
    selected: set[str] = set()

    def bad_value(arg: str, option: str) -> None:
        _fail(f"{argv0}: Unrecognized argument '{arg}' for option {option}.", try_help)

    for opt_id, arg in iter_options(_OPTIONS, args):
        match opt_id:
            case "exclude":
                runner.exclude_mode = True
            case "exec":
                if arg is None or arg == "always":
                    runner.no_exec = False
                elif arg == "never":
                    runner.no_exec = True
                elif arg != "auto":
                    bad_value(arg, "--exec")
            case "no-exec":
                runner.no_exec = True
            case "time":
                if arg is None or arg == "real":
                    runner.timer = 1
                elif arg == "cpu":
                    runner.timer = 2
                else:
                    bad_value(arg, "--time")
            case "no-summary":
                runner.no_summary = True
            case "tap":
                runner.tap = True
            case "list":
                print(_list_names(names), end="")
                raise _Exit(0)
            case "verbose":
                runner.verbose_level = _atoi(arg) if arg is not None else runner.verbose_level + 1
            case "quiet":
                runner.verbose_level = 0
            case "color":
                if arg is None or arg == "always":
                    runner.colorize = True
                elif arg == "never":
                    runner.colorize = False
                elif arg != "auto":
                    bad_value(arg, "--color")
            case "no-color":
                runner.colorize = False
            case "help":
                print(help_text(argv0, names), end="")
                raise _Exit(0)
            case "worker":
                runner.worker = True
                runner.worker_index = _atoi(arg or "")
            case "xml-output":
                if runner.xml_output is not None:
                    runner.xml_output.close()
                try:
                    runner.xml_output = open(arg, "w", encoding="utf-8")
                except OSError as exc:
                    _fail(f"Unable to open '{arg}': {exc.strerror}")
            case OptId.NONE:
                matched = select(names, arg)
                if not matched:
                    _fail(
                        f"{argv0}: Unrecognized unit test '{arg}'",
                        f"Try '{argv0} --list' for list of unit tests.",
                    )
                selected.update(names[i] for i in matched)
            case OptId.UNKNOWN:
                _fail(f"Unrecognized command line option '{arg}'.", try_help)
            case OptId.MISSING_ARG:
                _fail(f"The command line option '{arg}' requires an argument.", try_help)
            case OptId.BOGUS_ARG:
                _fail(f"The command line option '{arg}' does not expect an argument.", try_help)

    runner.selected = frozenset(selected)


def main(tests: Sequence[UnitTest], argv=None) -> int:
    """Parse the command line (program name excluded), run the suite, return the exit code."""
    args = sys.argv[1:] if argv is None else list(argv)
    argv0 = sys.argv[0] if sys.argv and sys.argv[0] else "test"
    runner = Runner(list(tests), argv0=argv0, colorize=sys.stdout.isatty())
    try:
        try:
            _apply_options(runner, args)
        except _Exit as exc:
            return exc.code
        return runner.run()
    finally:
        if runner.xml_output is not None:
            runner.xml_output.close()