"""Test-run summaries: the console summary and an XUnit XML report."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TextIO
from xml.sax.saxutils import escape

from labkit.console import TestState

_ATTR_ENTITIES = {'"': "&quot;"}


@dataclass(frozen=True)
class TestResult:
    """The final state of one unit test and how long it took, in seconds."""

    __test__ = False

    name: str
    state: TestState
    duration: float = 0.0


def _count(results: Iterable[TestResult], state: TestState) -> int:
    return sum(1 for result in results if result.state == state)


def _attr(value: str) -> str:
    return escape(value, _ATTR_ENTITIES)


def _state_element(state: TestState) -> str | None:
    if state == TestState.SUCCESS:
        return None
    if state in (TestState.EXCLUDED, TestState.SKIPPED):
        return "<skipped />"
    return "<failure />"


def write_xml(stream: TextIO, suite_name: str, results: Sequence[TestResult]) -> None:
    """Write an XUnit report of all tests, excluded ones counted as skipped."""
    failures = _count(results, TestState.FAILED)
    skipped = _count(results, TestState.SKIPPED) + _count(results, TestState.EXCLUDED)

    stream.write('<?xml version="1.0" encoding="UTF-8"?>\n')
    stream.write(
        f'<testsuite name="{_attr(suite_name)}" tests="{len(results)}" '
        f'errors="0" failures="{failures}" skip="{skipped}">\n'
    )
    for result in results:
        stream.write(
            f'  <testcase name="{_attr(result.name)}" time="{result.duration:.2f}">\n'
        )
        element = _state_element(result.state)
        if element is not None:
            stream.write(f"    {element}\n")
        stream.write("  </testcase>\n")
    stream.write("</testsuite>\n")


def summary_lines(results: Sequence[TestResult], verbose_level: int) -> list[str]:
    """Return the lines of the end-of-run summary; none when verbose_level is below 1."""
    if verbose_level < 1:
        return []

    n_run = len(results) - _count(results, TestState.EXCLUDED)
    n_success = _count(results, TestState.SUCCESS)
    n_failed = _count(results, TestState.FAILED)

    lines: list[str] = []
    if verbose_level >= 3:
        lines.append("Summary:")
        lines.append(f"  Count of run unit tests:        {n_run:4d}")
        lines.append(f"  Count of successful unit tests: {n_success:4d}")
        lines.append(f"  Count of failed unit tests:     {n_failed:4d}")

    if n_failed == 0:
        lines.append("SUCCESS: No unit tests have failed.")
    else:
        verb = "has" if n_failed == 1 else "have"
        lines.append(f"FAILED: {n_failed} of {n_run} unit tests {verb} failed.")

    if verbose_level >= 3:
        lines.append("")
    return lines