"""Demonstrations of how arguments reach a function and how results come back."""

import argparse
from collections.abc import MutableSequence


def update(v: MutableSequence[int]) -> None:
    """Set the third element of the sequence to 3; the caller sees the change."""
    v[2] = 3


def add(a: int, b: int) -> int:
    """Return the sum of two integers."""
    return a + b


def _add_into_local(a: int, b: int, answer: int) -> None:
    # Rebinding a parameter only changes the local name, never the caller's.
    answer = a + b  # noqa: F841


def _array_example() -> str:
    vector = [4, 2, -1, 8]
    update(vector)
    return str(vector[2])


def _byreference_example() -> str:
    num1, num2 = 10, 5
    result = add(num1, num2)
    return str(result)


def _byvalue_example() -> str:
    num1, num2, result = 10, 5, 0
    _add_into_local(num1, num2, result)
    return str(result)


_EXAMPLES = {
    "array": _array_example,
    "byreference": _byreference_example,
    "byvalue": _byvalue_example,
}


def main(argv=None) -> int:
    """Run the named examples (all of them by default) and print their output."""
    parser = argparse.ArgumentParser(description="Run argument-passing examples.")
    parser.add_argument("examples", nargs="*", choices=list(_EXAMPLES), metavar="EXAMPLE")
    args = parser.parse_args(argv)
    for name in args.examples or list(_EXAMPLES):
        print(_EXAMPLES[name]())
    return 0