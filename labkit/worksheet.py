"""Small exercises on passing values, sequences and results between functions."""

from collections.abc import MutableSequence, Sequence


def add_values(a: int, b: int) -> int:
    """Return the sum of two integers."""
    return a + b


def swap_values(a: int, b: int) -> tuple[int, int]:
    """Return the two values in swapped order."""
    return b, a


def sum_array(arr: Sequence[int]) -> int:
    """Return the sum of all elements."""
    return sum(arr)


def reverse_array(arr: MutableSequence[int]) -> None:
    """Reverse the sequence in place."""
    arr.reverse()


def average(arr: Sequence[int]) -> float:
    """Return the arithmetic mean of the elements as a float."""
    if not arr:
        raise ValueError("average of an empty sequence")
    return sum(arr) / len(arr)


def find_max(arr: Sequence[int]) -> tuple[int, int]:
    """Return the largest value and the index of its first occurrence."""
    if not arr:
        raise ValueError("maximum of an empty sequence")
    index, value = max(enumerate(arr), key=lambda pair: pair[1])
    return value, index