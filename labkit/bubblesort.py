"""Bubble sort demonstration."""

import argparse
from collections.abc import MutableSequence


def bubble_sort(array: MutableSequence[int]) -> None:
    """Sort the sequence in ascending order, in place."""
    n = len(array)
    for done in range(n - 1):
        for i in range(n - 1 - done):
            if array[i] > array[i + 1]:
                array[i], array[i + 1] = array[i + 1], array[i]


def _format(values) -> str:
    return "".join(f"{value} " for value in values)


def main(argv=None) -> int:
    """Sort a sample array and print it before and after."""
    argparse.ArgumentParser(description="Bubble sort a sample array.").parse_args(argv)
    arr = [64, 34, 25, 12, 22, 11, 90]
    print(f"Before sorting: {_format(arr)}")
    bubble_sort(arr)
    print(f"After sorting: {_format(arr)}")
    return 0