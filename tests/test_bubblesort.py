import random

import pytest

from labkit.bubblesort import bubble_sort, main


@pytest.mark.parametrize(
    "values",
    [[], [1], [2, 1], [64, 34, 25, 12, 22, 11, 90], [3, 3, 1, 3], [-1, 5, -9, 0]],
)
def test_bubble_sort_matches_sorted(values):
    expected = sorted(values)
    bubble_sort(values)
    assert values == expected


def test_bubble_sort_random_lists():
    rng = random.Random(1234)
    for _ in range(50):
        values = [rng.randint(-100, 100) for _ in range(rng.randint(0, 30))]
        expected = sorted(values)
        bubble_sort(values)
        assert values == expected


def test_bubble_sort_keeps_elements():
    values = [5, 1, 4, 1]
    bubble_sort(values)
    assert sorted(values) == values and len(values) == 4


def test_main_output(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out == (
        "Before sorting: 64 34 25 12 22 11 90 \n"
        "After sorting: 11 12 22 25 34 64 90 \n"
    )