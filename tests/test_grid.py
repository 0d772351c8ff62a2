import pytest

from labkit.grid import Grid, main, move_point, reflect_point, swap_coords


def _char_at(rendered: str, x: int, y: int) -> str:
    row = rendered.splitlines()[10 - y]
    return row[2 * (x + 10)]


def test_empty_grid_shape():
    lines = Grid().render().split("\n")
    # 21 rows, then the blank line, then the empty tail after the final newline
    assert len(lines) == 23
    assert lines[-2:] == ["", ""]
    assert all(len(line) == 42 for line in lines[:21])


def test_axes_and_origin():
    rendered = Grid().render()
    assert _char_at(rendered, 0, 0) == "+"
    assert _char_at(rendered, 0, 7) == "|"
    assert _char_at(rendered, -4, 0) == "-"
    assert _char_at(rendered, 3, 3) == " "


def test_add_point_marks_cell():
    grid = Grid()
    grid.add_point(-7, 3)
    rendered = grid.render()
    assert _char_at(rendered, -7, 3) == "*"
    assert rendered.count("*") == 1


@pytest.mark.parametrize("x, y", [(11, 0), (0, -11), (-11, 5), (20, 20)])
def test_add_point_out_of_bounds_ignored(x, y):
    grid = Grid()
    before = grid.render()
    grid.add_point(x, y)
    assert grid.render() == before


def test_corner_points_are_in_bounds():
    grid = Grid()
    grid.add_point(10, 10)
    grid.add_point(-10, -10)
    assert grid.render().count("*") == 2


def test_clear_removes_points():
    grid = Grid()
    pristine = grid.render()
    grid.add_point(2, 2)
    grid.clear()
    assert grid.render() == pristine


def test_draw_prints_render(capsys):
    grid = Grid()
    grid.add_point(1, 1)
    grid.draw()
    assert capsys.readouterr().out == grid.render()


def test_move_point():
    assert move_point(-7, 3, 2, -1) == (-5, 2)


def test_move_point_roundtrip():
    assert move_point(*move_point(4, 5, 3, -8), -3, 8) == (4, 5)


@pytest.mark.parametrize(
    "axis, expected",
    [("x", (7, -3)), ("X", (7, -3)), ("y", (-7, 3)), ("Y", (-7, 3)), ("z", (7, 3))],
)
def test_reflect_point(axis, expected):
    assert reflect_point(7, 3, axis) == expected


def test_reflect_twice_is_identity():
    assert reflect_point(*reflect_point(-2, 9, "x"), "x") == (-2, 9)


def test_swap_coords():
    assert swap_coords(1, 2) == (2, 1)


def test_main_draws_point_then_clear_grid(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert out.count("*") == 1
    assert out.count("+") == 2