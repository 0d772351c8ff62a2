"""A character grid with axes for plotting integer points from -10 to +10."""

import argparse

GRID_SIZE = 21
_ORIGIN = GRID_SIZE // 2


class Grid:
    """A 21x21 plotting area with the origin in the middle."""

    def __init__(self) -> None:
        self._cells: list[list[str]] = []
        self.clear()

    def clear(self) -> None:
        """Remove every point and redraw the axes."""
        self._cells = [[" "] * GRID_SIZE for _ in range(GRID_SIZE)]
        for i in range(GRID_SIZE):
            self._cells[i][_ORIGIN] = "|"
            self._cells[_ORIGIN][i] = "-"
        self._cells[_ORIGIN][_ORIGIN] = "+"

    def add_point(self, x: int, y: int) -> None:
        """Mark (x, y) with '*'; points outside the grid are ignored."""
        col = x + _ORIGIN
        row = _ORIGIN - y
        if 0 <= col < GRID_SIZE and 0 <= row < GRID_SIZE:
            self._cells[row][col] = "*"

    def render(self) -> str:
        """Return the grid as text, one row per line, followed by a blank line."""
        lines = ("".join(f"{cell} " for cell in row) for row in self._cells)
        return "".join(f"{line}\n" for line in lines) + "\n"

    def draw(self) -> None:
        """Print the grid."""
        print(self.render(), end="")


def move_point(x: int, y: int, dx: int, dy: int) -> tuple[int, int]:
    """Return the point moved by (dx, dy)."""
    return x + dx, y + dy


def reflect_point(x: int, y: int, axis: str) -> tuple[int, int]:
    """Reflect the point across the 'x' or 'y' axis; any other axis leaves it unchanged."""
    if axis in ("x", "X"):
        return x, -y
    if axis in ("y", "Y"):
        return -x, y
    return x, y


def swap_coords(x: int, y: int) -> tuple[int, int]:
    """Return the point with its coordinates exchanged."""
    return y, x


def main(argv=None) -> int:
    """Plot a sample point, then show the cleared grid."""
    argparse.ArgumentParser(description="Plot points on a character grid.").parse_args(argv)
    grid = Grid()
    grid.add_point(-7, 3)
    grid.draw()
    grid.clear()
    grid.draw()
    return 0