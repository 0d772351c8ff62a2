"""Reading, writing and transforming plain-text (P2) grayscale images."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from os import PathLike
from pathlib import Path


class PgmError(ValueError):
    """Raised when an image cannot be read, written or transformed."""


@dataclass(frozen=True)
class PgmImage:
    """A grayscale image: rows of pixel values in 0..max_gray."""

    max_gray: int
    pixels: tuple[tuple[int, ...], ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "pixels", tuple(tuple(row) for row in self.pixels))

    @property
    def height(self) -> int:
        return len(self.pixels)

    @property
    def width(self) -> int:
        return len(self.pixels[0]) if self.pixels else 0


def _next_int(tokens: Iterator[str]) -> int | None:
    token = next(tokens, None)
    if token is None:
        return None
    try:
        return int(token)
    except ValueError:
        return None


def read_image(path: str | PathLike[str]) -> PgmImage:
    """Load a P2 image whose header gives height before width."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise PgmError(f"could not open file '{path}'") from exc

    tokens = iter(text.split())
    if next(tokens, None) != "P2":
        raise PgmError("invalid PGM format. Expected magic number P2.")

    height = _next_int(tokens)
    width = _next_int(tokens) if height is not None else None
    if height is None or width is None:
        raise PgmError("missing image dimensions.")
    if height <= 0 or width <= 0:
        raise PgmError("image dimensions must be positive.")

    max_gray = _next_int(tokens)
    if max_gray is None:
        raise PgmError("missing max gray value.")
    if not 0 <= max_gray <= 255:
        raise PgmError("max gray value must be between 0 and 255.")

    rows = []
    for _ in range(height):
        row = []
        for _ in range(width):
            value = _next_int(tokens)
            if value is None:
                raise PgmError("missing pixel data.")
            if not 0 <= value <= max_gray:
                raise PgmError(f"pixel value {value} is out of range (0-{max_gray}).")
            row.append(value)
        rows.append(row)

    if _next_int(tokens) is not None:
        raise PgmError("file contains too many pixel values.")

    return PgmImage(max_gray, rows)


def write_image(path: str | PathLike[str], image: PgmImage) -> None:
    """Save the image in the same P2 layout that read_image accepts."""
    lines = ["P2\n", f"{image.height} {image.width}\n", f"{image.max_gray}\n"]
    lines.extend("".join(f"{value} " for value in row) + "\n" for row in image.pixels)
    try:
        Path(path).write_text("".join(lines), encoding="ascii")
    except OSError as exc:
        raise PgmError(f"could not write file '{path}'") from exc


def format_image(image: PgmImage) -> str:
    """Return the pixel values as aligned text, one row per line."""
    return "".join(
        "".join(f"{value:<4}" for value in row) + "\n" for row in image.pixels
    )


def invert_image(image: PgmImage) -> PgmImage:
    """Return the negative of the image."""
    return PgmImage(
        image.max_gray,
        [[image.max_gray - value for value in row] for row in image.pixels],
    )


def _transpose(pixels: Sequence[Sequence[int]]) -> list[tuple[int, ...]]:
    return list(zip(*pixels))


def _half_turn(pixels: Sequence[Sequence[int]]) -> list[list[int]]:
    return [list(reversed(row)) for row in reversed(pixels)]


def rotate_image(image: PgmImage, degrees: int) -> PgmImage:
    """Turn the image by 90, 180 or 270 degrees.

    90 mirrors across the main diagonal and 270 across the other diagonal;
    180 is a half turn.
    """
    if degrees == 90:
        pixels = _transpose(image.pixels)
    elif degrees == 180:
        pixels = _half_turn(image.pixels)
    elif degrees == 270:
        pixels = _transpose(_half_turn(image.pixels))
    else:
        raise PgmError("Invalid rotation. Please choose 90, 180 or 270.")
    return PgmImage(image.max_gray, pixels)


def scale_image(image: PgmImage, factor: int) -> PgmImage:
    """Shrink the image by averaging factor x factor blocks; leftover edges are dropped."""
    if factor <= 0:
        raise PgmError("Scale factor must be greater than 0.")
    height = image.height // factor
    width = image.width // factor
    if height <= 0 or width <= 0:
        raise PgmError("scale factor does not fit the image dimensions.")

    block_area = factor * factor
    pixels = [
        [
            sum(
                value
                for src_row in image.pixels[row * factor : (row + 1) * factor]
                for value in src_row[col * factor : (col + 1) * factor]
            )
            // block_area
            for col in range(width)
        ]
        for row in range(height)
    ]
    return PgmImage(image.max_gray, pixels)