"""Interactive menu for viewing and transforming a P2 grayscale image."""

from __future__ import annotations

import re
import sys
from typing import TextIO

from labkit.pgm import (
    PgmError,
    PgmImage,
    format_image,
    invert_image,
    read_image,
    rotate_image,
    scale_image,
    write_image,
)

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def menu() -> None:
    """Print the list of menu choices."""
    print("1 - View PGM Image")
    print("2 - Invert Image")
    print("3 - Rotate Image")
    print("4 - Scale Image")
    print("5 - Quit")


def _prompt_line(message: str, stream: TextIO | None) -> str:
    print(f"{message}: ", end="", flush=True)
    line = (stream if stream is not None else sys.stdin).readline()
    if not line:
        raise EOFError("end of input")
    return line


def get_user_input(message: str, stream: TextIO | None = None) -> int | None:
    """Prompt for a number; return it, or None when the line does not start with one.

    Raises EOFError when the input is exhausted.
    """
    match = _LEADING_INT.match(_prompt_line(message, stream))
    return int(match.group(1)) if match else None


def get_text_input(message: str, stream: TextIO | None = None) -> str | None:
    """Prompt for a line of text; return it without its newline, or None if empty.

    Raises EOFError when the input is exhausted.
    """
    text = _prompt_line(message, stream).removesuffix("\n")
    return text or None


def _save(result: PgmImage, stream: TextIO, done_message: str) -> None:
    output_path = get_text_input("Enter output file path", stream)
    if output_path is None:
        print("No output path provided.")
        return
    try:
        write_image(output_path, result)
    except PgmError as exc:
        print(f"Error: {exc}")
        return
    print(f"{done_message} {output_path}")


def _invert(image: PgmImage, stream: TextIO) -> None:
    _save(invert_image(image), stream, "Inverted image saved to")


def _rotate(image: PgmImage, stream: TextIO) -> None:
    degrees = get_user_input("Rotate by degrees (90, 180, 270)", stream)
    if degrees not in (90, 180, 270):
        print("Invalid rotation. Please choose 90, 180 or 270.")
        return
    _save(rotate_image(image, degrees), stream, "Rotated image saved to")


def _scale(image: PgmImage, stream: TextIO) -> None:
    factor = get_user_input("Scale down by factor (> 0)", stream)
    if factor is None or factor <= 0:
        print("Scale factor must be greater than 0.")
        return
    try:
        scaled = scale_image(image, factor)
    except PgmError:
        print("Failed to scale image. Ensure factor fits image dimensions.")
        return
    _save(scaled, stream, "Scaled image saved to")


def _read_choice(stream: TextIO) -> int:
    while True:
        choice = get_user_input("Enter choice", stream)
        if choice is not None and choice >= 1:
            return choice
        print("Please enter a valid menu option.")


def main(argv=None) -> int:
    """Load the image named on the command line and run the menu until Quit."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("Usage: ./pgmTools image_path")
        return 1

    try:
        image = read_image(args[0])
    except PgmError as exc:
        print(f"Error: {exc}")
        return 1

    stream = sys.stdin
    actions = {2: _invert, 3: _rotate, 4: _scale}
    try:
        while True:
            menu()
            choice = _read_choice(stream)
            if choice == 1:
                print(format_image(image), end="")
            elif choice in actions:
                actions[choice](image, stream)
            elif choice == 5:
                break
            else:
                print("Bad choice")
    except EOFError:
        pass
    return 0