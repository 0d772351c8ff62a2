import io

import pytest

from labkit.pgm import PgmImage, invert_image, read_image, rotate_image, write_image
from labkit.pgm_cli import get_text_input, get_user_input, main, menu


@pytest.fixture
def sample(tmp_path):
    path = tmp_path / "in.pgm"
    image = PgmImage(255, [[0, 10, 20], [30, 40, 50]])
    write_image(path, image)
    return path, image


def run_main(monkeypatch, args, text):
    monkeypatch.setattr("sys.stdin", io.StringIO(text))
    return main(args)


def test_menu_lists_choices(capsys):
    menu()
    assert capsys.readouterr().out == (
        "1 - View PGM Image\n2 - Invert Image\n3 - Rotate Image\n"
        "4 - Scale Image\n5 - Quit\n"
    )


@pytest.mark.parametrize(
    "line, expected",
    [("12\n", 12), ("  -3x\n", -3), ("abc\n", None), ("\n", None), ("+7", 7)],
)
def test_get_user_input_parses_leading_number(line, expected):
    assert get_user_input("Enter choice", io.StringIO(line)) == expected


def test_get_user_input_prints_prompt(capsys):
    get_user_input("Enter choice", io.StringIO("1\n"))
    assert capsys.readouterr().out == "Enter choice: "


def test_get_user_input_eof():
    with pytest.raises(EOFError):
        get_user_input("Enter choice", io.StringIO(""))


def test_get_text_input_strips_newline():
    assert get_text_input("Path", io.StringIO("out.pgm\nrest\n")) == "out.pgm"


def test_get_text_input_empty_line_is_none():
    assert get_text_input("Path", io.StringIO("\n")) is None


def test_get_text_input_eof():
    with pytest.raises(EOFError):
        get_text_input("Path", io.StringIO(""))


def test_main_usage_without_path(capsys):
    assert main([]) == 1
    assert "Usage: ./pgmTools image_path" in capsys.readouterr().out


def test_main_missing_file(tmp_path, capsys):
    missing = tmp_path / "nope.pgm"
    assert main([str(missing)]) == 1
    assert "Error: could not open file" in capsys.readouterr().out


def test_main_invert_writes_file(monkeypatch, sample, tmp_path, capsys):
    path, image = sample
    out = tmp_path / "inv.pgm"
    assert run_main(monkeypatch, [str(path)], f"2\n{out}\n5\n") == 0
    assert read_image(out) == invert_image(image)
    assert f"Inverted image saved to {out}" in capsys.readouterr().out


def test_main_rotate_writes_file(monkeypatch, sample, tmp_path):
    path, image = sample
    out = tmp_path / "rot.pgm"
    assert run_main(monkeypatch, [str(path)], f"3\n90\n{out}\n5\n") == 0
    assert read_image(out) == rotate_image(image, 90)


def test_main_rejects_bad_rotation(monkeypatch, sample, capsys):
    path, _ = sample
    run_main(monkeypatch, [str(path)], "3\n45\n5\n")
    assert "Invalid rotation. Please choose 90, 180 or 270." in capsys.readouterr().out


def test_main_scale_too_large(monkeypatch, sample, capsys):
    path, _ = sample
    run_main(monkeypatch, [str(path)], "4\n5\n5\n")
    assert "Failed to scale image." in capsys.readouterr().out


def test_main_scale_non_positive(monkeypatch, sample, capsys):
    path, _ = sample
    run_main(monkeypatch, [str(path)], "4\n0\n5\n")
    assert "Scale factor must be greater than 0." in capsys.readouterr().out


def test_main_no_output_path(monkeypatch, sample, capsys):
    path, _ = sample
    run_main(monkeypatch, [str(path)], "2\n\n5\n")
    assert "No output path provided." in capsys.readouterr().out


def test_main_bad_and_invalid_choices(monkeypatch, sample, capsys):
    path, _ = sample
    assert run_main(monkeypatch, [str(path)], "0\n7\n5\n") == 0
    out = capsys.readouterr().out
    assert "Please enter a valid menu option." in out
    assert "Bad choice" in out


def test_main_view_prints_pixels(monkeypatch, sample, capsys):
    path, _ = sample
    run_main(monkeypatch, [str(path)], "1\n5\n")
    out = capsys.readouterr().out
    assert "0   10  20  \n" in out


def test_main_ends_on_eof(monkeypatch, sample):
    path, _ = sample
    assert run_main(monkeypatch, [str(path)], "1\n") == 0