import pytest

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


@pytest.fixture
def image():
    return PgmImage(255, [[0, 10, 20], [30, 40, 50]])


def _write(tmp_path, text):
    path = tmp_path / "in.pgm"
    path.write_text(text)
    return path


def test_dimensions(image):
    assert (image.height, image.width) == (2, 3)


def test_read_header_order_height_then_width(tmp_path):
    path = _write(tmp_path, "P2\n2 3\n9\n1 2 3\n4 5 6\n")
    img = read_image(path)
    assert (img.height, img.width, img.max_gray) == (2, 3, 9)
    assert img.pixels == ((1, 2, 3), (4, 5, 6))


def test_write_format(tmp_path, image):
    path = tmp_path / "out.pgm"
    write_image(path, image)
    assert path.read_text() == "P2\n2 3\n255\n0 10 20 \n30 40 50 \n"


def test_round_trip(tmp_path, image):
    path = tmp_path / "out.pgm"
    write_image(path, image)
    assert read_image(path) == image


def test_read_missing_file(tmp_path):
    with pytest.raises(PgmError, match="could not open file"):
        read_image(tmp_path / "absent.pgm")


@pytest.mark.parametrize(
    "text, message",
    [
        ("P5\n1 1\n255\n0\n", "magic number P2"),
        ("", "magic number P2"),
        ("P2\n2\n", "missing image dimensions"),
        ("P2\n0 3\n255\n", "dimensions must be positive"),
        ("P2\n1 1\n", "missing max gray value"),
        ("P2\n1 1\n256\n0\n", "between 0 and 255"),
        ("P2\n1 2\n255\n7\n", "missing pixel data"),
        ("P2\n1 1\n9\n10\n", "out of range"),
        ("P2\n1 1\n9\n1 2\n", "too many pixel values"),
    ],
)
def test_read_errors(tmp_path, text, message):
    with pytest.raises(PgmError, match=message):
        read_image(_write(tmp_path, text))


def test_write_to_bad_path(tmp_path, image):
    with pytest.raises(PgmError, match="could not write file"):
        write_image(tmp_path / "missing_dir" / "x.pgm", image)


def test_format_image_alignment():
    img = PgmImage(255, [[5, 50, 255]])
    assert format_image(img) == "5   50  255 \n"


def test_format_image_line_count(image):
    assert len(format_image(image).splitlines()) == image.height


def test_invert(image):
    inverted = invert_image(image)
    assert inverted.pixels[0][0] == 255
    assert all(
        a + b == image.max_gray
        for row_a, row_b in zip(image.pixels, inverted.pixels)
        for a, b in zip(row_a, row_b)
    )


def test_invert_twice_is_identity(image):
    assert invert_image(invert_image(image)) == image


def test_rotate_90_transposes(image):
    rotated = rotate_image(image, 90)
    assert (rotated.height, rotated.width) == (image.width, image.height)
    assert rotated.pixels[2][1] == image.pixels[1][2]


def test_rotate_180(image):
    rotated = rotate_image(image, 180)
    assert rotated.pixels[0] == tuple(reversed(image.pixels[1]))


@pytest.mark.parametrize("degrees", [90, 180, 270])
def test_rotate_twice_is_identity(image, degrees):
    assert rotate_image(rotate_image(image, degrees), degrees) == image


def test_rotate_270_corner(image):
    rotated = rotate_image(image, 270)
    assert (rotated.height, rotated.width) == (3, 2)
    assert rotated.pixels[0][0] == image.pixels[-1][-1]


def test_rotate_invalid(image):
    with pytest.raises(PgmError):
        rotate_image(image, 45)


def test_scale_factor_one_is_identity(image):
    assert scale_image(image, 1) == image


def test_scale_constant_image():
    img = PgmImage(100, [[7] * 5 for _ in range(4)])
    scaled = scale_image(img, 2)
    assert (scaled.height, scaled.width) == (2, 2)
    assert scaled.pixels == ((7, 7), (7, 7))


def test_scale_averages_block():
    img = PgmImage(9, [[1, 2], [3, 4]])
    assert scale_image(img, 2).pixels == ((2,),)


@pytest.mark.parametrize("factor", [0, -1, 3])
def test_scale_invalid(image, factor):
    with pytest.raises(PgmError):
        scale_image(image, factor)