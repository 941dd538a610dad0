import io

import pytest

import bmpfile
from bmpfile import BMPFile, Kind, default_save_path, load, print_info, save
from errors import BMPIOError, InvalidArgumentError, NotBmpError, UnsupportedDepthError

from conftest import build_bmp


def test_load_color(color_file, color_rows):
    bmp = load(color_file)

    assert bmp.kind is Kind.COLOR
    assert (bmp.width, bmp.height, bmp.bpp) == (5, 3, 24)
    assert bmp.filename == "color.bmp"
    assert bmp.fileSize == color_file.stat().st_size
    assert bmp.buffer.get(2, 1) == color_rows[1][2]


def test_load_gray(gray_file, gradient_rows):
    bmp = load(gray_file)

    assert bmp.kind is Kind.GRAY
    assert bmp.bpp == 8
    assert bmp.bottomUp
    # 8-bit rows stay in file order, bottom row first
    assert bmp.buffer.get(3, 2) == gradient_rows[1][3]
    assert bmp.buffer.get(3, 0) == gradient_rows[3][3]


def test_load_missing_file(tmp_path):
    with pytest.raises(BMPIOError):
        load(tmp_path / "nope.bmp")


def test_load_rejects_other_depths(tmp_path):
    path = tmp_path / "mono.bmp"
    path.write_bytes(build_bmp(8, 1, 1, [b"\xff"]))
    with pytest.raises(UnsupportedDepthError):
        load(path)


def test_load_rejects_non_bmp(tmp_path):
    path = tmp_path / "fake.bmp"
    path.write_bytes(b"\x89PNG" + bytes(100))
    with pytest.raises(NotBmpError):
        load(path)


@pytest.mark.parametrize("fixture", ["color_file", "gray_file"])
def test_save_round_trip(request, tmp_path, fixture):
    bmp = load(request.getfixturevalue(fixture))
    out = tmp_path / "out.bmp"
    save(bmp, out)

    again = load(out)
    assert again.kind is bmp.kind
    assert again.buffer == bmp.buffer


def test_save_to_bad_path(color_file, tmp_path):
    bmp = load(color_file)
    with pytest.raises(BMPIOError):
        save(bmp, tmp_path / "missing" / "dir" / "out.bmp")


def test_save_empty_handle(tmp_path):
    with pytest.raises(InvalidArgumentError):
        save(BMPFile(), tmp_path / "x.bmp")


def test_apply_named_operations(color_file, gray_file):
    color = load(color_file)
    before = color.buffer.snapshot()
    color.apply("negative").apply("negative")
    assert color.buffer.snapshot() == before

    color.apply("grayscale")
    r, g, b = color.buffer.get(1, 1)
    assert r == g == b

    gray = load(gray_file)
    gray.apply("threshold", 100).apply("gaussian_blur")
    gray.apply("brightness", -10).apply("equalize")


def test_apply_checks_variant(color_file, gray_file):
    with pytest.raises(InvalidArgumentError):
        load(color_file).apply("threshold", 10)
    with pytest.raises(InvalidArgumentError):
        load(gray_file).apply("grayscale")
    with pytest.raises(InvalidArgumentError):
        load(gray_file).apply("posterize")
    with pytest.raises(InvalidArgumentError):
        BMPFile().apply("negative")


def test_apply_checks_argument_count(color_file, gray_file):
    gray = load(gray_file)
    before = gray.buffer.snapshot()
    with pytest.raises(InvalidArgumentError):
        gray.apply("threshold")
    with pytest.raises(InvalidArgumentError):
        gray.apply("brightness")
    with pytest.raises(InvalidArgumentError):
        gray.apply("negative", 5)
    with pytest.raises(InvalidArgumentError):
        load(color_file).apply("brightness", 10, 20)
    assert gray.buffer.snapshot() == before


def test_color_handle_is_top_row_first(color_file):
    assert not load(color_file).bottomUp
    assert not BMPFile().bottomUp


def test_every_filter_is_an_operation():
    for name in ("box_blur", "gaussian_blur", "sharpen", "outline", "emboss"):
        assert name in bmpfile.OPERATIONS


def test_close_is_idempotent(color_file):
    bmp = load(color_file)
    buffer = bmp.buffer
    bmp.close()
    bmp.close()

    assert bmp.kind is Kind.NONE
    assert buffer.is_empty()
    with pytest.raises(InvalidArgumentError):
        bmp.apply("negative")


def test_print_info_color(color_file):
    out = io.StringIO()
    print_info(load(color_file), file=out)
    text = out.getvalue()

    assert "Image Info (24-bit)" in text
    assert "Width: 5" in text
    assert "Height: 3" in text
    assert "Data Size: 48 bytes" in text
    assert "Data Offset (header): 54" in text


def test_print_info_gray(gray_file):
    out = io.StringIO()
    load(gray_file).printInfo(file=out)

    assert "Color Depth: 8" in out.getvalue()
    assert "Data Offset" not in out.getvalue()


def test_print_info_empty():
    out = io.StringIO()
    print_info(BMPFile(), file=out)
    assert out.getvalue().strip() == "No image loaded."


def test_default_save_path():
    assert default_save_path("photos/cat.bmp") == "photos/cat_modified.bmp"
    assert default_save_path("noext") == "noext_modified.bmp"


def test_handle_rejects_unknown_images():
    with pytest.raises(InvalidArgumentError):
        BMPFile(image="not an image")
