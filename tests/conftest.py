"""
Shared fixtures. BMP byte streams are assembled by hand here so the codec
tests do not depend on the encoder they are checking.
"""

import pytest

from pixelbuffer import PixelBuffer


def _le(value, size, signed=False):
    return value.to_bytes(size, "little", signed=signed)


def build_bmp(width, height, bpp, pixel_rows, palette=b"", top_down=False,
              compression=0, signature=b"BM", info_size=40, image_size=None):
    """
    pixel_rows: top row first, each a bytes object already in file order
    (BGR for 24-bit, indices for 8-bit) without padding.
    """
    row_bytes = width * bpp // 8
    pad = b"\x00" * ((4 - row_bytes % 4) % 4)
    ordered = pixel_rows if top_down else list(reversed(pixel_rows))
    pixels = b"".join(bytes(row) + pad for row in ordered)

    offset = 14 + 40 + len(palette)
    file_header = signature + _le(offset + len(pixels), 4) + _le(0, 2) + _le(0, 2) + _le(offset, 4)
    info = (_le(info_size, 4) + _le(width, 4, True) + _le(-height if top_down else height, 4, True)
            + _le(1, 2) + _le(bpp, 2) + _le(compression, 4)
            + _le(len(pixels) if image_size is None else image_size, 4)
            + _le(2835, 4, True) + _le(2835, 4, True)
            + _le(256 if palette else 0, 4) + _le(0, 4))
    return file_header + info + palette + pixels


def gray_palette():
    return b"".join(bytes((i, i, i, 0)) for i in range(256))


def bmp24_bytes(rgb_rows, top_down=False, **kw):
    """rgb_rows: list of rows of (r, g, b), top row first."""
    height = len(rgb_rows)
    width = len(rgb_rows[0])
    rows = [b"".join(bytes((b, g, r)) for r, g, b in row) for row in rgb_rows]
    return build_bmp(width, height, 24, rows, top_down=top_down, **kw)


def bmp8_bytes(rows, top_down=False, **kw):
    """rows: list of rows of gray levels, top row first."""
    height = len(rows)
    width = len(rows[0])
    return build_bmp(width, height, 8, [bytes(r) for r in rows],
                     palette=gray_palette(), top_down=top_down, **kw)


def gray_buffer(rows):
    buf = PixelBuffer.gray(len(rows[0]), len(rows))
    for y, row in enumerate(rows):
        for x, v in enumerate(row):
            buf.set(x, y, v)
    return buf


def color_buffer(rows):
    buf = PixelBuffer.color(len(rows[0]), len(rows))
    for y, row in enumerate(rows):
        for x, rgb in enumerate(row):
            buf.set(x, y, rgb)
    return buf


@pytest.fixture
def gradient_rows():
    # 6x4 gray gradient, width deliberately not a multiple of 4
    return [[(x * 40 + y * 10) % 256 for x in range(6)] for y in range(4)]


@pytest.fixture
def color_rows():
    # 5x3, odd width so every row carries padding
    return [[((x * 50) % 256, (y * 80) % 256, (x * y * 30) % 256) for x in range(5)]
            for y in range(3)]


@pytest.fixture
def gray_file(tmp_path, gradient_rows):
    path = tmp_path / "gray.bmp"
    path.write_bytes(bmp8_bytes(gradient_rows))
    return path


@pytest.fixture
def color_file(tmp_path, color_rows):
    path = tmp_path / "color.bmp"
    path.write_bytes(bmp24_bytes(color_rows))
    return path
