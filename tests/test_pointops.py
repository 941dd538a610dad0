import pytest

import pointops
from errors import InvalidArgumentError
from pixelbuffer import PixelBuffer

from conftest import color_buffer, gray_buffer


def test_negative_solid_red():
    buf = color_buffer([[(255, 0, 0)] * 4 for _ in range(4)])
    pointops.negative(buf)

    assert all(buf.get(x, y) == (0, 255, 255) for x in range(4) for y in range(4))


def test_negative_twice_is_identity(color_rows, gradient_rows):
    for buf in (color_buffer(color_rows), gray_buffer(gradient_rows)):
        before = buf.snapshot()
        pointops.negative(pointops.negative(buf))
        assert buf.snapshot() == before


def test_brightness_zero_is_identity(gradient_rows):
    buf = gray_buffer(gradient_rows)
    before = buf.snapshot()
    pointops.brightness(buf, 0)

    assert buf.snapshot() == before


def test_brightness_clamps():
    buf = gray_buffer([[0, 100, 250]])
    pointops.brightness(buf, 10)
    assert list(buf.samples) == [10, 110, 255]

    pointops.brightness(buf, -120)
    assert list(buf.samples) == [0, 0, 135]


def test_brightness_applies_to_every_channel():
    buf = color_buffer([[(10, 20, 250)]])
    pointops.brightness(buf, 10)
    assert buf.get(0, 0) == (20, 30, 255)


def test_threshold_only_black_and_white(gradient_rows):
    buf = gray_buffer(gradient_rows)
    pointops.threshold(buf, 128)

    assert set(buf.samples) <= {0, 255}
    assert buf.get(0, 0) == 0                      # 0 < 128
    assert buf.get(5, 3) == 255                    # 230 >= 128


def test_threshold_boundary_is_inclusive():
    buf = gray_buffer([[99, 100, 101]])
    pointops.threshold(buf, 100)
    assert list(buf.samples) == [0, 255, 255]


def test_threshold_out_of_range_is_clamped_with_warning(caplog):
    buf = gray_buffer([[0, 254, 255]])
    with caplog.at_level("WARNING"):
        pointops.threshold(buf, 300)

    assert list(buf.samples) == [0, 0, 255]
    assert "Clamping" in caplog.text


def test_threshold_rejects_color():
    with pytest.raises(InvalidArgumentError):
        pointops.threshold(color_buffer([[(1, 2, 3)]]), 10)


def test_grayscale_uses_weighted_luminance():
    buf = color_buffer([[(255, 0, 0), (0, 255, 0), (0, 0, 255), (10, 200, 30)]])
    pointops.grayscale(buf)

    # 0.299*255 = 76.245, 0.587*255 = 149.685, 0.114*255 = 29.07
    assert buf.get(0, 0) == (76, 76, 76)
    assert buf.get(1, 0) == (150, 150, 150)
    assert buf.get(2, 0) == (29, 29, 29)
    # 2.99 + 117.4 + 3.42 = 123.81
    assert buf.get(3, 0) == (124, 124, 124)


def test_grayscale_rejects_gray():
    with pytest.raises(InvalidArgumentError):
        pointops.grayscale(gray_buffer([[1]]))


def test_empty_buffer_is_rejected_untouched():
    buf = PixelBuffer.gray(0, 0)
    with pytest.raises(InvalidArgumentError):
        pointops.negative(buf)
    with pytest.raises(InvalidArgumentError):
        pointops.brightness(buf, 5)


def test_round_clamp():
    assert pointops.round_clamp(-3.2) == 0
    assert pointops.round_clamp(0.5) == 1
    assert pointops.round_clamp(2.5) == 3
    assert pointops.round_clamp(254.4) == 254
    assert pointops.round_clamp(300) == 255
