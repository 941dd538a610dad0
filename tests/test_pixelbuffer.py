import pytest

from errors import AllocationError, InvalidArgumentError
from pixelbuffer import PixelBuffer, GRAY, COLOR


def test_gray_layout():
    buf = PixelBuffer.gray(4, 3)

    assert len(buf.samples) == 12
    assert buf.stride == 4
    assert buf.row_start(2) == 8
    assert buf.channels == GRAY


def test_color_layout():
    buf = PixelBuffer.color(5, 2)

    assert len(buf.samples) == 30
    assert buf.stride == 15
    assert buf.index(1, 1) == 18
    assert buf.channels == COLOR


def test_get_and_set():
    buf = PixelBuffer.color(2, 2)
    buf.set(1, 0, (7, 8, 9))

    assert buf.get(1, 0) == (7, 8, 9)
    assert buf.row(0) == bytes([0, 0, 0, 7, 8, 9])


def test_snapshot_is_independent():
    buf = PixelBuffer.gray(2, 1)
    snap = buf.snapshot()
    buf.set(0, 0, 200)

    assert snap == bytes(2)
    assert isinstance(snap, bytes)


def test_release_is_idempotent():
    buf = PixelBuffer.gray(2, 2)
    buf.release()
    buf.release()

    assert buf.is_empty()
    with pytest.raises(InvalidArgumentError):
        buf.require_data("negative")


def test_sample_count_must_match():
    with pytest.raises(InvalidArgumentError):
        PixelBuffer(2, 2, GRAY, bytearray(3))


def test_rejects_other_channel_counts():
    with pytest.raises(InvalidArgumentError):
        PixelBuffer.allocate(2, 2, 4)


def test_allocation_failure_is_reported(monkeypatch):
    import pixelbuffer

    def boom(size):
        raise MemoryError

    monkeypatch.setattr(pixelbuffer, "bytearray", boom, raising=False)
    with pytest.raises(AllocationError):
        PixelBuffer.gray(10, 10)
