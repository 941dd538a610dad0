"""
Per-sample transforms. Each one mutates the buffer in place and returns it.

Negative, brightness and threshold are pure 256-entry remaps, so they are
applied with bytearray.translate over the whole sample block.
"""
import logging

from errors import InvalidArgumentError
from pixelbuffer import PixelBuffer, GRAY, COLOR

logger = logging.getLogger(__name__)


def clamp(value, low=0, high=255):
    return max(low, min(high, value))


def round_clamp(value: float) -> int:
    """Clamp into [0, 255] then round half away from zero."""
    if value <= 0:
        return 0
    if value >= 255:
        return 255
    return int(value + 0.5)


def luminance(r, g, b):
    return 0.299 * r + 0.587 * g + 0.114 * b


def apply_table(buffer: PixelBuffer, table):
    buffer.samples[:] = buffer.samples.translate(bytes(table))
    return buffer


def negative(buffer: PixelBuffer):
    buffer.require_data("negative")
    apply_table(buffer, [255 - v for v in range(256)])
    logger.info("Negative filter applied.")
    return buffer


def brightness(buffer: PixelBuffer, delta: int):
    buffer.require_data("brightness")
    delta = int(delta)
    apply_table(buffer, [clamp(v + delta) for v in range(256)])
    logger.info("Brightness adjusted by %d.", delta)
    return buffer


def threshold(buffer: PixelBuffer, value: int):
    buffer.require_data("threshold")
    if buffer.channels != GRAY:
        raise InvalidArgumentError("Threshold only applies to 8-bit images")
    value = int(value)
    if value < 0 or value > 255:
        logger.warning("Threshold value %d is outside the valid range [0, 255]. Clamping.", value)
        value = clamp(value)
    apply_table(buffer, [255 if v >= value else 0 for v in range(256)])
    logger.info("Threshold filter applied with threshold %d.", value)
    return buffer


def grayscale(buffer: PixelBuffer):
    buffer.require_data("grayscale")
    if buffer.channels != COLOR:
        raise InvalidArgumentError("Grayscale conversion only applies to 24-bit images")
    samples = buffer.samples
    for i in range(0, len(samples), 3):
        gray = round_clamp(luminance(samples[i], samples[i + 1], samples[i + 2]))
        samples[i] = samples[i + 1] = samples[i + 2] = gray
    logger.info("Grayscale filter applied.")
    return buffer
