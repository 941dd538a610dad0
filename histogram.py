"""
Histogram equalization for gray and color buffers.

Color images are equalized on luminance only: each pixel is split into
Y, U, V, the Y plane is remapped through the equalization LUT and the pixel
is rebuilt from the new Y and its original U and V, so hue is kept.
"""
import logging

from errors import InvalidArgumentError
from pixelbuffer import PixelBuffer, GRAY
from pointops import apply_table, luminance, round_clamp

logger = logging.getLogger(__name__)

LEVELS = 256


def rgb_to_yuv(r, g, b):
    y = luminance(r, g, b)
    u = -0.14713 * r - 0.28886 * g + 0.436 * b
    v = 0.615 * r - 0.51499 * g - 0.10001 * b
    return y, u, v


def yuv_to_rgb(y, u, v):
    r = y + 1.13983 * v
    g = y - 0.39465 * u - 0.58060 * v
    b = y + 2.03211 * u
    return round_clamp(r), round_clamp(g), round_clamp(b)


def compute_histogram(buffer: PixelBuffer):
    """
    Count samples per level. Gray buffers count raw samples; color buffers
    count the rounded luminance of each pixel.
    """
    buffer.require_data("histogram")
    hist = [0] * LEVELS
    samples = buffer.samples
    if buffer.channels == GRAY:
        for v in samples:
            hist[v] += 1
    else:
        for i in range(0, len(samples), 3):
            hist[round_clamp(luminance(samples[i], samples[i + 1], samples[i + 2]))] += 1
    return hist


def cumulative(counts):
    cdf = []
    total = 0
    for c in counts:
        total += c
        cdf.append(total)
    return cdf


def compute_equalization_lut(counts, total_pixels):
    """
    Map each input level to its equalized level:

        lut[i] = round(255 * (cdf[i] - cdf_min) / (total_pixels - cdf_min))

    where cdf_min is the smallest nonzero cumulative count. When every pixel
    shares one level (or there are none) the denominator is not positive and
    the identity mapping is returned instead.
    """
    if len(counts) != LEVELS:
        raise InvalidArgumentError(f"Histogram must have {LEVELS} bins, got {len(counts)}")

    cdf = cumulative(counts)
    cdf_min = next((c for c in cdf if c > 0), 0)
    denom = total_pixels - cdf_min
    if denom <= 0:
        logger.warning("Image has a single intensity level; equalization leaves it unchanged.")
        return list(range(LEVELS))

    scale = 255.0 / denom
    return [round_clamp(max(c - cdf_min, 0) * scale) for c in cdf]


def equalize8(buffer: PixelBuffer):
    buffer.require_data("equalization")
    if buffer.channels != GRAY:
        raise InvalidArgumentError("equalize8 needs an 8-bit buffer")
    hist = compute_histogram(buffer)
    lut = compute_equalization_lut(hist, buffer.pixel_count)
    apply_table(buffer, lut)
    logger.info("Grayscale histogram equalization applied.")
    return buffer


def equalize24(buffer: PixelBuffer):
    buffer.require_data("equalization")
    if buffer.channels == GRAY:
        raise InvalidArgumentError("equalize24 needs a 24-bit buffer")

    samples = buffer.samples
    n = buffer.pixel_count
    # temporary planes, local to this call
    us = [0.0] * n
    vs = [0.0] * n
    levels = bytearray(n)
    hist = [0] * LEVELS
    for p in range(n):
        i = p * 3
        y, u, v = rgb_to_yuv(samples[i], samples[i + 1], samples[i + 2])
        level = round_clamp(y)
        levels[p] = level
        us[p] = u
        vs[p] = v
        hist[level] += 1

    lut = compute_equalization_lut(hist, n)

    for p in range(n):
        i = p * 3
        samples[i], samples[i + 1], samples[i + 2] = yuv_to_rgb(lut[levels[p]], us[p], vs[p])

    logger.info("Color histogram equalization applied.")
    return buffer


def equalize(buffer: PixelBuffer):
    if buffer.channels == GRAY:
        return equalize8(buffer)
    return equalize24(buffer)
