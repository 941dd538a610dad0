"""
24-bit BMP codec.

On disk each pixel is B, G, R and rows are stored bottom-to-top, padded to a
multiple of 4 bytes. In memory the pixels are R, G, B with row 0 at the top
and no padding. Saving always rewrites the size and offset fields from the
current dimensions, so a saved file describes itself correctly even if the
loaded headers were stale.
"""
import logging

from bmpheader import (
    FileHeader, InfoHeader, HEADER_SIZE, INFO_HEADER_SIZE, BI_RGB,
    check_data_offset, padded_row_size, read_headers, read_rows, require_pixel_data, write_rows,
)
from errors import InvalidArgumentError
from pixelbuffer import PixelBuffer, COLOR

logger = logging.getLogger(__name__)

COLOR_DEPTH = 24
BYTES_PER_PIXEL = 3


class BMP24Image:
    def __init__(self, header: FileHeader, info: InfoHeader, buffer: PixelBuffer):
        self.header = header
        self.info = info
        self.buffer = buffer

    @property
    def width(self):
        return self.buffer.width

    @property
    def height(self):
        return self.buffer.height

    @property
    def colorDepth(self):
        return COLOR_DEPTH

    @property
    def dataSize(self):
        return padded_row_size(self.width, BYTES_PER_PIXEL) * self.height

    @classmethod
    def blank(cls, width, height):
        """A black image with freshly computed headers."""
        buffer = PixelBuffer.color(width, height)
        image = cls(FileHeader(), InfoHeader(width=width, height=height, bpp=COLOR_DEPTH), buffer)
        refresh_headers(image)
        return image

    def release(self):
        if self.buffer is not None:
            self.buffer.release()


def _swap_red_blue(samples):
    # BGR <-> RGB, in place
    samples[0::3], samples[2::3] = samples[2::3], samples[0::3]
    return samples


def decode(data) -> BMP24Image:
    file_header, info = read_headers(data, COLOR_DEPTH)
    if info.size != INFO_HEADER_SIZE:
        logger.warning("Unexpected DIB header size %d (expected %d); reading pixels from offset %d",
                       info.size, INFO_HEADER_SIZE, file_header.dataOffset)

    width, height = info.width, info.abs_height
    check_data_offset(file_header, HEADER_SIZE)
    require_pixel_data(data, file_header.dataOffset, width, height, BYTES_PER_PIXEL)

    buffer = PixelBuffer.allocate(width, height, COLOR)
    read_rows(data, file_header.dataOffset, width, height, BYTES_PER_PIXEL,
              buffer.samples, top_down=info.is_top_down)
    _swap_red_blue(buffer.samples)
    logger.debug("Decoded 24-bit image %dx%d (top-down=%s)", width, height, info.is_top_down)
    return BMP24Image(file_header, info, buffer)


def refresh_headers(image: BMP24Image):
    """Recompute every size/offset field from the buffer's dimensions."""
    header, info = image.header, image.info
    info.size = INFO_HEADER_SIZE
    info.width = image.width
    info.height = image.height       # bottom-up on write, whatever was loaded
    info.planes = 1
    info.bpp = COLOR_DEPTH
    info.compression = BI_RGB
    info.imageSize = image.dataSize
    info.xResolution = 0
    info.yResolution = 0
    info.numColors = 0
    info.importantColors = 0
    header.signature = b"BM"
    header.reserved1 = 0
    header.reserved2 = 0
    header.dataOffset = HEADER_SIZE
    header.fileSize = HEADER_SIZE + info.imageSize


def encode(image: BMP24Image) -> bytes:
    if image.buffer is None or image.buffer.is_empty():
        raise InvalidArgumentError("Cannot save an empty 24-bit image")
    refresh_headers(image)
    samples = _swap_red_blue(bytearray(image.buffer.samples))
    pixels = write_rows(samples, image.width, image.height, BYTES_PER_PIXEL)
    return image.header.to_bytes() + image.info.to_bytes() + pixels
