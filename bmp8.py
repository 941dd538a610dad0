"""
8-bit BMP codec.

Only the common layout is handled: a 54-byte header followed by a 256-entry
(1024-byte) color table. The header and palette are kept as raw bytes and
written back unchanged, apart from the file size, pixel offset and image size
which are recomputed for the fixed layout. The palette is never interpreted;
samples are treated as gray levels.

Rows stay in file order: for the usual bottom-up file, row 0 of the buffer is
the bottom row of the picture. Filters see the rows exactly as stored.

"""
import logging

from bmpheader import (
    FileHeader, InfoHeader, HEADER_SIZE, INFO_HEADER_SIZE, COLOR_TABLE_SIZE,
    check_data_offset, padded_row_size, read_headers, read_rows, require_pixel_data, write_rows,
)
from errors import FormatError, InvalidArgumentError, TruncatedError
from pixelbuffer import PixelBuffer, GRAY

logger = logging.getLogger(__name__)

COLOR_DEPTH = 8
PIXEL_OFFSET = HEADER_SIZE + COLOR_TABLE_SIZE   # 1078


def grayscale_palette():
    return b"".join(bytes((i, i, i, 0)) for i in range(256))


class BMP8Image:
    def __init__(self, header: bytes, colorTable: bytes, buffer: PixelBuffer):
        self.header = bytes(header)
        self.colorTable = bytes(colorTable)
        self.buffer = buffer
        self.fileHeader = FileHeader.parse(self.header)
        self.infoHeader = InfoHeader.parse(self.header)

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
        # size of the padded pixel block as saved; the header field may be stale or 0
        return padded_row_size(self.width, 1) * self.height

    @property
    def bottomUp(self):
        return not self.infoHeader.is_top_down

    @classmethod
    def blank(cls, width, height):
        """A black image with a grayscale ramp palette."""
        info = InfoHeader(width=width, height=height, bpp=COLOR_DEPTH, numColors=256,
                          imageSize=padded_row_size(width, 1) * height)
        header = FileHeader(fileSize=PIXEL_OFFSET + info.imageSize, dataOffset=PIXEL_OFFSET)
        return cls(header.to_bytes() + info.to_bytes(), grayscale_palette(),
                   PixelBuffer.gray(width, height))

    def release(self):
        if self.buffer is not None:
            self.buffer.release()


def decode(data) -> BMP8Image:
    file_header, info = read_headers(data, COLOR_DEPTH)
    if info.size != INFO_HEADER_SIZE:
        raise FormatError(
            f"8-bit images need a {INFO_HEADER_SIZE}-byte info header, got {info.size}"
        )
    if len(data) < PIXEL_OFFSET:
        raise TruncatedError("BMP color table is truncated")

    width, height = info.width, info.abs_height
    check_data_offset(file_header, PIXEL_OFFSET)
    require_pixel_data(data, file_header.dataOffset, width, height, 1)

    buffer = PixelBuffer.allocate(width, height, GRAY)
    read_rows(data, file_header.dataOffset, width, height, 1, buffer.samples, file_order=True)
    logger.debug("Decoded 8-bit image %dx%d (top-down=%s)", width, height, info.is_top_down)
    return BMP8Image(data[:HEADER_SIZE], data[HEADER_SIZE:PIXEL_OFFSET], buffer)


def encode(image: BMP8Image) -> bytes:
    if image.buffer is None or image.buffer.is_empty():
        raise InvalidArgumentError("Cannot save an empty 8-bit image")
    pixels = write_rows(image.buffer.samples, image.width, image.height, 1, file_order=True)

    header = bytearray(image.header)
    header[0x02:0x06] = (PIXEL_OFFSET + len(pixels)).to_bytes(4, "little")
    header[0x0A:0x0E] = PIXEL_OFFSET.to_bytes(4, "little")
    header[0x22:0x26] = len(pixels).to_bytes(4, "little")
    return bytes(header) + image.colorTable + pixels
