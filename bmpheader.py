from errors import (
    FormatError, NotBmpError, TruncatedError, UnsupportedCompressionError,
    UnsupportedDepthError,
)

BMP_MAGIC = b"BM"
FILE_HEADER_SIZE = 14
INFO_HEADER_SIZE = 40
HEADER_SIZE = FILE_HEADER_SIZE + INFO_HEADER_SIZE   # 54
COLOR_TABLE_SIZE = 256 * 4                           # 1024
BI_RGB = 0


def _u16(data, offset):
    return int.from_bytes(data[offset:offset + 2], "little")


def _u32(data, offset):
    return int.from_bytes(data[offset:offset + 4], "little")


def _i32(data, offset):
    return int.from_bytes(data[offset:offset + 4], "little", signed=True)


def row_padding(row_bytes):
    return (4 - row_bytes % 4) % 4


def padded_row_size(width, bytes_per_pixel):
    row_bytes = width * bytes_per_pixel
    return row_bytes + row_padding(row_bytes)


class FileHeader:
    """The 14-byte BITMAPFILEHEADER."""

    def __init__(self, signature=BMP_MAGIC, fileSize=0, reserved1=0, reserved2=0, dataOffset=HEADER_SIZE):
        self.signature = signature
        self.fileSize = fileSize
        self.reserved1 = reserved1
        self.reserved2 = reserved2
        self.dataOffset = dataOffset

    @classmethod
    def parse(cls, data):
        if len(data) < FILE_HEADER_SIZE:
            raise TruncatedError(f"BMP file header needs {FILE_HEADER_SIZE} bytes, got {len(data)}")
        signature = bytes(data[0x00:0x02])
        if signature != BMP_MAGIC:
            raise NotBmpError(f"Not a BMP file (signature {signature!r})")
        return cls(
            signature=signature,
            fileSize=_u32(data, 0x02),
            reserved1=_u16(data, 0x06),
            reserved2=_u16(data, 0x08),
            dataOffset=_u32(data, 0x0A),
        )

    def to_bytes(self):
        return b"".join((
            self.signature,
            self.fileSize.to_bytes(4, "little"),
            self.reserved1.to_bytes(2, "little"),
            self.reserved2.to_bytes(2, "little"),
            self.dataOffset.to_bytes(4, "little"),
        ))


class InfoHeader:
    """The 40-byte BITMAPINFOHEADER. Height is signed: negative means top-down rows."""

    def __init__(self, size=INFO_HEADER_SIZE, width=0, height=0, planes=1, bpp=24,
                 compression=BI_RGB, imageSize=0, xResolution=0, yResolution=0,
                 numColors=0, importantColors=0):
        self.size = size
        self.width = width
        self.height = height
        self.planes = planes
        self.bpp = bpp
        self.compression = compression
        self.imageSize = imageSize
        self.xResolution = xResolution
        self.yResolution = yResolution
        self.numColors = numColors
        self.importantColors = importantColors

    @classmethod
    def parse(cls, data):
        if len(data) < HEADER_SIZE:
            raise TruncatedError(f"BMP headers need {HEADER_SIZE} bytes, got {len(data)}")
        return cls(
            size=_u32(data, 0x0E),
            width=_i32(data, 0x12),
            height=_i32(data, 0x16),
            planes=_u16(data, 0x1A),
            bpp=_u16(data, 0x1C),
            compression=_u32(data, 0x1E),
            imageSize=_u32(data, 0x22),
            xResolution=_i32(data, 0x26),
            yResolution=_i32(data, 0x2A),
            numColors=_u32(data, 0x2E),
            importantColors=_u32(data, 0x32),
        )

    def to_bytes(self):
        return b"".join((
            self.size.to_bytes(4, "little"),
            self.width.to_bytes(4, "little", signed=True),
            self.height.to_bytes(4, "little", signed=True),
            self.planes.to_bytes(2, "little"),
            self.bpp.to_bytes(2, "little"),
            self.compression.to_bytes(4, "little"),
            self.imageSize.to_bytes(4, "little"),
            self.xResolution.to_bytes(4, "little", signed=True),
            self.yResolution.to_bytes(4, "little", signed=True),
            self.numColors.to_bytes(4, "little"),
            self.importantColors.to_bytes(4, "little"),
        ))

    @property
    def abs_height(self):
        return abs(self.height)

    @property
    def is_top_down(self):
        return self.height < 0


def read_headers(data, expected_bpp):
    """
    Parse and validate both headers for a `expected_bpp` image.

    Nothing is allocated for pixels here, so a rejected stream never leaves a
    half-built image behind.
    """
    file_header = FileHeader.parse(data)
    info = InfoHeader.parse(data)
    if info.bpp != expected_bpp:
        raise UnsupportedDepthError(f"Expected a {expected_bpp}-bit BMP, got {info.bpp} bits per pixel")
    if info.compression != BI_RGB:
        raise UnsupportedCompressionError(
            f"Compressed BMP files are not supported (compression type {info.compression})"
        )
    if info.width <= 0 or info.height == 0:
        raise FormatError(f"Invalid image dimensions ({info.width} x {info.height})")
    return file_header, info


def peek_bpp(data):
    """Bits per pixel of a BMP stream, after checking the signature."""
    FileHeader.parse(data)
    if len(data) < 0x1E:
        raise TruncatedError("BMP info header is truncated")
    return _u16(data, 0x1C)


def check_data_offset(file_header, minimum):
    """Pixel data may not start inside the headers or the color table."""
    if file_header.dataOffset < minimum:
        raise FormatError(
            f"BMP pixel data offset {file_header.dataOffset} is inside the header "
            f"(must be at least {minimum})"
        )


def require_pixel_data(data, offset, width, height, bytes_per_pixel):
    """Raise TruncatedError unless `data` holds every row the headers promise."""
    row_bytes = width * bytes_per_pixel
    stride = row_bytes + row_padding(row_bytes)
    # the last row's padding is sometimes missing; its pixels are not
    if offset + stride * height - row_padding(row_bytes) > len(data):
        raise TruncatedError(
            f"BMP pixel data truncated: need {stride * height} bytes at offset {offset}, "
            f"file has {max(len(data) - offset, 0)}"
        )


def read_rows(data, offset, width, height, bytes_per_pixel, out, top_down=False, file_order=False):
    """
    Copy `height` padded rows starting at `offset` into the unpadded block
    `out`, top row first. Bottom-up files are flipped on the way in unless
    `file_order` is set, in which case rows keep their on-disk order.
    """
    row_bytes = width * bytes_per_pixel
    stride = row_bytes + row_padding(row_bytes)
    for y in range(height):
        src_row = y if (top_down or file_order) else (height - 1 - y)
        row_offset = offset + src_row * stride
        out[y * row_bytes:(y + 1) * row_bytes] = data[row_offset:row_offset + row_bytes]
    return out


def write_rows(samples, width, height, bytes_per_pixel, file_order=False):
    """Inverse of read_rows: bottom row first, each row zero-padded to 4 bytes."""
    row_bytes = width * bytes_per_pixel
    pad = bytes(row_padding(row_bytes))
    out = bytearray()
    rows = range(height) if file_order else range(height - 1, -1, -1)
    for y in rows:
        out += samples[y * row_bytes:(y + 1) * row_bytes]
        out += pad
    return bytes(out)
