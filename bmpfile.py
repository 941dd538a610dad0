import enum
import logging
import os

import bmp8
import bmp24
import config
import convolution
import histogram
import pointops
from bmpheader import peek_bpp
from errors import BMPIOError, InvalidArgumentError, UnsupportedDepthError

logger = logging.getLogger(__name__)


class Kind(enum.Enum):
    NONE = 0
    GRAY = 8
    COLOR = 24


class BMPFile:
    """
    Handle for the image being edited.

    `kind` says which variant is held: nothing, an 8-bit gray image or a
    24-bit color image. The handle is passed to every operation explicitly;
    `close()` drops the pixels and returns it to the NONE state.
    """

    def __init__(self, image=None, url=None):
        self.url = url
        self.filename = os.path.basename(url) if url else None
        self.fileSize = 0
        self.image = image
        if isinstance(image, bmp8.BMP8Image):
            self.kind = Kind.GRAY
        elif isinstance(image, bmp24.BMP24Image):
            self.kind = Kind.COLOR
        elif image is None:
            self.kind = Kind.NONE
        else:
            raise InvalidArgumentError(f"Unsupported image type: {type(image).__name__}")

    @property
    def buffer(self):
        return self.image.buffer if self.image is not None else None

    @property
    def width(self):
        return self.image.width if self.image is not None else 0

    @property
    def height(self):
        return self.image.height if self.image is not None else 0

    @property
    def bpp(self):
        return self.kind.value

    @property
    def bottomUp(self):
        """True when buffer row 0 is the bottom row of the picture (8-bit files keep file order)."""
        return self.kind is Kind.GRAY and self.image.bottomUp

    def is_loaded(self):
        return self.kind is not Kind.NONE

    def close(self):
        if self.image is not None:
            self.image.release()
        self.image = None
        self.kind = Kind.NONE

    def info(self):
        if not self.is_loaded():
            return {}
        info = {
            "width": self.width,
            "height": self.height,
            "color_depth": self.image.colorDepth,
            "data_size": self.image.dataSize,
        }
        if self.kind is Kind.COLOR:
            info["file_size"] = self.image.header.fileSize
            info["data_offset"] = self.image.header.dataOffset
        return info

    def printInfo(self, file=None):
        print_info(self, file)

    def apply(self, operation, *args):
        """Run a named operation on the held buffer ("negative", "brightness", ...)."""
        if not self.is_loaded():
            raise InvalidArgumentError("No image loaded")
        try:
            op = OPERATIONS[operation]
        except KeyError:
            raise InvalidArgumentError(f"Unknown operation: {operation}") from None
        expected = OPERATION_ARGS.get(operation, 0)
        if len(args) != expected:
            raise InvalidArgumentError(
                f"{operation} takes {expected} argument(s), got {len(args)}"
            )
        op(self.buffer, *args)
        return self

    def __repr__(self):
        if not self.is_loaded():
            return "BMPFile(<none>)"
        return f"BMPFile({self.filename!r}, {self.width}x{self.height}, {self.bpp}-bit)"


def _filter(name):
    return lambda buffer: convolution.apply_preset(buffer, name)


OPERATIONS = {
    "negative": pointops.negative,
    "brightness": pointops.brightness,
    "threshold": pointops.threshold,
    "grayscale": pointops.grayscale,
    "equalize": histogram.equalize,
}
OPERATIONS.update({name: _filter(name) for name in convolution.KERNELS})

# parameterised operations; everything else takes none
OPERATION_ARGS = {
    "brightness": 1,
    "threshold": 1,
}


def decode(data):
    """Decode BMP bytes into a handle, picking the codec from the bit depth."""
    bpp = peek_bpp(data)
    if bpp == 24:
        return BMPFile(bmp24.decode(data))
    if bpp == 8:
        return BMPFile(bmp8.decode(data))
    raise UnsupportedDepthError(f"Only 8-bit and 24-bit BMP files are supported (got {bpp} bits)")


def encode(bmp: BMPFile):
    if bmp.kind is Kind.COLOR:
        return bmp24.encode(bmp.image)
    if bmp.kind is Kind.GRAY:
        return bmp8.encode(bmp.image)
    raise InvalidArgumentError("No image loaded to save")


def load(path) -> BMPFile:
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise BMPIOError(f"Cannot read '{path}': {e.strerror or e}") from e

    bmp = decode(data)
    bmp.url = str(path)
    bmp.filename = os.path.basename(bmp.url)
    bmp.fileSize = len(data)
    logger.info("%d-bit image '%s' loaded (%dx%d).", bmp.bpp, path, bmp.width, bmp.height)
    return bmp


def save(bmp: BMPFile, path):
    data = encode(bmp)
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise BMPIOError(f"Cannot write '{path}': {e.strerror or e}") from e
    logger.info("Image saved to '%s'.", path)
    return len(data)


def print_info(bmp: BMPFile, file=None):
    if bmp is None or not bmp.is_loaded():
        print("No image loaded.", file=file)
        return
    info = bmp.info()
    print(f"Image Info ({bmp.bpp}-bit):", file=file)
    print(f"  Width: {info['width']}", file=file)
    print(f"  Height: {info['height']}", file=file)
    print(f"  Color Depth: {info['color_depth']}", file=file)
    print(f"  Data Size: {info['data_size']} bytes", file=file)
    if bmp.kind is Kind.COLOR:
        print(f"  File Size (header): {info['file_size']} bytes", file=file)
        print(f"  Data Offset (header): {info['data_offset']}", file=file)


def default_save_path(path):
    root, ext = os.path.splitext(str(path))
    return f"{root}{config.SAVE_SUFFIX}{ext or '.bmp'}"
