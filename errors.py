"""
Error types raised by the BMP codecs and the pixel transforms.

Everything derives from BMPError so callers (the GUI, scripts) can catch one
type and report it. The second base class keeps the usual built-in meaning
(OSError, ValueError, MemoryError) for code that already catches those.
"""


class BMPError(Exception):
    """Base class for every bmplab failure."""
    pass


class BMPIOError(BMPError, OSError):
    """Raised when a file cannot be opened, read or written."""
    pass


class FormatError(BMPError, ValueError):
    """Raised when a byte stream is not a BMP this package can decode."""
    pass


class NotBmpError(FormatError):
    pass


class UnsupportedDepthError(FormatError):
    pass


class UnsupportedCompressionError(FormatError):
    pass


class TruncatedError(FormatError):
    pass


class AllocationError(BMPError, MemoryError):
    """Raised when the pixel block cannot be allocated."""
    pass


class InvalidArgumentError(BMPError, ValueError):
    """Raised for an empty buffer or a parameter an operation cannot use."""
    pass


class InvalidKernelError(InvalidArgumentError):
    pass
