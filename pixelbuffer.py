from errors import AllocationError, InvalidArgumentError

GRAY = 1
COLOR = 3


class PixelBuffer:
    """
    Owned pixel storage for one image.

    All samples live in a single bytearray; row y starts at y * stride, so
    there are no per-row objects. Channel order for color buffers is R, G, B
    and row 0 is the top of the image. Gray buffers keep the rows in the
    order the file stores them.
    """

    def __init__(self, width, height, channels, samples):
        if channels not in (GRAY, COLOR):
            raise InvalidArgumentError(f"Unsupported channel count: {channels}")
        if len(samples) != width * height * channels:
            raise InvalidArgumentError(
                f"Sample block holds {len(samples)} bytes, "
                f"expected {width * height * channels}"
            )
        self.width = width
        self.height = height
        self.channels = channels
        self.samples = samples

    @classmethod
    def allocate(cls, width, height, channels):
        if width < 0 or height < 0:
            raise InvalidArgumentError(f"Invalid dimensions {width}x{height}")
        try:
            samples = bytearray(width * height * channels)
        except MemoryError as e:
            raise AllocationError(
                f"Could not allocate {width}x{height}x{channels} pixel block"
            ) from e
        return cls(width, height, channels, samples)

    @classmethod
    def gray(cls, width, height):
        return cls.allocate(width, height, GRAY)

    @classmethod
    def color(cls, width, height):
        return cls.allocate(width, height, COLOR)

    @property
    def stride(self):
        return self.width * self.channels

    @property
    def pixel_count(self):
        return self.width * self.height

    def row_start(self, y):
        return y * self.stride

    def index(self, x, y):
        return y * self.stride + x * self.channels

    def get(self, x, y):
        """Sample at (x, y): an int for gray buffers, an (r, g, b) tuple for color."""
        i = self.index(x, y)
        if self.channels == GRAY:
            return self.samples[i]
        return tuple(self.samples[i:i + self.channels])

    def set(self, x, y, value):
        i = self.index(x, y)
        if self.channels == GRAY:
            self.samples[i] = value
        else:
            self.samples[i:i + self.channels] = bytes(value)

    def row(self, y):
        start = self.row_start(y)
        return bytes(self.samples[start:start + self.stride])

    def snapshot(self):
        # immutable copy; reads during a transform must come from here
        return bytes(self.samples)

    def is_empty(self):
        return self.samples is None or len(self.samples) == 0

    def release(self):
        self.samples = None

    def require_data(self, operation):
        if self.is_empty():
            raise InvalidArgumentError(f"Cannot apply {operation} to an empty image")

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (self.width == other.width and self.height == other.height
                and self.channels == other.channels and self.samples == other.samples)

    def __repr__(self):
        return f"PixelBuffer({self.width}x{self.height}, channels={self.channels})"
