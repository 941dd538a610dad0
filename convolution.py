import enum
import logging

from errors import InvalidArgumentError, InvalidKernelError
from pixelbuffer import PixelBuffer, COLOR
from pointops import round_clamp

logger = logging.getLogger(__name__)


class EdgePolicy(enum.Enum):
    # neighbours outside the image read the nearest edge pixel; every pixel is rewritten
    REPLICATE = "replicate"
    # pixels closer than the kernel radius to an edge keep their value
    SKIP_BORDER = "skip_border"


BOX_BLUR = [[1 / 9, 1 / 9, 1 / 9],
            [1 / 9, 1 / 9, 1 / 9],
            [1 / 9, 1 / 9, 1 / 9]]

GAUSSIAN_BLUR = [[1 / 16, 2 / 16, 1 / 16],
                 [2 / 16, 4 / 16, 2 / 16],
                 [1 / 16, 2 / 16, 1 / 16]]

SHARPEN = [[0, -1, 0],
           [-1, 5, -1],
           [0, -1, 0]]

OUTLINE = [[-1, -1, -1],
           [-1, 8, -1],
           [-1, -1, -1]]

EMBOSS = [[-2, -1, 0],
          [-1, 1, 1],
          [0, 1, 2]]

KERNELS = {
    "box_blur": BOX_BLUR,
    "gaussian_blur": GAUSSIAN_BLUR,
    "sharpen": SHARPEN,
    "outline": OUTLINE,
    "emboss": EMBOSS,
}


def identity_kernel(size=3):
    kernel = [[0.0 for _ in range(size)] for _ in range(size)]
    kernel[size // 2][size // 2] = 1.0
    return kernel


def kernel_radius(kernel):
    size = len(kernel) if kernel else 0
    if size == 0 or size % 2 == 0 or any(len(row) != size for row in kernel):
        raise InvalidKernelError(f"Kernel must be a square with an odd, positive side (got {size})")
    return size // 2


def default_edge_policy(buffer: PixelBuffer):
    return EdgePolicy.REPLICATE if buffer.channels == COLOR else EdgePolicy.SKIP_BORDER


def apply_kernel(buffer: PixelBuffer, kernel, edge_policy=None):
    """
    Convolve `buffer` with `kernel` in place and return it.

    Every read comes from a snapshot taken before the first write, so no
    output pixel ever sees a partially filtered neighbourhood.
    """
    buffer.require_data("filter")
    radius = kernel_radius(kernel)
    if edge_policy is None:
        edge_policy = default_edge_policy(buffer)

    w, h, ch = buffer.width, buffer.height, buffer.channels
    stride = buffer.stride
    size = 2 * radius + 1
    # flattened (dy, dx, weight) taps; zero weights contribute nothing
    taps = [(j - radius, i - radius, float(kernel[j][i]))
            for j in range(size) for i in range(size) if kernel[j][i] != 0]

    if edge_policy is EdgePolicy.REPLICATE:
        ys, xs = range(h), range(w)
    else:
        ys, xs = range(radius, h - radius), range(radius, w - radius)

    src = buffer.snapshot()
    out = buffer.samples
    for y in ys:
        for x in xs:
            acc = [0.0] * ch
            for dy, dx, k in taps:
                yy = min(max(y + dy, 0), h - 1)
                xx = min(max(x + dx, 0), w - 1)
                base = yy * stride + xx * ch
                for c in range(ch):
                    acc[c] += src[base + c] * k
            base = y * stride + x * ch
            for c in range(ch):
                out[base + c] = round_clamp(acc[c])

    logger.info("Filter applied (kernel size %d, %s edges).", size, edge_policy.value)
    return buffer


def apply_preset(buffer: PixelBuffer, name, edge_policy=None):
    try:
        kernel = KERNELS[name]
    except KeyError:
        raise InvalidArgumentError(f"Unknown filter: {name}") from None
    return apply_kernel(buffer, kernel, edge_policy)
