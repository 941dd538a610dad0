from PyQt5.QtWidgets import QLabel
from PyQt5.QtGui import QImage, QPixmap, QColor

from pixelbuffer import PixelBuffer, GRAY


class ImageView(QLabel):
    """Preview of the handle's pixel buffer. Display scaling never touches the image data."""

    def __init__(self, width=200, height=200):
        super().__init__()
        self.width_ = width
        self.height_ = height

        self.bmp = None
        self.scale = 1.0

        # backing image
        self.image = QImage(width, height, QImage.Format_RGB32)
        self.image.fill(QColor(0, 0, 0))
        self.setPixmap(QPixmap.fromImage(self.image))

    def render_bmp(self, bmp):
        # New handle, reset the zoom
        self.bmp = bmp
        self.scale = 1.0
        self.rebuild()

    def clear(self):
        self.bmp = None
        self.image = QImage(self.width_, self.height_, QImage.Format_RGB32)
        self.image.fill(QColor(0, 0, 0))
        self.setPixmap(QPixmap.fromImage(self.image))

    def set_scale(self, factor: float):
        if not self.bmp:
            return
        self.scale = max(0.01, float(factor))
        self.rebuild()

    def rebuild(self):
        if self.bmp is None or not self.bmp.is_loaded():
            self.clear()
            return
        buffer = self.bmp.buffer
        flip = self.bmp.bottomUp

        new_w = max(1, int(buffer.width * self.scale))
        new_h = max(1, int(buffer.height * self.scale))
        if new_w != buffer.width or new_h != buffer.height:
            grid = bilinear_resize(buffer, new_w, new_h, flip=flip)
        else:
            grid = to_pixel_grid(buffer, flip=flip)
        self._render_from_pixelgrid(grid)

    def _render_from_pixelgrid(self, grid):
        h = len(grid)
        w = len(grid[0])
        self.setMinimumSize(w, h)
        self.image = QImage(w, h, QImage.Format_RGB32)

        for y in range(h):
            row = grid[y]
            for x in range(w):
                r, g, b = row[x]
                self.image.setPixel(x, y, QColor(r, g, b).rgb())

        self.setPixmap(QPixmap.fromImage(self.image))


def _rgb_at(buffer: PixelBuffer, x, y, flip=False):
    if flip:
        y = buffer.height - 1 - y
    v = buffer.get(x, y)
    # gray samples are shown as a plain ramp; the palette is not consulted
    if buffer.channels == GRAY:
        return (v, v, v)
    return v


def to_pixel_grid(buffer: PixelBuffer, flip=False):
    """Rows of (r, g, b) tuples, top row first. `flip` is for buffers stored bottom row first."""
    return [[_rgb_at(buffer, x, y, flip) for x in range(buffer.width)] for y in range(buffer.height)]


# Bilinear so the preview can zoom by any factor, not just integer steps.
# Output pixel centres are mapped back onto the source grid.
def bilinear_resize(buffer: PixelBuffer, new_w, new_h, flip=False):
    src_w, src_h = buffer.width, buffer.height
    scale_x = new_w / float(src_w)
    scale_y = new_h / float(src_h)
    out = [[(0, 0, 0) for _ in range(new_w)] for _ in range(new_h)]

    for y_out in range(new_h):
        src_y = (y_out + 0.5) / scale_y - 0.5
        y0 = min(max(int(src_y), 0), src_h - 1)
        y1 = min(y0 + 1, src_h - 1)
        wy = min(max(src_y - y0, 0.0), 1.0)

        for x_out in range(new_w):
            src_x = (x_out + 0.5) / scale_x - 0.5
            x0 = min(max(int(src_x), 0), src_w - 1)
            x1 = min(x0 + 1, src_w - 1)
            wx = min(max(src_x - x0, 0.0), 1.0)

            c00 = _rgb_at(buffer, x0, y0, flip)
            c10 = _rgb_at(buffer, x1, y0, flip)
            c01 = _rgb_at(buffer, x0, y1, flip)
            c11 = _rgb_at(buffer, x1, y1, flip)

            out[y_out][x_out] = tuple(
                int((1 - wx) * (1 - wy) * c00[c] + wx * (1 - wy) * c10[c] +
                    (1 - wx) * wy * c01[c] + wx * wy * c11[c] + 0.5)
                for c in range(3)
            )
    return out
