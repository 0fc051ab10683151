import numpy as np

from .config import width, height


class Display:
    """64x32 monochrome framebuffer.

    Stored as a (height, width) boolean array, so the flat view is row-major
    with index = x + y * 64.
    """

    def __init__(self):
        self.pixels = np.zeros((height, width), dtype=bool)
        # Initial draw for clearing purposes
        self.should_draw = True

    @property
    def vram(self):
        """Flat 2048-cell view of the framebuffer (shares memory)."""
        return self.pixels.reshape(-1)

    def gfx(self):
        """Copy of the framebuffer for the host to render."""
        return self.vram.copy()

    def rows(self):
        """(height, width) view of the framebuffer, row 0 at the top."""
        return self.pixels

    def pixel(self, x, y):
        return bool(self.pixels[y, x])

    def clear(self):
        self.pixels[:] = False
        self.should_draw = True

    def draw_sprite(self, x, y, sprite):
        """XOR ``sprite`` (one byte per row, MSB on the left) at (x, y).

        The origin wraps to the screen; pixels past the right or bottom edge
        are dropped. Returns True if any lit pixel was turned off.
        """
        x %= width
        y %= height
        span = min(8, width - x)
        collision = False
        for row, line in enumerate(sprite):
            if y + row >= height:
                break
            if line == 0:
                continue
            bits = np.unpackbits(np.array([line], dtype=np.uint8))[:span].astype(bool)
            target = self.pixels[y + row, x:x + span]
            if np.any(target & bits):
                collision = True
            target ^= bits
        self.should_draw = True
        return collision

    def consume(self):
        """Return the changed flag and clear it (one frame per change)."""
        changed = self.should_draw
        self.should_draw = False
        return changed

    def reset(self):
        self.pixels[:] = False
        self.should_draw = True
