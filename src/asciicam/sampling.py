import logging
import math

import numpy as np

from asciicam.sources import FrameSource

logger = logging.getLogger(__name__)

# Glyph cells are roughly twice as tall as they are wide
ASCII_CORRECTION = 0.55
# Output pixels are square
PIXEL_CORRECTION = 1.0


def sample_rows(columns: int, width: int, height: int, correction: float) -> int:
    """Row count that keeps the source's proportions at ``columns`` wide."""
    aspect = height / width
    return math.floor(columns * aspect * correction)


class Surface:
    """Reusable RGBA scratch buffer the sampler draws into.

    The buffer is only reallocated when the requested size changes. Arrays
    returned by :func:`sample` are views of it and are overwritten by the next
    call, so a surface must not be shared between renders running at once.
    """

    def __init__(self):
        self.pixels = np.zeros((0, 0, 4), dtype=np.uint8)
        self.allocations = 0

    @property
    def columns(self) -> int:
        return self.pixels.shape[1]

    @property
    def rows(self) -> int:
        return self.pixels.shape[0]

    def resize(self, columns: int, rows: int) -> bool:
        if self.pixels.shape[:2] == (rows, columns):
            return False
        self.pixels = np.zeros((rows, columns, 4), dtype=np.uint8)
        self.allocations += 1
        logger.debug("Sample surface resized to %dx%d", columns, rows)
        return True


def sample(source: FrameSource, columns: int, surface: Surface, correction: float) -> np.ndarray:
    """Downsample ``source`` to ``columns`` wide. Returns (rows, columns, 4) uint8.

    A source without dimensions yet, or a row count that rounds down to zero,
    yields an empty buffer rather than an error.
    """
    if columns < 1:
        raise ValueError(f"columns must be a positive integer, got {columns}")
    width, height = source.width, source.height
    rows = sample_rows(columns, width, height, correction) if width > 0 and height > 0 else 0
    surface.resize(columns, rows)
    if rows > 0:
        source.draw_into(surface.pixels)
    return surface.pixels
