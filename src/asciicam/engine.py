from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np
from PIL import Image

from asciicam.params import RenderParameters
from asciicam.sources import FrameSource


@dataclass
class AsciiFrame:
    text: str  # rows newline-terminated lines of columns glyphs
    columns: int
    rows: int

    @property
    def lines(self) -> list[str]:
        return self.text.split("\n")[:-1] if self.text else []


@dataclass
class PixelFrame:
    pixels: np.ndarray  # (rows, cols, 4) uint8 RGBA

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def to_image(self) -> Image.Image:
        if self.width == 0 or self.height == 0:
            return Image.new("RGBA", (self.width, self.height))
        return Image.fromarray(self.pixels)

    def magnify(self, scale: int) -> Image.Image:
        """Upscale with nearest-neighbour filtering so every pixel stays a crisp block."""
        if scale < 1:
            raise ValueError(f"scale must be at least 1, got {scale}")
        image = self.to_image()
        if self.width == 0 or self.height == 0:
            return image
        return image.resize((self.width * scale, self.height * scale), Image.NEAREST)


class Engine(Protocol):
    def render(self, source: FrameSource, params: RenderParameters) -> AsciiFrame | PixelFrame:
        """Sample ``source`` and render it with the given parameters."""
        ...
