from __future__ import annotations

from typing import Protocol

import cv2
import numpy as np
from PIL import Image


class FrameSource(Protocol):
    """Anything that can be drawn, scaled, into an RGBA sample buffer."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def draw_into(self, pixels: np.ndarray) -> None:
        """Scale the source to fill ``pixels`` of shape (rows, cols, 4) uint8."""
        ...


class StillSource:
    """A decoded still image."""

    def __init__(self, image: Image.Image, resample=Image.BILINEAR):
        self.image = image.convert("RGBA")
        self.resample = resample

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def draw_into(self, pixels: np.ndarray) -> None:
        rows, cols = pixels.shape[:2]
        pixels[...] = np.asarray(self.image.resize((cols, rows), self.resample))


_TO_RGBA = {1: cv2.COLOR_GRAY2RGBA, 3: cv2.COLOR_BGR2RGBA, 4: cv2.COLOR_BGRA2RGBA}


class LiveSource:
    """One frame of a live stream as delivered by OpenCV (BGR channel order).

    Dimensions come from the frame itself, so they are only known once the
    stream has produced data.
    """

    def __init__(self, frame: np.ndarray):
        self.frame = frame

    @property
    def width(self) -> int:
        return self.frame.shape[1]

    @property
    def height(self) -> int:
        return self.frame.shape[0]

    def draw_into(self, pixels: np.ndarray) -> None:
        rows, cols = pixels.shape[:2]
        channels = 1 if self.frame.ndim == 2 else self.frame.shape[2]
        small = cv2.resize(self.frame, (cols, rows), interpolation=cv2.INTER_AREA)
        pixels[...] = cv2.cvtColor(small, _TO_RGBA[channels])
