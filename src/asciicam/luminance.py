import math

import numpy as np


def ramp_indices(length: int) -> np.ndarray:
    """Map each brightness 0-255 to an index into a sequence of ``length`` items.

    Computed in floating point as ``floor(v / 255 * (length - 1))`` so glyph
    boundaries land exactly where the float formula puts them.
    """
    if length < 1:
        raise ValueError("Cannot map brightness onto an empty sequence")
    return np.array([math.floor(v / 255 * (length - 1)) for v in range(256)], dtype=np.intp)


def build_lut(ramp: str) -> tuple[str, ...]:
    """Build the 256-entry brightness to glyph lookup table for a ramp."""
    if not ramp:
        raise ValueError("Glyph ramp must not be empty")
    return tuple(ramp[i] for i in ramp_indices(len(ramp)))


def brightness(pixels):
    """Unweighted mean of R, G and B, truncated to an integer.

    Accepts a single ``(r, g, b[, a])`` tuple or an array whose last axis holds
    the channels, in which case an array of the leading shape is returned.
    """
    if isinstance(pixels, np.ndarray):
        return pixels[..., :3].astype(np.uint16).sum(axis=-1) // 3
    r, g, b = pixels[:3]
    return (int(r) + int(g) + int(b)) // 3


class LuminanceMapper:
    """Holds a ramp and memoises its LUT for each invert setting."""

    def __init__(self, ramp: str):
        if not ramp:
            raise ValueError("Glyph ramp must not be empty")
        self.ramp = ramp
        self._luts: dict[bool, tuple[str, ...]] = {}

    def lut(self, invert: bool = False) -> tuple[str, ...]:
        invert = bool(invert)
        if invert not in self._luts:
            self._luts[invert] = build_lut(self.ramp[::-1] if invert else self.ramp)
        return self._luts[invert]
