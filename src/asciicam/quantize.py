from enum import Enum

import numpy as np

from asciicam.luminance import brightness, ramp_indices


class QuantizeMode(str, Enum):
    NEAREST = "nearest"  # squared RGB distance, earliest entry wins ties
    BUCKET = "bucket"  # brightness bucket, ignores hue


def nearest_colour(rgb, palette) -> tuple[int, int, int]:
    """Return the palette entry with the smallest squared RGB distance to ``rgb``."""
    r, g, b = (int(c) for c in rgb[:3])
    best = None
    best_dist = None
    for entry in palette:
        pr, pg, pb = entry
        dr = r - pr
        dg = g - pg
        db = b - pb
        dist = dr * dr + dg * dg + db * db
        if best_dist is None or dist < best_dist:
            best_dist = dist
            best = entry
    if best is None:
        raise ValueError("Palette must contain at least one colour")
    return tuple(best)


def _palette_array(palette) -> np.ndarray:
    arr = np.asarray(palette, dtype=np.int32)
    if arr.ndim != 2 or arr.shape[0] == 0 or arr.shape[1] != 3:
        raise ValueError("Palette must be a non-empty list of RGB triples")
    if arr.min() < 0 or arr.max() > 255:
        raise ValueError("Palette channels must be in range 0-255")
    return arr


def quantize_nearest(pixels: np.ndarray, palette) -> np.ndarray:
    """Replace each pixel's RGB with its nearest palette colour. Alpha is copied."""
    pal = _palette_array(palette)
    out = pixels.copy()
    if pixels.size == 0:
        return out
    diff = pixels[..., None, :3].astype(np.int32) - pal  # (rows, cols, P, 3)
    dist = (diff * diff).sum(axis=-1)
    # argmin returns the first minimum, so ties resolve to the earliest entry
    out[..., :3] = pal[dist.argmin(axis=-1)]
    return out


def quantize_bucket(pixels: np.ndarray, palette) -> np.ndarray:
    """Pick a palette entry by brightness bucket alone. Alpha is copied."""
    pal = _palette_array(palette)
    out = pixels.copy()
    if pixels.size == 0:
        return out
    out[..., :3] = pal[ramp_indices(len(pal))[brightness(pixels)]]
    return out


def quantize(pixels: np.ndarray, palette, mode: QuantizeMode = QuantizeMode.NEAREST) -> np.ndarray:
    mode = QuantizeMode(mode)
    if mode is QuantizeMode.BUCKET:
        return quantize_bucket(pixels, palette)
    return quantize_nearest(pixels, palette)
