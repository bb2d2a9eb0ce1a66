import numpy as np

from asciicam.charsets import DEFAULT_RAMP
from asciicam.engine import AsciiFrame, PixelFrame
from asciicam.luminance import LuminanceMapper, brightness
from asciicam.palettes import get_palette
from asciicam.params import RenderParameters
from asciicam.quantize import QuantizeMode, quantize
from asciicam.sampling import ASCII_CORRECTION, PIXEL_CORRECTION, Surface, sample
from asciicam.sources import FrameSource


def render_ascii(pixels: np.ndarray, lut) -> str:
    """One glyph per pixel in row-major order, every row ending in a newline."""
    rows, cols = pixels.shape[:2]
    if rows == 0 or cols == 0:
        return ""
    glyphs = np.asarray(lut)[brightness(pixels)]
    return "".join("".join(row) + "\n" for row in glyphs)


def render_pixels(pixels: np.ndarray, palette, mode: QuantizeMode = QuantizeMode.NEAREST) -> np.ndarray:
    """Recolour every pixel from ``palette``; the result has the sample's dimensions."""
    return quantize(pixels, palette, mode)


class AsciiEngine:
    """Samples a source at glyph aspect and maps brightness to a ramp."""

    def __init__(self, ramp: str = DEFAULT_RAMP):
        self.mapper = LuminanceMapper(ramp)
        self.surface = Surface()

    def render(self, source: FrameSource, params: RenderParameters) -> AsciiFrame:
        pixels = sample(source, params.columns, self.surface, ASCII_CORRECTION)
        text = render_ascii(pixels, self.mapper.lut(params.invert))
        return AsciiFrame(text=text, columns=pixels.shape[1], rows=pixels.shape[0])


class PixelEngine:
    """Samples a source at square-pixel aspect and quantizes it to a palette."""

    def __init__(self):
        self.surface = Surface()

    def render(self, source: FrameSource, params: RenderParameters) -> PixelFrame:
        pixels = sample(source, params.columns, self.surface, PIXEL_CORRECTION)
        return PixelFrame(render_pixels(pixels, get_palette(params.palette), params.quantize))
