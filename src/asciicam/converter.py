from pathlib import Path

from PIL import Image

from asciicam.charsets import DEFAULT_RAMP
from asciicam.engine import PixelFrame
from asciicam.palettes import DEFAULT_PALETTE
from asciicam.params import DEFAULT_COLUMNS, RenderParameters
from asciicam.quantize import QuantizeMode
from asciicam.renderer import AsciiEngine, PixelEngine
from asciicam.sources import StillSource


def load_image(path: str | Path) -> Image.Image:
    """Open and fully decode an image file."""
    image = Image.open(path)
    image.load()
    return image


def _as_source(image: Image.Image | str | Path) -> StillSource:
    if not isinstance(image, Image.Image):
        image = load_image(image)
    return StillSource(image)


def image_to_ascii(
    image: Image.Image | str | Path,
    columns: int = DEFAULT_COLUMNS,
    invert: bool = False,
    ramp: str = DEFAULT_RAMP,
) -> str:
    params = RenderParameters(columns=columns, invert=invert)
    return AsciiEngine(ramp).render(_as_source(image), params).text


def image_to_pixels(
    image: Image.Image | str | Path,
    columns: int = DEFAULT_COLUMNS,
    palette: str = DEFAULT_PALETTE,
    mode: QuantizeMode = QuantizeMode.NEAREST,
) -> PixelFrame:
    params = RenderParameters(columns=columns, palette=palette, quantize=mode)
    return PixelEngine().render(_as_source(image), params)

