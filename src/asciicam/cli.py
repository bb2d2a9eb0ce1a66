import argparse
import asyncio
import logging
import sys
from pathlib import Path

from PIL import UnidentifiedImageError

from asciicam.camera import CaptureError, OpenCVCamera
from asciicam.charsets import RAMPS
from asciicam.converter import load_image
from asciicam.loop import AsyncioScheduler, LoopState, RenderLoop
from asciicam.palettes import DEFAULT_PALETTE, palette_names
from asciicam.params import (
    DEFAULT_COLUMNS,
    MAX_COLUMNS,
    MIN_COLUMNS,
    ParameterStore,
    RenderMode,
    RenderParameters,
)
from asciicam.pipeline import Pipeline, StillView
from asciicam.quantize import QuantizeMode
from asciicam.sources import StillSource
from asciicam.terminal import TerminalDisplay, format_ansi, get_terminal_size

logger = logging.getLogger(__name__)


def _columns(value: str) -> int:
    columns = int(value)
    if not MIN_COLUMNS <= columns <= MAX_COLUMNS:
        raise argparse.ArgumentTypeError(f"width must be between {MIN_COLUMNS} and {MAX_COLUMNS}")
    return columns


def _device(value: str) -> int | str:
    return int(value) if value.isdigit() else value


def _common_options() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "-w",
        "--width",
        type=_columns,
        default=DEFAULT_COLUMNS,
        help=f"Output width in columns, {MIN_COLUMNS}-{MAX_COLUMNS} (default: {DEFAULT_COLUMNS})",
    )
    parser.add_argument("-i", "--invert", action="store_true", default=False, help="Reverse the glyph ramp")
    parser.add_argument(
        "-p", "--palette", default=DEFAULT_PALETTE, choices=palette_names(), help="Pixel art palette (default: indie)"
    )
    parser.add_argument(
        "-m", "--mode", default="ascii", choices=[m.value for m in RenderMode], help="What to render (default: ascii)"
    )
    parser.add_argument(
        "-q",
        "--quantize",
        default="nearest",
        choices=[q.value for q in QuantizeMode],
        help="Palette matching: nearest colour or brightness bucket (default: nearest)",
    )
    parser.add_argument("--ramp", default="default", choices=sorted(RAMPS), help="Glyph ramp (default: default)")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Enable debug logging")
    return parser


def _build_parser() -> argparse.ArgumentParser:
    common = _common_options()
    parser = argparse.ArgumentParser(description="Render images and camera frames as ASCII or pixel art")
    sub = parser.add_subparsers(dest="command", required=True)

    image = sub.add_parser("image", parents=[common], help="Convert a still image")
    image.add_argument("image", help="Path to input image")
    image.add_argument("-o", "--output", default=None, help="Also write the ASCII text to this .txt file")
    image.add_argument("--png", default=None, help="Also save the pixel art to this image file")
    image.add_argument("--scale", type=int, default=6, help="Magnification for --png (default: 6)")

    live = sub.add_parser("live", parents=[common], help="Render a camera or video stream")
    live.add_argument("--device", type=_device, default=0, help="Camera index, video file or stream URL (default: 0)")
    live.add_argument("--fps", type=float, default=30.0, help="Refresh rate (default: 30)")
    live.add_argument("--frames", type=int, default=None, help="Stop after this many frames")
    return parser


def _run_image(args, params: RenderParameters) -> None:
    image_path = Path(args.image)
    if not image_path.exists():
        print(f"File not found: {image_path}", file=sys.stderr)
        sys.exit(1)
    try:
        image = load_image(image_path)
    except UnidentifiedImageError:
        print(f"Cannot read image: {image_path}", file=sys.stderr)
        sys.exit(1)

    def show_text(frame):
        sys.stdout.write(frame.text)
        if args.output:
            Path(args.output).write_text(frame.text, encoding="utf-8")

    def show_raster(frame):
        print(format_ansi(frame.pixels))
        if args.png:
            frame.magnify(args.scale).save(args.png)

    view = StillView(Pipeline(show_text, show_raster, RAMPS[args.ramp]), ParameterStore(params))
    view.show(StillSource(image))


async def _live(render_loop: RenderLoop, scheduler: AsyncioScheduler, frames: int | None) -> None:
    render_loop.start()
    try:
        while render_loop.state is LoopState.ACTIVE and (frames is None or render_loop.frames_rendered < frames):
            if render_loop.error is not None:
                raise render_loop.error
            await asyncio.sleep(scheduler.interval)
    finally:
        render_loop.close()


def _run_live(args, params: RenderParameters) -> None:
    terminal_columns = get_terminal_size()[0]
    if params.mode is not RenderMode.PIXEL and params.columns > terminal_columns:
        logger.warning("Output is %d columns wide but the terminal has %d", params.columns, terminal_columns)

    display = TerminalDisplay(params.mode)
    scheduler = AsyncioScheduler(args.fps)
    pipeline = Pipeline(display.show_text, display.show_raster, RAMPS[args.ramp])
    render_loop = RenderLoop(OpenCVCamera(args.device), pipeline, ParameterStore(params), scheduler)
    try:
        asyncio.run(_live(render_loop, scheduler, args.frames))
    except CaptureError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        pass
    except Exception as exc:
        print(f"Live rendering failed: {exc!r}", file=sys.stderr)
        sys.exit(1)


def main(argv=None):
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    params = RenderParameters(
        columns=args.width,
        invert=args.invert,
        palette=args.palette,
        mode=RenderMode(args.mode),
        quantize=QuantizeMode(args.quantize),
    )
    if args.command == "image":
        _run_image(args, params)
    else:
        _run_live(args, params)
