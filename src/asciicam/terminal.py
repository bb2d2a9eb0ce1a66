import os
import sys

from asciicam.engine import AsciiFrame, PixelFrame
from asciicam.params import RenderMode

CLEAR_SCREEN = "\033[2J"
CURSOR_HOME = "\033[H"
RESET = "\033[0m"


def get_terminal_size() -> tuple[int, int]:
    """Return (columns, rows) of the terminal, or (80, 24) if not a tty."""
    if not sys.stdout.isatty():
        return (80, 24)
    size = os.get_terminal_size()
    return (size.columns, size.lines)


def format_ansi(pixels) -> str:
    """Draw a raster as truecolor background blocks, two cells per pixel so they look square."""
    out = []
    for row in pixels:
        parts = [f"\033[48;2;{int(r)};{int(g)};{int(b)}m  " for r, g, b, _ in row]
        parts.append(RESET)
        out.append("".join(parts))
    return "\n".join(out)


class TerminalDisplay:
    """Text and raster sinks that redraw each frame in place.

    In ``both`` mode the raster is drawn straight under the text of the same
    frame, so only the text moves the cursor home.
    """

    def __init__(self, mode: RenderMode, stream=None):
        self.mode = mode
        self.stream = stream if stream is not None else sys.stdout
        self._cleared = False

    def show_text(self, frame: AsciiFrame) -> None:
        self._write(CURSOR_HOME + frame.text)

    def show_raster(self, frame: PixelFrame) -> None:
        prefix = "" if self.mode is RenderMode.BOTH else CURSOR_HOME
        self._write(prefix + format_ansi(frame.pixels) + "\n")

    def _write(self, data: str) -> None:
        if not self._cleared:
            self.stream.write(CLEAR_SCREEN)
            self._cleared = True
        self.stream.write(data)
        self.stream.flush()
