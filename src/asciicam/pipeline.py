from __future__ import annotations

from typing import Callable

from asciicam.charsets import DEFAULT_RAMP
from asciicam.engine import AsciiFrame, Engine, PixelFrame
from asciicam.params import ParameterStore, RenderMode, RenderParameters
from asciicam.renderer import AsciiEngine, PixelEngine
from asciicam.sources import FrameSource

TextSink = Callable[[AsciiFrame], None]
RasterSink = Callable[[PixelFrame], None]


class Pipeline:
    """Runs a source through the renderer(s) picked by ``params.mode`` and feeds the sinks."""

    def __init__(
        self,
        text_sink: TextSink | None = None,
        raster_sink: RasterSink | None = None,
        ramp: str = DEFAULT_RAMP,
    ):
        self.ascii: Engine = AsciiEngine(ramp)
        self.pixel: Engine = PixelEngine()
        self.text_sink = text_sink
        self.raster_sink = raster_sink

    def render(self, source: FrameSource, params: RenderParameters) -> list[AsciiFrame | PixelFrame]:
        frames: list[AsciiFrame | PixelFrame] = []
        if params.mode in (RenderMode.ASCII, RenderMode.BOTH):
            text = self.ascii.render(source, params)
            if self.text_sink is not None:
                self.text_sink(text)
            frames.append(text)
        if params.mode in (RenderMode.PIXEL, RenderMode.BOTH):
            raster = self.pixel.render(source, params)
            if self.raster_sink is not None:
                self.raster_sink(raster)
            frames.append(raster)
        return frames


class StillView:
    """Keeps a still image on display and re-renders it whenever parameters change."""

    def __init__(self, pipeline: Pipeline, store: ParameterStore):
        self.pipeline = pipeline
        self.store = store
        self.source: FrameSource | None = None
        self._unsubscribe = store.subscribe(self._on_change)

    def show(self, source: FrameSource) -> list[AsciiFrame | PixelFrame]:
        self.source = source
        return self.pipeline.render(source, self.store.params)

    def close(self) -> None:
        self._unsubscribe()

    def _on_change(self, params: RenderParameters) -> None:
        # Nothing uploaded yet
        if self.source is None:
            return
        self.pipeline.render(self.source, params)
