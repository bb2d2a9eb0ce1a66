from asciicam.engine import AsciiFrame, PixelFrame
from asciicam.params import ParameterStore, RenderMode, RenderParameters
from asciicam.pipeline import Pipeline, StillView
from asciicam.sources import StillSource
from tests.conftest import gray_image


def _recording_pipeline():
    texts, rasters = [], []
    return Pipeline(texts.append, rasters.append), texts, rasters


def test_mode_selects_renderers():
    pipeline, texts, rasters = _recording_pipeline()
    source = StillSource(gray_image())

    pipeline.render(source, RenderParameters(mode=RenderMode.ASCII))
    assert (len(texts), len(rasters)) == (1, 0)

    pipeline.render(source, RenderParameters(mode=RenderMode.PIXEL))
    assert (len(texts), len(rasters)) == (1, 1)

    frames = pipeline.render(source, RenderParameters(mode=RenderMode.BOTH))
    assert (len(texts), len(rasters)) == (2, 2)
    assert isinstance(frames[0], AsciiFrame)
    assert isinstance(frames[1], PixelFrame)


def test_pipeline_without_sinks_returns_frames():
    frames = Pipeline().render(StillSource(gray_image()), RenderParameters(mode=RenderMode.BOTH))
    assert len(frames) == 2


def test_still_view_rerenders_on_parameter_change():
    pipeline, texts, _ = _recording_pipeline()
    store = ParameterStore()
    view = StillView(pipeline, store)
    view.show(StillSource(gray_image()))
    assert texts[-1].columns == 100

    store.update(columns=60)
    assert len(texts) == 2
    assert texts[-1].columns == 60
    assert all(len(line) == 60 for line in texts[-1].lines)


def test_still_view_without_image_ignores_changes():
    pipeline, texts, rasters = _recording_pipeline()
    store = ParameterStore()
    StillView(pipeline, store)
    store.update(invert=True)
    assert texts == []
    assert rasters == []


def test_still_view_close_stops_rerendering():
    pipeline, texts, _ = _recording_pipeline()
    store = ParameterStore()
    view = StillView(pipeline, store)
    view.show(StillSource(gray_image()))
    view.close()
    store.update(invert=True)
    assert len(texts) == 1
