import cv2
import numpy as np
import pytest
from PIL import Image

from asciicam.camera import CaptureError, EndOfStream
from asciicam.sources import LiveSource


class ManualHandle:
    def __init__(self, callback):
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose ticks only run when the test says so."""

    def __init__(self):
        self.handles = []

    @property
    def pending(self):
        return [h for h in self.handles if not h.cancelled]

    def schedule(self, callback):
        handle = ManualHandle(callback)
        self.handles.append(handle)
        return handle

    def run_next(self):
        while self.handles:
            handle = self.handles.pop(0)
            if not handle.cancelled:
                handle.callback()
                return True
        return False


class FakeCamera:
    """Camera that serves queued frames; ``None`` entries mean "not ready yet".

    With ``eof`` set, an empty queue means the stream has ended.
    """

    def __init__(self, frames=None, fail=False, eof=False):
        self.frames = list(frames) if frames is not None else None
        self.fail = fail
        self.eof = eof
        self.opened = 0
        self.released = 0
        self.is_open = False

    def open(self):
        if self.fail:
            raise CaptureError("Permission denied")
        self.opened += 1
        self.is_open = True

    def read(self):
        if self.frames is None:
            return LiveSource(np.full((100, 200, 3), 128, dtype=np.uint8))
        if not self.frames:
            if self.eof:
                raise EndOfStream("clip finished")
            return None
        frame = self.frames.pop(0)
        return None if frame is None else LiveSource(frame)

    def release(self):
        self.released += 1
        self.is_open = False


def gray_image(width=200, height=100, value=128):
    return Image.new("RGB", (width, height), (value, value, value))


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def camera():
    return FakeCamera()


@pytest.fixture
def video_clip(tmp_path):
    """A three-frame MJPG clip of flat gray."""
    path = tmp_path / "clip.avi"
    writer = cv2.VideoWriter(str(path), cv2.VideoWriter_fourcc(*"MJPG"), 10, (64, 48))
    if not writer.isOpened():
        pytest.skip("No MJPG video writer available")
    for _ in range(3):
        writer.write(np.full((48, 64, 3), 128, dtype=np.uint8))
    writer.release()
    return path
