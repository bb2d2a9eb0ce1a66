from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import cv2

from asciicam.sources import LiveSource

logger = logging.getLogger(__name__)


class CaptureError(RuntimeError):
    """The camera or stream could not be opened."""


class EndOfStream(Exception):
    """A finite source such as a video file has no more frames."""


class Camera(Protocol):
    def open(self) -> None:
        """Acquire the stream. Raises CaptureError on failure."""
        ...

    def read(self) -> LiveSource | None:
        """Return the current frame, or None if no decodable frame is ready.

        Raises EndOfStream once a finite source is exhausted.
        """
        ...

    def release(self) -> None: ...


class OpenCVCamera:
    """Camera backed by ``cv2.VideoCapture``.

    ``device`` is a camera index, a video file path or a stream URL.
    """

    def __init__(self, device: int | str = 0, width: int = 640, height: int = 480):
        self.device = device
        self.width = width
        self.height = height
        self.cap = None

    @property
    def is_open(self) -> bool:
        return self.cap is not None

    def open(self) -> None:
        cap = cv2.VideoCapture(self.device)
        if not cap.isOpened():
            cap.release()
            raise CaptureError(f"Cannot open video stream: {self.device}")
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        self.cap = cap
        logger.info("Opened video stream %s", self.device)

    def read(self) -> LiveSource | None:
        if self.cap is None:
            return None
        ok, frame = self.cap.read()
        if not ok or frame is None or frame.size == 0:
            if self._at_end():
                raise EndOfStream(f"End of video stream: {self.device}")
            return None
        return LiveSource(frame)

    def _at_end(self) -> bool:
        # camera indices never run out
        if isinstance(self.device, int):
            return False
        count = self.cap.get(cv2.CAP_PROP_FRAME_COUNT)
        if count > 0:
            return self.cap.get(cv2.CAP_PROP_POS_FRAMES) >= count
        return Path(self.device).is_file()

    def release(self) -> None:
        if self.cap is not None:
            self.cap.release()
            self.cap = None
            logger.info("Released video stream %s", self.device)
