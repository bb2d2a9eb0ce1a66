from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, Protocol

from asciicam.camera import Camera, CaptureError, EndOfStream
from asciicam.params import ParameterStore, RenderParameters
from asciicam.pipeline import Pipeline

logger = logging.getLogger(__name__)


class LoopState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    STOPPED = "stopped"


class Handle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def schedule(self, callback: Callable[[], None]) -> Handle:
        """Run ``callback`` once on the next refresh tick."""
        ...


class AsyncioScheduler:
    """Refresh ticks at a fixed rate on the running asyncio event loop."""

    def __init__(self, fps: float = 30.0):
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.interval = 1.0 / fps

    def schedule(self, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return asyncio.get_running_loop().call_later(self.interval, callback)


class RenderLoop:
    """Renders the camera's frames once per refresh tick while capture is active.

    Idle -> Active on :meth:`start`, Active -> Stopped -> Idle on :meth:`stop`
    or when a finite stream runs out. An exception raised by a render is kept
    in :attr:`error` before it propagates out of the tick.
    Each tick reads the store's current parameters, so parameter changes land
    on the next tick without restarting anything.

    A parameter change re-schedules a tick only when capture is active and no
    tick is pending (for instance after a render raised out of a tick). While
    idle, parameter changes never produce a frame.
    """

    def __init__(self, camera: Camera, pipeline: Pipeline, store: ParameterStore, scheduler: Scheduler):
        self.camera = camera
        self.pipeline = pipeline
        self.store = store
        self.scheduler = scheduler
        self.state = LoopState.IDLE
        self.frames_rendered = 0
        self.ticks_skipped = 0
        self.error: BaseException | None = None
        self._handle: Handle | None = None
        self._unsubscribe = store.subscribe(self._on_params_changed)

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        if self.state is LoopState.ACTIVE:
            logger.debug("Capture already active")
            return
        try:
            self.camera.open()
        except CaptureError:
            logger.error("Could not start capture", exc_info=True)
            raise
        self.error = None
        self._set_state(LoopState.ACTIVE)
        self._kick()

    def stop(self) -> None:
        if self.state is not LoopState.ACTIVE:
            return
        self._set_state(LoopState.STOPPED)
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self.camera.release()
        self._set_state(LoopState.IDLE)

    def close(self) -> None:
        self.stop()
        self._unsubscribe()

    def tick(self) -> None:
        self._handle = None
        if self.state is not LoopState.ACTIVE:
            return
        try:
            source = self.camera.read()
        except EndOfStream:
            logger.info("Video stream ended")
            self.stop()
            return
        if source is None:
            self.ticks_skipped += 1
            logger.debug("Frame not ready, skipping tick")
        else:
            try:
                self.pipeline.render(source, self.store.params)
            except Exception as exc:
                # event loop callbacks only log their exceptions
                self.error = exc
                raise
            self.frames_rendered += 1
        # a sink may have stopped capture during the render
        if self.state is LoopState.ACTIVE:
            self._kick()

    def _kick(self) -> None:
        if self._handle is None:
            self._handle = self.scheduler.schedule(self.tick)

    def _on_params_changed(self, params: RenderParameters) -> None:
        if self.state is LoopState.ACTIVE and self._handle is None:
            logger.debug("Parameters changed with no tick pending, restarting ticks")
            self._kick()

    def _set_state(self, state: LoopState) -> None:
        logger.info("Render loop %s -> %s", self.state.value, state.value)
        self.state = state
