from __future__ import annotations

import numbers
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable

from asciicam.palettes import DEFAULT_PALETTE, get_palette
from asciicam.quantize import QuantizeMode

MIN_COLUMNS = 50
MAX_COLUMNS = 200
DEFAULT_COLUMNS = 100


class RenderMode(str, Enum):
    ASCII = "ascii"
    PIXEL = "pixel"
    BOTH = "both"


@dataclass(frozen=True)
class RenderParameters:
    columns: int = DEFAULT_COLUMNS
    invert: bool = False
    palette: str = DEFAULT_PALETTE
    mode: RenderMode = RenderMode.ASCII
    quantize: QuantizeMode = QuantizeMode.NEAREST

    def __post_init__(self):
        if isinstance(self.columns, bool) or not isinstance(self.columns, numbers.Integral):
            raise ValueError(f"columns must be an integer, got {self.columns!r}")
        if not MIN_COLUMNS <= self.columns <= MAX_COLUMNS:
            raise ValueError(f"columns must be between {MIN_COLUMNS} and {MAX_COLUMNS}, got {self.columns}")
        get_palette(self.palette)
        object.__setattr__(self, "mode", RenderMode(self.mode))
        object.__setattr__(self, "quantize", QuantizeMode(self.quantize))


Listener = Callable[[RenderParameters], None]


class ParameterStore:
    """Holds the current render parameters and tells subscribers when they change."""

    def __init__(self, params: RenderParameters | None = None):
        self._params = params or RenderParameters()
        self._listeners: list[Listener] = []

    @property
    def params(self) -> RenderParameters:
        return self._params

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def update(self, **changes) -> RenderParameters:
        """Apply ``changes``; listeners are only called if something actually changed."""
        new = replace(self._params, **changes)
        if new != self._params:
            self._params = new
            for listener in list(self._listeners):
                listener(new)
        return new
