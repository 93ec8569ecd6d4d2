from __future__ import annotations

from enum import IntEnum

from termplot.raster.canvas import CharacterBuffer


class RenderPriority(IntEnum):
    AXES = 2
    LINES = 3
    POINTS = 4
    LABELS = 5


_ORDER = tuple(sorted(RenderPriority))
_SLOT = {priority: i for i, priority in enumerate(_ORDER)}


class LayeredCanvas:
    """Per-priority character buffers composited lowest priority first."""

    def __init__(self, width: int, height: int) -> None:
        self.width = max(0, int(width))
        self.height = max(0, int(height))
        self._layers: list[CharacterBuffer | None] = [None] * len(_ORDER)

    def layer(self, priority: RenderPriority | int) -> CharacterBuffer:
        slot = _SLOT[RenderPriority(priority)]
        buffer = self._layers[slot]
        if buffer is None:
            buffer = CharacterBuffer(self.width, self.height)
            self._layers[slot] = buffer
        return buffer

    def has_layer(self, priority: RenderPriority | int) -> bool:
        return self._layers[_SLOT[RenderPriority(priority)]] is not None

    def flatten(self) -> CharacterBuffer:
        merged = CharacterBuffer(self.width, self.height)
        for buffer in self._layers:
            if buffer is not None:
                merged.blit(buffer)
        return merged
