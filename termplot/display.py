from __future__ import annotations

import shutil


DEFAULT_FALLBACK_SIZE = (80, 24)
DEFAULT_MIN_WIDTH = 40
DEFAULT_MIN_HEIGHT = 12
# Rows reserved outside the canvas for title, axis label and prompt.
DEFAULT_RESERVED_ROWS = 6


def resolve_default_canvas_size(
    *,
    min_width: int = DEFAULT_MIN_WIDTH,
    min_height: int = DEFAULT_MIN_HEIGHT,
    reserved_rows: int = DEFAULT_RESERVED_ROWS,
) -> tuple[int, int]:
    if min_width <= 0 or min_height <= 0:
        raise ValueError("min_width/min_height must be > 0")
    if reserved_rows < 0:
        raise ValueError("reserved_rows must be >= 0")

    terminal = _detect_terminal_size()
    if terminal is None:
        cols, rows = DEFAULT_FALLBACK_SIZE
    else:
        cols, rows = terminal
    return (max(min_width, cols), max(min_height, rows - reserved_rows))


def _detect_terminal_size() -> tuple[int, int] | None:
    size = shutil.get_terminal_size(fallback=(0, 0))
    if size.columns > 0 and size.lines > 0:
        return (int(size.columns), int(size.lines))
    return None
