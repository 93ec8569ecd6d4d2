"""ANSI color helpers for rendered plots.

Colors are opt-in per call: nothing here consults the environment or the
attached stream. Chart assemblers pass ``use_color`` through explicitly.
"""
from __future__ import annotations

import re

RESET = "\x1b[0m"
BOLD = "\x1b[1m"
FG_BLACK = "\x1b[30m"
FG_RED = "\x1b[31m"
FG_GREEN = "\x1b[32m"
FG_YELLOW = "\x1b[33m"
FG_BLUE = "\x1b[34m"
FG_MAGENTA = "\x1b[35m"
FG_CYAN = "\x1b[36m"
FG_WHITE = "\x1b[37m"
FG_GRAY = "\x1b[90m"

NAMED_COLORS: dict[str, str] = {
    "black": FG_BLACK,
    "red": FG_RED,
    "green": FG_GREEN,
    "yellow": FG_YELLOW,
    "blue": FG_BLUE,
    "magenta": FG_MAGENTA,
    "cyan": FG_CYAN,
    "white": FG_WHITE,
    "gray": FG_GRAY,
    "grey": FG_GRAY,
}

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


def is_valid_color(color: str) -> bool:
    return color.lower() in NAMED_COLORS or _HEX_RE.match(color) is not None


def escape_for(color: str) -> str:
    """Return the SGR prefix for a color name or ``#RRGGBB`` string."""
    named = NAMED_COLORS.get(color.lower())
    if named is not None:
        return named
    match = _HEX_RE.match(color)
    if match is None:
        raise ValueError(f"unknown color: {color!r}")
    raw = match.group(1)
    r, g, b = (int(raw[i : i + 2], 16) for i in (0, 2, 4))
    return f"\x1b[38;2;{r};{g};{b}m"


def colorize(text: str, color: str | None, bold: bool = False) -> str:
    if not text or (color is None and not bold):
        return text
    prefix = BOLD if bold else ""
    if color is not None:
        prefix += escape_for(color)
    return f"{prefix}{text}{RESET}"


__all__ = ["BOLD", "NAMED_COLORS", "RESET", "colorize", "escape_for", "is_valid_color"]
