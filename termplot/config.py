from __future__ import annotations

from dataclasses import dataclass, field, replace
import math

from termplot.color import is_valid_color


DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 20
DEFAULT_POINT_CHAR = "●"
DEFAULT_LINE_CHAR = "·"
DEFAULT_BRAILLE_MIN_WIDTH = 100


@dataclass(frozen=True)
class RenderQuality:
    """Switches that trade output density for legibility."""

    braille_min_width: int = DEFAULT_BRAILLE_MIN_WIDTH
    subcell_lines: bool = True

    def __post_init__(self) -> None:
        if self.braille_min_width < 0:
            raise ValueError("braille_min_width must be >= 0")

    def use_subcell(self, width: int) -> bool:
        return self.subcell_lines and width > self.braille_min_width


@dataclass(frozen=True)
class RenderConfig:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    title: str | None = None
    xlabel: str | None = None
    ylabel: str | None = None
    xlim: tuple[float, float] | None = None
    ylim: tuple[float, float] | None = None
    color: str | None = None
    symbol: str | None = None
    use_color: bool = False
    show_labels: bool = True
    quality: RenderQuality = field(default_factory=RenderQuality)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width/height must be > 0")
        _validate_limits("xlim", self.xlim)
        _validate_limits("ylim", self.ylim)
        if self.color is not None and not is_valid_color(self.color):
            raise ValueError(f"unknown color: {self.color!r}")
        if self.symbol is not None and len(self.symbol) != 1:
            raise ValueError("symbol must be a single character")

    def with_overrides(self, **changes) -> "RenderConfig":
        return replace(self, **changes)


@dataclass(frozen=True)
class LineStyle:
    point_char: str = DEFAULT_POINT_CHAR
    line_char: str = DEFAULT_LINE_CHAR
    show_points: bool = True
    show_lines: bool = True
    # Pick ─ │ ╱ ╲ per segment direction instead of a single glyph.
    directional: bool = False

    @classmethod
    def points_only(cls) -> "LineStyle":
        return cls(show_lines=False)

    @classmethod
    def lines_only(cls) -> "LineStyle":
        return cls(show_points=False)

    @classmethod
    def ascii(cls) -> "LineStyle":
        return cls(point_char="o", line_char=".")

    @classmethod
    def unicode_smooth(cls) -> "LineStyle":
        return cls(point_char="◆", line_char="─", directional=True)

    @classmethod
    def dashed(cls) -> "LineStyle":
        return cls(point_char="◆", line_char="╌")


# Marker cycle for multi-series charts without an explicit symbol.
SERIES_SYMBOLS = ("●", "◆", "▲", "■", "✚", "○")


def _validate_limits(name: str, limits: tuple[float, float] | None) -> None:
    if limits is None:
        return
    if len(limits) != 2:
        raise ValueError(f"{name} must be a (min, max) pair")
    lo, hi = float(limits[0]), float(limits[1])
    if not (math.isfinite(lo) and math.isfinite(hi)):
        raise ValueError(f"{name} must be finite")
    if lo >= hi:
        raise ValueError(f"{name} must satisfy min < max, got {limits!r}")
