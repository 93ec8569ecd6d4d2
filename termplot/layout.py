from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging

from termplot.raster.draw_text import text_width
from termplot.scales import DataBounds, Margins, PlotArea
from termplot.ticks import Tick, TickGenerator


LOGGER = logging.getLogger(__name__)

DEFAULT_LABEL_PADDING = 1
UNLABELLED_MARGINS = Margins(left=2, right=2, top=1, bottom=1)

PositionedTick = tuple[int, Tick]


@dataclass(frozen=True)
class Layout:
    margins: Margins
    plot_area: PlotArea
    x_ticks: tuple[PositionedTick, ...]
    y_ticks: tuple[PositionedTick, ...]


class LayoutEngine:
    def __init__(
        self,
        width: int,
        height: int,
        *,
        show_labels: bool = True,
        label_padding: int = DEFAULT_LABEL_PADDING,
    ) -> None:
        if label_padding < 0:
            raise ValueError("label_padding must be >= 0")
        self.width = max(0, int(width))
        self.height = max(0, int(height))
        self.show_labels = show_labels
        self.label_padding = label_padding

    def calculate_layout(
        self,
        bounds: DataBounds,
        x_ticks: Sequence[Tick] | None = None,
        y_ticks: Sequence[Tick] | None = None,
    ) -> Layout:
        if x_ticks is None:
            x_ticks = TickGenerator.for_x_axis(self.width).generate_ticks(bounds.min_x, bounds.max_x).ticks
        if y_ticks is None:
            y_ticks = TickGenerator.for_y_axis(self.height).generate_ticks(bounds.min_y, bounds.max_y).ticks

        margins = self.calculate_margins(x_ticks, y_ticks)
        area = PlotArea(
            left=margins.left,
            top=margins.top,
            width=max(0, self.width - margins.left - margins.right),
            height=max(0, self.height - margins.top - margins.bottom),
        )
        LOGGER.debug("layout %dx%d margins=%s plot_area=%s", self.width, self.height, margins, area)
        if area.is_degenerate():
            return Layout(margins=margins, plot_area=area, x_ticks=(), y_ticks=())
        return Layout(
            margins=margins,
            plot_area=area,
            x_ticks=self.position_x_ticks(x_ticks, bounds, area),
            y_ticks=self.position_y_ticks(y_ticks, bounds, area),
        )

    def calculate_margins(self, x_ticks: Sequence[Tick], y_ticks: Sequence[Tick]) -> Margins:
        if not self.show_labels:
            return UNLABELLED_MARGINS
        max_y = max((text_width(t.label) for t in y_ticks), default=0)
        max_x = max((text_width(t.label) for t in x_ticks), default=0)
        return Margins(
            left=max_y + self.label_padding + 1,
            right=max(1, max_x // 2),
            top=1,
            bottom=2 + self.label_padding,
        )

    def position_x_ticks(self, ticks: Sequence[Tick], bounds: DataBounds, area: PlotArea) -> tuple[PositionedTick, ...]:
        out: list[PositionedTick] = []
        for tick in ticks:
            norm = _normalized(tick, bounds.min_x, bounds.x_range)
            if norm is None:
                continue
            out.append((area.left + int(round(norm * area.width)), tick))
        return tuple(out)

    def position_y_ticks(self, ticks: Sequence[Tick], bounds: DataBounds, area: PlotArea) -> tuple[PositionedTick, ...]:
        out: list[PositionedTick] = []
        for tick in ticks:
            norm = _normalized(tick, bounds.min_y, bounds.y_range)
            if norm is None:
                continue
            out.append((area.top + int(round((1.0 - norm) * area.height)), tick))
        return tuple(out)


def _normalized(tick: Tick, lo: float, span: float) -> float | None:
    if span <= 0:
        return None
    value = tick.position if tick.position is not None else tick.value
    norm = (value - lo) / span
    if not 0.0 <= norm <= 1.0:
        return None
    return norm
