from __future__ import annotations

from collections.abc import Sequence

from termplot.color import colorize
from termplot.raster.canvas import CharacterBuffer
from termplot.raster.draw_text import center_text, text_width


LegendEntry = tuple[str, str, str | None]


def compile_text(
    canvas: CharacterBuffer,
    *,
    width: int,
    title: str | None = None,
    xlabel: str | None = None,
    ylabel: str | None = None,
    legend: Sequence[LegendEntry] = (),
    use_color: bool = False,
) -> str:
    """Assemble the final plot text around a flattened canvas.

    Order: centered title and a blank line, the Y-axis label, every canvas
    row, the centered X-axis label, then the legend. Each line ends with a
    newline and carries no trailing whitespace.
    """
    lines: list[str] = []
    if title:
        pad = max(0, (width - text_width(title)) // 2)
        lines.append(" " * pad + (colorize(title, None, bold=True) if use_color else title))
        lines.append("")
    if ylabel:
        lines.append(ylabel)
    lines.extend(canvas.rows(colorize if use_color else None))
    if xlabel:
        lines.append(center_text(xlabel, width))
    if legend:
        lines.append("")
        for symbol, name, color in legend:
            marker = colorize(symbol, color) if use_color and color is not None else symbol
            lines.append(f"  {marker} {name}")
    return "".join(f"{line.rstrip()}\n" for line in lines)
