from .canvas import CharacterBuffer
from .draw_lines import BrailleGrid, bresenham_line, draw_polyline, draw_subcell_polyline, smooth_line
from .draw_markers import draw_markers
from .draw_text import center_text, draw_text, text_width
from .layers import LayeredCanvas, RenderPriority

__all__ = [
    "BrailleGrid",
    "CharacterBuffer",
    "LayeredCanvas",
    "RenderPriority",
    "bresenham_line",
    "center_text",
    "draw_markers",
    "draw_polyline",
    "draw_subcell_polyline",
    "draw_text",
    "smooth_line",
    "text_width",
]
