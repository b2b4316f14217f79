"""Frame rendering: draw-list construction and output adapters."""

from star_quiz.rendering.primitives import (
    Color,
    Disc,
    Frame,
    GlowCircle,
    GradientStop,
    Label,
    Line,
    Rect,
    parse_color,
)
from star_quiz.rendering.renderer import render_frame, visible_stars

__all__: list[str] = [
    'Color',
    'Disc',
    'Frame',
    'GlowCircle',
    'GradientStop',
    'Label',
    'Line',
    'Rect',
    'parse_color',
    'render_frame',
    'visible_stars',
]
