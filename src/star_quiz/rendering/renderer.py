"""Build the per-frame draw list: background, optional RA/Dec grid, star glow and disc."""

from __future__ import annotations

import logging

from star_quiz.catalog import StarCatalog, StarRecord
from star_quiz.constants import (
    BACKGROUND_COLOR,
    CULL_MARGIN,
    DEC_MAX_DEGREES,
    GLOW_RADIUS_SCALE,
    GLOW_STOPS,
    GRID_DEC_STEP_DEGREES,
    GRID_FONT,
    GRID_LABEL_COLOR,
    GRID_LABEL_OFFSET,
    GRID_LINE_COLOR,
    GRID_LINE_WIDTH,
    GRID_RA_LABEL_Y,
    GRID_RA_STEP_HOURS,
    HOURS_PER_CIRCLE,
    STAR_COLOR,
)
from star_quiz.rendering.primitives import (
    Disc,
    Frame,
    GlowCircle,
    GradientStop,
    Label,
    Line,
    Primitive,
    Rect,
    parse_color,
)
from star_quiz.viewport import Viewport

logger = logging.getLogger(__name__)

_BACKGROUND = parse_color(BACKGROUND_COLOR)
_GRID_LINE = parse_color(GRID_LINE_COLOR)
_GRID_LABEL = parse_color(GRID_LABEL_COLOR)
_STAR = parse_color(STAR_COLOR)
_GLOW = tuple(GradientStop(offset, parse_color(color)) for offset, color in GLOW_STOPS)


def in_canvas(x: float, y: float, width: float, height: float, margin: float = CULL_MARGIN) -> bool:
    """True if (x, y) lies within the canvas grown by margin on every side."""
    return -margin <= x <= width + margin and -margin <= y <= height + margin


def grid_primitives(viewport: Viewport, width: float, height: float) -> list[Primitive]:
    """RA lines every 2 h and Dec lines every 30 deg, each with a text label.

    Lines span the full canvas; the projected position is the only thing that
    depends on the viewport.
    """
    out: list[Primitive] = []
    for ra in range(0, int(HOURS_PER_CIRCLE) + 1, GRID_RA_STEP_HOURS):
        x, _ = viewport.project_radec(float(ra), 0.0)
        out.append(Line(x, 0.0, x, height, _GRID_LINE, GRID_LINE_WIDTH))
        out.append(Label(x + GRID_LABEL_OFFSET, GRID_RA_LABEL_Y, f'{ra}h', _GRID_LABEL, GRID_FONT))
    dec_max = int(DEC_MAX_DEGREES)
    for dec in range(-dec_max, dec_max + 1, GRID_DEC_STEP_DEGREES):
        _, y = viewport.project_radec(0.0, float(dec))
        out.append(Line(0.0, y, width, y, _GRID_LINE, GRID_LINE_WIDTH))
        out.append(
            Label(GRID_LABEL_OFFSET, y - GRID_LABEL_OFFSET, f'{dec}°', _GRID_LABEL, GRID_FONT)
        )
    return out


def star_primitives(star: StarRecord, viewport: Viewport) -> tuple[GlowCircle, Disc]:
    """Glow (twice the glyph radius) and solid disc for one star."""
    x, y = viewport.project(star)
    radius = viewport.radius_for(star.mag, star.is_named)
    glow = GlowCircle(x, y, radius * GLOW_RADIUS_SCALE, _GLOW, star_id=star.id)
    disc = Disc(x, y, radius, _STAR, star_id=star.id)
    return glow, disc


def visible_stars(
    catalog: StarCatalog,
    viewport: Viewport,
    max_magnitude: float,
    width: float,
    height: float,
) -> list[StarRecord]:
    """Stars passing the magnitude filter whose center is within the cull margin."""
    out: list[StarRecord] = []
    for star in catalog.visible(max_magnitude):
        x, y = viewport.project(star)
        if in_canvas(x, y, width, height):
            out.append(star)
    return out


def render_frame(
    catalog: StarCatalog,
    viewport: Viewport,
    max_magnitude: float,
    width: float,
    height: float,
    show_grid: bool = False,
) -> Frame:
    """Produce the ordered draw list for one frame.

    Order: background, grid (if enabled), then for each visible star in
    catalog order its glow followed by its disc.

    Parameters:
        catalog: Stars to draw.
        viewport: Current pan/zoom.
        max_magnitude: Faintest magnitude drawn (inclusive).
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        show_grid: Draw the RA/Dec grid overlay.

    Returns:
        Frame with primitives and the ids of the drawn stars.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f'Canvas size must be positive, got {width}x{height}')
    frame = Frame(width=width, height=height)
    frame.primitives.append(Rect(0.0, 0.0, width, height, _BACKGROUND))
    if show_grid:
        frame.primitives.extend(grid_primitives(viewport, width, height))
    for star in visible_stars(catalog, viewport, max_magnitude, width, height):
        frame.primitives.extend(star_primitives(star, viewport))
        frame.visible_ids.append(star.id)
    logger.debug(
        'Rendered %d of %d stars (mag <= %s, zoom %.3g)',
        len(frame.visible_ids),
        len(catalog),
        max_magnitude,
        viewport.zoom,
    )
    return frame
