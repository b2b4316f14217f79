"""Matplotlib rasterizer for renderer Frames (PNG/SVG/PDF by output extension)."""

from __future__ import annotations

import logging
import re
from pathlib import Path

import numpy as np

from star_quiz.rendering.primitives import (
    Disc,
    Frame,
    GlowCircle,
    GradientStop,
    Label,
    Line,
    Rect,
)

logger = logging.getLogger(__name__)

# Radial gradients are approximated by this many concentric filled rings.
GLOW_RINGS = 12
_POINTS_PER_INCH = 72.0
_FONT_RE = re.compile(r'^\s*([\d.]+)px\s+(.+?)\s*$')


def gradient_color_at(stops: tuple[GradientStop, ...], offset: float) -> tuple[float, float, float, float]:
    """Linearly interpolate a gradient's unit RGBA at offset (0 center .. 1 edge)."""
    offsets = np.array([s.offset for s in stops])
    channels = np.array([s.color.to_unit_rgba() for s in stops])
    r, g, b, a = (float(np.interp(offset, offsets, channels[:, i])) for i in range(4))
    return (r, g, b, a)


def _font_props(font: str, dpi: float) -> tuple[float, str]:
    """'12px sans-serif' -> (size in points, family)."""
    m = _FONT_RE.match(font)
    if m is None:
        return (12.0 * _POINTS_PER_INCH / dpi, 'sans-serif')
    return (float(m.group(1)) * _POINTS_PER_INCH / dpi, m.group(2))


def draw_frame_mpl(frame: Frame, output_path: str | Path, dpi: float = 100.0) -> None:
    """Render a Frame to an image file using matplotlib (Agg backend).

    One frame pixel maps to one output pixel at the given dpi.
    """
    try:
        import matplotlib
        matplotlib.use('Agg')
        import matplotlib.pyplot as plt
        from matplotlib.patches import Circle, Rectangle
    except ImportError:
        raise ImportError('matplotlib is required for draw_frame_mpl') from None

    px_to_pt = _POINTS_PER_INCH / dpi
    fig = plt.figure(figsize=(frame.width / dpi, frame.height / dpi), dpi=dpi)
    try:
        ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
        ax.set_xlim(0.0, frame.width)
        ax.set_ylim(frame.height, 0.0)
        ax.set_aspect('equal')
        ax.axis('off')
        for prim in frame.primitives:
            if isinstance(prim, Rect):
                ax.add_patch(
                    Rectangle(
                        (prim.x, prim.y),
                        prim.width,
                        prim.height,
                        facecolor=prim.color.to_unit_rgba(),
                        edgecolor='none',
                    )
                )
            elif isinstance(prim, Line):
                ax.plot(
                    [prim.x1, prim.x2],
                    [prim.y1, prim.y2],
                    color=prim.color.to_unit_rgba(),
                    linewidth=prim.width * px_to_pt,
                )
            elif isinstance(prim, Label):
                size, family = _font_props(prim.font, dpi)
                ax.text(
                    prim.x,
                    prim.y,
                    prim.text,
                    color=prim.color.to_unit_rgba(),
                    fontsize=size,
                    family=family,
                    va='baseline',
                    ha='left',
                )
            elif isinstance(prim, GlowCircle):
                # Outermost ring first so inner (brighter) rings paint over it.
                for t in np.linspace(1.0, 0.0, GLOW_RINGS, endpoint=False):
                    ax.add_patch(
                        Circle(
                            (prim.x, prim.y),
                            prim.radius * float(t),
                            facecolor=gradient_color_at(prim.stops, float(t)),
                            edgecolor='none',
                        )
                    )
            elif isinstance(prim, Disc):
                ax.add_patch(
                    Circle(
                        (prim.x, prim.y),
                        prim.radius,
                        facecolor=prim.color.to_unit_rgba(),
                        edgecolor='none',
                    )
                )
        fig.savefig(str(output_path), dpi=dpi, facecolor='black')
    finally:
        plt.close(fig)
    logger.info('Wrote %d primitives to %s', len(frame.primitives), output_path)
