"""Pan/zoom state and the RA/Dec to screen-pixel projection.

The sky is mapped onto a fixed logical canvas (LOGICAL_WIDTH x LOGICAL_HEIGHT):
RA 0..24 h runs left to right, Dec +90..-90 runs top to bottom. The logical
canvas is then scaled by zoom and centered on (offset_x, offset_y), so the
center of the chart stays at the offset at every zoom level.
"""

from __future__ import annotations

import logging
import math

from star_quiz.catalog import StarRecord
from star_quiz.constants import (
    BUTTON_ZOOM_STEP,
    DEC_MAX_DEGREES,
    DEC_SPAN_DEGREES,
    HOURS_PER_CIRCLE,
    LOGICAL_HEIGHT,
    LOGICAL_WIDTH,
    MAX_ZOOM,
    MIN_ZOOM,
    NAMED_STAR_SCALE,
    STAR_RADIUS_BASE,
    STAR_RADIUS_MIN,
    STAR_RADIUS_SLOPE,
)

logger = logging.getLogger(__name__)


class Viewport:
    """Mutable view state (offset, zoom) and the sky <-> screen transforms."""

    def __init__(
        self,
        offset_x: float = 0.0,
        offset_y: float = 0.0,
        zoom: float = 1.0,
        min_zoom: float = MIN_ZOOM,
        max_zoom: float = MAX_ZOOM,
    ) -> None:
        if not min_zoom <= zoom <= max_zoom:
            raise ValueError(f'zoom {zoom} outside [{min_zoom}, {max_zoom}]')
        self.offset_x = offset_x
        self.offset_y = offset_y
        self.zoom = zoom
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom

    def __repr__(self) -> str:
        return (
            f'Viewport(offset_x={self.offset_x!r}, offset_y={self.offset_y!r}, '
            f'zoom={self.zoom!r})'
        )

    def state(self) -> tuple[float, float, float]:
        """Return (offset_x, offset_y, zoom)."""
        return (self.offset_x, self.offset_y, self.zoom)

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------

    def project_radec(self, ra: float, dec: float) -> tuple[float, float]:
        """Project RA (hours) / Dec (degrees) to screen pixels."""
        lx = (ra / HOURS_PER_CIRCLE) * LOGICAL_WIDTH
        ly = ((DEC_MAX_DEGREES - dec) / DEC_SPAN_DEGREES) * LOGICAL_HEIGHT
        x = lx * self.zoom + self.offset_x - LOGICAL_WIDTH * self.zoom / 2.0
        y = ly * self.zoom + self.offset_y - LOGICAL_HEIGHT * self.zoom / 2.0
        return (x, y)

    def project(self, star: StarRecord) -> tuple[float, float]:
        """Project a star to screen pixels (x right, y down)."""
        return self.project_radec(star.ra, star.dec)

    def unproject(self, x: float, y: float) -> tuple[float, float]:
        """Inverse of project_radec: screen pixels to (RA hours, Dec degrees).

        Points off the chart give RA outside [0, 24) or Dec outside [-90, 90];
        no wrapping or clamping is applied.
        """
        lx = (x - self.offset_x + LOGICAL_WIDTH * self.zoom / 2.0) / self.zoom
        ly = (y - self.offset_y + LOGICAL_HEIGHT * self.zoom / 2.0) / self.zoom
        ra = lx / LOGICAL_WIDTH * HOURS_PER_CIRCLE
        dec = DEC_MAX_DEGREES - ly / LOGICAL_HEIGHT * DEC_SPAN_DEGREES
        return (ra, dec)

    def radius_for(self, mag: float, is_named: bool) -> float:
        """Star glyph radius in pixels.

        Brighter (lower magnitude) stars are larger. Scales with sqrt(zoom) so
        glyphs grow slower than the chart itself.
        """
        base = max(STAR_RADIUS_MIN, STAR_RADIUS_BASE - mag * STAR_RADIUS_SLOPE)
        radius = base * math.sqrt(self.zoom)
        return radius * NAMED_STAR_SCALE if is_named else radius

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def pan(self, dx: float, dy: float) -> None:
        """Set the offset from a drag delta measured against the drag-start anchor.

        Not incremental: callers pass pointer position minus the anchor captured
        at press time, so repeated moves never accumulate error.
        """
        self.offset_x = dx
        self.offset_y = dy

    def zoom_at(self, screen_x: float, screen_y: float, factor: float) -> bool:
        """Zoom by factor keeping the sky point under (screen_x, screen_y) fixed.

        If the new zoom falls outside [min_zoom, max_zoom] nothing changes.

        Returns:
            True if the zoom was applied.
        """
        new_zoom = self.zoom * factor
        if not self.min_zoom <= new_zoom <= self.max_zoom:
            logger.debug('Zoom %.4g rejected (limits %s..%s)', new_zoom, self.min_zoom, self.max_zoom)
            return False
        self.offset_x = screen_x - (screen_x - self.offset_x) * factor
        self.offset_y = screen_y - (screen_y - self.offset_y) * factor
        self.zoom = new_zoom
        return True

    def zoom_by(self, factor: float) -> None:
        """Zoom about the chart center, clamping to the zoom limits (toolbar buttons)."""
        self.zoom = min(max(self.zoom * factor, self.min_zoom), self.max_zoom)

    def zoom_in(self) -> None:
        """One toolbar zoom-in step."""
        self.zoom_by(BUTTON_ZOOM_STEP)

    def zoom_out(self) -> None:
        """One toolbar zoom-out step."""
        self.zoom_by(1.0 / BUTTON_ZOOM_STEP)

    def center_on(self, ra: float, dec: float, screen_x: float, screen_y: float) -> None:
        """Pan so that (ra, dec) projects to (screen_x, screen_y) at the current zoom."""
        x, y = self.project_radec(ra, dec)
        self.offset_x += screen_x - x
        self.offset_y += screen_y - y

    def reset_view(self, canvas_width: float, canvas_height: float) -> None:
        """Zoom 1 and chart centered on the canvas."""
        self.zoom = 1.0
        self.offset_x = canvas_width / 2.0
        self.offset_y = canvas_height / 2.0
