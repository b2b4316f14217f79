"""Session controller: owns viewport, quiz, and timers; exposes the UI control surface.

A presentation layer translates its real events into these calls and redraws
from render() / the quiz state afterwards.
"""

from __future__ import annotations

import logging
import random

from star_quiz.catalog import StarCatalog, StarRecord
from star_quiz.constants import (
    DEFAULT_MAX_MAGNITUDE,
    LOGICAL_HEIGHT,
    LOGICAL_WIDTH,
    WHEEL_ZOOM_IN,
    WHEEL_ZOOM_OUT,
)
from star_quiz.hit_test import find_star_at
from star_quiz.quiz import AnswerResult, QuizEngine, QuizOption, Score
from star_quiz.rendering.primitives import Frame
from star_quiz.rendering.renderer import render_frame
from star_quiz.scheduler import Scheduler
from star_quiz.viewport import Viewport

logger = logging.getLogger(__name__)


class StarQuizController:
    """Explicit owner of all mutable session state.

    Parameters:
        catalog: Loaded stars (may be empty).
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        max_magnitude: Initial magnitude filter.
        rng: Random source for the quiz.
    """

    def __init__(
        self,
        catalog: StarCatalog,
        width: float = LOGICAL_WIDTH,
        height: float = LOGICAL_HEIGHT,
        max_magnitude: float = DEFAULT_MAX_MAGNITUDE,
        rng: random.Random | None = None,
    ) -> None:
        self.catalog = catalog
        self.scheduler = Scheduler()
        self.viewport = Viewport()
        self.quiz = QuizEngine(catalog, rng=rng, scheduler=self.scheduler)
        self.max_magnitude = max_magnitude
        self.show_grid = False
        self.width = 0.0
        self.height = 0.0
        self.is_dragging = False
        self.did_drag = False
        self._anchor = (0.0, 0.0)
        self.resize(width, height)

    # ------------------------------------------------------------------
    # Canvas and view
    # ------------------------------------------------------------------

    def resize(self, width: float, height: float) -> None:
        """New canvas size; re-centers the chart (zoom unchanged)."""
        if width <= 0 or height <= 0:
            raise ValueError(f'Canvas size must be positive, got {width}x{height}')
        self.width = width
        self.height = height
        self.viewport.offset_x = width / 2.0
        self.viewport.offset_y = height / 2.0

    def render(self) -> Frame:
        """Draw list for the current state."""
        return render_frame(
            self.catalog,
            self.viewport,
            self.max_magnitude,
            self.width,
            self.height,
            show_grid=self.show_grid,
        )

    def set_magnitude_filter(self, value: float) -> None:
        self.max_magnitude = float(value)

    def set_grid_visible(self, visible: bool) -> None:
        self.show_grid = bool(visible)

    def zoom_in(self) -> None:
        self.viewport.zoom_in()

    def zoom_out(self) -> None:
        self.viewport.zoom_out()

    def reset_view(self) -> None:
        self.viewport.reset_view(self.width, self.height)

    # ------------------------------------------------------------------
    # Pointer
    # ------------------------------------------------------------------

    def on_pointer_down(self, x: float, y: float) -> None:
        """Start a drag, anchoring the pointer against the current offset."""
        if self.quiz.active:
            return
        self.is_dragging = True
        self.did_drag = False
        self._anchor = (x - self.viewport.offset_x, y - self.viewport.offset_y)

    def on_pointer_move(self, x: float, y: float) -> bool:
        """Pan while dragging.

        Returns:
            True if the view changed.
        """
        if not self.is_dragging:
            return False
        self.did_drag = True
        self.viewport.pan(x - self._anchor[0], y - self._anchor[1])
        return True

    def on_pointer_up(self, x: float | None = None, y: float | None = None) -> None:
        """End a drag. did_drag stays set so the trailing click is ignored."""
        del x, y
        self.is_dragging = False

    def on_pointer_leave(self) -> None:
        self.on_pointer_up()

    def on_wheel(self, x: float, y: float, delta_sign: float) -> bool:
        """Zoom about the pointer: positive delta zooms out, otherwise in.

        Returns:
            True if the zoom was applied (False when it would leave the limits).
        """
        factor = WHEEL_ZOOM_OUT if delta_sign > 0 else WHEEL_ZOOM_IN
        return self.viewport.zoom_at(x, y, factor)

    def on_click(self, x: float, y: float) -> tuple[QuizOption, ...] | None:
        """Open a question for the star under the pointer.

        Ignored right after a drag or while a question is open.

        Returns:
            Options of the new question, or None (no hit or suppressed).
        """
        if self.did_drag or self.quiz.active:
            return None
        star = find_star_at(self.catalog, self.viewport, self.max_magnitude, x, y)
        if star is None:
            return None
        return self.quiz.open_question(star, self.max_magnitude)

    # ------------------------------------------------------------------
    # Quiz
    # ------------------------------------------------------------------

    def select_quiz_option(self, star: StarRecord | int) -> AnswerResult | None:
        return self.quiz.answer(star)

    def skip_quiz(self) -> bool:
        return self.quiz.skip()

    def restart_score(self) -> None:
        self.quiz.restart_score()

    @property
    def score(self) -> Score:
        return self.quiz.score

    @property
    def quiz_active(self) -> bool:
        return self.quiz.active

    def tick(self, elapsed_ms: float) -> int:
        """Advance timers (the post-answer auto close).

        Returns:
            Number of timer callbacks run.
        """
        return self.scheduler.tick(elapsed_ms)
