"""Tests for the session controller's control surface."""

from __future__ import annotations

import random

import pytest

from star_quiz.catalog import StarCatalog
from star_quiz.controller import StarQuizController
from star_quiz.quiz import OptionMark, QuizPhase, Score
from star_quiz.rendering import Line


def _controller(catalog: StarCatalog) -> StarQuizController:
    return StarQuizController(catalog, width=1000.0, height=500.0, rng=random.Random(7))


def test_init_centers_view(bright_four: StarCatalog) -> None:
    """The chart starts centered on the canvas at zoom 1."""
    ctl = StarQuizController(bright_four, width=800.0, height=600.0)
    assert ctl.viewport.state() == (400.0, 300.0, 1.0)
    assert ctl.max_magnitude == 6.0
    assert not ctl.show_grid


def test_resize_recenters_and_validates(bright_four: StarCatalog) -> None:
    """resize() re-centers; non-positive sizes are rejected."""
    ctl = _controller(bright_four)
    ctl.resize(640.0, 480.0)
    assert (ctl.viewport.offset_x, ctl.viewport.offset_y) == (320.0, 240.0)
    with pytest.raises(ValueError):
        ctl.resize(0.0, 480.0)


def test_drag_pans_from_anchor(bright_four: StarCatalog) -> None:
    """Offset follows the pointer relative to the press point."""
    ctl = _controller(bright_four)
    ctl.on_pointer_down(100.0, 100.0)
    assert ctl.on_pointer_move(150.0, 120.0)
    assert (ctl.viewport.offset_x, ctl.viewport.offset_y) == (550.0, 270.0)
    ctl.on_pointer_move(160.0, 130.0)
    assert (ctl.viewport.offset_x, ctl.viewport.offset_y) == (560.0, 280.0)
    ctl.on_pointer_up(160.0, 130.0)
    assert not ctl.on_pointer_move(300.0, 300.0)
    assert (ctl.viewport.offset_x, ctl.viewport.offset_y) == (560.0, 280.0)


def test_click_after_drag_is_ignored(bright_four: StarCatalog) -> None:
    """The click that ends a drag does not open a question."""
    ctl = _controller(bright_four)
    x, y = ctl.viewport.project(bright_four.get(1))
    ctl.on_pointer_down(x, y)
    ctl.on_pointer_move(x, y)
    ctl.on_pointer_leave()
    assert ctl.on_click(x, y) is None
    ctl.on_pointer_down(x, y)
    ctl.on_pointer_up(x, y)
    assert ctl.on_click(x, y) is not None


def test_wheel_zooms_about_pointer(bright_four: StarCatalog) -> None:
    """Positive delta zooms out by 0.9, negative zooms in by 1.1, about the pointer."""
    ctl = _controller(bright_four)
    ra, dec = ctl.viewport.unproject(200.0, 100.0)
    assert ctl.on_wheel(200.0, 100.0, -1)
    assert ctl.viewport.zoom == pytest.approx(1.1)
    assert ctl.viewport.project_radec(ra, dec) == pytest.approx((200.0, 100.0))
    assert ctl.on_wheel(200.0, 100.0, 1)
    assert ctl.viewport.zoom == pytest.approx(0.99)


def test_wheel_at_limit_is_rejected(bright_four: StarCatalog) -> None:
    """Zooming out past 0.5 leaves the view untouched."""
    ctl = _controller(bright_four)
    ctl.viewport.zoom = 0.5
    before = ctl.viewport.state()
    assert ctl.on_wheel(10.0, 10.0, 1) is False
    assert ctl.viewport.state() == before


def test_toolbar_buttons(bright_four: StarCatalog) -> None:
    """zoom_in/zoom_out step by 1.5 and reset_view restores the start."""
    ctl = _controller(bright_four)
    ctl.zoom_in()
    assert ctl.viewport.zoom == pytest.approx(1.5)
    ctl.zoom_out()
    assert ctl.viewport.zoom == pytest.approx(1.0)
    ctl.viewport.pan(3.0, 4.0)
    ctl.zoom_in()
    ctl.reset_view()
    assert ctl.viewport.state() == (500.0, 250.0, 1.0)


def test_sirius_end_to_end(bright_four: StarCatalog) -> None:
    """Click Sirius, answer Canopus: wrong, score 0/1, Sirius highlighted."""
    ctl = _controller(bright_four)
    ctl.set_magnitude_filter(6)
    x, y = ctl.viewport.project(bright_four.get(1))
    options = ctl.on_click(x, y)
    assert options is not None
    assert ctl.quiz.state.current_target.name == 'Sirius'
    assert sorted(o.name for o in options) == ['Canopus', 'Polaris', 'Sirius', 'Vega']
    result = ctl.select_quiz_option(bright_four.get(2))
    assert result is not None
    assert result.is_correct is False
    assert ctl.score == Score(correct=0, total=1)
    marks = {o.name: o.mark for o in ctl.quiz.options}
    assert marks['Canopus'] is OptionMark.INCORRECT
    assert marks['Sirius'] is OptionMark.CORRECT


def test_starfield_suppressed_while_quiz_active(bright_four: StarCatalog) -> None:
    """While a question is open clicks and drags on the chart are ignored."""
    ctl = _controller(bright_four)
    sx, sy = ctl.viewport.project(bright_four.get(1))
    ctl.on_click(sx, sy)
    assert ctl.quiz_active
    vx, vy = ctl.viewport.project(bright_four.get(3))
    assert ctl.on_click(vx, vy) is None
    assert ctl.quiz.state.current_target.id == 1
    ctl.on_pointer_down(0.0, 0.0)
    assert not ctl.is_dragging


def test_timer_closes_question_and_reenables_clicks(bright_four: StarCatalog) -> None:
    """tick() drives the auto close; afterwards clicks work again."""
    ctl = _controller(bright_four)
    sx, sy = ctl.viewport.project(bright_four.get(1))
    ctl.on_click(sx, sy)
    ctl.select_quiz_option(1)
    assert ctl.quiz.state.phase is QuizPhase.ANSWERED
    assert ctl.tick(2000.0) == 1
    assert not ctl.quiz_active
    vx, vy = ctl.viewport.project(bright_four.get(3))
    assert ctl.on_click(vx, vy) is not None


def test_skip_then_timer_changes_state_once(bright_four: StarCatalog) -> None:
    """Continue followed by the timer is a single transition."""
    ctl = _controller(bright_four)
    sx, sy = ctl.viewport.project(bright_four.get(1))
    ctl.on_click(sx, sy)
    ctl.select_quiz_option(1)
    assert ctl.skip_quiz() is True
    assert ctl.tick(2000.0) == 0
    assert ctl.skip_quiz() is False
    assert ctl.score == Score(correct=1, total=1)


def test_magnitude_filter_hides_stars_from_render_and_clicks(bright_four: StarCatalog) -> None:
    """Lowering the limit removes faint stars from the frame and the hit test."""
    ctl = _controller(bright_four)
    ctl.set_magnitude_filter(1.0)
    assert ctl.render().visible_ids == [1, 2, 3]
    px, py = ctl.viewport.project(bright_four.get(4))
    assert ctl.on_click(px, py) is None


def test_grid_toggle_and_restart(bright_four: StarCatalog) -> None:
    """Grid visibility flows into render(); restart_score() zeroes the score."""
    ctl = _controller(bright_four)
    ctl.set_grid_visible(True)
    assert len(ctl.render().of_type(Line)) == 20
    ctl.set_grid_visible(False)
    assert ctl.render().of_type(Line) == []
    sx, sy = ctl.viewport.project(bright_four.get(1))
    ctl.on_click(sx, sy)
    ctl.select_quiz_option(1)
    ctl.restart_score()
    assert ctl.score == Score()


def test_empty_catalog_is_usable() -> None:
    """No stars: renders, and clicks are silent misses."""
    ctl = _controller(StarCatalog())
    assert ctl.render().visible_ids == []
    assert ctl.on_click(500.0, 250.0) is None
