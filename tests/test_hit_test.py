"""Tests for resolving clicks to stars."""

from __future__ import annotations

from star_quiz.catalog import StarCatalog, StarRecord
from star_quiz.hit_test import find_star_at, hit_tolerance
from star_quiz.viewport import Viewport


def _centered() -> Viewport:
    return Viewport(offset_x=500.0, offset_y=250.0)


def test_hit_tolerance_has_fifteen_pixel_floor() -> None:
    """Tolerance is three radii, but never below 15 px."""
    assert hit_tolerance(1.0) == 15.0
    assert hit_tolerance(6.0) == 18.0


def test_click_on_star_selects_it() -> None:
    """A click near a star's projected center returns that star."""
    star = StarRecord(id=7, name='A', ra=6.0, dec=0.0, mag=1.0)  # (250, 250)
    catalog = StarCatalog([star])
    assert find_star_at(catalog, _centered(), 6.0, 255.0, 250.0) == star


def test_click_far_from_stars_is_no_hit() -> None:
    """Clicking empty sky gives None."""
    catalog = StarCatalog([StarRecord(id=7, name='A', ra=6.0, dec=0.0, mag=1.0)])
    assert find_star_at(catalog, _centered(), 6.0, 300.0, 300.0) is None


def test_tolerance_boundary_is_exclusive() -> None:
    """A faint star (15 px floor) hits at 14 px and misses at exactly 15 px."""
    catalog = StarCatalog([StarRecord(id=1, name='Faint', ra=6.0, dec=0.0, mag=10.0)])
    vp = _centered()
    assert find_star_at(catalog, vp, 10.0, 264.0, 250.0) is not None
    assert find_star_at(catalog, vp, 10.0, 265.0, 250.0) is None


def test_bright_star_has_larger_hit_area() -> None:
    """A very bright star is clickable beyond the 15 px floor."""
    star = StarRecord(id=1, name='Sirius', ra=6.0, dec=0.0, mag=-1.46)
    vp = _centered()
    assert hit_tolerance(vp.radius_for(star.mag, True)) > 15.5
    assert find_star_at(StarCatalog([star]), vp, 6.0, 250.0, 265.5) == star


def test_nearest_star_wins() -> None:
    """When several stars are in range the closest center is chosen."""
    a = StarRecord(id=1, name='A', ra=6.0, dec=0.0, mag=1.0)  # x = 250
    b = StarRecord(id=2, name='B', ra=6.24, dec=0.0, mag=1.0)  # x = 260
    catalog = StarCatalog([a, b])
    assert find_star_at(catalog, _centered(), 6.0, 258.0, 250.0) == b
    assert find_star_at(catalog, _centered(), 6.0, 252.0, 250.0) == a


def test_equal_distance_keeps_first_in_catalog_order() -> None:
    """Exact ties resolve to the star listed first."""
    first = StarRecord(id=10, name='Twin', ra=6.0, dec=0.0, mag=1.0)
    second = StarRecord(id=11, name='Twin', ra=6.0, dec=0.0, mag=1.0)
    assert find_star_at(StarCatalog([first, second]), _centered(), 6.0, 250.0, 250.0) == first
    assert find_star_at(StarCatalog([second, first]), _centered(), 6.0, 250.0, 250.0) == second


def test_filtered_star_is_not_clickable() -> None:
    """Stars hidden by the magnitude filter cannot be hit, even if nearer."""
    hidden = StarRecord(id=1, name='Hidden', ra=6.0, dec=0.0, mag=7.0)
    shown = StarRecord(id=2, name='Shown', ra=6.24, dec=0.0, mag=1.0)
    catalog = StarCatalog([hidden, shown])
    assert find_star_at(catalog, _centered(), 6.0, 251.0, 250.0) == shown


def test_hit_uses_zoomed_projection(bright_four: StarCatalog) -> None:
    """Hit testing follows pan and zoom."""
    vp = Viewport(offset_x=-200.0, offset_y=900.0, zoom=6.0)
    vega = bright_four.get(3)
    x, y = vp.project(vega)
    assert find_star_at(bright_four, vp, 6.0, x + 3.0, y - 3.0) == vega


def test_hit_is_deterministic(bright_four: StarCatalog) -> None:
    """Repeated identical queries return the same answer."""
    vp = _centered()
    results = {find_star_at(bright_four, vp, 6.0, 281.0, 296.0) for _ in range(5)}
    assert len(results) == 1
    assert results.pop().name == 'Sirius'
