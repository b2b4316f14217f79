"""Draw primitives emitted by the renderer, in device pixels (x right, y down)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_RGBA_RE = re.compile(
    r'^rgba?\(\s*([\d.]+)\s*,\s*([\d.]+)\s*,\s*([\d.]+)\s*(?:,\s*([\d.]+)\s*)?\)$'
)


@dataclass(frozen=True)
class Color:
    """RGBA color, channels 0..255 and alpha 0..1."""

    r: int
    g: int
    b: int
    alpha: float = 1.0

    def to_unit_rgba(self) -> tuple[float, float, float, float]:
        """Return (r, g, b, a) with all channels in 0..1 (matplotlib convention)."""
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0, self.alpha)


def parse_color(value: str) -> Color:
    """Parse '#rgb', '#rrggbb', 'rgb(r, g, b)' or 'rgba(r, g, b, a)'.

    Raises:
        ValueError: Unrecognized color string.
    """
    s = value.strip().lower()
    if s.startswith('#'):
        digits = s[1:]
        if len(digits) == 3:
            digits = ''.join(c * 2 for c in digits)
        if len(digits) != 6:
            raise ValueError(f'Invalid hex color: {value!r}')
        try:
            packed = int(digits, 16)
        except ValueError:
            raise ValueError(f'Invalid hex color: {value!r}') from None
        return Color((packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF)
    m = _RGBA_RE.match(s)
    if m is None:
        raise ValueError(f'Invalid color: {value!r}')
    r, g, b = (min(255, int(float(m.group(i)))) for i in (1, 2, 3))
    alpha = float(m.group(4)) if m.group(4) is not None else 1.0
    return Color(r, g, b, min(1.0, alpha))


@dataclass(frozen=True)
class Rect:
    """Filled axis-aligned rectangle."""

    x: float
    y: float
    width: float
    height: float
    color: Color


@dataclass(frozen=True)
class Line:
    """Stroked straight segment."""

    x1: float
    y1: float
    x2: float
    y2: float
    color: Color
    width: float = 1.0


@dataclass(frozen=True)
class Label:
    """Text anchored at its baseline-left point."""

    x: float
    y: float
    text: str
    color: Color
    font: str = '12px sans-serif'


@dataclass(frozen=True)
class GradientStop:
    """One radial gradient stop: offset 0 (center) .. 1 (edge)."""

    offset: float
    color: Color


@dataclass(frozen=True)
class GlowCircle:
    """Circle filled with a radial gradient from the center outward."""

    x: float
    y: float
    radius: float
    stops: tuple[GradientStop, ...]
    star_id: int | None = None


@dataclass(frozen=True)
class Disc:
    """Solid filled circle."""

    x: float
    y: float
    radius: float
    color: Color
    star_id: int | None = None


Primitive = Rect | Line | Label | GlowCircle | Disc


@dataclass
class Frame:
    """One rendered frame: ordered primitives plus the ids of stars drawn."""

    width: float
    height: float
    primitives: list[Primitive] = field(default_factory=list)
    visible_ids: list[int] = field(default_factory=list)

    def of_type(self, kind: type) -> list[Primitive]:
        """Primitives of one class, in draw order."""
        return [p for p in self.primitives if isinstance(p, kind)]
