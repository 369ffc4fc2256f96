"""Affine transforms from KiCad source space to Circuit JSON output space.

KiCad uses millimetres with Y pointing down. Circuit JSON uses Y pointing up,
so every transform built here flips the vertical axis. Component rotation is
not part of the affine map: it is composed separately (see ``placement``)
because local offsets must be rotated before the map is applied.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..schema.common import Point


@dataclass(frozen=True)
class Affine:
    """2D affine matrix ``[[a, c, e], [b, d, f], [0, 0, 1]]``.

    ``x' = a*x + c*y + e`` and ``y' = b*x + d*y + f``.
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> Affine:
        return cls()

    @classmethod
    def scale(cls, sx: float, sy: float | None = None) -> Affine:
        return cls(a=sx, d=sx if sy is None else sy)

    @classmethod
    def translate(cls, tx: float, ty: float) -> Affine:
        return cls(e=tx, f=ty)

    def compose(self, other: Affine) -> Affine:
        """Return ``self ∘ other``: ``other`` is applied first."""
        return Affine(
            a=self.a * other.a + self.c * other.b,
            b=self.b * other.a + self.d * other.b,
            c=self.a * other.c + self.c * other.d,
            d=self.b * other.c + self.d * other.d,
            e=self.a * other.e + self.c * other.f + self.e,
            f=self.b * other.e + self.d * other.f + self.f,
        )

    def apply(self, point: Point) -> Point:
        return Point(
            x=self.a * point.x + self.c * point.y + self.e,
            y=self.b * point.x + self.d * point.y + self.f,
        )

    @property
    def scale_factor(self) -> float:
        """Magnitude of the horizontal scale coefficient (1.0 if degenerate)."""
        magnitude = math.hypot(self.a, self.b)
        return magnitude if magnitude > 0 else 1.0


def kicad_to_output(scale: float = 1.0, origin: Point | None = None) -> Affine:
    """Build the source → output map.

    ``origin`` (source space) lands on (0, 0); the result is scaled and the
    Y axis flipped.
    """
    flip = Affine.scale(scale, -scale)
    if origin is None:
        return flip
    return flip.compose(Affine.translate(-origin.x, -origin.y))


def normalize_angle(degrees: float) -> float:
    """Normalize an angle to [0, 360)."""
    result = degrees % 360.0
    # -1e-20 % 360 rounds to 360.0
    return 0.0 if result >= 360.0 else result


def compose_rotation(rotation: float, parent_rotation: float) -> float:
    """Effective rotation of a child inside a rotated parent, in [0, 360)."""
    return normalize_angle(rotation + parent_rotation)
