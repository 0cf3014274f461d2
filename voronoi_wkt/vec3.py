"""Shared 3-component point/vector helpers (pure Python, no binding dependency).

Vertex coordinates of every cell are held as :class:`Point3` values and
rendered to text through :func:`to_text`, so the numeric format of the whole
well-known-text output is decided here.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Optional

__all__ = [
    "Point3",
    "ORIGIN",
    "sub",
    "cross",
    "magnitude",
    "dot",
    "angle_between",
    "to_text",
]


@dataclass(frozen=True, slots=True)
class Point3:
    """Immutable 3D point or direction."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __post_init__(self) -> None:
        # numpy scalars would otherwise render as ``np.float64(...)``.
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __sub__(self, other: "Point3") -> "Point3":
        return sub(self, other)


ORIGIN = Point3()


def sub(a: Point3, b: Point3) -> Point3:
    return Point3(a.x - b.x, a.y - b.y, a.z - b.z)


def cross(a: Point3, b: Point3) -> Point3:
    return Point3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def magnitude(a: Point3) -> float:
    """Euclidean length of *a*."""
    return math.sqrt(a.x * a.x + a.y * a.y + a.z * a.z)


def dot(a: Point3, b: Point3) -> float:
    return a.x * b.x + a.y * b.y + a.z * b.z


def angle_between(a: Point3, b: Point3) -> float:
    """Angle in radians between two vectors, ``nan`` if either has zero length."""
    na, nb = magnitude(a), magnitude(b)
    if na == 0.0 or nb == 0.0:
        return math.nan
    c = dot(a, b) / (na * nb)
    c = max(-1.0, min(1.0, c))
    return math.acos(c)


def to_text(a: Point3, precision: Optional[int] = None) -> str:
    """Render *a* as three space-separated numbers.

    With ``precision=None`` every coordinate uses the shortest decimal string
    that round-trips to the same double. An integer precision gives fixed-point
    output with that many decimals (``6`` matches the legacy rendering).
    """
    if precision is None:
        return f"{a.x!r} {a.y!r} {a.z!r}"
    return f"{a.x:.{precision}f} {a.y:.{precision}f} {a.z:.{precision}f}"
