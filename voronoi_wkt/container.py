"""Container sizing for the cell-construction engine.

The engine partitions its domain into a regular grid of blocks. This module
picks the padded domain and the block counts so that:

* no axis collapses to zero thickness when the input is collinear or
  coplanar (axis lengths are clamped to :data:`MIN_AXIS_LENGTH`), and
* each block holds a roughly constant number of points.

Two grid policies are available:

``"density"``
    ``floor(L * cbrt(n / (C * Lx * Ly * Lz))) + 1`` blocks per axis, using the
    clamped but un-padded lengths and ``C = DENSITY_CONSTANT``.
``"uniform"``
    ``ceil(cbrt(n))`` blocks on every axis.

Both only affect performance, never the resulting cells.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

__all__ = [
    "MIN_AXIS_LENGTH",
    "DENSITY_CONSTANT",
    "GRID_POLICIES",
    "BoundingBox",
    "Container",
    "bounding_box",
    "clamp_length",
    "size_container",
]

log = logging.getLogger(__name__)

MIN_AXIS_LENGTH = 2.0
DENSITY_CONSTANT = 5.6
GRID_POLICIES = ("density", "uniform")

Divisions = Tuple[int, int, int]


@dataclass(frozen=True, slots=True)
class BoundingBox:
    x_min: float
    x_max: float
    y_min: float
    y_max: float
    z_min: float
    z_max: float

    @property
    def lengths(self) -> Tuple[float, float, float]:
        return (
            self.x_max - self.x_min,
            self.y_max - self.y_min,
            self.z_max - self.z_min,
        )

    def as_pairs(self) -> Tuple[Tuple[float, float], Tuple[float, float], Tuple[float, float]]:
        return (
            (self.x_min, self.x_max),
            (self.y_min, self.y_max),
            (self.z_min, self.z_max),
        )


@dataclass(frozen=True, slots=True)
class Container:
    """Padded domain plus grid divisions handed to the engine."""

    bounds: BoundingBox
    axis_lengths: Tuple[float, float, float]  # clamped, before padding
    divisions: Divisions
    policy: str = "density"

    def summary(self) -> str:
        (x0, x1), (y0, y1), (z0, z1) = self.bounds.as_pairs()
        nx, ny, nz = self.divisions
        return (
            f"x=[{x0:.6g}, {x1:.6g}] y=[{y0:.6g}, {y1:.6g}] z=[{z0:.6g}, {z1:.6g}] "
            f"grid={nx}x{ny}x{nz} ({self.policy})"
        )


def bounding_box(x: Sequence[float], y: Sequence[float], z: Sequence[float]) -> BoundingBox:
    if not len(x) or not len(y) or not len(z):
        raise ValueError("Cannot compute a bounding box of an empty point set")
    return BoundingBox(
        x_min=float(min(x)),
        x_max=float(max(x)),
        y_min=float(min(y)),
        y_max=float(max(y)),
        z_min=float(min(z)),
        z_max=float(max(z)),
    )


def clamp_length(length: float, threshold: float = MIN_AXIS_LENGTH) -> float:
    """Return *length*, or *threshold* when the axis is shorter than that."""
    if length < threshold:
        return threshold
    return length


def size_container(
    box: BoundingBox,
    n: int,
    ratio: float,
    *,
    policy: str = "density",
    density: float = DENSITY_CONSTANT,
    min_length: float = MIN_AXIS_LENGTH,
) -> Container:
    """Pad *box* by *ratio* and choose grid divisions for *n* points."""

    if n < 2:
        raise ValueError("Cannot generate cells if points are less than 2.")
    if ratio < 1:
        raise ValueError("Invalid containerRatio: Value must not be less than 1.")
    if policy not in GRID_POLICIES:
        raise ValueError(f"Unknown grid policy '{policy}'")

    lx, ly, lz = (clamp_length(length, min_length) for length in box.lengths)

    mx = lx * (ratio - 1) / 2
    my = ly * (ratio - 1) / 2
    mz = lz * (ratio - 1) / 2
    padded = BoundingBox(
        x_min=box.x_min - mx,
        x_max=box.x_max + mx,
        y_min=box.y_min - my,
        y_max=box.y_max + my,
        z_min=box.z_min - mz,
        z_max=box.z_max + mz,
    )

    if policy == "density":
        divisions = _density_divisions((lx, ly, lz), n, density)
    else:
        k = _ceil_cbrt(n)
        divisions = (k, k, k)

    container = Container(
        bounds=padded,
        axis_lengths=(lx, ly, lz),
        divisions=divisions,
        policy=policy,
    )
    log.debug("Sized container for %d points: %s", n, container.summary())
    return container


def _density_divisions(lengths: Tuple[float, float, float], n: int, density: float) -> Divisions:
    lx, ly, lz = lengths
    per_length = (n / (density * lx * ly * lz)) ** (1.0 / 3.0)
    nx = max(1, int(lx * per_length + 1))
    ny = max(1, int(ly * per_length + 1))
    nz = max(1, int(lz * per_length + 1))
    return (nx, ny, nz)


def _ceil_cbrt(n: int) -> int:
    # Float cube roots overshoot for perfect cubes (27 ** (1/3) > 3).
    k = max(1, int(round(n ** (1.0 / 3.0))))
    while k ** 3 < n:
        k += 1
    while k > 1 and (k - 1) ** 3 >= n:
        k -= 1
    return k
