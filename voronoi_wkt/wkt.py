"""Well-known-text rendering of cell boundaries.

A successful cell becomes::

    POLYHEDRALSURFACE(((x1 y1 z1, x2 y2 z2, x3 y3 z3, x1 y1 z1)), ...)

and a cell that could not be constructed becomes :data:`MISSING`.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence

from .vec3 import Point3, to_text

__all__ = [
    "MISSING",
    "PREFIX",
    "format_ring",
    "polyhedral_surface",
    "parse_polyhedral_surface",
]

MISSING = None
PREFIX = "POLYHEDRALSURFACE("

_RING_PATTERN = re.compile(r"\(\(([^()]*)\)\)")


def format_ring(face: Sequence[Point3], precision: Optional[int] = None) -> str:
    return "((" + ", ".join(to_text(p, precision) for p in face) + "))"


def polyhedral_surface(faces: Iterable[Sequence[Point3]], precision: Optional[int] = None) -> str:
    return PREFIX + ", ".join(format_ring(face, precision) for face in faces) + ")"


def parse_polyhedral_surface(text: str) -> List[List[Point3]]:
    """Read the rings of a record written by :func:`polyhedral_surface`."""

    body = text.strip()
    if not body.startswith(PREFIX) or not body.endswith(")"):
        raise ValueError("Not a POLYHEDRALSURFACE record")
    body = body[len(PREFIX):-1]

    rings: List[List[Point3]] = []
    end = 0
    for match in _RING_PATTERN.finditer(body):
        gap = body[end:match.start()].strip()
        if gap not in ("", ","):
            raise ValueError(f"Unexpected text between rings: {gap!r}")
        ring: List[Point3] = []
        for token in match.group(1).split(","):
            coords = token.split()
            if len(coords) != 3:
                raise ValueError(f"Expected 3 coordinates, got {token.strip()!r}")
            ring.append(Point3(*(float(c) for c in coords)))
        rings.append(ring)
        end = match.end()
    if body[end:].strip():
        raise ValueError(f"Trailing text after last ring: {body[end:].strip()!r}")
    return rings
