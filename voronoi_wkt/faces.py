"""Face extraction from a cell's half-edge table.

Every directed edge ``v -> w`` of a convex cell bounds exactly one planar
face. Starting from an unvisited edge, the face is recovered by repeatedly
stepping to the slot that cyclically follows the reciprocal edge on the far
vertex until the walk returns to the start vertex. Edges are marked as they
are traversed, so every face is walked once and every directed edge belongs
to exactly one walk.

The visited marks live in a table owned by a single extraction call; the
cell itself is never modified.

Faces are emitted either as fan triangles anchored on the vertex the walk
started from (the established output format) or as one ring per face.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from .cell import HalfEdgeCell
from .vec3 import Point3

__all__ = [
    "FACE_MODES",
    "Face",
    "walk_faces",
    "fan_triangles",
    "extract_faces",
]

log = logging.getLogger(__name__)

FACE_MODES = ("triangles", "polygons")

# Closed ring of vertex coordinates, first point repeated at the end.
Face = Tuple[Point3, ...]
Triangle = Tuple[int, int, int]


def walk_faces(cell: HalfEdgeCell) -> List[List[int]]:
    """Return every face of *cell* as a loop of vertex indices.

    Faces are discovered in vertex order, then slot order; vertex 0 is never a
    start vertex since each of its faces is reached from another vertex.
    """

    visited = [bytearray(cell.degree(v)) for v in range(cell.vertex_count)]
    loops: List[List[int]] = []

    for v in range(1, cell.vertex_count):
        for s in range(cell.degree(v)):
            if visited[v][s]:
                continue
            visited[v][s] = 1
            w = cell.neighbor(v, s)
            t = cell.cyclic_successor(v, s)
            x = cell.neighbor(w, t)
            _mark(visited, cell, w, t)
            loop = [v, w]
            while x != v:
                t = cell.cyclic_successor(w, t)
                w = x
                x = cell.neighbor(w, t)
                _mark(visited, cell, w, t)
                loop.append(w)
            loops.append(loop)

    return loops


def _mark(visited: List[bytearray], cell: HalfEdgeCell, v: int, slot: int) -> None:
    if visited[v][slot]:
        raise RuntimeError(
            f"Cell {cell.index}: half-edge {v}->{cell.neighbor(v, slot)} traversed twice; "
            "the half-edge table is inconsistent"
        )
    visited[v][slot] = 1


def fan_triangles(loop: Sequence[int]) -> List[Triangle]:
    """Triangulate a face loop as a fan around its first vertex."""
    anchor = loop[0]
    return [(anchor, loop[i], loop[i + 1]) for i in range(1, len(loop) - 1)]


def extract_faces(cell: HalfEdgeCell, mode: str = "triangles") -> List[Face]:
    """Return the closed rings bounding *cell*.

    ``mode="triangles"`` yields one 4-point ring per fan triangle,
    ``mode="polygons"`` one ring per planar face.
    """

    if mode not in FACE_MODES:
        raise ValueError(f"Unknown face mode '{mode}'")

    points = cell.vertices
    faces: List[Face] = []
    for loop in walk_faces(cell):
        if len(loop) < 3:
            log.warning("Cell %d: skipping degenerate face %s", cell.index, loop)
            continue
        if mode == "triangles":
            for a, b, c in fan_triangles(loop):
                faces.append((points[a], points[b], points[c], points[a]))
        else:
            ring = [points[i] for i in loop]
            ring.append(points[loop[0]])
            faces.append(tuple(ring))

    log.debug("Cell %d: %d rings (%s)", cell.index, len(faces), mode)
    return faces
