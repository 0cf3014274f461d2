"""Half-edge view of one constructed Voronoi cell.

The engine reports each cell as a vertex list plus, per vertex, the indices
of its neighbouring vertices in cyclic order around that vertex. The face
walk additionally needs the cycle-position table: for the edge leaving ``v``
through slot ``s`` towards ``w``, the slot on ``w`` whose edge points back at
``v``. :meth:`HalfEdgeCell.from_adjacency` derives it once per cell.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .vec3 import ORIGIN, Point3

__all__ = ["HalfEdgeCell"]


@dataclass(slots=True)
class HalfEdgeCell:
    index: int
    site: Point3
    vertices: List[Point3]
    edges: List[Tuple[int, ...]]
    back: List[Tuple[int, ...]] = field(default_factory=list)

    @classmethod
    def from_adjacency(
        cls,
        vertices: Sequence[Sequence[float]],
        adjacency: Sequence[Sequence[int]],
        *,
        site: Optional[Sequence[float]] = None,
        index: int = -1,
    ) -> "HalfEdgeCell":
        if len(vertices) != len(adjacency):
            raise ValueError(
                f"Cell {index}: {len(vertices)} vertices but {len(adjacency)} adjacency rows"
            )
        points = [Point3(*coords) for coords in vertices]
        edges = [tuple(int(w) for w in row) for row in adjacency]
        back: List[Tuple[int, ...]] = []
        for v, row in enumerate(edges):
            slots = []
            for w in row:
                if not 0 <= w < len(edges):
                    raise ValueError(f"Cell {index}: vertex {v} references missing vertex {w}")
                try:
                    slots.append(edges[w].index(v))
                except ValueError:
                    raise ValueError(
                        f"Cell {index}: edge {v}->{w} has no reciprocal edge {w}->{v}"
                    ) from None
            back.append(tuple(slots))
        centre = Point3(*site) if site is not None else ORIGIN
        return cls(index=index, site=centre, vertices=points, edges=edges, back=back)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def half_edge_count(self) -> int:
        return sum(len(row) for row in self.edges)

    def degree(self, v: int) -> int:
        return len(self.edges[v])

    def neighbor(self, v: int, slot: int) -> int:
        return self.edges[v][slot]

    def reciprocal_slot(self, v: int, slot: int) -> int:
        return self.back[v][slot]

    def cyclic_successor(self, v: int, slot: int) -> int:
        """Slot on ``neighbor(v, slot)`` that follows the edge back to ``v``."""
        w = self.edges[v][slot]
        return (self.back[v][slot] + 1) % len(self.edges[w])
