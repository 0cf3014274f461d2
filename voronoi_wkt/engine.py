"""Cell construction through the voro++ library (``pyvoro2`` binding).

The binding is imported lazily so the geometry helpers, configuration and
serialization can be used and tested without the compiled extension.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Sequence

from .cell import HalfEdgeCell
from .container import Container

__all__ = ["Voro2Engine", "cells_from_records"]

log = logging.getLogger(__name__)


class Voro2Engine:
    """Build one :class:`HalfEdgeCell` per input point inside a container."""

    name = "voro++"

    def __init__(self, particle_memory: int = 8) -> None:
        self.particle_memory = particle_memory

    def construct(
        self,
        x: Sequence[float],
        y: Sequence[float],
        z: Sequence[float],
        container: Container,
    ) -> Dict[int, HalfEdgeCell]:
        """Return cells keyed by input index; unresolved points are absent."""

        import numpy as np
        import pyvoro2  # type: ignore

        points = np.column_stack(
            (
                np.asarray(x, dtype=np.float64),
                np.asarray(y, dtype=np.float64),
                np.asarray(z, dtype=np.float64),
            )
        )
        domain = pyvoro2.Box(bounds=container.bounds.as_pairs())
        records = pyvoro2.compute(
            points,
            domain=domain,
            blocks=container.divisions,
            init_mem=self.particle_memory,
            return_vertices=True,
            return_adjacency=True,
            return_faces=False,
            output="cells",
        )
        log.debug("voro++ returned %d cell records for %d points", len(records), len(points))
        return cells_from_records(records, points)


def cells_from_records(
    records: Iterable[Mapping[str, Any]],
    sites: Sequence[Sequence[float]],
) -> Dict[int, HalfEdgeCell]:
    """Map binding records to half-edge cells by particle id."""

    cells: Dict[int, HalfEdgeCell] = {}
    for record in records:
        index = int(record.get("id", -1))
        if not 0 <= index < len(sites):
            log.warning("Ignoring cell record with unknown particle id %s", record.get("id"))
            continue
        vertices = record.get("vertices")
        if record.get("empty") or vertices is None or len(vertices) == 0:
            continue
        adjacency = record.get("adjacency")
        site = record.get("site")
        cells[index] = HalfEdgeCell.from_adjacency(
            vertices,
            adjacency if adjacency is not None else [],
            site=site if site is not None else sites[index],
            index=index,
        )
    return cells
