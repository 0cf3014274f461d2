"""Public entry point: one POLYHEDRALSURFACE record per input point."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, List, Optional, Sequence

from .parameters import VoronoiParameters
from .pipeline import PipelineContext, VoronoiPipeline, validate_inputs

__all__ = ["compute_voronoi"]


def compute_voronoi(
    x: Sequence[float],
    y: Sequence[float],
    z: Sequence[float],
    container_ratio: float,
    params: VoronoiParameters | None = None,
    engine: Any = None,
) -> List[Optional[str]]:
    """Compute the Voronoi cell boundary of every point.

    Returns a list with one entry per input point, in input order: the cell as
    ``POLYHEDRALSURFACE(...)`` text, or ``None`` when the engine could not
    construct that point's cell.

    Raises ``ValueError`` when the coordinate sequences differ in length, when
    fewer than two points are given, or when ``container_ratio < 1``.
    """

    validate_inputs(x, y, z, container_ratio)
    base = params if params is not None else VoronoiParameters()
    ctx = PipelineContext(
        params=replace(base, container_ratio=float(container_ratio)),
        x=x,
        y=y,
        z=z,
        engine=engine,
    )
    VoronoiPipeline().run(ctx)
    return ctx.records
