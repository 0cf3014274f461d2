"""Pipeline architecture for the Voronoi cell generator.

Breaks the generation flow into composable, testable steps. Each step
receives a shared ``PipelineContext`` and can read/write its fields. Steps
declare their own ``should_run`` predicate so the pipeline runner
automatically skips irrelevant stages.

Usage::

    from voronoi_wkt.pipeline import PipelineContext, VoronoiPipeline

    ctx = PipelineContext(params=my_params, x=xs, y=ys, z=zs)
    VoronoiPipeline().run(ctx)
    ctx.records  # one WKT string (or None) per input point
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .cell import HalfEdgeCell
from .container import Container, bounding_box, size_container
from .engine import Voro2Engine
from .faces import extract_faces
from .parameters import VoronoiParameters
from .wkt import MISSING, polyhedral_surface

__all__ = [
    "PipelineContext",
    "PipelineStep",
    "VoronoiPipeline",
    "InputValidationStep",
    "ContainerSizingStep",
    "CellConstructionStep",
    "SurfaceExtractionStep",
    "ReportStep",
    "ExportStep",
    "default_steps",
    "validate_inputs",
]


# ---------------------------------------------------------------------------
# Pipeline context: shared state between steps
# ---------------------------------------------------------------------------


@dataclass
class PipelineContext:
    """Mutable state bag passed through every pipeline step."""

    params: VoronoiParameters
    x: Sequence[float]
    y: Sequence[float]
    z: Sequence[float]

    # Anything with a ``construct(x, y, z, container)`` method returning
    # ``Dict[int, HalfEdgeCell]``.
    engine: Any = None

    # Written by ExportStep when set.
    out_path: Optional[Path] = None

    # Populated by ContainerSizingStep.
    container: Container | None = None

    # Populated by CellConstructionStep, keyed by input index.
    cells: Dict[int, HalfEdgeCell] = field(default_factory=dict)

    # Populated by SurfaceExtractionStep, one entry per input point.
    records: List[Optional[str]] = field(default_factory=list)
    ring_counts: Dict[int, int] = field(default_factory=dict)

    # Populated by ReportStep.
    report: Dict[str, Any] = field(default_factory=dict)

    @property
    def point_count(self) -> int:
        return len(self.x)


# ---------------------------------------------------------------------------
# Step base class
# ---------------------------------------------------------------------------


class PipelineStep(ABC):
    """A single composable stage of the cell generation pipeline."""

    name: str = "unnamed"

    def should_run(self, ctx: PipelineContext) -> bool:
        """Return ``False`` to skip this step for the current context."""
        return True

    @abstractmethod
    def execute(self, ctx: PipelineContext) -> None:
        """Perform the step's work, mutating *ctx* as needed."""
        ...


# ---------------------------------------------------------------------------
# Concrete steps
# ---------------------------------------------------------------------------


def validate_inputs(
    x: Sequence[float], y: Sequence[float], z: Sequence[float], container_ratio: float
) -> None:
    """Reject inputs that cannot be tessellated, before any work is done."""
    n = len(x)
    if n != len(y) or n != len(z):
        raise ValueError("Lengths of coordinate vectors are not equal.")
    if n < 2:
        raise ValueError("Cannot generate cells if points are less than 2.")
    if not container_ratio >= 1:
        raise ValueError("Invalid containerRatio: Value must not be less than 1.")


class InputValidationStep(PipelineStep):
    """Check coordinate lengths, point count, and container ratio."""

    name = "input_validation"

    def execute(self, ctx: PipelineContext) -> None:
        validate_inputs(ctx.x, ctx.y, ctx.z, ctx.params.container_ratio)
        ctx.params.validate()


class ContainerSizingStep(PipelineStep):
    """Pad the bounding box and choose the engine's grid divisions."""

    name = "container_sizing"

    def execute(self, ctx: PipelineContext) -> None:
        box = bounding_box(ctx.x, ctx.y, ctx.z)
        ctx.container = size_container(
            box,
            ctx.point_count,
            ctx.params.container_ratio,
            policy=ctx.params.grid_policy,
            density=ctx.params.density_constant,
            min_length=ctx.params.min_axis_length,
        )
        logging.info("Container: %s", ctx.container.summary())


class CellConstructionStep(PipelineStep):
    """Ask the engine for one cell per input point."""

    name = "cell_construction"

    def execute(self, ctx: PipelineContext) -> None:
        if ctx.engine is None:
            ctx.engine = Voro2Engine(particle_memory=ctx.params.particle_memory)
        ctx.cells = ctx.engine.construct(ctx.x, ctx.y, ctx.z, ctx.container)
        logging.info("Constructed %d of %d cells", len(ctx.cells), ctx.point_count)


class SurfaceExtractionStep(PipelineStep):
    """Walk each cell's faces and render them as POLYHEDRALSURFACE text."""

    name = "surface_extraction"

    def execute(self, ctx: PipelineContext) -> None:
        records: List[Optional[str]] = [MISSING] * ctx.point_count
        ring_counts: Dict[int, int] = {}
        for index in range(ctx.point_count):
            cell = ctx.cells.get(index)
            if cell is None:
                continue
            faces = extract_faces(cell, mode=ctx.params.face_mode)
            records[index] = polyhedral_surface(faces, ctx.params.coordinate_precision)
            ring_counts[index] = len(faces)
        ctx.records = records
        ctx.ring_counts = ring_counts


class ReportStep(PipelineStep):
    """Summarize construction results and log them."""

    name = "report"

    def execute(self, ctx: PipelineContext) -> None:
        ctx.report = summarize(ctx)
        _log_report(ctx.report)


class ExportStep(PipelineStep):
    """Write records to ``ctx.out_path`` in the format its suffix implies."""

    name = "export"

    def should_run(self, ctx: PipelineContext) -> bool:
        return ctx.out_path is not None

    def execute(self, ctx: PipelineContext) -> None:
        from .export import export_records

        ctx.out_path.parent.mkdir(parents=True, exist_ok=True)
        export_records(ctx.x, ctx.y, ctx.z, ctx.records, ctx.out_path)


# ---------------------------------------------------------------------------
# Pipeline orchestrator
# ---------------------------------------------------------------------------


def default_steps() -> List[PipelineStep]:
    """Return the standard ordered list of pipeline steps."""
    return [
        InputValidationStep(),
        ContainerSizingStep(),
        CellConstructionStep(),
        SurfaceExtractionStep(),
        ReportStep(),
        ExportStep(),
    ]


class VoronoiPipeline:
    """Orchestrates the full cell generation flow.

    Users can supply a custom step list to re-order, insert, or remove stages.
    """

    def __init__(self, steps: List[PipelineStep] | None = None) -> None:
        self.steps = steps if steps is not None else default_steps()

    def run(self, ctx: PipelineContext) -> None:
        """Execute all enabled steps in order."""
        for step in self.steps:
            if step.should_run(ctx):
                logging.debug("[pipeline] %s", step.name)
                step.execute(ctx)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def summarize(ctx: PipelineContext) -> Dict[str, Any]:
    missing = [i for i, record in enumerate(ctx.records) if record is None]
    ring_histogram = Counter(ctx.ring_counts.values())
    return {
        "points": ctx.point_count,
        "cells": ctx.point_count - len(missing),
        "missing": missing,
        "ring_histogram": dict(sorted(ring_histogram.items())),
        "face_mode": ctx.params.face_mode,
    }


def _log_report(report: Dict[str, Any]) -> None:
    logging.info("Cells: %d / %d points", report.get("cells", 0), report.get("points", 0))
    missing = report.get("missing", [])
    if missing:
        logging.warning(
            "%d points have no cell (sample: %s)", len(missing), missing[:5]
        )
    histogram = report.get("ring_histogram", {})
    if histogram:
        logging.info("Rings per cell (%s): %s", report.get("face_mode"), histogram)
