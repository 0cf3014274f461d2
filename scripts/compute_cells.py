#!/usr/bin/env python3
"""Headless entry point: read a point CSV, write one cell record per point."""

from __future__ import annotations

import logging
from pathlib import Path
import sys
from typing import List, Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from voronoi_wkt import parameters
from voronoi_wkt.export import read_points_csv
from voronoi_wkt.pipeline import PipelineContext, VoronoiPipeline


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def main(argv: Sequence[str] | None = None) -> int:
    overrides, cli = parameters.parse_cli_overrides(_sanitized_args(argv))
    configure_logging(cli.verbose)
    if cli.points is None:
        logging.error("No point file given")
        return 2

    params = parameters.load_parameters(cli.config, overrides)
    logging.info(
        "Parameters: ratio=%.3f grid=%s faces=%s",
        params.container_ratio,
        params.grid_policy,
        params.face_mode,
    )

    x, y, z = read_points_csv(cli.points)
    ctx = PipelineContext(params=params, x=x, y=y, z=z, out_path=Path(cli.out))
    VoronoiPipeline().run(ctx)
    return 0


def _sanitized_args(argv: Sequence[str] | None) -> List[str]:
    raw = list(sys.argv[1:] if argv is None else argv)
    return [arg for arg in raw if arg != "--"]


if __name__ == "__main__":
    sys.exit(main())
