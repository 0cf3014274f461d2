"""Configuration stack and parameter management for the cell generator.

Parameters are resolved in layers ordered from lowest to highest precedence:

1. Dataclass defaults.
2. JSON file: persistent project configuration.
3. CLI overrides: runtime tweaks for automation/headless workflows.

The interface is pure Python; nothing here touches the voro++ binding.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple
import argparse
import json
import logging

from .container import DENSITY_CONSTANT, GRID_POLICIES, MIN_AXIS_LENGTH
from .faces import FACE_MODES

__all__ = [
    "VoronoiParameters",
    "load_json_config",
    "apply_overrides",
    "build_arg_parser",
    "parse_cli_overrides",
    "load_parameters",
]


@dataclass(slots=True)
class VoronoiParameters:
    """Canonical set of adjustable tessellation parameters."""

    container_ratio: float = 2.0  # container length / bounding box length
    grid_policy: str = "density"
    density_constant: float = DENSITY_CONSTANT
    min_axis_length: float = MIN_AXIS_LENGTH
    particle_memory: int = 8  # voro++ initial particles per block
    face_mode: str = "triangles"
    coordinate_precision: Optional[int] = None  # None = shortest round-trip repr

    def validate(self) -> None:
        if self.container_ratio < 1:
            raise ValueError("Invalid containerRatio: Value must not be less than 1.")
        if self.grid_policy not in GRID_POLICIES:
            raise ValueError(f"grid_policy must be one of {', '.join(GRID_POLICIES)}")
        if self.density_constant <= 0:
            raise ValueError("Density constant must be positive")
        if self.min_axis_length <= 0:
            raise ValueError("Minimum axis length must be positive")
        if self.particle_memory < 1:
            raise ValueError("Particle memory must be at least 1")
        if self.face_mode not in FACE_MODES:
            raise ValueError(f"face_mode must be one of {', '.join(FACE_MODES)}")
        if self.coordinate_precision is not None and self.coordinate_precision < 0:
            raise ValueError("Coordinate precision cannot be negative")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VoronoiParameters":
        base = cls()
        known = asdict(base)
        for key in data:
            if key not in known:
                raise KeyError(f"Unknown parameter '{key}'")
        merged = {**known, **data}
        params = cls(**merged)
        params.validate()
        return params


def load_json_config(path: Path | str | None) -> Dict[str, Any]:
    """Load the JSON config file or return an empty dict if no path is given."""

    if path is None:
        return {}
    json_path = Path(path)
    if not json_path.exists():
        raise FileNotFoundError(f"Config file not found: {json_path}")
    data = json.loads(json_path.read_text(encoding="utf-8"))
    if not isinstance(data, Mapping):
        raise ValueError("Top-level JSON config must be an object")
    return dict(data)


def apply_overrides(base: VoronoiParameters, overrides: Mapping[str, Any]) -> VoronoiParameters:
    """Return a copy of ``base`` with overrides applied."""

    merged = base.to_dict()
    for key, value in overrides.items():
        if key not in merged:
            raise KeyError(f"Unknown parameter '{key}'")
        merged[key] = value
    return VoronoiParameters.from_dict(merged)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute 3D Voronoi cells as POLYHEDRALSURFACE well-known text"
    )
    parser.add_argument("points", nargs="?", default=None, help="CSV file with x, y, z columns")
    parser.add_argument("--config", type=str, help="Path to JSON config", default=None)
    parser.add_argument(
        "--out",
        type=str,
        default="cells.json",
        help="Output file (.json, .csv, or one WKT record per line otherwise)",
    )
    parser.add_argument("--ratio", type=float, help="Container ratio (>= 1)")
    parser.add_argument(
        "--grid-policy",
        type=str,
        choices=list(GRID_POLICIES),
        help="How container grid divisions are chosen",
    )
    parser.add_argument("--density", type=float, help="Target density constant for the grid")
    parser.add_argument("--min-axis-length", type=float, help="Axis length threshold")
    parser.add_argument("--particle-memory", type=int, help="Initial voro++ particles per block")
    parser.add_argument(
        "--face-mode",
        type=str,
        choices=list(FACE_MODES),
        help="Emit fan triangles or one ring per face",
    )
    parser.add_argument(
        "--precision",
        type=int,
        help="Fixed decimals for coordinates (default: shortest round-trip)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def parse_cli_overrides(
    args: Optional[Iterable[str]] = None,
) -> Tuple[Dict[str, Any], Any]:
    """Parse CLI-style overrides using argparse conventions."""

    parser = build_arg_parser()
    parsed, unknown = parser.parse_known_args(args=args)
    if unknown:
        logging.info("Ignoring unknown CLI args: %s", " ".join(unknown))
    overrides: Dict[str, Any] = {}
    if parsed.ratio is not None:
        overrides["container_ratio"] = parsed.ratio
    if parsed.grid_policy is not None:
        overrides["grid_policy"] = parsed.grid_policy
    if parsed.density is not None:
        overrides["density_constant"] = parsed.density
    if parsed.min_axis_length is not None:
        overrides["min_axis_length"] = parsed.min_axis_length
    if parsed.particle_memory is not None:
        overrides["particle_memory"] = parsed.particle_memory
    if parsed.face_mode is not None:
        overrides["face_mode"] = parsed.face_mode
    if parsed.precision is not None:
        overrides["coordinate_precision"] = parsed.precision
    return overrides, parsed


def load_parameters(
    config_path: Path | str | None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> VoronoiParameters:
    """Load parameters using the JSON → CLI precedence chain."""

    data = load_json_config(config_path)
    params = VoronoiParameters.from_dict(data)
    if cli_overrides:
        params = apply_overrides(params, cli_overrides)
    return params
