import json
import math

import pytest

from voronoi_wkt import parameters
from voronoi_wkt.parameters import VoronoiParameters


def test_defaults_are_valid():
    params = VoronoiParameters()
    params.validate()
    assert params.container_ratio == 2.0
    assert params.grid_policy == "density"
    assert math.isclose(params.density_constant, 5.6)
    assert params.face_mode == "triangles"
    assert params.coordinate_precision is None


@pytest.mark.parametrize(
    "field, value, message",
    [
        ("container_ratio", 0.5, "containerRatio"),
        ("grid_policy", "octree", "grid_policy"),
        ("density_constant", 0.0, "Density"),
        ("min_axis_length", -1.0, "axis length"),
        ("particle_memory", 0, "Particle memory"),
        ("face_mode", "quads", "face_mode"),
        ("coordinate_precision", -2, "precision"),
    ],
)
def test_invalid_values_rejected(field, value, message):
    with pytest.raises(ValueError, match=message):
        VoronoiParameters.from_dict({field: value})


def test_apply_overrides_rejects_unknown_keys():
    with pytest.raises(KeyError):
        parameters.apply_overrides(VoronoiParameters(), {"radius": 3.0})


def test_cli_overrides():
    overrides, parsed = parameters.parse_cli_overrides(
        [
            "points.csv",
            "--ratio",
            "1.5",
            "--grid-policy",
            "uniform",
            "--face-mode",
            "polygons",
            "--precision",
            "6",
            "--out",
            "cells.csv",
        ]
    )
    assert overrides == {
        "container_ratio": 1.5,
        "grid_policy": "uniform",
        "face_mode": "polygons",
        "coordinate_precision": 6,
    }
    assert parsed.points == "points.csv"
    assert parsed.out == "cells.csv"
    assert parsed.verbose is False


def test_cli_without_flags_has_no_overrides():
    overrides, parsed = parameters.parse_cli_overrides([])
    assert overrides == {}
    assert parsed.points is None


def test_load_parameters_layers_json_then_cli(tmp_path):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"container_ratio": 3.0, "grid_policy": "uniform"}), encoding="utf-8")
    params = parameters.load_parameters(config, {"container_ratio": 1.25})
    assert params.container_ratio == 1.25
    assert params.grid_policy == "uniform"


def test_load_json_config_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        parameters.load_json_config(tmp_path / "missing.json")
    bad = tmp_path / "list.json"
    bad.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError, match="object"):
        parameters.load_json_config(bad)
    assert parameters.load_json_config(None) == {}


def test_json_config_rejects_unknown_keys(tmp_path):
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"ratio_typo": 3.0}), encoding="utf-8")
    with pytest.raises(KeyError, match="ratio_typo"):
        parameters.load_parameters(cfg, {})
