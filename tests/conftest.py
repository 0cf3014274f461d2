from __future__ import annotations

import importlib.util
import sys
from pathlib import Path
from typing import Dict, List, Sequence

import pytest

# Ensure repo root is importable when running pytest from any CWD.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from voronoi_wkt.cell import HalfEdgeCell  # noqa: E402

PYVORO2_AVAILABLE = importlib.util.find_spec("pyvoro2") is not None

# Neighbour lists are in the same cyclic sense at every vertex, matching the
# convention of the voro++ half-edge table (this cube is its initial cell).
CUBE_VERTICES = [
    (-1.0, -1.0, -1.0),
    (1.0, -1.0, -1.0),
    (-1.0, 1.0, -1.0),
    (1.0, 1.0, -1.0),
    (-1.0, -1.0, 1.0),
    (1.0, -1.0, 1.0),
    (-1.0, 1.0, 1.0),
    (1.0, 1.0, 1.0),
]
CUBE_ADJACENCY = [
    [1, 4, 2],
    [3, 5, 0],
    [0, 6, 3],
    [2, 7, 1],
    [6, 0, 5],
    [4, 1, 7],
    [7, 2, 4],
    [5, 3, 6],
]

TETRA_VERTICES = [
    (0.0, 0.0, 0.0),
    (1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, 0.0, 1.0),
]
TETRA_ADJACENCY = [
    [1, 3, 2],
    [0, 2, 3],
    [0, 3, 1],
    [0, 1, 2],
]

PRISM_VERTICES = [
    (0.0, 0.0, 0.0),
    (1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, 0.0, 1.0),
    (1.0, 0.0, 1.0),
    (0.0, 1.0, 1.0),
]
PRISM_ADJACENCY = [
    [1, 3, 2],
    [0, 2, 4],
    [0, 5, 1],
    [0, 4, 5],
    [1, 5, 3],
    [2, 3, 4],
]


def make_cell(
    vertices: Sequence[Sequence[float]],
    adjacency: Sequence[Sequence[int]],
    index: int = 0,
    offset: Sequence[float] = (0.0, 0.0, 0.0),
) -> HalfEdgeCell:
    ox, oy, oz = offset
    moved = [(x + ox, y + oy, z + oz) for x, y, z in vertices]
    return HalfEdgeCell.from_adjacency(moved, adjacency, site=offset, index=index)


@pytest.fixture
def cube_cell() -> HalfEdgeCell:
    return make_cell(CUBE_VERTICES, CUBE_ADJACENCY)


@pytest.fixture
def tetra_cell() -> HalfEdgeCell:
    return make_cell(TETRA_VERTICES, TETRA_ADJACENCY)


@pytest.fixture
def prism_cell() -> HalfEdgeCell:
    return make_cell(PRISM_VERTICES, PRISM_ADJACENCY)


class FakeEngine:
    """Hands back prepared cells and remembers what it was asked for."""

    def __init__(self, cells: Dict[int, HalfEdgeCell]) -> None:
        self.cells = cells
        self.calls: List[tuple] = []

    def construct(self, x, y, z, container):
        self.calls.append((list(x), list(y), list(z), container))
        return dict(self.cells)


@pytest.fixture
def fake_engine():
    return FakeEngine
