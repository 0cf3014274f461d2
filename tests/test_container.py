import math

import pytest

from voronoi_wkt.container import (
    BoundingBox,
    bounding_box,
    clamp_length,
    size_container,
)


def test_bounding_box_from_coordinates():
    box = bounding_box([0.0, 4.0, 1.0], [-1.0, 2.0, 0.0], [3.0, 3.0, 5.0])
    assert box == BoundingBox(0.0, 4.0, -1.0, 2.0, 3.0, 5.0)
    assert box.lengths == (4.0, 3.0, 2.0)


def test_clamp_length_threshold():
    assert clamp_length(0.0) == 2.0
    assert clamp_length(1.999) == 2.0
    assert clamp_length(2.5) == 2.5


def test_coplanar_points_get_minimum_thickness():
    box = bounding_box([0.0, 10.0, 5.0], [0.0, 10.0, 2.0], [7.0, 7.0, 7.0])
    container = size_container(box, 3, 2.0)
    assert container.axis_lengths == (10.0, 10.0, 2.0)
    assert all(length >= 2.0 for length in container.axis_lengths)
    bounds = container.bounds
    assert math.isclose(bounds.z_min, 6.0)
    assert math.isclose(bounds.z_max, 8.0)
    assert math.isclose(bounds.x_min, -5.0)
    assert math.isclose(bounds.x_max, 15.0)


def test_collinear_points_never_collapse():
    box = bounding_box([1.0, 1.0], [2.0, 2.0], [0.0, 50.0])
    container = size_container(box, 2, 1.0)
    lx, ly, lz = container.axis_lengths
    assert (lx, ly, lz) == (2.0, 2.0, 50.0)
    # Ratio 1 adds no padding, even to clamped axes.
    assert container.bounds == box


def test_density_divisions_for_uniform_cloud():
    box = BoundingBox(0.0, 10.0, 0.0, 10.0, 0.0, 10.0)
    container = size_container(box, 100, 1.5)
    # cbrt(100 / (5.6 * 1000)) * 10 = 2.61..., floored then + 1.
    assert container.divisions == (3, 3, 3)


def test_density_divisions_follow_axis_lengths():
    box = BoundingBox(0.0, 40.0, 0.0, 10.0, 0.0, 2.0)
    container = size_container(box, 1000, 1.0)
    nx, ny, nz = container.divisions
    assert nx > ny > nz >= 1


def test_small_cloud_gets_single_block():
    box = bounding_box([0.0, 1.0], [0.0, 1.0], [0.0, 1.0])
    container = size_container(box, 2, 2.0)
    assert container.divisions == (1, 1, 1)


@pytest.mark.parametrize("n, expected", [(2, 2), (8, 2), (9, 3), (27, 3), (28, 4), (1000, 10)])
def test_uniform_policy_uses_ceil_cbrt(n, expected):
    box = BoundingBox(0.0, 1.0, 0.0, 1.0, 0.0, 1.0)
    container = size_container(box, n, 1.0, policy="uniform")
    assert container.divisions == (expected, expected, expected)
    assert container.policy == "uniform"


def test_invalid_ratio_rejected():
    box = BoundingBox(0.0, 1.0, 0.0, 1.0, 0.0, 1.0)
    with pytest.raises(ValueError, match="containerRatio"):
        size_container(box, 10, 0.5)


def test_too_few_points_rejected():
    box = BoundingBox(0.0, 1.0, 0.0, 1.0, 0.0, 1.0)
    with pytest.raises(ValueError, match="less than 2"):
        size_container(box, 1, 2.0)


def test_unknown_policy_rejected():
    box = BoundingBox(0.0, 1.0, 0.0, 1.0, 0.0, 1.0)
    with pytest.raises(ValueError, match="grid policy"):
        size_container(box, 10, 2.0, policy="octree")


def test_summary_mentions_grid():
    box = BoundingBox(0.0, 10.0, 0.0, 10.0, 0.0, 10.0)
    assert "grid=3x3x3" in size_container(box, 100, 1.5).summary()
