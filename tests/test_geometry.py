# tests/test_geometry.py
"""
Real intervals and complex regions.

Run: pytest -v tests/test_geometry.py
"""

from __future__ import annotations

import pytest

from cuspgen.geometry import ComplexRegion, RealInterval


def test_interval_orders_its_endpoints():
    iv = RealInterval(2.0, -1.0)
    assert (iv.lower, iv.upper) == (-1.0, 2.0)


@pytest.mark.parametrize(
    "value,closest,distance",
    [
        (0.5, 0.5, 0.0),
        (-3.0, -1.0, 2.0),
        (2.5, 2.0, 0.5),
    ],
)
def test_interval_closest_and_distance(value, closest, distance):
    iv = RealInterval(-1.0, 2.0)
    assert iv.closest(value) == closest
    assert iv.distance(value) == pytest.approx(distance)


def test_interval_contains_is_tolerant():
    iv = RealInterval(0.0, 1.0)
    assert iv.contains(0.0)
    assert iv.contains(1.0 + 1e-12)
    assert iv.contains(-1e-12)
    assert not iv.contains(1.0 + 1e-6)
    assert not iv.contains(-0.5)


def test_interval_extend_and_scale():
    iv = RealInterval(0.0, 1.0).extend(0.5)
    assert (iv.lower, iv.upper) == (-0.5, 1.5)
    half = iv / 0.5
    assert (half.lower, half.upper) == (-1.0, 3.0)
    flipped = iv / -1.0
    assert (flipped.lower, flipped.upper) == (-1.5, 0.5)


def test_region_corners_order():
    reg = ComplexRegion.from_bounds(0.0, 1.0, -2.0, 3.0)
    assert reg.corners() == (complex(0, -2), complex(1, -2), complex(0, 3), complex(1, 3))


def test_region_contains_and_distance():
    reg = ComplexRegion.from_bounds(-0.5, 0.5, 0.0, 1.0)
    assert reg.contains(0.5 + 1j)
    assert reg.contains(complex(0.5 + 1e-12, -1e-12))
    assert not reg.contains(0.6 + 0.5j)
    assert not reg.contains(0.0 - 0.1j)

    assert reg.closest(1.5 + 2j) == 0.5 + 1j
    assert reg.distance(1.5 + 2j) == pytest.approx(2 ** 0.5)
    assert reg.distance(0.25 + 0.5j) == 0.0


def test_region_extend_grows_both_axes():
    reg = ComplexRegion.from_bounds(0.0, 1.0, 0.0, 1.0).extend(0.25)
    assert reg.contains(-0.25 - 0.25j)
    assert reg.contains(1.25 + 1.25j)
    assert not reg.contains(1.3 + 0.5j)


def test_transform_contain_bounds_the_rotated_region():
    reg = ComplexRegion.from_bounds(0.0, 1.0, 0.0, 2.0)
    image = reg.transform_contain(1j)
    assert (image.real.lower, image.real.upper) == (-2.0, 0.0)
    assert (image.imag.lower, image.imag.upper) == (0.0, 1.0)
    for c in reg.corners():
        assert image.contains(c * 1j)


def test_bounding_box_of_points():
    reg = ComplexRegion.bounding([1 + 1j, -2 + 0.5j, 0 - 3j])
    assert reg.corners()[0] == complex(-2, -3)
    assert reg.corners()[3] == complex(1, 1)
