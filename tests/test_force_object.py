"""Tests for ForceObject point masses."""

import math

import pytest

from layout_spatial import Point
from layout_spatial.spatial.force_object import ForceObject


class TestForceObjectBasics:
    """Tests for construction and force accumulation."""

    def test_creation(self):
        """Test basic force object creation."""
        fo = ForceObject("a", 10.0, 20.0, mass=1.5)
        assert fo.element == "a"
        assert fo.position == Point(10.0, 20.0)
        assert fo.mass == 1.5
        assert fo.force == Point(0.0, 0.0)
        assert not fo.is_aggregate

    def test_defaults(self):
        """Mass defaults to 1 and force to zero."""
        fo = ForceObject.at(3, (1, 2))
        assert fo.mass == 1.0
        assert fo.x == 1.0
        assert fo.y == 2.0
        assert fo.fx == 0.0
        assert fo.fy == 0.0

    def test_add_force_accumulates(self):
        """Forces add up."""
        fo = ForceObject("a", 0.0, 0.0)
        fo.add_force(1.0, 2.0)
        fo.add_force(0.5, -3.0)
        assert fo.force == Point(1.5, -1.0)

    def test_reset_force(self):
        """Reset zeroes the accumulator."""
        fo = ForceObject("a", 0.0, 0.0)
        fo.add_force(4.0, 4.0)
        fo.reset_force()
        assert fo.force == Point(0.0, 0.0)

    def test_identity_semantics(self):
        """Equal fields do not make two objects equal."""
        a = ForceObject("a", 1.0, 1.0)
        b = ForceObject("a", 1.0, 1.0)
        assert a != b
        assert len({a, b}) == 2

    def test_distance(self):
        """Euclidean distance between two objects."""
        a = ForceObject("a", 0.0, 0.0)
        b = ForceObject("b", 3.0, 4.0)
        assert a.distance_to(b) == 5.0


class TestCombine:
    """Tests for merging point masses into aggregates."""

    def test_equal_masses_midpoint(self):
        """Equal masses combine at the midpoint."""
        a = ForceObject("a", 20.0, 50.0)
        b = ForceObject("b", 80.0, 50.0)
        agg = a.combine(b)
        assert agg.is_aggregate
        assert agg.mass == 2.0
        assert agg.position == Point(50.0, 50.0)

    def test_weighted_centroid(self):
        """Heavier masses pull the centroid."""
        a = ForceObject("a", 0.0, 0.0, mass=3.0)
        b = ForceObject("b", 100.0, 0.0, mass=1.0)
        agg = a.combine(b)
        # COM = (3*0 + 1*100) / 4 = 25
        assert agg.mass == 4.0
        assert agg.x == pytest.approx(25.0)
        assert agg.y == pytest.approx(0.0)

    def test_operands_unchanged(self):
        """Combining never mutates its operands."""
        a = ForceObject("a", 0.0, 0.0)
        b = ForceObject("b", 10.0, 10.0)
        a.combine(b)
        assert a.position == Point(0.0, 0.0)
        assert a.mass == 1.0
        assert b.position == Point(10.0, 10.0)

    def test_incremental_matches_mean(self):
        """Folding combine over many objects gives the arithmetic mean."""
        points = [(1.0, 2.0), (7.0, 3.0), (4.0, 9.0), (10.0, 10.0), (0.5, 0.5)]
        agg = ForceObject(0, *points[0])
        for i, (x, y) in enumerate(points[1:], start=1):
            agg = agg.combine(ForceObject(i, x, y))

        assert agg.mass == 5.0
        assert agg.x == pytest.approx(sum(p[0] for p in points) / 5)
        assert agg.y == pytest.approx(sum(p[1] for p in points) / 5)

    def test_massless_midpoint(self):
        """Zero total mass falls back to the midpoint without dividing by zero."""
        a = ForceObject("a", 0.0, 0.0, mass=0.0)
        b = ForceObject("b", 4.0, 2.0, mass=0.0)
        agg = a.combine(b)
        assert agg.mass == 0.0
        assert agg.position == Point(2.0, 1.0)
        assert not math.isnan(agg.x)


class TestIsSameAs:
    """Tests for self-recognition between force objects."""

    def test_same_object(self):
        """An object is itself."""
        a = ForceObject("a", 0.0, 0.0)
        assert a.is_same_as(a)

    def test_same_element(self):
        """Separately built objects for one element match."""
        a = ForceObject("a", 0.0, 0.0)
        b = ForceObject("a", 5.0, 5.0)
        assert a.is_same_as(b)

    def test_different_elements(self):
        """Different elements never match."""
        assert not ForceObject("a", 0.0, 0.0).is_same_as(ForceObject("b", 0.0, 0.0))

    def test_aggregates_never_match_by_element(self):
        """Aggregates only match themselves."""
        agg1 = ForceObject("a", 0, 0).combine(ForceObject("b", 1, 1))
        agg2 = ForceObject("a", 0, 0).combine(ForceObject("b", 1, 1))
        assert not agg1.is_same_as(agg2)
        assert not ForceObject("a", 0, 0).is_same_as(agg1)
