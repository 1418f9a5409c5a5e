"""
Common types for the spatial index.

This module provides the small value types shared across the package:
- Point: An immutable 2D position
- PointLike: Anything that can be read as a position
- PositionFunction: Maps a layout element to its current position
"""

from __future__ import annotations

from typing import Any, Callable, NamedTuple, Sequence, TypeVar, Union

from .validation import validate_position


class Point(NamedTuple):
    """An immutable 2D position."""

    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        """Euclidean distance to another point."""
        dx = self.x - other.x
        dy = self.y - other.y
        return (dx * dx + dy * dy) ** 0.5


# Element type stored in the tree (graph nodes, indices, ids...)
T = TypeVar("T")

PointLike = Union[Point, Sequence[float], dict[str, float], Any]
"""Input type for positions: Point, (x, y) sequence, dict, or object with x/y."""

PositionFunction = Callable[[T], PointLike]
"""Maps an element to its current position."""


def to_point(value: PointLike) -> Point:
    """
    Convert a point-like value to a Point.

    Raises:
        InvalidPositionError: If the value cannot be read as a finite 2D point
    """
    if isinstance(value, Point):
        return value
    x, y = validate_position(value)
    return Point(x, y)


__all__ = [
    "Point",
    "PointLike",
    "PositionFunction",
    "T",
    "to_point",
]
