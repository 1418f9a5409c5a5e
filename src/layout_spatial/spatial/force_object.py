"""
Point masses used by the Barnes-Hut quadtree.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

from ..types import Point


@dataclass(eq=False)
class ForceObject:
    """
    A point mass with an accumulated force vector.

    Leaf force objects carry the layout element they stand for. Aggregates
    produced by ``combine`` carry no element (``element is None``) and sit at
    the mass-weighted centroid of everything merged into them.

    Instances compare and hash by identity.

    Attributes:
        element: Layout element this object represents (None for aggregates)
        x, y: Position
        mass: Weight of the element, or summed weight of an aggregate
        fx, fy: Accumulated force
    """

    element: Optional[Any]
    x: float
    y: float
    mass: float = 1.0
    fx: float = 0.0
    fy: float = 0.0

    @classmethod
    def at(cls, element: Any, position: Point, mass: float = 1.0) -> ForceObject:
        """Create a force object for an element at a position."""
        return cls(element, float(position[0]), float(position[1]), mass=mass)

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    @property
    def force(self) -> Point:
        return Point(self.fx, self.fy)

    @property
    def is_aggregate(self) -> bool:
        return self.element is None

    def add_force(self, dx: float, dy: float) -> None:
        """Accumulate a force contribution."""
        self.fx += dx
        self.fy += dy

    def reset_force(self) -> None:
        """Zero the accumulated force before a new traversal."""
        self.fx = 0.0
        self.fy = 0.0

    def combine(self, other: ForceObject) -> ForceObject:
        """
        Merge two point masses into a new aggregate.

        Returns:
            ForceObject with summed mass located at the weighted centroid.
            Neither operand is modified.
        """
        total = self.mass + other.mass
        if total > 0:
            x = (self.x * self.mass + other.x * other.mass) / total
            y = (self.y * self.mass + other.y * other.mass) / total
        else:
            # Massless objects: fall back to the plain midpoint
            x = (self.x + other.x) / 2
            y = (self.y + other.y) / 2
        return ForceObject(None, x, y, mass=total)

    def distance_to(self, other: ForceObject) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def is_same_as(self, other: ForceObject) -> bool:
        """
        True if both objects stand for the same layout element.

        A query target built separately from the tree's own leaf for the
        same element is still recognised through element equality.
        """
        if self is other:
            return True
        return self.element is not None and other.element is not None and (
            self.element == other.element
        )

    def __repr__(self) -> str:
        label = "aggregate" if self.element is None else repr(self.element)
        return (
            f"ForceObject({label}, x={self.x:.2f}, y={self.y:.2f}, mass={self.mass:g}, "
            f"force=({self.fx:.3g}, {self.fy:.3g}))"
        )


__all__ = ["ForceObject"]
