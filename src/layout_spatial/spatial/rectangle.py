"""
Axis-aligned rectangles and quadrant subdivision.

Coordinates follow screen convention: y grows downward, so the NW quadrant
is the top-left one. Containment is half-open (a rectangle owns its left and
top edges but not its right and bottom ones), which gives every point of the
parent exactly one quadrant.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from ..validation import validate_bounds


class Quadrant(IntEnum):
    """Child slots of a quad node, in traversal order."""

    NW = 0
    NE = 1
    SW = 2
    SE = 3


@dataclass(frozen=True)
class Rectangle:
    """
    Bounding box described by its top-left corner and extent.

    Attributes:
        x, y: Top-left corner
        width, height: Extent (both positive)
    """

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        x, y, width, height = validate_bounds(self.x, self.y, self.width, self.height)
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)

    @classmethod
    def from_bounds(cls, min_x: float, min_y: float, max_x: float, max_y: float) -> Rectangle:
        """Build from (min_x, min_y, max_x, max_y) extents."""
        return cls(min_x, min_y, max_x - min_x, max_y - min_y)

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    @property
    def size(self) -> float:
        """Region extent used by the Barnes-Hut opening criterion."""
        return max(self.width, self.height)

    def contains(self, x: float, y: float) -> bool:
        """Half-open containment: left/top edges inside, right/bottom outside."""
        return self.x <= x < self.max_x and self.y <= y < self.max_y

    def covers(self, x: float, y: float) -> bool:
        """Closed containment, including the right and bottom edges."""
        return self.x <= x <= self.max_x and self.y <= y <= self.max_y

    def quadrant(self, x: float, y: float) -> Quadrant:
        """
        Get the quadrant a point falls into.

        Points on a split line go east/south, matching ``contains`` on the
        sub-rectangles.
        """
        east = x >= self.center_x
        south = y >= self.center_y
        return Quadrant((2 if south else 0) + (1 if east else 0))

    def sub_rectangle(self, quadrant: Quadrant) -> Rectangle:
        """Get the rectangle of one quadrant (half width, half height)."""
        half_w = self.width / 2
        half_h = self.height / 2
        x = self.center_x if quadrant & 1 else self.x
        y = self.center_y if quadrant & 2 else self.y
        return Rectangle(x, y, half_w, half_h)

    def split(self) -> tuple[Rectangle, Rectangle, Rectangle, Rectangle]:
        """Get all four quadrants as (nw, ne, sw, se)."""
        return (
            self.sub_rectangle(Quadrant.NW),
            self.sub_rectangle(Quadrant.NE),
            self.sub_rectangle(Quadrant.SW),
            self.sub_rectangle(Quadrant.SE),
        )

    def __str__(self) -> str:
        return f"[{self.x:g}, {self.y:g}, {self.width:g}x{self.height:g}]"


__all__ = ["Quadrant", "Rectangle"]
