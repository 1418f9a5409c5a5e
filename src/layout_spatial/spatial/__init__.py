"""
Spatial data structures for efficient force calculations.

Provides the Barnes-Hut quadtree used for O(n log n) repulsive-force
approximation in force-directed layouts.
"""

from .force_object import ForceObject
from .forces import (
    ForceLaw,
    FruchtermanReingoldRepulsion,
    InverseSquareRepulsion,
    accumulate_forces,
    pairwise_forces,
)
from .node import NO_CHILD, Node, NodeArena, NodeKind
from .quadtree import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_THETA,
    BarnesHutQuadTree,
    ForceObjectIterator,
    MutationGuard,
)
from .rectangle import Quadrant, Rectangle

__all__ = [
    "BarnesHutQuadTree",
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_THETA",
    "ForceLaw",
    "ForceObject",
    "ForceObjectIterator",
    "FruchtermanReingoldRepulsion",
    "InverseSquareRepulsion",
    "MutationGuard",
    "NO_CHILD",
    "Node",
    "NodeArena",
    "NodeKind",
    "Quadrant",
    "Rectangle",
    "accumulate_forces",
    "pairwise_forces",
]
