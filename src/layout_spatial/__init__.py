"""
layout-spatial: Barnes-Hut spatial indexing for force-directed graph layouts.

This package provides the quadtree that force-directed layout algorithms
rebuild once per iteration to approximate all-pairs repulsion in
O(n log n):
- spatial: Rectangle geometry, point masses, the quadtree and force laws
- layout_model: Element/position sources the tree is rebuilt from
- validation: Exceptions and input checks
"""

import logging

__version__ = "0.1.0"

# Layout models (tree inputs)
from .layout_model import (
    ArrayLayoutModel,
    LayoutModel,
    MappingLayoutModel,
)

# Spatial data structures
from .spatial import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_THETA,
    BarnesHutQuadTree,
    ForceLaw,
    ForceObject,
    ForceObjectIterator,
    FruchtermanReingoldRepulsion,
    InverseSquareRepulsion,
    Node,
    NodeKind,
    Quadrant,
    Rectangle,
    accumulate_forces,
    pairwise_forces,
)
from .types import Point, PointLike, PositionFunction, to_point

# Validation utilities
from .validation import (
    InvalidBoundsError,
    InvalidDepthError,
    InvalidPositionError,
    InvalidThetaError,
    OutOfBoundsError,
    ValidationError,
)

# Library logging: silent unless the application configures handlers
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Shared types
    "Point",
    "PointLike",
    "PositionFunction",
    "to_point",
    # Layout models
    "LayoutModel",
    "MappingLayoutModel",
    "ArrayLayoutModel",
    # Spatial data structures
    "BarnesHutQuadTree",
    "ForceObjectIterator",
    "ForceObject",
    "Node",
    "NodeKind",
    "Quadrant",
    "Rectangle",
    "DEFAULT_THETA",
    "DEFAULT_MAX_DEPTH",
    # Force laws
    "ForceLaw",
    "InverseSquareRepulsion",
    "FruchtermanReingoldRepulsion",
    "accumulate_forces",
    "pairwise_forces",
    # Validation
    "ValidationError",
    "InvalidBoundsError",
    "OutOfBoundsError",
    "InvalidPositionError",
    "InvalidThetaError",
    "InvalidDepthError",
]
