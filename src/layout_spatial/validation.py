"""
Input validation utilities for the spatial index.

Provides centralized validation functions for bounds, positions and tree
parameters. Raises descriptive exceptions on invalid input.
"""

from __future__ import annotations

import math
from typing import Any


class ValidationError(ValueError):
    """Base exception for spatial validation errors."""

    pass


class InvalidBoundsError(ValidationError):
    """Raised when a bounding rectangle is degenerate or not finite."""

    pass


class OutOfBoundsError(ValidationError):
    """Raised when a position lies outside the tree's root bounds."""

    pass


class InvalidPositionError(ValidationError):
    """Raised when a position cannot be read as a 2D point."""

    pass


class InvalidThetaError(ValidationError):
    """Raised when the Barnes-Hut opening threshold is invalid."""

    pass


class InvalidDepthError(ValidationError):
    """Raised when the maximum tree depth is invalid."""

    pass


def validate_bounds(
    x: float,
    y: float,
    width: float,
    height: float,
) -> tuple[float, float, float, float]:
    """
    Validate rectangle dimensions.

    Args:
        x, y: Top-left corner
        width, height: Extent of the rectangle

    Returns:
        Validated (x, y, width, height) tuple of floats

    Raises:
        InvalidBoundsError: If a value is not finite or an extent is not positive
    """
    values = (float(x), float(y), float(width), float(height))
    if not all(math.isfinite(v) for v in values):
        raise InvalidBoundsError(f"Bounds must be finite, got {values}")

    if values[2] <= 0:
        raise InvalidBoundsError(f"Bounds width must be positive, got {values[2]}")
    if values[3] <= 0:
        raise InvalidBoundsError(f"Bounds height must be positive, got {values[3]}")

    return values


def validate_theta(theta: float) -> float:
    """
    Validate the Barnes-Hut opening threshold.

    Args:
        theta: Ratio of region size to distance below which a cluster is
            treated as a single mass (0 = exact)

    Returns:
        Validated theta

    Raises:
        InvalidThetaError: If theta is negative or not finite
    """
    theta = float(theta)
    if not math.isfinite(theta) or theta < 0:
        raise InvalidThetaError(f"theta must be a finite number >= 0, got {theta}")
    return theta


def validate_max_depth(max_depth: int) -> int:
    """
    Validate the maximum subdivision depth.

    Args:
        max_depth: Depth at which leaves stop splitting

    Returns:
        Validated depth

    Raises:
        InvalidDepthError: If max_depth < 1 or not an integer
    """
    if isinstance(max_depth, bool) or not isinstance(max_depth, int):
        raise InvalidDepthError(f"max_depth must be an int, got {max_depth!r}")
    if max_depth < 1:
        raise InvalidDepthError(f"max_depth must be >= 1, got {max_depth}")
    return max_depth


def validate_position(value: Any) -> tuple[float, float]:
    """
    Read a position as a pair of finite floats.

    Accepts objects with ``x``/``y`` attributes, dicts with ``"x"``/``"y"``
    keys, and length-2 sequences (tuples, lists, numpy arrays).

    Raises:
        InvalidPositionError: If the value has no usable coordinates
    """
    if hasattr(value, "x") and hasattr(value, "y"):
        raw = (value.x, value.y)
    elif isinstance(value, dict):
        if "x" not in value or "y" not in value:
            raise InvalidPositionError(f"Position dict needs 'x' and 'y' keys, got {value!r}")
        raw = (value["x"], value["y"])
    else:
        try:
            if len(value) != 2:
                raise InvalidPositionError(
                    f"Position must have 2 elements (x, y), got {len(value)}"
                )
            raw = (value[0], value[1])
        except TypeError as exc:
            raise InvalidPositionError(f"Cannot read position from {value!r}") from exc

    try:
        px, py = float(raw[0]), float(raw[1])
    except (TypeError, ValueError) as exc:
        raise InvalidPositionError(f"Position coordinates must be numeric, got {raw!r}") from exc

    if not (math.isfinite(px) and math.isfinite(py)):
        raise InvalidPositionError(f"Position must be finite, got ({px}, {py})")

    return px, py


__all__ = [
    "ValidationError",
    "InvalidBoundsError",
    "OutOfBoundsError",
    "InvalidPositionError",
    "InvalidThetaError",
    "InvalidDepthError",
    "validate_bounds",
    "validate_theta",
    "validate_max_depth",
    "validate_position",
]
