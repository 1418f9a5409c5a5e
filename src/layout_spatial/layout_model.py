"""
Layout models: the element set and position lookup a quadtree is built from.

A layout model answers two questions for the tree: which elements are laid
out, and where each of them currently is. The tree only reads positions
during a rebuild; moving elements is the layout algorithm's business.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, Iterable, Iterator, Mapping, Optional, Sequence

import numpy as np

from .types import Point, PointLike, T, to_point
from .validation import InvalidPositionError

# (min_x, min_y, max_x, max_y) used when a model has no elements
DEFAULT_EMPTY_BOUNDS = (0.0, 0.0, 100.0, 100.0)


class LayoutModel(ABC, Generic[T]):
    """
    Abstract source of elements and their positions.

    Subclasses implement ``nodes`` and ``get``. A model is also callable, so
    it can be passed wherever a position function is expected.
    """

    @abstractmethod
    def nodes(self) -> Iterable[T]:
        """Get the elements in their natural iteration order."""

    @abstractmethod
    def get(self, node: T) -> Point:
        """Get the current position of an element."""

    def __call__(self, node: T) -> Point:
        return self.get(node)

    def __len__(self) -> int:
        return sum(1 for _ in self.nodes())

    def positions(self) -> np.ndarray:
        """Get all positions as an (n, 2) array, in ``nodes()`` order."""
        points = [self.get(node) for node in self.nodes()]
        if not points:
            return np.zeros((0, 2), dtype=np.float64)
        return np.array(points, dtype=np.float64)

    def bounds(self, padding: float = 10.0) -> tuple[float, float, float, float]:
        """
        Get the bounding box of all positions, grown by ``padding``.

        Returns:
            (min_x, min_y, max_x, max_y) enclosing every position. A zero
            extent (one element, or aligned elements without padding) is
            widened to 1.
        """
        positions = self.positions()
        if len(positions) == 0:
            return DEFAULT_EMPTY_BOUNDS

        min_x, min_y = (float(v) for v in positions.min(axis=0) - padding)
        max_x, max_y = (float(v) for v in positions.max(axis=0) + padding)
        if max_x <= min_x:
            max_x = min_x + 1.0
        if max_y <= min_y:
            max_y = min_y + 1.0
        return min_x, min_y, max_x, max_y


class MappingLayoutModel(LayoutModel[T]):
    """
    Layout model backed by a dict of element -> position.

    Example:
        model = MappingLayoutModel({"a": (0, 0), "b": (10, 5)})
        tree = BarnesHutQuadTree.from_layout_model(model)
    """

    def __init__(self, positions: Optional[Mapping[T, PointLike]] = None) -> None:
        self._positions: dict[T, Point] = {}
        if positions is not None:
            for node, position in positions.items():
                self._positions[node] = to_point(position)

    @classmethod
    def from_nodes(cls, nodes: Sequence[Any]) -> MappingLayoutModel[Any]:
        """
        Build from node records with x/y coordinates.

        Accepts dicts or objects. Each record is keyed by its ``index`` or
        ``id`` when present, else by its position in ``nodes``.
        """
        model: MappingLayoutModel[Any] = cls()
        for i, node_data in enumerate(nodes):
            if isinstance(node_data, dict):
                key = node_data.get("index", node_data.get("id"))
            else:
                key = getattr(node_data, "index", getattr(node_data, "id", None))
            model.set(i if key is None else key, node_data)
        return model

    def nodes(self) -> Iterator[T]:
        return iter(self._positions)

    def get(self, node: T) -> Point:
        return self._positions[node]

    def set(self, node: T, position: PointLike) -> None:
        """Place an element (adds it if new)."""
        self._positions[node] = to_point(position)

    def __len__(self) -> int:
        return len(self._positions)

    def __contains__(self, node: object) -> bool:
        return node in self._positions


class ArrayLayoutModel(LayoutModel[int]):
    """
    Layout model over a numpy (n, 2) position array.

    Elements are the row indices 0..n-1. A float64 array is referenced,
    not copied, so positions written by a layout loop are seen on the next
    rebuild.
    """

    def __init__(self, positions: np.ndarray) -> None:
        positions = np.asarray(positions, dtype=np.float64)
        if positions.ndim != 2 or positions.shape[1] != 2:
            raise InvalidPositionError(
                f"Position array must have shape (n, 2), got {positions.shape}"
            )
        self._positions = positions

    @property
    def array(self) -> np.ndarray:
        return self._positions

    def nodes(self) -> Iterator[int]:
        return iter(range(len(self._positions)))

    def get(self, node: int) -> Point:
        row = self._positions[node]
        return Point(float(row[0]), float(row[1]))

    def positions(self) -> np.ndarray:
        return self._positions.copy()

    def __len__(self) -> int:
        return len(self._positions)


__all__ = [
    "DEFAULT_EMPTY_BOUNDS",
    "LayoutModel",
    "MappingLayoutModel",
    "ArrayLayoutModel",
]
