"""
Barnes-Hut quadtree for force-directed layouts.

The tree is rebuilt from the current element positions once per layout
iteration and then queried once per element, either to accumulate the net
repulsive force directly (``visit``) or to list the point masses that an
element interacts with (``get_force_objects_for``).
"""

from __future__ import annotations

import logging
import threading
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Generic,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
    Union,
    overload,
)

if TYPE_CHECKING:
    from typing_extensions import Self

from ..layout_model import LayoutModel
from ..types import PositionFunction, T, to_point
from ..validation import OutOfBoundsError, validate_max_depth, validate_theta
from .force_object import ForceObject
from .forces import ForceLaw, InverseSquareRepulsion
from .node import Node, NodeArena
from .rectangle import Quadrant, Rectangle

logger = logging.getLogger(__name__)

# Standard Barnes-Hut opening threshold: balanced accuracy and speed
DEFAULT_THETA = 0.5

# Subdivision stops here; deeper inserts share a leaf. At depth 32 a cell
# is 2^-32 of the root extent, finer than any layout distinguishes.
DEFAULT_MAX_DEPTH = 32

BoundsLike = Union[Rectangle, Tuple[float, float, float, float]]


class MutationGuard:
    """
    Serializes structural mutation of a tree.

    Only insert/clear/rebuild enter the guard. Traversals stay lock-free and
    rely on phase separation: finish the rebuild, then query.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def __enter__(self) -> MutationGuard:
        self._lock.acquire()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self._lock.release()

    def locked(self) -> bool:
        return self._lock.locked()


class BarnesHutQuadTree(Generic[T]):
    """
    Barnes-Hut quadtree over the elements of a layout.

    Insertion keeps every internal node's center of mass up to date, so the
    tree can be queried as soon as the last element is in.

    Usage:
        tree = BarnesHutQuadTree(Rectangle(0, 0, 1000, 1000), theta=0.5)
        tree.rebuild(graph_nodes, position_of)

        for force_object in tree.force_objects:
            force_object.reset_force()
            tree.visit(force_object)
            fx, fy = force_object.force

    The theta parameter controls the accuracy/speed tradeoff:
    - theta = 0: Exact calculation (no approximation)
    - theta = 0.5: Good balance (default)
    - theta = 1.0+: Fast but less accurate

    Thread safety:
        insert, clear and rebuild are serialized by an internal guard.
        visit and get_force_objects_for take no lock; run them only after
        rebuild has returned. Any number of them may then run in parallel.
    """

    def __init__(
        self,
        bounds: BoundsLike,
        *,
        theta: float = DEFAULT_THETA,
        max_depth: int = DEFAULT_MAX_DEPTH,
        force_law: Optional[ForceLaw] = None,
    ) -> None:
        """
        Initialize an empty quadtree.

        Args:
            bounds: Rectangle, or (min_x, min_y, max_x, max_y) bounding box.
                Fixed for the lifetime of the tree.
            theta: Barnes-Hut threshold (0 = exact, higher = more approximation)
            max_depth: Depth at which leaves stop subdividing
            force_law: Pairwise force applied by ``visit``. Defaults to
                inverse-square repulsion.

        Raises:
            InvalidBoundsError: If the bounds are degenerate
            InvalidThetaError: If theta is negative
            InvalidDepthError: If max_depth < 1
        """
        if not isinstance(bounds, Rectangle):
            bounds = Rectangle.from_bounds(*bounds)

        self._theta: float = validate_theta(theta)
        if force_law is None:
            force_law = InverseSquareRepulsion()
        self._force_law: ForceLaw = force_law
        self._arena = NodeArena(bounds, validate_max_depth(max_depth))
        self._force_objects: List[ForceObject] = []
        self._by_element: Dict[Any, ForceObject] = {}
        self._guard = MutationGuard()

    @classmethod
    def from_size(cls, width: float, height: float, **kwargs: Any) -> BarnesHutQuadTree[T]:
        """Create a tree covering (0, 0) to (width, height)."""
        return cls(Rectangle(0.0, 0.0, width, height), **kwargs)

    @classmethod
    def from_layout_model(
        cls,
        layout_model: LayoutModel[T],
        padding: float = 10.0,
        **kwargs: Any,
    ) -> BarnesHutQuadTree[T]:
        """
        Build a tree sized to a layout model's positions and fill it.

        Args:
            layout_model: Source of elements and positions
            padding: Margin added around the positions' bounding box
            **kwargs: Passed to the constructor (theta, max_depth, force_law)

        Returns:
            Tree with every element of the model inserted
        """
        tree = cls(layout_model.bounds(padding), **kwargs)
        tree.rebuild(layout_model)
        return tree

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def bounds(self) -> Rectangle:
        """Get the root bounds."""
        return self._arena.bounds

    @property
    def root(self) -> Node:
        """Get the root node."""
        return self._arena.root

    @property
    def theta(self) -> float:
        """Get Barnes-Hut theta parameter (accuracy)."""
        return self._theta

    @theta.setter
    def theta(self, value: float) -> None:
        """Set Barnes-Hut theta parameter."""
        self._theta = validate_theta(value)

    @property
    def max_depth(self) -> int:
        """Get the subdivision depth cap."""
        return self._arena.max_depth

    @max_depth.setter
    def max_depth(self, value: int) -> None:
        """Set the depth cap. Applies from the next insertion on."""
        with self._guard:
            self._arena.max_depth = validate_max_depth(value)

    @property
    def force_law(self) -> ForceLaw:
        """Get the pairwise force law used by visit."""
        return self._force_law

    @force_law.setter
    def force_law(self, value: ForceLaw) -> None:
        self._force_law = value

    @property
    def force_objects(self) -> Tuple[ForceObject, ...]:
        """Leaf force objects in insertion order."""
        return tuple(self._force_objects)

    @property
    def element_count(self) -> int:
        return len(self._force_objects)

    @property
    def node_count(self) -> int:
        return len(self._arena)

    @property
    def depth(self) -> int:
        """Depth of the deepest node (0 for a single-cell tree)."""
        return self._arena.depth()

    def __len__(self) -> int:
        return len(self._force_objects)

    def children(self, node: Node) -> List[Optional[Node]]:
        """Get a node's children as [NW, NE, SW, SE], None where absent."""
        return [self._arena.child(node, quadrant) for quadrant in Quadrant]

    def force_object_for(self, element: T) -> Optional[ForceObject]:
        """Get the leaf force object of an inserted element, if any."""
        return self._by_element.get(element)

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def clear(self) -> None:
        """Remove every element. The root keeps its bounds."""
        with self._guard:
            self._clear()

    def _clear(self) -> None:
        self._arena.clear()
        self._force_objects = []
        self._by_element = {}

    def insert(self, force_object: ForceObject) -> None:
        """
        Insert a force object. Its element must be hashable.

        Raises:
            OutOfBoundsError: If the position lies outside the root bounds
            TypeError: If the element is unhashable
        """
        self._check_insertable(force_object)
        with self._guard:
            self._insert(force_object)

    def _insert(self, force_object: ForceObject) -> None:
        self._arena.insert(0, force_object)
        self._force_objects.append(force_object)
        self._by_element.setdefault(force_object.element, force_object)

    def _check_insertable(self, force_object: ForceObject) -> None:
        # Raises TypeError for an unhashable element before the tree is touched
        hash(force_object.element)
        if not self.bounds.covers(force_object.x, force_object.y):
            raise OutOfBoundsError(
                f"Position ({force_object.x}, {force_object.y}) of "
                f"{force_object.element!r} is outside tree bounds {self.bounds}"
            )

    @overload
    def rebuild(self, elements: LayoutModel[T]) -> Self: ...

    @overload
    def rebuild(self, elements: Iterable[T], position_of: PositionFunction[T]) -> Self: ...

    def rebuild(
        self,
        elements: Union[LayoutModel[T], Iterable[T]],
        position_of: Optional[PositionFunction[T]] = None,
    ) -> Self:
        """
        Clear the tree and insert every element at its current position.

        Every position is read and checked before the tree is touched, so a
        failing rebuild leaves the previous contents in place.

        Args:
            elements: Elements to index, or a LayoutModel providing both the
                elements and their positions
            position_of: Maps an element to its position (omit for a LayoutModel)

        Returns:
            self (for chaining)

        Raises:
            OutOfBoundsError: If any position lies outside the root bounds
            InvalidPositionError: If any position cannot be read
        """
        if isinstance(elements, LayoutModel):
            position_of = elements
            elements = elements.nodes()
        if position_of is None:
            raise TypeError("rebuild() needs a position function unless given a LayoutModel")

        force_objects = [
            ForceObject.at(element, to_point(position_of(element))) for element in elements
        ]
        for force_object in force_objects:
            self._check_insertable(force_object)

        with self._guard:
            self._clear()
            for force_object in force_objects:
                self._insert(force_object)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Rebuilt quadtree: %d elements, %d nodes, depth %d",
                len(force_objects),
                self.node_count,
                self.depth,
            )
        return self

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def _skips(self, target: ForceObject) -> bool:
        """Nothing to report for an empty tree or for the sole element itself."""
        root = self._arena.root
        return root.is_empty() or root.force_object is target

    def visit(self, target: ForceObject) -> None:
        """
        Accumulate into ``target`` the force exerted by every other element.

        Distant clusters with size/distance < theta act as one mass at their
        center of mass. The target's force is added to, not reset.
        """
        if self._skips(target):
            return
        self._arena.visit(0, target, self._force_law, self._theta)

    def get_force_objects_for(self, target: ForceObject) -> List[ForceObject]:
        """
        List the force objects ``target`` would interact with.

        Returns:
            Elements and cluster aggregates in traversal order, without
            duplicates and never including the target itself
        """
        if self._skips(target):
            return []
        return list(self._arena.collect(0, target, self._theta, {}))

    def iter_force_objects(self, target: ForceObject) -> ForceObjectIterator[T]:
        """Get an iterator over a snapshot of ``get_force_objects_for(target)``."""
        return ForceObjectIterator(self, target)

    def __repr__(self) -> str:
        return (
            f"BarnesHutQuadTree(bounds={self.bounds}, elements={self.element_count}, "
            f"nodes={self.node_count}, theta={self._theta})"
        )


class ForceObjectIterator(Generic[T]):
    """
    Iterator over the force objects relevant to one target.

    The whole result is computed on construction; later changes to the tree
    are not seen, and an exhausted iterator stays exhausted.
    """

    def __init__(self, tree: BarnesHutQuadTree[T], target: ForceObject) -> None:
        self.target = target
        self._snapshot: Tuple[ForceObject, ...] = tuple(tree.get_force_objects_for(target))
        self._position = 0
        logger.debug("Force objects for %r: %s", target.element, self._snapshot)

    @property
    def snapshot(self) -> Tuple[ForceObject, ...]:
        """Every force object of the result, including those already yielded."""
        return self._snapshot

    def __iter__(self) -> Iterator[ForceObject]:
        return self

    def __next__(self) -> ForceObject:
        if self._position >= len(self._snapshot):
            raise StopIteration
        force_object = self._snapshot[self._position]
        self._position += 1
        return force_object

    def __len__(self) -> int:
        """Number of force objects not yet yielded."""
        return len(self._snapshot) - self._position


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_THETA",
    "BarnesHutQuadTree",
    "ForceObjectIterator",
    "MutationGuard",
]
