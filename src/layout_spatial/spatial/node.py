"""
Quad nodes and the arena that stores them.

Nodes live in a flat list and refer to their children by index, so clearing
the tree is a single truncation. Each node is tagged with its kind:

- EMPTY: no payload, no children (fresh root or freshly created child)
- LEAF: one element, or several once the depth cap stops subdividing
- INTERNAL: aggregate payload over up to four children [NW, NE, SW, SE]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional

from ..types import Point
from .force_object import ForceObject
from .forces import ForceLaw
from .rectangle import Quadrant, Rectangle

logger = logging.getLogger(__name__)

# Child slot marker for a quadrant that was never populated
NO_CHILD = -1


class NodeKind(IntEnum):
    """Structural state of a quad node."""

    EMPTY = 0
    LEAF = 1
    INTERNAL = 2


@dataclass
class Node:
    """
    A cell of the quadtree.

    Attributes:
        bounds: Region covered by this cell
        depth: Distance from the root (root = 0)
        kind: Structural state
        force_object: Single element (one-member leaf) or aggregate
            (internal node, or leaf holding several coincident members)
        members: Elements stored in a leaf
        children: Arena indices of the [NW, NE, SW, SE] children
    """

    bounds: Rectangle
    depth: int = 0
    kind: NodeKind = NodeKind.EMPTY
    force_object: Optional[ForceObject] = None
    members: List[ForceObject] = field(default_factory=list)
    children: List[int] = field(default_factory=lambda: [NO_CHILD] * 4)

    def is_empty(self) -> bool:
        return self.kind is NodeKind.EMPTY

    def is_leaf(self) -> bool:
        """True for empty and occupied leaves (no children)."""
        return self.kind is not NodeKind.INTERNAL

    def is_internal(self) -> bool:
        return self.kind is NodeKind.INTERNAL

    @property
    def mass(self) -> float:
        return self.force_object.mass if self.force_object is not None else 0.0

    @property
    def center_of_mass(self) -> Optional[Point]:
        return self.force_object.position if self.force_object is not None else None

    def __str__(self) -> str:
        if self.kind is NodeKind.EMPTY:
            return f"Empty{self.bounds}"
        if self.kind is NodeKind.LEAF:
            return f"Leaf{self.bounds}{self.members}"
        return f"Internal{self.bounds}(mass={self.mass:g}, com={self.center_of_mass})"


class NodeArena:
    """
    Flat storage for the nodes of one quadtree.

    Index 0 is always the root. Insertion and both Barnes-Hut traversals are
    implemented here, recursing over node indices.
    """

    def __init__(self, bounds: Rectangle, max_depth: int) -> None:
        self.bounds = bounds
        self.max_depth = max_depth
        self.nodes: List[Node] = [Node(bounds)]

    @property
    def root(self) -> Node:
        return self.nodes[0]

    def __len__(self) -> int:
        return len(self.nodes)

    def clear(self) -> None:
        """Drop every node and start over with an empty root."""
        self.nodes = [Node(self.bounds)]

    def child(self, node: Node, quadrant: Quadrant) -> Optional[Node]:
        """Get the child node in a quadrant, or None if it was never created."""
        index = node.children[quadrant]
        return self.nodes[index] if index != NO_CHILD else None

    def depth(self) -> int:
        """Deepest level currently holding a node."""
        return max(node.depth for node in self.nodes)

    # -------------------------------------------------------------------------
    # Insertion
    # -------------------------------------------------------------------------

    def insert(self, index: int, force_object: ForceObject) -> None:
        """Insert a force object into the subtree rooted at ``index``."""
        node = self.nodes[index]

        if node.kind is NodeKind.EMPTY:
            node.kind = NodeKind.LEAF
            node.members = [force_object]
            node.force_object = force_object
            return

        aggregate = force_object
        if node.force_object is not None:
            aggregate = node.force_object.combine(force_object)

        if node.kind is NodeKind.LEAF:
            if node.depth >= self.max_depth:
                # Coincident (or nearly so) elements: keep them side by side
                logger.debug(
                    "Depth cap %d reached at %s, storing %r as extra leaf member",
                    self.max_depth,
                    node.bounds,
                    force_object.element,
                )
                node.members.append(force_object)
                node.force_object = aggregate
                return

            # More than one member if the depth cap was raised since they were stored
            members = node.members + [force_object]
            node.kind = NodeKind.INTERNAL
            node.members = []
            node.force_object = aggregate
            for member in members:
                self._insert_into_child(index, member)
            return

        node.force_object = aggregate
        self._insert_into_child(index, force_object)

    def _insert_into_child(self, index: int, force_object: ForceObject) -> None:
        """Insert into the child covering the object's quadrant, creating it if needed."""
        node = self.nodes[index]
        quadrant = node.bounds.quadrant(force_object.x, force_object.y)

        child_index = node.children[quadrant]
        if child_index == NO_CHILD:
            child_index = len(self.nodes)
            self.nodes.append(Node(node.bounds.sub_rectangle(quadrant), depth=node.depth + 1))
            node.children[quadrant] = child_index

        self.insert(child_index, force_object)

    # -------------------------------------------------------------------------
    # Traversals
    # -------------------------------------------------------------------------

    def _use_aggregate(
        self, node: Node, aggregate: ForceObject, target: ForceObject, theta: float
    ) -> bool:
        """
        Barnes-Hut opening criterion for an internal node.

        The aggregate stands in for the whole subtree when the target lies
        outside the cell and s / d < theta. A cell containing the target is
        always opened, so the target never interacts with its own mass.
        """
        if node.bounds.covers(target.x, target.y):
            return False

        dist = target.distance_to(aggregate)
        if dist == 0:
            return False
        return node.bounds.size / dist < theta

    def visit(
        self,
        index: int,
        target: ForceObject,
        force_law: ForceLaw,
        theta: float,
    ) -> None:
        """Accumulate into ``target`` the forces exerted by the subtree at ``index``."""
        node = self.nodes[index]

        if node.kind is NodeKind.EMPTY:
            return

        if node.kind is NodeKind.LEAF:
            for member in node.members:
                if member.is_same_as(target):
                    continue
                if member.x == target.x and member.y == target.y:
                    continue
                target.add_force(*force_law(target, member))
            return

        aggregate = node.force_object
        if aggregate is not None and self._use_aggregate(node, aggregate, target, theta):
            target.add_force(*force_law(target, aggregate))
            return

        for child_index in node.children:
            if child_index != NO_CHILD:
                self.visit(child_index, target, force_law, theta)

    def collect(
        self,
        index: int,
        target: ForceObject,
        theta: float,
        force_objects: dict[ForceObject, None],
    ) -> dict[ForceObject, None]:
        """
        Gather the force objects ``target`` interacts with in the subtree.

        Uses the same opening decision as ``visit``. ``force_objects`` is an
        insertion-ordered set (dict keys) that is filled and returned.
        """
        node = self.nodes[index]

        if node.kind is NodeKind.EMPTY:
            return force_objects

        if node.kind is NodeKind.LEAF:
            for member in node.members:
                if not member.is_same_as(target):
                    force_objects[member] = None
            return force_objects

        aggregate = node.force_object
        if aggregate is not None and self._use_aggregate(node, aggregate, target, theta):
            force_objects[aggregate] = None
            return force_objects

        for child_index in node.children:
            if child_index != NO_CHILD:
                self.collect(child_index, target, theta, force_objects)
        return force_objects


__all__ = ["NO_CHILD", "Node", "NodeArena", "NodeKind"]
