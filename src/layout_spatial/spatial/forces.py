"""
Pairwise force laws and force accumulation helpers.

A force law maps a (target, source) pair of point masses to the force the
source exerts on the target. The quadtree applies it to single elements and
to aggregates alike, so a law must only depend on positions and masses.
"""

from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Sequence, Tuple

import numpy as np

from .force_object import ForceObject

if TYPE_CHECKING:
    from .quadtree import BarnesHutQuadTree


ForceLaw = Callable[[ForceObject, ForceObject], Tuple[float, float]]
"""Force on the target (first argument) due to the source (second argument)."""


@dataclass(frozen=True)
class InverseSquareRepulsion:
    """
    Coulomb-style repulsion: F = strength * m_target * m_source / d^2.

    The force points away from the source. Coincident objects exert no force.
    """

    strength: float = 1.0

    def __call__(self, target: ForceObject, source: ForceObject) -> Tuple[float, float]:
        dx = target.x - source.x
        dy = target.y - source.y
        dist_sq = dx * dx + dy * dy
        if dist_sq == 0:
            return 0.0, 0.0

        dist = math.sqrt(dist_sq)
        force = self.strength * target.mass * source.mass / dist_sq
        return (dx / dist) * force, (dy / dist) * force


@dataclass(frozen=True)
class FruchtermanReingoldRepulsion:
    """
    Fruchterman-Reingold repulsion: F = k^2 * m_source / d.

    Attributes:
        k_sq: Square of the optimal distance k between connected nodes
    """

    k_sq: float = 1.0

    def __call__(self, target: ForceObject, source: ForceObject) -> Tuple[float, float]:
        dx = target.x - source.x
        dy = target.y - source.y
        dist_sq = dx * dx + dy * dy
        if dist_sq == 0:
            return 0.0, 0.0

        dist = math.sqrt(dist_sq)
        force = self.k_sq * source.mass / dist
        return (dx / dist) * force, (dy / dist) * force


def pairwise_forces(
    targets: Sequence[ForceObject],
    sources: Sequence[ForceObject],
    force_law: ForceLaw,
) -> np.ndarray:
    """
    Exact O(n*m) force evaluation, without approximation.

    Each target receives the force of every source that is not the same
    element and does not coincide with it. Targets are not modified.

    Returns:
        (len(targets), 2) array of force vectors
    """
    forces = np.zeros((len(targets), 2), dtype=np.float64)
    for i, target in enumerate(targets):
        for source in sources:
            if source.is_same_as(target):
                continue
            if source.x == target.x and source.y == target.y:
                continue
            fx, fy = force_law(target, source)
            forces[i, 0] += fx
            forces[i, 1] += fy
    return forces


def accumulate_forces(
    tree: BarnesHutQuadTree,
    targets: Sequence[ForceObject],
    *,
    reset: bool = True,
    max_workers: Optional[int] = None,
) -> np.ndarray:
    """
    Visit the tree once per target and collect the accumulated forces.

    The tree must be fully built before calling this. Traversals never
    mutate the tree, so with ``max_workers > 1`` they are spread across a
    thread pool.

    Args:
        tree: A built quadtree
        targets: Force objects to accumulate into (usually ``tree.force_objects``)
        reset: Zero each target's force before visiting
        max_workers: Thread count; None or 1 runs in the calling thread

    Returns:
        (len(targets), 2) array of the targets' forces after the traversal
    """

    def _visit(target: ForceObject) -> Tuple[float, float]:
        if reset:
            target.reset_force()
        tree.visit(target)
        return target.fx, target.fy

    if max_workers is not None and max_workers > 1 and len(targets) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(_visit, targets))
    else:
        results = [_visit(target) for target in targets]

    forces = np.zeros((len(targets), 2), dtype=np.float64)
    for i, (fx, fy) in enumerate(results):
        forces[i, 0] = fx
        forces[i, 1] = fy
    return forces


__all__ = [
    "ForceLaw",
    "InverseSquareRepulsion",
    "FruchtermanReingoldRepulsion",
    "pairwise_forces",
    "accumulate_forces",
]
