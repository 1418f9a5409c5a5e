#!/usr/bin/env python3
"""
Visualization script for the Barnes-Hut quadtree.

Draws the cell structure of a clustered point set, and the cells one element
interacts with at a given theta, into ./build/

Usage:
    uv run python scripts/visualize_quadtree.py
"""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle as RectPatch

from layout_spatial import ArrayLayoutModel, BarnesHutQuadTree

# Output directory
BUILD_DIR = Path(__file__).parent.parent / "build"


def ensure_build_dir():
    """Create build directory if it doesn't exist."""
    BUILD_DIR.mkdir(exist_ok=True)


def create_clustered_points(n=300, seed=7):
    """Generate points in a few Gaussian clusters inside a 1000x1000 canvas."""
    rng = np.random.default_rng(seed)
    centers = rng.uniform(150, 850, size=(5, 2))
    points = np.concatenate(
        [rng.normal(center, 60.0, size=(n // len(centers), 2)) for center in centers]
    )
    return np.clip(points, 0, 1000)


def draw_cells(tree, ax):
    """Draw every cell outline of the tree."""
    for node in tree._arena.nodes:
        b = node.bounds
        ax.add_patch(
            RectPatch((b.x, b.y), b.width, b.height, fill=False, linewidth=0.4, edgecolor="#999999")
        )


def visualize(tree, positions, theta, title, filename):
    """Render the tree and the interaction set of one element."""
    fig, axes = plt.subplots(1, 2, figsize=(14, 7))

    ax = axes[0]
    draw_cells(tree, ax)
    ax.scatter(positions[:, 0], positions[:, 1], s=6, c="#1f77b4", zorder=3)
    ax.set_title(f"{title}: {tree.node_count} cells, depth {tree.depth}")

    ax = axes[1]
    tree.theta = theta
    target = tree.force_objects[0]
    sources = tree.get_force_objects_for(target)
    ax.scatter(positions[:, 0], positions[:, 1], s=4, c="#cccccc", zorder=2)
    leaves = np.array([[s.x, s.y] for s in sources if not s.is_aggregate])
    aggregates = [s for s in sources if s.is_aggregate]
    if len(leaves):
        ax.scatter(leaves[:, 0], leaves[:, 1], s=10, c="#2ca02c", zorder=3, label="elements")
    if aggregates:
        ax.scatter(
            [s.x for s in aggregates],
            [s.y for s in aggregates],
            s=[10 + 4 * s.mass for s in aggregates],
            c="#d62728",
            alpha=0.6,
            zorder=3,
            label="aggregates",
        )
    ax.scatter([target.x], [target.y], s=80, marker="*", c="black", zorder=4, label="target")
    ax.set_title(f"theta={theta}: {len(sources)} interactions instead of {len(tree) - 1}")
    ax.legend(loc="upper right")

    for ax in axes:
        ax.set_xlim(tree.bounds.x, tree.bounds.max_x)
        ax.set_ylim(tree.bounds.max_y, tree.bounds.y)
        ax.set_aspect("equal")

    plt.tight_layout()
    filepath = BUILD_DIR / filename
    plt.savefig(filepath, dpi=120)
    plt.close(fig)
    print(f"Saved {filepath}")


def generate_all():
    ensure_build_dir()
    positions = create_clustered_points()
    model = ArrayLayoutModel(positions)
    tree = BarnesHutQuadTree.from_size(1000, 1000).rebuild(model)

    for theta in (0.3, 0.5, 1.0):
        visualize(tree, positions, theta, "Clustered points", f"quadtree_theta_{theta}.png")


if __name__ == "__main__":
    generate_all()
