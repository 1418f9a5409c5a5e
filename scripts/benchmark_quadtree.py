#!/usr/bin/env python3
"""
Benchmark Barnes-Hut force approximation against exact pairwise evaluation.

Usage:
    uv run python scripts/benchmark_quadtree.py [--sizes N,...] [--thetas T,...]

Examples:
    uv run python scripts/benchmark_quadtree.py
    uv run python scripts/benchmark_quadtree.py --sizes 500,2000 --thetas 0.3,0.5,1.0
    uv run python scripts/benchmark_quadtree.py --workers 4 --output results.json
"""

from __future__ import annotations

import argparse
import json
import time
from pathlib import Path
from typing import Any

import numpy as np

from layout_spatial import (
    ArrayLayoutModel,
    BarnesHutQuadTree,
    FruchtermanReingoldRepulsion,
    accumulate_forces,
    pairwise_forces,
)


def benchmark_size(
    n: int,
    thetas: list[float],
    canvas: float = 1000.0,
    workers: int | None = None,
    seed: int = 42,
) -> list[dict[str, Any]]:
    """
    Time tree rebuild + traversal for each theta, and the exact O(n^2) pass.

    Returns:
        One result dict per theta
    """
    rng = np.random.default_rng(seed)
    model = ArrayLayoutModel(rng.uniform(0, canvas, size=(n, 2)))
    k = np.sqrt(canvas * canvas / n)
    law = FruchtermanReingoldRepulsion(k_sq=k * k)

    tree = BarnesHutQuadTree.from_size(canvas, canvas, force_law=law)
    tree.rebuild(model)

    start = time.perf_counter()
    exact = pairwise_forces(tree.force_objects, tree.force_objects, law)
    exact_time = time.perf_counter() - start
    exact_norm = np.linalg.norm(exact, axis=1)

    results = []
    for theta in thetas:
        tree.theta = theta

        start = time.perf_counter()
        tree.rebuild(model)
        build_time = time.perf_counter() - start

        start = time.perf_counter()
        approx = accumulate_forces(tree, tree.force_objects, max_workers=workers)
        query_time = time.perf_counter() - start

        error = np.linalg.norm(approx - exact, axis=1)
        rel_error = error / np.maximum(exact_norm, 1e-12)

        results.append(
            {
                "num_nodes": n,
                "theta": theta,
                "tree_nodes": tree.node_count,
                "tree_depth": tree.depth,
                "build_seconds": build_time,
                "query_seconds": query_time,
                "exact_seconds": exact_time,
                "speedup": exact_time / max(build_time + query_time, 1e-12),
                "max_rel_error": float(rel_error.max()),
                "mean_rel_error": float(rel_error.mean()),
            }
        )
    return results


def print_results(results: list[dict[str, Any]]) -> None:
    """Print results as a table."""
    header = (
        f"{'n':>7} {'theta':>6} {'nodes':>7} {'depth':>5} {'build':>9} "
        f"{'query':>9} {'exact':>9} {'speedup':>8} {'max err':>9} {'mean err':>9}"
    )
    print(header)
    print("-" * len(header))
    for r in results:
        print(
            f"{r['num_nodes']:>7} {r['theta']:>6.2f} {r['tree_nodes']:>7} {r['tree_depth']:>5} "
            f"{r['build_seconds']:>8.3f}s {r['query_seconds']:>8.3f}s {r['exact_seconds']:>8.3f}s "
            f"{r['speedup']:>7.1f}x {r['max_rel_error']:>9.2e} {r['mean_rel_error']:>9.2e}"
        )


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark the Barnes-Hut quadtree")
    parser.add_argument(
        "--sizes",
        default="100,500,1000",
        help="Comma-separated element counts (default: 100,500,1000)",
    )
    parser.add_argument(
        "--thetas",
        default="0.0,0.5,1.0",
        help="Comma-separated theta values (default: 0.0,0.5,1.0)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Threads for per-element traversals (default: single thread)",
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--output", type=Path, default=None, help="Write results as JSON")
    args = parser.parse_args()

    sizes = [int(s) for s in args.sizes.split(",") if s]
    thetas = [float(t) for t in args.thetas.split(",") if t]

    results: list[dict[str, Any]] = []
    for n in sizes:
        print(f"Benchmarking n={n}...")
        results.extend(benchmark_size(n, thetas, workers=args.workers, seed=args.seed))

    print()
    print_results(results)

    if args.output is not None:
        with open(args.output, "w") as f:
            json.dump(results, f, indent=2)
        print(f"\nResults written to {args.output}")


if __name__ == "__main__":
    main()
