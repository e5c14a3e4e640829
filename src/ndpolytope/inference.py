"""
Structure inference from vertex positions.

Used by polytopes whose edges have no simple combinatorial rule: two
vertices are joined when their squared distance is close to a known edge
length, and faces are the triangles of the resulting edge graph.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

import numpy as np
from scipy.spatial import cKDTree

from .config import DEDUP_DECIMALS
from .vector import VectorND

logger = logging.getLogger(__name__)


def _as_array(vertices: Sequence[VectorND]) -> np.ndarray:
    return np.stack([v.to_array() for v in vertices])


def deduplicate_rounded(
    vertices: Sequence[VectorND],
    decimals: int = DEDUP_DECIMALS
) -> list[VectorND]:
    """Drop vertices whose coordinates repeat after rounding.

    Args:
        vertices: Candidate vertices
        decimals: Decimal places compared

    Returns:
        First occurrence of each rounded position, in input order
    """
    unique: list[VectorND] = []
    seen: set[tuple[float, ...]] = set()

    for v in vertices:
        # -0.0 and 0.0 compare and hash equal, so signed zeros collapse
        key = tuple(round(c, decimals) for c in v.components)
        if key in seen:
            continue
        seen.add(key)
        unique.append(v)

    if len(unique) != len(vertices):
        logger.debug("De-duplicated %d vertices to %d", len(vertices), len(unique))
    return unique


def connect_within_tolerance(
    vertices: Sequence[VectorND],
    target_distance_sq: float,
    tolerance: float
) -> list[tuple[int, int]]:
    """Find vertex pairs whose squared distance is near ``target_distance_sq``.

    Candidate pairs come from a KD-tree radius query, so only nearby
    vertices are compared.

    Args:
        vertices: Vertex positions (all of one dimension)
        target_distance_sq: Expected squared edge length
        tolerance: Accepted absolute deviation of the squared distance

    Returns:
        Sorted (i, j) pairs with i < j
    """
    if len(vertices) < 2:
        return []

    points = _as_array(vertices)
    radius = math.sqrt(max(target_distance_sq + tolerance, 0.0))
    tree = cKDTree(points)

    edges = []
    for i, j in tree.query_pairs(radius):
        i, j = min(i, j), max(i, j)
        diff = points[i] - points[j]
        if abs(float(np.dot(diff, diff)) - target_distance_sq) < tolerance:
            edges.append((i, j))

    edges.sort()
    return edges


def triangle_closure(edges: Iterable[tuple[int, int]]) -> list[tuple[int, int, int]]:
    """Every vertex triple that is pairwise connected.

    Args:
        edges: Unordered vertex index pairs

    Returns:
        Sorted (i, j, k) triples with i < j < k
    """
    neighbors: dict[int, set[int]] = {}
    for a, b in edges:
        if a == b:
            continue
        neighbors.setdefault(a, set()).add(b)
        neighbors.setdefault(b, set()).add(a)

    triangles = []
    for i, adj_i in neighbors.items():
        for j in adj_i:
            if j <= i:
                continue
            for k in adj_i & neighbors[j]:
                if k > j:
                    triangles.append((i, j, k))

    triangles.sort()
    return triangles
