"""
Polytope Generators.

Procedural constructions for regular and semi-regular polytopes.
Hypercube, simplex and orthoplex work in any dimension; the remaining
shapes are fixed to four dimensions.

Two strategies are used:

* Combinatorial rules (hypercube, simplex, orthoplex, tori, hypercone,
  grand antiprism): edges and faces follow directly from vertex indices.
* Distance inference (24-cell, 600-cell): edges join vertices at the known
  edge length, faces are the triangles of that edge graph.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable
from enum import Enum
from itertools import combinations

from .config import (
    EDGE_TOLERANCE_FACTOR,
    GOLDEN_RATIO,
    HYPERCONE_HEIGHT_FACTOR,
)
from .inference import connect_within_tolerance, deduplicate_rounded, triangle_closure
from .models import GeometryND
from .vector import VectorND

logger = logging.getLogger(__name__)


HYPERCUBE_NAMES = ['Point', 'Segment', 'Square', 'Cube', 'Tesseract', '5-cube', '6-cube', '7-cube']
SIMPLEX_NAMES = ['Point', 'Segment', 'Triangle', 'Tetrahedron', '5-cell', '5-simplex', '6-simplex']
ORTHOPLEX_NAMES = ['Point', 'Segment', 'Square', 'Octahedron', '16-cell', '5-orthoplex']


class GeometryType(str, Enum):
    """Shapes known to :func:`create_geometry`."""

    HYPERCUBE = "hypercube"
    SIMPLEX = "simplex"
    ORTHOPLEX = "orthoplex"
    CELL_24 = "24-cell"
    CELL_600 = "600-cell"
    CLIFFORD_TORUS = "clifford-torus"
    DUOCYLINDER = "duocylinder"
    HYPERCONE = "hypercone"
    GRAND_ANTIPRISM = "grand-antiprism"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def is_4d_only(self) -> bool:
        return self not in _ANY_DIMENSION


_LABELS = {
    GeometryType.HYPERCUBE: 'Hypercube',
    GeometryType.SIMPLEX: 'Simplex',
    GeometryType.ORTHOPLEX: 'Orthoplex',
    GeometryType.CELL_24: '24-cell',
    GeometryType.CELL_600: '600-cell',
    GeometryType.CLIFFORD_TORUS: 'Clifford Torus',
    GeometryType.DUOCYLINDER: 'Duocylinder',
    GeometryType.HYPERCONE: 'Hypercone',
    GeometryType.GRAND_ANTIPRISM: 'Grand Antiprism',
}

_ANY_DIMENSION = (GeometryType.HYPERCUBE, GeometryType.SIMPLEX, GeometryType.ORTHOPLEX)


def _table_name(names: list[str], dimension: int, fallback: str) -> str:
    if 0 <= dimension < len(names):
        return names[dimension]
    return f"{dimension}-{fallback}"


def _log_built(geom: GeometryND) -> GeometryND:
    logger.debug(
        "Built %s: %d vertices, %d edges, %d faces",
        geom.name, geom.vertex_count, geom.edge_count, geom.face_count
    )
    return geom


# =============================================================================
# Combinatorial constructions
# =============================================================================

def create_hypercube(dimension: int, size: float = 1.0) -> GeometryND:
    """Create an N-dimensional hypercube (square, cube, tesseract, ...).

    Vertex ``i`` has coordinate ``d`` equal to ``+size`` when bit ``d`` of
    ``i`` is set and ``-size`` otherwise, so two vertices share an edge
    exactly when their indices differ in one bit.

    Args:
        dimension: Number of dimensions
        size: Half the edge length

    Returns:
        GeometryND with 2^N vertices, N * 2^(N-1) edges and square faces
    """
    count = 1 << dimension
    vertices = [
        VectorND([size if (i >> d) & 1 else -size for d in range(dimension)])
        for i in range(count)
    ]

    edges = []
    for i in range(count):
        for j in range(i + 1, count):
            x = i ^ j
            if x & (x - 1) == 0:
                edges.append((i, j))

    # A square face varies two axes and fixes the remaining N-2
    faces = []
    for axis1, axis2 in combinations(range(dimension), 2):
        others = [d for d in range(dimension) if d != axis1 and d != axis2]
        for combo in range(1 << len(others)):
            base = 0
            for k, d in enumerate(others):
                if (combo >> k) & 1:
                    base |= 1 << d
            faces.append((
                base,
                base | (1 << axis1),
                base | (1 << axis1) | (1 << axis2),
                base | (1 << axis2),
            ))

    return _log_built(GeometryND(
        name=_table_name(HYPERCUBE_NAMES, dimension, 'cube'),
        dimension=dimension,
        vertices=vertices,
        edges=edges,
        faces=faces,
    ))


def create_simplex(dimension: int, size: float = 1.0) -> GeometryND:
    """Create an N-dimensional simplex (triangle, tetrahedron, 5-cell, ...).

    Uses the equidistant embedding where vertex ``i`` has
    ``sqrt((d+1)/(d+2))`` at coordinate ``d == i`` and
    ``-1/sqrt((d+1)(d+2))`` at every earlier coordinate. The result is
    centred on its centroid and rescaled so every vertex is ``size`` from it.

    Args:
        dimension: Number of dimensions
        size: Distance from the centroid to each vertex

    Returns:
        GeometryND with N+1 vertices, a complete edge graph and all triangles
    """
    raw = []
    for i in range(dimension + 1):
        coords = []
        for d in range(dimension):
            if d < i:
                coords.append(-1 / math.sqrt((d + 1) * (d + 2)))
            elif d == i:
                coords.append(math.sqrt((d + 1) / (d + 2)))
            else:
                coords.append(0.0)
        raw.append(VectorND(coords).scale(size))

    center = VectorND.zero(dimension)
    for v in raw:
        center = center.add(v)
    center = center.scale(1 / len(raw))

    centered = [v.subtract(center) for v in raw]
    max_dist = max(v.magnitude() for v in centered)
    if max_dist > 0:
        vertices = [v.scale(size / max_dist) for v in centered]
    else:
        vertices = centered

    n = dimension + 1
    edges = list(combinations(range(n), 2))
    faces = list(combinations(range(n), 3))

    return _log_built(GeometryND(
        name=_table_name(SIMPLEX_NAMES, dimension, 'simplex'),
        dimension=dimension,
        vertices=vertices,
        edges=edges,
        faces=faces,
    ))


def create_orthoplex(dimension: int, size: float = 1.0) -> GeometryND:
    """Create an N-dimensional cross-polytope (square, octahedron, 16-cell, ...).

    Vertex ``2d`` sits at ``+size`` on axis ``d`` and vertex ``2d+1`` at
    ``-size``. Every vertex is joined to every other except its opposite.

    Args:
        dimension: Number of dimensions
        size: Distance of the vertices from the origin

    Returns:
        GeometryND with 2N vertices
    """
    vertices = []
    for d in range(dimension):
        for sign in (1, -1):
            coords = [0.0] * dimension
            coords[d] = sign * size
            vertices.append(VectorND(coords))

    edges = [
        (i, j)
        for i, j in combinations(range(2 * dimension), 2)
        if i // 2 != j // 2
    ]

    # One triangle per choice of three axes and one sign on each
    faces = []
    for a1, a2, a3 in combinations(range(dimension), 3):
        for s1 in range(2):
            for s2 in range(2):
                for s3 in range(2):
                    faces.append((2 * a1 + s1, 2 * a2 + s2, 2 * a3 + s3))

    return _log_built(GeometryND(
        name=_table_name(ORTHOPLEX_NAMES, dimension, 'orthoplex'),
        dimension=dimension,
        vertices=vertices,
        edges=edges,
        faces=faces,
    ))


def _unique_edges(edges: Iterable[tuple[int, int]]) -> list[tuple[int, int]]:
    # Coarse grids wrap onto themselves and repeat edges
    seen = set()
    out = []
    for a, b in edges:
        if a == b:
            continue
        key = (min(a, b), max(a, b))
        if key in seen:
            continue
        seen.add(key)
        out.append((a, b))
    return out


def _toroidal_grid(
    name: str,
    major_segments: int,
    minor_segments: int,
    radius: float
) -> GeometryND:
    """Product of two circles of ``radius`` in the XY and ZW planes."""
    vertices = []
    for i in range(major_segments):
        theta = 2 * math.pi * i / major_segments
        for j in range(minor_segments):
            phi = 2 * math.pi * j / minor_segments
            vertices.append(VectorND([
                radius * math.cos(theta),
                radius * math.sin(theta),
                radius * math.cos(phi),
                radius * math.sin(phi),
            ]))

    edges = []
    faces = []
    for i in range(major_segments):
        ni = (i + 1) % major_segments
        for j in range(minor_segments):
            nj = (j + 1) % minor_segments
            idx = i * minor_segments + j
            right = i * minor_segments + nj
            down = ni * minor_segments + j
            diag = ni * minor_segments + nj

            edges.append((idx, right))
            edges.append((idx, down))
            faces.append((idx, right, diag))
            faces.append((idx, diag, down))

    return _log_built(GeometryND(
        name=name,
        dimension=4,
        vertices=vertices,
        edges=_unique_edges(edges),
        faces=faces,
    ))


def create_clifford_torus(
    major_segments: int = 16,
    minor_segments: int = 16,
    size: float = 1.0
) -> GeometryND:
    """Create a Clifford torus: x^2 + y^2 = z^2 + w^2 = size^2 / 2.

    Every vertex lies at distance ``size`` from the origin.

    Args:
        major_segments: Samples around the XY circle
        minor_segments: Samples around the ZW circle
        size: Distance of every vertex from the origin

    Returns:
        GeometryND with a wrapped major x minor grid of vertices
    """
    return _toroidal_grid(
        'Clifford Torus', major_segments, minor_segments, size / math.sqrt(2)
    )


def create_duocylinder(segments: int = 20, size: float = 1.0) -> GeometryND:
    """Create the ridge of a duocylinder: two perpendicular circles of radius ``size``."""
    return _toroidal_grid('Duocylinder', segments, segments, size)


def create_hypercone(segments: int = 16, rings: int = 8, size: float = 1.0) -> GeometryND:
    """Create a 4-D cone with a spherical base in the W=0 hyperplane.

    The apex sits at ``W = 1.5 * size``. Each ring is a sphere sampled on a
    ``segments x ceil(segments / 2)`` longitude/latitude grid whose radius
    grows from 0 towards ``size`` as W falls to 0.

    Connectivity strides over ``segments * (segments // 2)`` vertices per
    ring. For odd ``segments`` that is shorter than the actual ring, so the
    trailing latitude row of each ring is not joined to the apex or the
    next ring. With two segments the ring loop doubles back on itself and
    the repeated edge is dropped.

    Args:
        segments: Longitude samples per ring
        rings: Number of rings between the apex and the base
        size: Base radius

    Returns:
        GeometryND with the apex at index 0
    """
    height = size * HYPERCONE_HEIGHT_FACTOR
    half = segments / 2
    latitudes = math.ceil(half)

    vertices = [VectorND([0.0, 0.0, 0.0, height])]
    for ring in range(1, rings + 1):
        t = ring / rings
        r = size * t
        w = height * (1 - t)
        for i in range(segments):
            theta = 2 * math.pi * i / segments
            for j in range(latitudes):
                phi = math.pi * j / half
                vertices.append(VectorND([
                    r * math.sin(phi) * math.cos(theta),
                    r * math.sin(phi) * math.sin(theta),
                    r * math.cos(phi),
                    w,
                ]))

    n = len(vertices)
    ring_size = segments * (segments // 2)

    edges = []
    faces = []
    for i in range(1, min(ring_size, n - 1) + 1):
        edges.append((0, i))
        faces.append((0, i, i % ring_size + 1))

    for ring in range(rings - 1):
        start = 1 + ring * ring_size
        next_start = start + ring_size
        for i in range(ring_size):
            curr = start + i
            down = next_start + i
            if curr >= n or down >= n:
                break
            nxt = start + (i + 1) % ring_size
            edges.append((curr, down))
            if nxt < n:
                edges.append((curr, nxt))
                faces.append((curr, nxt, down))

    return _log_built(GeometryND(
        name='Hypercone',
        dimension=4,
        vertices=vertices,
        edges=_unique_edges(edges),
        faces=faces,
    ))


def create_grand_antiprism(size: float = 1.0) -> GeometryND:
    """Create a 100-vertex approximation of the grand antiprism.

    Two stacks of five concentric decagons, one spanning XY (stacked along
    Z) and one spanning ZW (stacked along Y). Decagons are closed loops,
    neighbouring layers are zig-zag connected, and vertex ``i`` of the first
    stack joins ``50 + 3i mod 50`` and ``50 + (3i + 1) mod 50`` of the
    second. This is a visual stand-in, not the uniform polytope's adjacency.

    Args:
        size: Overall scale

    Returns:
        GeometryND with 100 vertices
    """
    n = 10
    layers = 5
    stack = n * layers

    vertices = []
    for ring in range(2):
        for layer in range(layers):
            r = size * (0.5 + 0.2 * layer)
            offset = layer * 0.3 * size - size * 0.6
            for i in range(n):
                angle = 2 * math.pi * i / n
                c = r * math.cos(angle)
                s = r * math.sin(angle)
                if ring == 0:
                    vertices.append(VectorND([c, s, offset, 0.0]))
                else:
                    vertices.append(VectorND([0.0, offset, c, s]))

    edges = []
    for ring in range(2):
        for layer in range(layers):
            layer_base = ring * stack + layer * n
            for i in range(n):
                edges.append((layer_base + i, layer_base + (i + 1) % n))
                if layer < layers - 1:
                    edges.append((layer_base + i, layer_base + n + i))
                    edges.append((layer_base + i, layer_base + n + (i + 1) % n))

    for i in range(stack):
        edges.append((i, stack + (i * 3) % stack))
        edges.append((i, stack + (i * 3 + 1) % stack))

    faces = []
    for ring in range(2):
        for layer in range(layers - 1):
            layer_base = ring * stack + layer * n
            for i in range(n):
                ni = (i + 1) % n
                faces.append((layer_base + i, layer_base + ni, layer_base + n + i))
                faces.append((layer_base + ni, layer_base + n + ni, layer_base + n + i))

    return _log_built(GeometryND(
        name='Grand Antiprism',
        dimension=4,
        vertices=vertices,
        edges=edges,
        faces=faces,
    ))


# =============================================================================
# Distance-inferred constructions
# =============================================================================

def _axis_vertices(size: float) -> list[VectorND]:
    """The 8 vertices (+-size, 0, 0, 0) and permutations."""
    out = []
    for d in range(4):
        for sign in (-1, 1):
            coords = [0.0] * 4
            coords[d] = sign * size
            out.append(VectorND(coords))
    return out


def _half_vertices(size: float) -> list[VectorND]:
    """The 16 vertices (+-size/2, +-size/2, +-size/2, +-size/2)."""
    return [
        VectorND([0.5 * size if (i >> d) & 1 else -0.5 * size for d in range(4)])
        for i in range(16)
    ]


def create_24_cell(size: float = 1.0) -> GeometryND:
    """Create a 24-cell, the self-dual regular polytope unique to 4-D.

    Vertices are the 8 axis points and 16 half-coordinate points, all at
    distance ``size`` from the origin. Vertices at squared distance
    ``2 * size^2`` are joined and faces are the triangles of that graph.

    Args:
        size: Circumradius

    Returns:
        GeometryND with 24 vertices
    """
    vertices = _axis_vertices(size) + _half_vertices(size)

    edges = connect_within_tolerance(
        vertices,
        target_distance_sq=2 * size * size,
        tolerance=EDGE_TOLERANCE_FACTOR * size * size,
    )
    faces = triangle_closure(edges)

    return _log_built(GeometryND(
        name='24-cell',
        dimension=4,
        vertices=vertices,
        edges=edges,
        faces=faces,
    ))


# Even permutations of four positions
_EVEN_PERMUTATIONS = [
    (0, 1, 2, 3), (0, 2, 3, 1), (0, 3, 1, 2),
    (1, 0, 3, 2), (1, 2, 0, 3), (1, 3, 2, 0),
    (2, 0, 1, 3), (2, 1, 3, 0), (2, 3, 0, 1),
    (3, 0, 2, 1), (3, 1, 0, 2), (3, 2, 1, 0),
]


def _golden_vertices(size: float) -> list[VectorND]:
    """The 96 even permutations of (+-phi/2, +-1/2, +-1/(2 phi), 0) * size."""
    values = (GOLDEN_RATIO / 2 * size, 0.5 * size, 1 / (2 * GOLDEN_RATIO) * size, 0.0)

    out = []
    for perm in _EVEN_PERMUTATIONS:
        base = [values[p] for p in perm]
        nonzero = [i for i, p in enumerate(perm) if values[p] != 0]
        for signs in range(8):
            coords = list(base)
            for bit, pos in enumerate(nonzero):
                if (signs >> bit) & 1:
                    coords[pos] = -coords[pos]
            out.append(VectorND(coords))
    return out


def create_600_cell(size: float = 1.0) -> GeometryND:
    """Create a 600-cell: 120 vertices, 720 edges, 1200 triangular faces.

    Vertices are the 24-cell's 24 vertices plus 96 golden-ratio vertices,
    de-duplicated after rounding. The edge length is ``size / phi``.

    Args:
        size: Circumradius

    Returns:
        GeometryND with 120 vertices
    """
    candidates = _axis_vertices(size) + _half_vertices(size) + _golden_vertices(size)
    vertices = deduplicate_rounded(candidates)

    edge_length = size / GOLDEN_RATIO
    edges = connect_within_tolerance(
        vertices,
        target_distance_sq=edge_length * edge_length,
        tolerance=EDGE_TOLERANCE_FACTOR * size * size,
    )
    faces = triangle_closure(edges)

    return _log_built(GeometryND(
        name='600-cell',
        dimension=4,
        vertices=vertices,
        edges=edges,
        faces=faces,
    ))


# =============================================================================
# Catalog
# =============================================================================

def get_available_geometries(dimension: int) -> list[GeometryType]:
    """Shapes that can be generated in ``dimension``."""
    if dimension == 4:
        return list(GeometryType)
    return list(_ANY_DIMENSION)


GEOMETRY_GENERATORS: dict[GeometryType, Callable[[int, float], GeometryND]] = {
    GeometryType.HYPERCUBE: create_hypercube,
    GeometryType.SIMPLEX: create_simplex,
    GeometryType.ORTHOPLEX: create_orthoplex,
    GeometryType.CELL_24: lambda dimension, size: create_24_cell(size),
    GeometryType.CELL_600: lambda dimension, size: create_600_cell(size),
    GeometryType.CLIFFORD_TORUS: lambda dimension, size: create_clifford_torus(size=size),
    GeometryType.DUOCYLINDER: lambda dimension, size: create_duocylinder(size=size),
    GeometryType.HYPERCONE: lambda dimension, size: create_hypercone(size=size),
    GeometryType.GRAND_ANTIPRISM: lambda dimension, size: create_grand_antiprism(size),
}


def list_geometries() -> list[str]:
    return [kind.value for kind in GeometryType]


def get_generator(kind: GeometryType | str) -> Callable[[int, float], GeometryND]:
    """Look up the generator for a shape.

    Raises:
        ValueError: If the shape name is unknown
    """
    try:
        return GEOMETRY_GENERATORS[GeometryType(kind)]
    except ValueError:
        raise ValueError(
            f"Unknown geometry type: {kind}. Available: {list_geometries()}"
        ) from None


def create_geometry(
    kind: GeometryType | str,
    dimension: int = 4,
    size: float = 1.0
) -> GeometryND:
    """Generate a shape by name with its default resolution.

    Args:
        kind: Shape, e.g. GeometryType.HYPERCUBE or 'hypercube'
        dimension: Dimension of the space
        size: Scale passed to the generator

    Returns:
        GeometryND

    Raises:
        ValueError: If the shape is unknown or only exists in 4-D and
            another dimension was requested
    """
    generator = get_generator(kind)
    kind = GeometryType(kind)
    if kind.is_4d_only and dimension != 4:
        raise ValueError(f"{kind.label} only exists in 4 dimensions, not {dimension}")
    return generator(dimension, size)
