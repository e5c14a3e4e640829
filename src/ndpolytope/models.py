"""
Data classes for N-dimensional geometry.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .matrix import MatrixND
from .projection import ProjectionConfig, project_points_to_3d
from .vector import VectorND


@dataclass(frozen=True)
class GeometryND:
    """Vertices, edges and (optionally) faces of a shape in N dimensions.

    Instances are never modified. Transforming a geometry produces a new
    one that shares the edge and face tables.

    Attributes:
        name: Display name, e.g. 'Tesseract'
        dimension: Dimension of the space the geometry lives in
        vertices: Vertex positions
        edges: Unordered vertex index pairs
        faces: Vertex index tuples of the 2-D faces, or None
    """
    name: str
    dimension: int
    vertices: tuple[VectorND, ...]
    edges: tuple[tuple[int, int], ...] = field(default_factory=tuple)
    faces: tuple[tuple[int, ...], ...] | None = None

    def __post_init__(self):
        object.__setattr__(self, "vertices", tuple(self.vertices))
        object.__setattr__(self, "edges", tuple((int(a), int(b)) for a, b in self.edges))
        if self.faces is not None:
            object.__setattr__(
                self, "faces", tuple(tuple(int(i) for i in face) for face in self.faces)
            )

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    @property
    def face_count(self) -> int:
        return len(self.faces) if self.faces is not None else 0

    def vertex_array(self) -> np.ndarray:
        """Vertices as a (V, dimension) array."""
        if not self.vertices:
            return np.zeros((0, self.dimension))
        return np.stack([v.to_array() for v in self.vertices])

    def center(self) -> VectorND:
        """Centroid of the vertices."""
        if not self.vertices:
            return VectorND.zero(self.dimension)
        return VectorND(np.mean(self.vertex_array(), axis=0))

    def _with_vertices(self, vertices: Sequence[VectorND]) -> GeometryND:
        return GeometryND(
            name=self.name,
            dimension=self.dimension,
            vertices=tuple(vertices),
            edges=self.edges,
            faces=self.faces,
        )

    def scale_to_unit(self) -> GeometryND:
        """Copy scaled so the farthest vertex is at distance 1 from the centroid."""
        center = self.center()
        centered = [v.subtract(center) for v in self.vertices]
        max_dist = max((v.magnitude() for v in centered), default=0.0)
        if max_dist == 0:
            return self._with_vertices(centered)
        return self._with_vertices([v.scale(1.0 / max_dist) for v in centered])

    def translate(self, offset: VectorND) -> GeometryND:
        """Copy moved by ``offset`` (zero-padded or truncated to ``dimension``)."""
        offset = offset.extend(self.dimension).truncate(self.dimension)
        return self._with_vertices([v.add(offset) for v in self.vertices])

    def transformed(self, matrix: MatrixND) -> GeometryND:
        """Copy with every vertex multiplied by ``matrix``.

        Raises:
            DimensionMismatchError: If the matrix size differs from ``dimension``
        """
        return self._with_vertices(matrix.transform_all(list(self.vertices)))

    def project_to_3d(self, config: ProjectionConfig) -> list[VectorND]:
        """Vertex positions collapsed to three dimensions."""
        return project_points_to_3d(self.vertices, config)

    def is_valid(self) -> bool:
        """Check that indices, vertex dimensions and edge uniqueness hold.

        Returns:
            True if the geometry satisfies all structural invariants
        """
        n = len(self.vertices)
        if any(v.dimension != self.dimension for v in self.vertices):
            return False

        seen = set()
        for a, b in self.edges:
            if not (0 <= a < n and 0 <= b < n):
                return False
            key = (min(a, b), max(a, b))
            if key in seen:
                return False
            seen.add(key)

        for face in self.faces or ():
            if any(not 0 <= i < n for i in face):
                return False

        return True

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        return {
            'name': self.name,
            'dimension': self.dimension,
            'vertices': [list(v.components) for v in self.vertices],
            'edges': [list(e) for e in self.edges],
            'faces': [list(f) for f in self.faces] if self.faces is not None else None,
        }
