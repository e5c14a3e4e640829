"""
Rotations in N-dimensional space.

In N dimensions rotations happen in 2-D *planes*, not around axes. A plane
is a pair of coordinate axes; N-dimensional space has N(N-1)/2 of them
(4-D: XY, XZ, XW, YZ, YW, ZW).

Composition is order-sensitive in four or more dimensions, so
:meth:`RotationND.compose` keeps the caller's list order exactly.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from .config import AXIS_NAMES, ROTATION_ANGLE_THRESHOLD
from .exceptions import DimensionMismatchError, InvalidRotationPlaneError
from .matrix import MatrixND
from .vector import VectorND


def axis_name(axis: int) -> str:
    """Letter for an axis: X, Y, Z, W, V, U, then A6, A7, ..."""
    if 0 <= axis < len(AXIS_NAMES):
        return AXIS_NAMES[axis]
    return f"A{axis}"


@dataclass(frozen=True)
class RotationND:
    """A single rotation by ``angle`` radians in the (axis1, axis2) plane.

    The axes are stored sorted, so ``RotationND(4, 3, 0, a)`` is the same
    rotation as ``RotationND(4, 0, 3, a)``.

    Raises:
        InvalidRotationPlaneError: If the axes are equal or lie outside
            ``[0, dimension)``.
    """

    dimension: int
    axis1: int
    axis2: int
    angle: float

    def __post_init__(self):
        if self.axis1 == self.axis2:
            raise InvalidRotationPlaneError(
                "Rotation plane must be defined by two different axes"
            )
        if (
            self.axis1 >= self.dimension or self.axis2 >= self.dimension
            or self.axis1 < 0 or self.axis2 < 0
        ):
            raise InvalidRotationPlaneError(
                f"Axes {self.axis1}, {self.axis2} out of bounds for dimension {self.dimension}"
            )
        lo, hi = sorted((self.axis1, self.axis2))
        object.__setattr__(self, "axis1", lo)
        object.__setattr__(self, "axis2", hi)

    @property
    def plane(self) -> tuple[int, int]:
        return (self.axis1, self.axis2)

    @property
    def plane_name(self) -> str:
        return axis_name(self.axis1) + axis_name(self.axis2)

    def to_matrix(self) -> MatrixND:
        return MatrixND.rotation(self.dimension, self.axis1, self.axis2, self.angle)

    def apply(self, vector: VectorND) -> VectorND:
        if vector.dimension != self.dimension:
            raise DimensionMismatchError(
                f"Vector dimension {vector.dimension} doesn't match rotation dimension {self.dimension}"
            )
        return self.to_matrix().transform(vector)

    @staticmethod
    def compose(rotations: Sequence[RotationND]) -> MatrixND:
        """Combine rotations into one matrix.

        The first rotation in the list is applied to a vector first:
        each rotation's matrix is left-multiplied onto the running product.

        Args:
            rotations: Rotations sharing one dimension

        Returns:
            The combined transform

        Raises:
            ValueError: If the list is empty
            DimensionMismatchError: If the rotations mix dimensions
        """
        if not rotations:
            raise ValueError("Cannot compose empty rotation list")

        dimension = rotations[0].dimension
        result = MatrixND.identity(dimension)
        for rotation in rotations:
            if rotation.dimension != dimension:
                raise DimensionMismatchError(
                    f"All rotations must have the same dimension "
                    f"(got {rotation.dimension}, expected {dimension})"
                )
            result = rotation.to_matrix().multiply(result)
        return result

    def __str__(self) -> str:
        return f"Rotation({self.plane_name}, {math.degrees(self.angle):.1f}°)"


def get_rotation_planes(dimension: int) -> list[tuple[int, int]]:
    """All axis pairs (i, j) with i < j, ordered by i then j.

    The order is relied upon for plane labels and default plane selection.
    """
    return [(i, j) for i in range(dimension) for j in range(i + 1, dimension)]


def get_rotation_plane_names(dimension: int) -> list[str]:
    """Plane labels ('XY', 'XZ', ...) in :func:`get_rotation_planes` order."""
    return [axis_name(i) + axis_name(j) for i, j in get_rotation_planes(dimension)]


def rotation_from_angles(
    dimension: int,
    angles: Mapping[str, float],
    threshold: float = ROTATION_ANGLE_THRESHOLD,
) -> MatrixND:
    """Build one transform from per-plane angles keyed by plane name.

    Planes are visited in canonical order; planes that are missing or whose
    angle is within ``threshold`` of zero are skipped.

    Args:
        dimension: Dimension of the space
        angles: Mapping like ``{'XW': 0.3, 'YW': 1.2}``; unknown names are ignored
        threshold: Smallest angle magnitude that counts as a rotation

    Returns:
        Combined rotation matrix (identity if no plane is active)
    """
    rotations = [
        RotationND(dimension, i, j, angles[name])
        for (i, j), name in zip(get_rotation_planes(dimension), get_rotation_plane_names(dimension))
        if abs(angles.get(name, 0.0)) > threshold
    ]
    if not rotations:
        return MatrixND.identity(dimension)
    return RotationND.compose(rotations)


def default_active_planes(dimension: int, count: int = 2) -> list[str]:
    """Names of the first ``count`` planes that involve an axis beyond Z.

    These are the planes that make higher-dimensional structure visible
    (4-D: ``['XW', 'YW']``). Empty for three dimensions or fewer.
    """
    names = [
        name
        for (_, j), name in zip(get_rotation_planes(dimension), get_rotation_plane_names(dimension))
        if j >= 3
    ]
    return names[:count]
