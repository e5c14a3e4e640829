"""
Square matrices for N-dimensional linear transforms.

Mostly used for plane rotations; see :mod:`ndpolytope.rotation`.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from .exceptions import DimensionMismatchError, InvalidRotationPlaneError
from .vector import VectorND


class MatrixND:
    """Immutable ``size x size`` matrix.

    Args:
        data: Rows of the matrix. Every row must have ``len(data)`` entries.

    Raises:
        DimensionMismatchError: If the data is not square.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Sequence[Sequence[float]] | np.ndarray):
        try:
            arr = np.array(data, dtype=np.float64)
        except ValueError as exc:
            # Ragged rows
            raise DimensionMismatchError(f"Matrix data must be square: {exc}") from exc
        if arr.size == 0:
            arr = arr.reshape(0, 0)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise DimensionMismatchError(
                f"Matrix data must be square, got shape {arr.shape}"
            )
        arr.flags.writeable = False
        self._data = arr

    @classmethod
    def _wrap(cls, arr: np.ndarray) -> MatrixND:
        m = cls.__new__(cls)
        arr.flags.writeable = False
        m._data = arr
        return m

    @classmethod
    def identity(cls, size: int) -> MatrixND:
        return cls._wrap(np.eye(size))

    @classmethod
    def zero(cls, size: int) -> MatrixND:
        return cls._wrap(np.zeros((size, size)))

    @classmethod
    def rotation(cls, size: int, axis1: int, axis2: int, angle: float) -> MatrixND:
        """Rotation by ``angle`` radians in the plane spanned by two axes.

        In N dimensions rotations happen in 2-D planes, not around axes:
        every coordinate other than ``axis1`` and ``axis2`` is left alone.

        Args:
            size: Dimension of the matrix
            axis1: First axis of the rotation plane (0-indexed)
            axis2: Second axis of the rotation plane (0-indexed)
            angle: Rotation angle in radians

        Returns:
            Identity matrix with the four plane cells replaced

        Raises:
            InvalidRotationPlaneError: If either axis lies outside [0, size)
        """
        if not (0 <= axis1 < size and 0 <= axis2 < size):
            raise InvalidRotationPlaneError(
                f"Rotation axes ({axis1}, {axis2}) out of bounds for dimension {size}"
            )
        arr = np.eye(size)
        c = math.cos(angle)
        s = math.sin(angle)
        arr[axis1, axis1] = c
        arr[axis1, axis2] = -s
        arr[axis2, axis1] = s
        arr[axis2, axis2] = c
        return cls._wrap(arr)

    @property
    def size(self) -> int:
        return self._data.shape[0]

    def get(self, row: int, col: int) -> float:
        """Element at (row, col), or 0.0 outside the matrix."""
        if 0 <= row < self.size and 0 <= col < self.size:
            return float(self._data[row, col])
        return 0.0

    def set(self, row: int, col: int, value: float) -> MatrixND:
        """Copy of this matrix with one element replaced.

        Out-of-range positions leave the matrix unchanged.
        """
        if not (0 <= row < self.size and 0 <= col < self.size):
            return self
        arr = self._data.copy()
        arr[row, col] = value
        return MatrixND._wrap(arr)

    def multiply(self, other: MatrixND) -> MatrixND:
        """Matrix product ``self x other``."""
        if self.size != other.size:
            raise DimensionMismatchError(
                f"Matrix size mismatch: {self.size} vs {other.size}"
            )
        return MatrixND._wrap(self._data @ other._data)

    def transform(self, vector: VectorND) -> VectorND:
        """Matrix-vector product."""
        if vector.dimension != self.size:
            raise DimensionMismatchError(
                f"Vector dimension {vector.dimension} doesn't match matrix size {self.size}"
            )
        return VectorND._wrap(self._data @ vector.to_array())

    def transform_all(self, vectors: Sequence[VectorND]) -> list[VectorND]:
        """Transform many vectors with a single batched product."""
        if not vectors:
            return []
        for v in vectors:
            if v.dimension != self.size:
                raise DimensionMismatchError(
                    f"Vector dimension {v.dimension} doesn't match matrix size {self.size}"
                )
        points = np.stack([v.to_array() for v in vectors])
        rotated = points @ self._data.T
        return [VectorND._wrap(row.copy()) for row in rotated]

    def transpose(self) -> MatrixND:
        return MatrixND._wrap(self._data.T.copy())

    def scale(self, scalar: float) -> MatrixND:
        return MatrixND._wrap(self._data * scalar)

    def to_array(self) -> np.ndarray:
        return self._data.copy()

    def clone(self) -> MatrixND:
        return MatrixND._wrap(self._data.copy())

    def __matmul__(self, other):
        if isinstance(other, MatrixND):
            return self.multiply(other)
        if isinstance(other, VectorND):
            return self.transform(other)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MatrixND):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self._data, other._data))

    __hash__ = None

    def __repr__(self) -> str:
        return f"MatrixND({self._data.tolist()!r})"

    def __str__(self) -> str:
        return "\n".join(
            " ".join(f"{v:8.3f}" for v in row) for row in self._data
        )
