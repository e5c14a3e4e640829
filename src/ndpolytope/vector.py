"""
N-dimensional vector value type.

Vectors of different dimension can be mixed freely: ``add``/``subtract``
zero-pad the shorter operand, ``dot`` only looks at the shared leading
components. Nothing in this module raises on a dimension mismatch.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator

import numpy as np

from .config import VECTOR_EPSILON


def _frozen(values) -> np.ndarray:
    arr = np.array(values, dtype=np.float64).reshape(-1)
    arr.flags.writeable = False
    return arr


class VectorND:
    """Immutable vector of arbitrary dimension.

    Args:
        components: Coordinates, in axis order.

    Example:
        >>> VectorND([1, 2]).add(VectorND([3, 4, 5])).components
        (4.0, 6.0, 5.0)
    """

    __slots__ = ("_data",)

    def __init__(self, components: Iterable[float]):
        if isinstance(components, np.ndarray):
            self._data = _frozen(components)
        else:
            self._data = _frozen(list(components))

    @classmethod
    def _wrap(cls, arr: np.ndarray) -> VectorND:
        # Takes ownership of a freshly computed array
        vec = cls.__new__(cls)
        arr = arr.astype(np.float64, copy=False).reshape(-1)
        arr.flags.writeable = False
        vec._data = arr
        return vec

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def zero(cls, dimension: int) -> VectorND:
        return cls._wrap(np.zeros(max(dimension, 0)))

    @classmethod
    def basis(cls, dimension: int, axis: int) -> VectorND:
        """Unit vector along ``axis``; all zeros if the axis is outside the space."""
        arr = np.zeros(max(dimension, 0))
        if 0 <= axis < dimension:
            arr[axis] = 1.0
        return cls._wrap(arr)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    @property
    def dimension(self) -> int:
        return self._data.shape[0]

    @property
    def components(self) -> tuple[float, ...]:
        return tuple(float(c) for c in self._data)

    def get(self, index: int) -> float:
        """Component at ``index``, or 0.0 when the index is out of range."""
        if 0 <= index < self._data.shape[0]:
            return float(self._data[index])
        return 0.0

    def to_array(self) -> np.ndarray:
        return self._data.copy()

    def clone(self) -> VectorND:
        return VectorND._wrap(self._data.copy())

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------

    def _padded(self, dimension: int) -> np.ndarray:
        if dimension <= self.dimension:
            return self._data
        out = np.zeros(dimension)
        out[:self.dimension] = self._data
        return out

    def add(self, other: VectorND) -> VectorND:
        dim = max(self.dimension, other.dimension)
        return VectorND._wrap(self._padded(dim) + other._padded(dim))

    def subtract(self, other: VectorND) -> VectorND:
        dim = max(self.dimension, other.dimension)
        return VectorND._wrap(self._padded(dim) - other._padded(dim))

    def scale(self, scalar: float) -> VectorND:
        return VectorND._wrap(self._data * scalar)

    def dot(self, other: VectorND) -> float:
        n = min(self.dimension, other.dimension)
        return float(np.dot(self._data[:n], other._data[:n]))

    def magnitude_squared(self) -> float:
        return self.dot(self)

    def magnitude(self) -> float:
        return math.sqrt(self.magnitude_squared())

    def normalize(self) -> VectorND:
        mag = self.magnitude()
        if mag == 0:
            return VectorND.zero(self.dimension)
        return self.scale(1 / mag)

    def project_onto(self, other: VectorND) -> VectorND:
        """Component of this vector along ``other``."""
        other_mag_sq = other.magnitude_squared()
        if other_mag_sq == 0:
            return VectorND.zero(self.dimension)
        return other.scale(self.dot(other) / other_mag_sq)

    def truncate(self, new_dimension: int) -> VectorND:
        """First ``new_dimension`` components."""
        return VectorND._wrap(self._data[:max(new_dimension, 0)].copy())

    def extend(self, new_dimension: int) -> VectorND:
        """Zero-pad up to ``new_dimension``; returns self if already that large."""
        if new_dimension <= self.dimension:
            return self
        return VectorND._wrap(self._padded(new_dimension))

    def equals(self, other: VectorND, epsilon: float = VECTOR_EPSILON) -> bool:
        if self.dimension != other.dimension:
            return False
        return bool(np.all(np.abs(self._data - other._data) <= epsilon))

    # ------------------------------------------------------------------
    # Python protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return self.dimension

    def __iter__(self) -> Iterator[float]:
        return iter(self.components)

    def __getitem__(self, index: int | slice) -> float | VectorND:
        if isinstance(index, slice):
            return VectorND._wrap(self._data[index].copy())
        if not isinstance(index, (int, np.integer)):
            raise TypeError(
                f"VectorND indices must be integers or slices, not {type(index).__name__}"
            )
        return self.get(int(index))

    def __add__(self, other: VectorND) -> VectorND:
        if not isinstance(other, VectorND):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: VectorND) -> VectorND:
        if not isinstance(other, VectorND):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self) -> VectorND:
        return self.scale(-1.0)

    def __mul__(self, scalar: float) -> VectorND:
        if isinstance(scalar, VectorND):
            return NotImplemented
        return self.scale(scalar)

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VectorND):
            return NotImplemented
        return self.dimension == other.dimension and bool(np.array_equal(self._data, other._data))

    def __hash__(self) -> int:
        return hash(self.components)

    def __repr__(self) -> str:
        return f"VectorND({list(self.components)!r})"

    def __str__(self) -> str:
        return "(" + ", ".join(f"{c:.3f}" for c in self._data) + ")"
