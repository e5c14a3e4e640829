"""Errors raised for structurally invalid arguments."""


class DimensionMismatchError(ValueError):
    """Operand sizes are incompatible (matrix/matrix, matrix/vector, rotation/vector)."""


class InvalidRotationPlaneError(ValueError):
    """A rotation plane was given two equal axes or an axis outside the space."""
