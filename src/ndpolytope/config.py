"""
Kernel Constants & Defaults
===========================
Central registry for the numeric defaults shared across the kernel.

Exports:
    DEFAULT_VIEW_DISTANCE (float): Eye distance for perspective projection.
    DEFAULT_POLE_DISTANCE (float): Pole distance for stereographic projection.
    AXIS_NAMES (tuple): Letters used to label axes in rotation-plane names.
"""
import math

# Projection
DEFAULT_VIEW_DISTANCE: float = 2.0
DEFAULT_POLE_DISTANCE: float = 1.0

# Vector comparison
VECTOR_EPSILON: float = 1e-10

# Angles at or below this magnitude are treated as "no rotation"
ROTATION_ANGLE_THRESHOLD: float = 1e-4

# X, Y, Z, W, V, U; axes beyond the sixth are labelled A6, A7, ...
AXIS_NAMES: tuple[str, ...] = ("X", "Y", "Z", "W", "V", "U")

GOLDEN_RATIO: float = (1 + math.sqrt(5)) / 2

# Distance-inferred edges: |d^2 - target| < EDGE_TOLERANCE_FACTOR * size^2
EDGE_TOLERANCE_FACTOR: float = 0.01

# Vertex de-duplication precision (decimal places)
DEDUP_DECIMALS: int = 6

# Hypercone apex height as a multiple of the base radius
HYPERCONE_HEIGHT_FACTOR: float = 1.5
