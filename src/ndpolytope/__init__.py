"""
ndpolytope - N-dimensional Polytope Geometry Kernel.

Generates regular and semi-regular polytopes in any dimension, rotates
them in coordinate planes and projects them step by step down to 3-D.

Example:
    >>> from ndpolytope import create_hypercube, rotation_from_angles
    >>> from ndpolytope import ProjectionConfig, ProjectionType
    >>>
    >>> tesseract = create_hypercube(4)
    >>> print(tesseract.vertex_count, tesseract.edge_count)
    16 32

    >>> # Rotate in the XW plane, then collapse to 3-D
    >>> turned = tesseract.transformed(rotation_from_angles(4, {'XW': 0.5}))
    >>> points = turned.project_to_3d(ProjectionConfig(ProjectionType.PERSPECTIVE))
"""

import logging

__version__ = "1.0.0"

# Linear algebra
from .exceptions import DimensionMismatchError, InvalidRotationPlaneError
from .matrix import MatrixND
from .vector import VectorND

# Rotations
from .rotation import (
    RotationND,
    axis_name,
    default_active_planes,
    get_rotation_plane_names,
    get_rotation_planes,
    rotation_from_angles,
)

# Projection
from .projection import (
    ProjectionConfig,
    ProjectionType,
    get_depth_value,
    orthographic_project,
    perspective_project,
    project,
    project_points_to_3d,
    project_to_3d,
    stereographic_project,
)

# Data classes
from .models import GeometryND

# Generators
from .polytopes import (
    GEOMETRY_GENERATORS,
    GeometryType,
    create_24_cell,
    create_600_cell,
    create_clifford_torus,
    create_duocylinder,
    create_geometry,
    create_grand_antiprism,
    create_hypercone,
    create_hypercube,
    create_orthoplex,
    create_simplex,
    get_available_geometries,
    get_generator,
    list_geometries,
)

# Structure inference
from .inference import connect_within_tolerance, deduplicate_rounded, triangle_closure

from .logging_config import setup_logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Linear algebra
    "VectorND",
    "MatrixND",
    "DimensionMismatchError",
    "InvalidRotationPlaneError",
    # Rotations
    "RotationND",
    "axis_name",
    "get_rotation_planes",
    "get_rotation_plane_names",
    "rotation_from_angles",
    "default_active_planes",
    # Projection
    "ProjectionType",
    "ProjectionConfig",
    "perspective_project",
    "orthographic_project",
    "stereographic_project",
    "project",
    "project_to_3d",
    "project_points_to_3d",
    "get_depth_value",
    # Data classes
    "GeometryND",
    # Generators
    "GeometryType",
    "GEOMETRY_GENERATORS",
    "create_hypercube",
    "create_simplex",
    "create_orthoplex",
    "create_24_cell",
    "create_600_cell",
    "create_clifford_torus",
    "create_duocylinder",
    "create_hypercone",
    "create_grand_antiprism",
    "create_geometry",
    "get_generator",
    "list_geometries",
    "get_available_geometries",
    # Structure inference
    "connect_within_tolerance",
    "triangle_closure",
    "deduplicate_rounded",
    # Logging
    "setup_logging",
]
