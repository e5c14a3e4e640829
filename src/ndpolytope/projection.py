"""
Dimension-reduction projections.

Each projector maps an N-dimensional point to N-1 dimensions by dropping
the last coordinate, optionally scaling the others by how far the point
sits along that coordinate. :func:`project_to_3d` repeats one projector
until the point is three-dimensional.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

import numpy as np

from .config import DEFAULT_POLE_DISTANCE, DEFAULT_VIEW_DISTANCE
from .vector import VectorND

logger = logging.getLogger(__name__)


class ProjectionType(str, Enum):
    PERSPECTIVE = "perspective"
    ORTHOGRAPHIC = "orthographic"
    STEREOGRAPHIC = "stereographic"


@dataclass(frozen=True)
class ProjectionConfig:
    """How to collapse a dimension.

    Attributes:
        type: Projection rule
        view_distance: Eye distance for perspective (default 2)
        pole_distance: Pole distance for stereographic (default 1)
    """
    type: ProjectionType = ProjectionType.PERSPECTIVE
    view_distance: float | None = None
    pole_distance: float | None = None


def _central_project(point: VectorND, distance: float) -> VectorND:
    # Shared by perspective and stereographic: scale by d / (d - last), drop last.
    n = point.dimension
    if n < 2:
        return point

    coords = point.to_array()
    # A point at the eye/pole yields inf or nan rather than an exception
    with np.errstate(divide='ignore', invalid='ignore'):
        scale = np.float64(distance) / (np.float64(distance) - coords[-1])
        return VectorND(coords[:-1] * scale)


def perspective_project(point: VectorND, view_distance: float = DEFAULT_VIEW_DISTANCE) -> VectorND:
    """Project to N-1 dimensions with perspective foreshortening.

    Points with a larger last coordinate are closer to the viewer and come
    out larger. Points at ``last == view_distance`` are not clamped.

    Args:
        point: N-dimensional point
        view_distance: Distance of the viewpoint from the origin along the last axis

    Returns:
        (N-1)-dimensional point
    """
    return _central_project(point, view_distance)


def orthographic_project(point: VectorND) -> VectorND:
    """Drop the last coordinate, no scaling."""
    return point.truncate(point.dimension - 1)


def stereographic_project(point: VectorND, pole_distance: float = DEFAULT_POLE_DISTANCE) -> VectorND:
    """Project from a pole onto the hyperplane through the origin.

    Conformal for points on the sphere of radius ``pole_distance``: the
    opposite pole lands on the origin and the equator keeps its radius.

    Args:
        point: N-dimensional point, typically on or near a hypersphere
        pole_distance: Distance of the projection pole from the origin

    Returns:
        (N-1)-dimensional point
    """
    return _central_project(point, pole_distance)


_PROJECTORS: dict[ProjectionType, Callable[[VectorND, ProjectionConfig], VectorND]] = {
    ProjectionType.PERSPECTIVE: lambda p, c: perspective_project(
        p, DEFAULT_VIEW_DISTANCE if c.view_distance is None else c.view_distance
    ),
    ProjectionType.ORTHOGRAPHIC: lambda p, c: orthographic_project(p),
    ProjectionType.STEREOGRAPHIC: lambda p, c: stereographic_project(
        p, DEFAULT_POLE_DISTANCE if c.pole_distance is None else c.pole_distance
    ),
}


def project(point: VectorND, config: ProjectionConfig) -> VectorND:
    """Reduce ``point`` by one dimension according to ``config``.

    Unrecognised projection types fall back to orthographic.
    """
    try:
        kind = ProjectionType(config.type)
    except ValueError:
        logger.debug("Unknown projection type %r, using orthographic", config.type)
        kind = ProjectionType.ORTHOGRAPHIC
    return _PROJECTORS[kind](point, config)


def project_to_3d(point: VectorND, config: ProjectionConfig) -> VectorND:
    """Project one dimension at a time (N -> N-1 -> ... -> 3).

    Every step uses the same projection type and parameters. Points with
    three or fewer dimensions are returned unchanged.
    """
    current = point
    while current.dimension > 3:
        current = project(current, config)
    return current


def project_points_to_3d(points: Iterable[VectorND], config: ProjectionConfig) -> list[VectorND]:
    return [project_to_3d(p, config) for p in points]


def get_depth_value(point: VectorND, min_val: float = -1.0, max_val: float = 1.0) -> float:
    """Linear remap of the last coordinate from [min_val, max_val] to [0, 1].

    Not clamped: coordinates outside the range map outside [0, 1].
    An empty range gives inf or nan.
    """
    last = point.get(point.dimension - 1)
    with np.errstate(divide='ignore', invalid='ignore'):
        return float((np.float64(last) - min_val) / (np.float64(max_val) - min_val))
