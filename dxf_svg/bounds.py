"""
Bounds Module

Computes the axis-aligned bounding box of a sequence of entities:
- Lines and polylines contribute their vertices
- Circles contribute center +- radius on both axes
- Arcs contribute their endpoints plus every axis extreme inside the sweep
- Ellipses contribute their full-ellipse extent
- Points and texts contribute their location
- Other entities contribute nothing

An empty result is reported as None so callers can fall back to a default
viewport instead of fitting a zero-area box.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from .entities import Entity, EntityKind, Point2D

logger = logging.getLogger("Bounds")


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box, min <= max on both axes"""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def union(self, other: "BoundingBox") -> "BoundingBox":
        return BoundingBox(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def as_tuple(self):
        return (self.min_x, self.min_y, self.max_x, self.max_y)


def _line_points(entity) -> List[Point2D]:
    return [entity.start, entity.end]


def _circle_points(entity) -> List[Point2D]:
    cx, cy = entity.center
    r = abs(entity.radius)
    return [(cx - r, cy - r), (cx + r, cy + r)]


def _arc_points(entity) -> List[Point2D]:
    cx, cy = entity.center
    r = abs(entity.radius)
    start = entity.start_angle % 360.0
    sweep = entity.sweep

    angles = [start, start + sweep]
    for cardinal in (0.0, 90.0, 180.0, 270.0):
        # offset of the cardinal direction past the start angle, CCW
        if (cardinal - start) % 360.0 <= sweep:
            angles.append(cardinal)

    return [
        (cx + r * math.cos(math.radians(a)), cy + r * math.sin(math.radians(a)))
        for a in angles
    ]


def _polyline_points(entity) -> List[Point2D]:
    return list(entity.vertices)


def _ellipse_points(entity) -> List[Point2D]:
    cx, cy = entity.center
    mx, my = entity.major_axis
    ratio = abs(entity.ratio)
    ex = math.sqrt(mx * mx + (ratio * my) ** 2)
    ey = math.sqrt(my * my + (ratio * mx) ** 2)
    return [(cx - ex, cy - ey), (cx + ex, cy + ey)]


def _point_points(entity) -> List[Point2D]:
    return [entity.location]


def _text_points(entity) -> List[Point2D]:
    return [entity.insert]


def _no_points(entity) -> List[Point2D]:
    return []


POINT_EXTRACTORS: Dict[EntityKind, Callable[[Entity], List[Point2D]]] = {
    EntityKind.LINE: _line_points,
    EntityKind.CIRCLE: _circle_points,
    EntityKind.ARC: _arc_points,
    EntityKind.POLYLINE: _polyline_points,
    EntityKind.ELLIPSE: _ellipse_points,
    EntityKind.POINT: _point_points,
    EntityKind.TEXT: _text_points,
    EntityKind.OTHER: _no_points,
}


def entity_points(entity: Entity) -> List[Point2D]:
    """
    Extremal points contributed by a single entity.

    Non-finite coordinates are dropped.
    """
    extractor = POINT_EXTRACTORS.get(getattr(entity, 'kind', None), _no_points)
    return [
        (float(x), float(y)) for x, y in extractor(entity)
        if math.isfinite(x) and math.isfinite(y)
    ]


def compute_bounds(entities: Iterable[Entity]) -> Optional[BoundingBox]:
    """
    Calculate the bounding box of all supported entities.

    Args:
        entities: Entities in any order

    Returns:
        BoundingBox enclosing every contributed point, or None when no entity
        contributed geometry (empty input, or only unsupported entities)

    Example:
        >>> compute_bounds([Line((0, 0), (10, 5))]).as_tuple()
        (0.0, 0.0, 10.0, 5.0)
    """
    min_x = min_y = math.inf
    max_x = max_y = -math.inf
    count = 0

    for entity in entities:
        for x, y in entity_points(entity):
            min_x = min(min_x, x)
            min_y = min(min_y, y)
            max_x = max(max_x, x)
            max_y = max(max_y, y)
            count += 1

    if count == 0:
        logger.debug("No entity contributed geometry, bounds are empty")
        return None

    return BoundingBox(min_x, min_y, max_x, max_y)
