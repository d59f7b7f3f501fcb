"""
Entities Module

Closed set of drawing primitives understood by the converter:
- Line, Circle, Arc, Polyline (core geometry)
- Ellipse, Point, Text (annotation and secondary geometry)
- Other (any DXF entity kind that is carried along but never rendered)

Entities are immutable; the reader builds them, the bounds calculator and
renderer only read them.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

Point2D = Tuple[float, float]


class EntityKind(Enum):
    """Entity variants"""
    LINE = "line"
    CIRCLE = "circle"
    ARC = "arc"
    POLYLINE = "polyline"
    ELLIPSE = "ellipse"
    POINT = "point"
    TEXT = "text"
    OTHER = "other"


@dataclass(frozen=True)
class Line:
    start: Point2D
    end: Point2D
    color: Optional[str] = None

    kind = EntityKind.LINE


@dataclass(frozen=True)
class Circle:
    center: Point2D
    radius: float
    color: Optional[str] = None

    kind = EntityKind.CIRCLE


@dataclass(frozen=True)
class Arc:
    """Circular arc running counter-clockwise from start_angle to end_angle (degrees)"""
    center: Point2D
    radius: float
    start_angle: float
    end_angle: float
    color: Optional[str] = None

    kind = EntityKind.ARC

    @property
    def sweep(self) -> float:
        """Counter-clockwise sweep in degrees, in (0, 360]"""
        span = (self.end_angle - self.start_angle) % 360.0
        return span if span > 0 else 360.0


@dataclass(frozen=True)
class Polyline:
    vertices: Tuple[Point2D, ...]
    closed: bool = False
    color: Optional[str] = None

    kind = EntityKind.POLYLINE


@dataclass(frozen=True)
class Ellipse:
    """
    Ellipse or elliptical arc.

    major_axis is the vector from the center to the end of the major axis,
    ratio is minor/major, and start_param/end_param are parametric angles in
    radians (0 and 2*pi for a full ellipse).
    """
    center: Point2D
    major_axis: Point2D
    ratio: float
    start_param: float = 0.0
    end_param: float = math.tau
    color: Optional[str] = None

    kind = EntityKind.ELLIPSE

    @property
    def minor_axis(self) -> Point2D:
        mx, my = self.major_axis
        return (-my * self.ratio, mx * self.ratio)

    @property
    def is_full(self) -> bool:
        span = (self.end_param - self.start_param) % math.tau
        return math.isclose(span, 0.0, abs_tol=1e-9) or math.isclose(span, math.tau, abs_tol=1e-9)

    def point_at(self, param: float) -> Point2D:
        mx, my = self.major_axis
        nx, ny = self.minor_axis
        c, s = math.cos(param), math.sin(param)
        return (self.center[0] + c * mx + s * nx, self.center[1] + c * my + s * ny)


@dataclass(frozen=True)
class Point:
    location: Point2D
    color: Optional[str] = None

    kind = EntityKind.POINT


@dataclass(frozen=True)
class Text:
    insert: Point2D
    text: str
    height: float = 1.0
    rotation: float = 0.0
    color: Optional[str] = None

    kind = EntityKind.TEXT


@dataclass(frozen=True)
class Other:
    """Entity kind the converter does not render (INSERT, HATCH, DIMENSION, ...)"""
    dxftype: str = "UNKNOWN"
    color: Optional[str] = None

    kind = EntityKind.OTHER


Entity = Union[Line, Circle, Arc, Polyline, Ellipse, Point, Text, Other]
