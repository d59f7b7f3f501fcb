"""
Transform Module

Affine transform from DXF drawing space (Y up) to SVG user space (Y down).

One transform is built per conversion and applied to every coordinate:
- fit_transform() maps a bounding box plus padding onto a viewport anchored
  at the origin
- default_transform() keeps raw coordinates and only flips Y inside the
  default viewport
"""

import logging
import math
from typing import Iterable, List, Tuple

import numpy as np

from .bounds import BoundingBox
from .entities import Point2D
from .options import DEFAULT_VIEWPORT, MIN_EXTENT

logger = logging.getLogger("Transform")

Viewport = Tuple[float, float]


class Affine:
    """2D affine transform stored as a 3x3 homogeneous matrix"""

    def __init__(self, matrix=None):
        if matrix is None:
            matrix = np.identity(3)
        self.matrix = np.asarray(matrix, dtype=float)
        if self.matrix.shape != (3, 3):
            raise ValueError(f"Affine matrix must be 3x3, got {self.matrix.shape}")

    @classmethod
    def identity(cls) -> "Affine":
        return cls()

    @classmethod
    def translation(cls, tx: float, ty: float) -> "Affine":
        return cls([[1.0, 0.0, tx], [0.0, 1.0, ty], [0.0, 0.0, 1.0]])

    @classmethod
    def scaling(cls, sx: float, sy: float = None) -> "Affine":
        if sy is None:
            sy = sx
        return cls([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]])

    @classmethod
    def flip_y(cls, height: float) -> "Affine":
        """Mirror about the horizontal line y = height / 2 (y -> height - y)"""
        return cls.translation(0.0, height) @ cls.scaling(1.0, -1.0)

    def __matmul__(self, other: "Affine") -> "Affine":
        """Compose: (self @ other) applies other first, then self"""
        return Affine(self.matrix @ other.matrix)

    def __eq__(self, other):
        if not isinstance(other, Affine):
            return NotImplemented
        return bool(np.allclose(self.matrix, other.matrix))

    def __repr__(self):
        return f"Affine({self.matrix[:2].tolist()})"

    @property
    def determinant(self) -> float:
        return float(np.linalg.det(self.matrix[:2, :2]))

    @property
    def length_scale(self) -> float:
        """Factor applied to lengths such as radii and text heights"""
        return math.sqrt(abs(self.determinant))

    @property
    def flips(self) -> bool:
        """True when the transform reverses orientation (CCW becomes CW)"""
        return self.determinant < 0

    def apply(self, x: float, y: float) -> Point2D:
        tx, ty, _ = self.matrix @ np.array([x, y, 1.0])
        return (float(tx), float(ty))

    def apply_many(self, points: Iterable[Point2D]) -> List[Point2D]:
        pts = np.asarray(list(points), dtype=float).reshape(-1, 2)
        if len(pts) == 0:
            return []
        homogeneous = np.column_stack([pts, np.ones(len(pts))])
        out = homogeneous @ self.matrix.T
        return [(float(x), float(y)) for x, y in out[:, :2]]

    def apply_angle(self, degrees: float) -> float:
        """Map a direction angle (degrees, CCW in source space) through the linear part"""
        rad = math.radians(degrees)
        dx, dy = self.matrix[:2, :2] @ np.array([math.cos(rad), math.sin(rad)])
        return math.degrees(math.atan2(dy, dx))


def fit_transform(bounds: BoundingBox, padding: float) -> Tuple[Affine, Viewport]:
    """
    Build the transform that fits a bounding box into an origin-anchored viewport.

    The box's min corner (minus padding) lands on x = 0 and its top edge
    (plus padding) lands on y = 0, with Y flipped. A degenerate axis is
    widened upward/rightward to MIN_EXTENT.

    Args:
        bounds: Drawing extents in DXF units
        padding: Margin on every side

    Returns:
        tuple: (transform, (viewport_width, viewport_height))
    """
    width = max(bounds.width, MIN_EXTENT)
    height = max(bounds.height, MIN_EXTENT)
    top = bounds.min_y + height

    transform = Affine([
        [1.0, 0.0, padding - bounds.min_x],
        [0.0, -1.0, top + padding],
        [0.0, 0.0, 1.0],
    ])
    viewport = (width + 2 * padding, height + 2 * padding)

    logger.debug(f"Fitted {bounds.as_tuple()} with padding {padding} -> viewport {viewport}")
    return transform, viewport


def default_transform() -> Tuple[Affine, Viewport]:
    """Raw coordinates in the default viewport, Y flipped so the drawing stays upright"""
    width, height = DEFAULT_VIEWPORT
    return Affine.flip_y(height), (width, height)
