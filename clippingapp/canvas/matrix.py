"""Affine transform used by the canvas save stack.

The matrix maps local (drawing) coordinates to device pixels:

    [x']   [sx  kx  tx] [x]
    [y'] = [ky  sy  ty] [y]
    [1 ]   [0   0   1 ] [1]

Canvas transforms pre-concatenate: after ``translate(dx, dy)`` a point drawn
at (0, 0) lands where (dx, dy) used to be.
"""

import math
from typing import Optional

import numpy as np

from .rect import RectF


class Matrix:
    """Mutable 3x3 affine matrix."""

    def __init__(self, values: Optional[np.ndarray] = None):
        if values is None:
            self._m = np.eye(3, dtype=np.float64)
        else:
            values = np.asarray(values, dtype=np.float64)
            if values.shape != (3, 3):
                raise ValueError(f"Matrix values must be (3, 3), got {values.shape}")
            self._m = values.copy()

    def __repr__(self) -> str:
        return f"Matrix({self._m[:2].tolist()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return bool(np.array_equal(self._m, other._m))

    @property
    def values(self) -> np.ndarray:
        """Copy of the underlying (3, 3) array."""
        return self._m.copy()

    def copy(self) -> 'Matrix':
        return Matrix(self._m)

    def is_identity(self) -> bool:
        return bool(np.array_equal(self._m, np.eye(3)))

    def rect_stays_rect(self) -> bool:
        """True when axis-aligned rectangles map to axis-aligned rectangles."""
        m = self._m
        return (m[0, 1] == 0.0 and m[1, 0] == 0.0) or (m[0, 0] == 0.0 and m[1, 1] == 0.0)

    def pre_concat(self, other: 'Matrix') -> 'Matrix':
        self._m = self._m @ other._m
        return self

    def translate(self, dx: float, dy: float) -> 'Matrix':
        t = np.eye(3)
        t[0, 2] = dx
        t[1, 2] = dy
        self._m = self._m @ t
        return self

    def scale(self, sx: float, sy: Optional[float] = None) -> 'Matrix':
        s = np.eye(3)
        s[0, 0] = sx
        s[1, 1] = sx if sy is None else sy
        self._m = self._m @ s
        return self

    def skew(self, kx: float, ky: float) -> 'Matrix':
        """Shear: x' = x + kx*y, y' = ky*x + y."""
        k = np.eye(3)
        k[0, 1] = kx
        k[1, 0] = ky
        self._m = self._m @ k
        return self

    def rotate(self, degrees: float) -> 'Matrix':
        rad = math.radians(degrees)
        c, s = math.cos(rad), math.sin(rad)
        r = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
        self._m = self._m @ r
        return self

    def invert(self) -> Optional['Matrix']:
        """Inverse matrix, or None when singular."""
        det = np.linalg.det(self._m[:2, :2])
        if abs(det) < 1e-12:
            return None
        return Matrix(np.linalg.inv(self._m))

    def map_points(self, points: np.ndarray) -> np.ndarray:
        """Map points of shape (N, 2) into device space."""
        points = np.asarray(points, dtype=np.float64)
        if points.shape[0] == 0:
            return points.reshape(0, 2)
        return points @ self._m[:2, :2].T + self._m[:2, 2]

    def map_rect(self, rect: RectF) -> RectF:
        """Bounding box of the mapped rectangle corners."""
        corners = np.array([
            (rect.left, rect.top),
            (rect.right, rect.top),
            (rect.right, rect.bottom),
            (rect.left, rect.bottom),
        ])
        mapped = self.map_points(corners)
        xmin, ymin = mapped.min(axis=0)
        xmax, ymax = mapped.max(axis=0)
        return RectF(float(xmin), float(ymin), float(xmax), float(ymax))
