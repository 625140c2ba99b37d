"""Reusable geometric outline made of closed contours.

A Path holds flattened contours in local coordinates. Curved primitives are
flattened when they are added, so rebuilding a path from the same calls
always yields the same vertices (and the same pixel coverage).

Fill rules:
    - WINDING: a point is inside when the summed winding number is non-zero.
      Contours added with the same Direction therefore form their union,
      while opposite directions cut holes.
    - EVEN_ODD: a point is inside when it is enclosed an odd number of times.
"""

import enum
import logging
from typing import List, Optional, Tuple, Union

import numpy as np

from ..utils import geometry
from .rect import RectF

logger = logging.getLogger(__name__)


class Direction(enum.Enum):
    """Screen-space traversal order of an added contour."""
    CW = 'cw'
    CCW = 'ccw'


class FillType(enum.Enum):
    WINDING = 'winding'
    EVEN_ODD = 'even_odd'


RectLike = Union[RectF, Tuple[float, float, float, float]]


def _as_rect(rect: RectLike) -> RectF:
    if isinstance(rect, RectF):
        return rect
    return RectF(*rect)


class Path:
    """Mutable outline: a fill type and a list of closed contours."""

    def __init__(self, fill_type: FillType = FillType.WINDING):
        self.fill_type = fill_type
        self._contours: List[np.ndarray] = []
        self._open: Optional[List[Tuple[float, float]]] = None

    def __repr__(self) -> str:
        return f"Path(fill_type={self.fill_type.name}, contours={len(self.contours)})"

    @property
    def contours(self) -> List[np.ndarray]:
        """Closed contours, including a pending move_to/line_to contour."""
        out = list(self._contours)
        if self._open is not None and len(self._open) >= 3:
            out.append(np.array(self._open, dtype=np.float64))
        return out

    @property
    def is_empty(self) -> bool:
        return not self.contours

    def reset(self) -> None:
        """Clear all contours and restore the default fill type."""
        self._contours = []
        self._open = None
        self.fill_type = FillType.WINDING

    def rewind(self) -> None:
        """Clear all contours but keep the fill type."""
        self._contours.clear()
        self._open = None

    def _append(self, contour: np.ndarray) -> None:
        self.close()
        self._contours.append(contour)

    def add_circle(
        self, cx: float, cy: float, radius: float, direction: Direction = Direction.CW
    ) -> None:
        if radius <= 0:
            logger.debug(f"Ignoring circle with non-positive radius {radius}")
            return
        self._append(geometry.circle_contour(cx, cy, radius, direction is Direction.CW))

    def add_rect(self, *args, direction: Direction = Direction.CW) -> None:
        """Append a rectangle.

        Accepts ``add_rect(rect, direction)`` or
        ``add_rect(left, top, right, bottom, direction)``.
        """
        if args and isinstance(args[-1], Direction):
            direction = args[-1]
            args = args[:-1]
        if len(args) == 1:
            rect = _as_rect(args[0])
        elif len(args) == 4:
            rect = RectF(*args)
        else:
            raise TypeError("add_rect() takes a rect or four edges")
        if rect.is_empty:
            logger.debug(f"Ignoring empty rect {rect}")
            return
        self._append(geometry.rect_contour(*rect.as_tuple(), direction is Direction.CW))

    def add_round_rect(
        self,
        rect: RectLike,
        rx: float,
        ry: float,
        direction: Direction = Direction.CW
    ) -> None:
        rect = _as_rect(rect)
        if rect.is_empty:
            logger.debug(f"Ignoring empty round rect {rect}")
            return
        self._append(geometry.round_rect_contour(
            *rect.as_tuple(), rx, ry, direction is Direction.CW
        ))

    def add_oval(self, rect: RectLike, direction: Direction = Direction.CW) -> None:
        rect = _as_rect(rect)
        if rect.is_empty:
            logger.debug(f"Ignoring empty oval {rect}")
            return
        self._append(geometry.oval_contour(*rect.as_tuple(), direction is Direction.CW))

    def move_to(self, x: float, y: float) -> None:
        self.close()
        self._open = [(x, y)]

    def line_to(self, x: float, y: float) -> None:
        if self._open is None:
            self._open = [(0.0, 0.0)]
        self._open.append((x, y))

    def close(self) -> None:
        """Close the pending free-form contour; contours with < 3 points are dropped."""
        if self._open is not None and len(self._open) >= 3:
            self._contours.append(np.array(self._open, dtype=np.float64))
        self._open = None

    def bounds(self) -> RectF:
        """Bounds of all contour vertices; an empty RectF when the path is empty."""
        contours = self.contours
        if not contours:
            return RectF(0.0, 0.0, 0.0, 0.0)
        return RectF(*geometry.points_bbox(np.concatenate(contours, axis=0)))

    def contains(self, x: float, y: float) -> bool:
        wn = geometry.winding_numbers(
            self.contours, np.array([x], dtype=np.float64), np.array([y], dtype=np.float64)
        )
        return bool(inside(wn, self.fill_type)[0, 0])


def inside(wn: np.ndarray, fill_type: FillType) -> np.ndarray:
    """Apply a fill rule to winding numbers."""
    if fill_type is FillType.EVEN_ODD:
        return (wn & 1).astype(bool)
    return wn != 0
