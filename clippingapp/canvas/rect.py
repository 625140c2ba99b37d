"""Float rectangle in surface units."""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class RectF:
    """Axis-aligned rectangle (left, top, right, bottom).

    A rectangle is empty when its width or height is not positive. Empty
    rectangles are valid values; drawing or quick-rejecting them is a no-op.
    """

    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_xywh(cls, x: float, y: float, w: float, h: float) -> 'RectF':
        return cls(x, y, x + w, y + h)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center_x(self) -> float:
        return 0.5 * (self.left + self.right)

    @property
    def center_y(self) -> float:
        return 0.5 * (self.top + self.bottom)

    @property
    def is_empty(self) -> bool:
        return not (self.left < self.right and self.top < self.bottom)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.left, self.top, self.right, self.bottom)

    def sorted(self) -> 'RectF':
        """Swap edges so that left <= right and top <= bottom."""
        return RectF(
            min(self.left, self.right),
            min(self.top, self.bottom),
            max(self.left, self.right),
            max(self.top, self.bottom),
        )

    def offset(self, dx: float, dy: float) -> 'RectF':
        return RectF(self.left + dx, self.top + dy, self.right + dx, self.bottom + dy)

    def inset(self, dx: float, dy: float) -> 'RectF':
        """Shrink by dx horizontally and dy vertically on each side (negative grows)."""
        return RectF(self.left + dx, self.top + dy, self.right - dx, self.bottom - dy)

    def contains(self, x: float, y: float) -> bool:
        """Half-open containment: left/top edges inclusive, right/bottom exclusive."""
        return self.left <= x < self.right and self.top <= y < self.bottom

    def intersects(self, other: 'RectF') -> bool:
        return (
            not self.is_empty
            and not other.is_empty
            and self.left < other.right
            and other.left < self.right
            and self.top < other.bottom
            and other.top < self.bottom
        )

    def intersect(self, other: 'RectF') -> Optional['RectF']:
        """Overlap of both rectangles, or None when they do not intersect."""
        if not self.intersects(other):
            return None
        return RectF(
            max(self.left, other.left),
            max(self.top, other.top),
            min(self.right, other.right),
            min(self.bottom, other.bottom),
        )

    def union(self, other: 'RectF') -> 'RectF':
        """Smallest rectangle containing both; empty operands are ignored."""
        if other.is_empty:
            return self
        if self.is_empty:
            return other
        return RectF(
            min(self.left, other.left),
            min(self.top, other.top),
            max(self.right, other.right),
            max(self.bottom, other.bottom),
        )
