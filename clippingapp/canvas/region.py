"""Device-space pixel regions and the boolean operations that build clips.

Architecture:
    - A Region is a (H, W) boolean mask over the device bitmap
    - Rectangles (already mapped to device space) rasterize by pixel-center spans
    - Paths rasterize by winding number at pixel centers, limited to their bbox
    - Region.op() combines two regions with a RegionOp

Invariants:
    - Pixel (x, y) is in a shape when its center (x + 0.5, y + 0.5) is inside
    - Identical inputs produce identical masks (no anti-aliasing)
"""

import enum
import math
from typing import Optional, Sequence, Tuple

import numpy as np

from ..utils import geometry
from .path import FillType, inside
from .rect import RectF


class RegionOp(enum.Enum):
    """How a new shape combines with the current clip."""
    DIFFERENCE = 'difference'
    INTERSECT = 'intersect'
    UNION = 'union'
    XOR = 'xor'
    REVERSE_DIFFERENCE = 'reverse_difference'
    REPLACE = 'replace'


def _span(lo: float, hi: float, limit: int) -> Tuple[int, int]:
    """Pixel index range [start, stop) whose centers fall in [lo, hi)."""
    start = max(0, int(math.ceil(lo - 0.5)))
    stop = min(limit, int(math.ceil(hi - 0.5)))
    return start, max(start, stop)


def rect_mask(width: int, height: int, rect: RectF) -> np.ndarray:
    """Rasterize a device-space rectangle."""
    mask = np.zeros((height, width), dtype=bool)
    if rect.is_empty:
        return mask
    x0, x1 = _span(rect.left, rect.right, width)
    y0, y1 = _span(rect.top, rect.bottom, height)
    mask[y0:y1, x0:x1] = True
    return mask


def contour_mask(
    width: int,
    height: int,
    contours: Sequence[np.ndarray],
    fill_type: FillType = FillType.WINDING
) -> np.ndarray:
    """Rasterize device-space contours with the given fill rule.

    Parameters
    ----------
    width, height : int
        Device size in pixels
    contours : sequence of np.ndarray
        Closed polygons in device coordinates, each shape (N, 2)
    fill_type : FillType
        WINDING (nonzero) or EVEN_ODD

    Returns
    -------
    np.ndarray
        Boolean mask, shape (height, width)
    """
    mask = np.zeros((height, width), dtype=bool)
    contours = [c for c in contours if c.shape[0] >= 3]
    if not contours:
        return mask
    xmin, ymin, xmax, ymax = geometry.points_bbox(np.concatenate(contours, axis=0))
    x0, x1 = _span(xmin, xmax, width)
    y0, y1 = _span(ymin, ymax, height)
    if x1 <= x0 or y1 <= y0:
        return mask
    xs = np.arange(x0, x1, dtype=np.float64) + 0.5
    ys = np.arange(y0, y1, dtype=np.float64) + 0.5
    wn = geometry.winding_numbers(contours, xs, ys)
    mask[y0:y1, x0:x1] = inside(wn, fill_type)
    return mask


class Region:
    """Boolean pixel mask with set/combine operations."""

    def __init__(self, width: int, height: int, mask: Optional[np.ndarray] = None):
        self.width = int(width)
        self.height = int(height)
        if mask is None:
            mask = np.zeros((self.height, self.width), dtype=bool)
        elif mask.shape != (self.height, self.width):
            raise ValueError(
                f"Region mask must be ({self.height}, {self.width}), got {mask.shape}"
            )
        self._mask = mask.astype(bool, copy=False)

    @classmethod
    def full(cls, width: int, height: int) -> 'Region':
        return cls(width, height, np.ones((height, width), dtype=bool))

    @classmethod
    def from_rect(cls, width: int, height: int, rect: RectF) -> 'Region':
        return cls(width, height, rect_mask(width, height, rect))

    @classmethod
    def from_contours(
        cls,
        width: int,
        height: int,
        contours: Sequence[np.ndarray],
        fill_type: FillType = FillType.WINDING
    ) -> 'Region':
        return cls(width, height, contour_mask(width, height, contours, fill_type))

    def __repr__(self) -> str:
        return f"Region({self.width}x{self.height}, bounds={self.bounds()})"

    @property
    def mask(self) -> np.ndarray:
        """Read-only view of the mask."""
        view = self._mask.view()
        view.flags.writeable = False
        return view

    def copy(self) -> 'Region':
        return Region(self.width, self.height, self._mask.copy())

    @property
    def is_empty(self) -> bool:
        return not self._mask.any()

    @property
    def area(self) -> int:
        """Number of pixels in the region."""
        return int(self._mask.sum())

    def set_empty(self) -> None:
        self._mask = np.zeros_like(self._mask)

    def set_rect(self, rect: RectF) -> bool:
        self._mask = rect_mask(self.width, self.height, rect)
        return not self.is_empty

    def set_path(self, path, clip: Optional['Region'] = None) -> bool:
        """Set to the pixels enclosed by a device-space path, optionally limited by clip."""
        self._mask = contour_mask(self.width, self.height, path.contours, path.fill_type)
        if clip is not None:
            self._mask &= clip._mask
        return not self.is_empty

    def contains(self, x: int, y: int) -> bool:
        if not (0 <= x < self.width and 0 <= y < self.height):
            return False
        return bool(self._mask[y, x])

    def bounds(self) -> Optional[Tuple[int, int, int, int]]:
        """Integer bounds (left, top, right, bottom), right/bottom exclusive; None if empty."""
        cols = np.flatnonzero(self._mask.any(axis=0))
        if cols.size == 0:
            return None
        rows = np.flatnonzero(self._mask.any(axis=1))
        return (int(cols[0]), int(rows[0]), int(cols[-1]) + 1, int(rows[-1]) + 1)

    def op(self, other: 'Region', op: RegionOp) -> bool:
        """Combine other into this region in place.

        Returns
        -------
        bool
            True if the resulting region is non-empty
        """
        if (other.width, other.height) != (self.width, self.height):
            raise ValueError(
                f"Region size mismatch: {self.width}x{self.height} vs "
                f"{other.width}x{other.height}"
            )
        a = self._mask
        b = other._mask
        if op is RegionOp.INTERSECT:
            result = a & b
        elif op is RegionOp.DIFFERENCE:
            result = a & ~b
        elif op is RegionOp.UNION:
            result = a | b
        elif op is RegionOp.XOR:
            result = a ^ b
        elif op is RegionOp.REVERSE_DIFFERENCE:
            result = b & ~a
        elif op is RegionOp.REPLACE:
            result = b.copy()
        else:
            raise ValueError(f"Unknown region op: {op}")
        self._mask = result
        return not self.is_empty
