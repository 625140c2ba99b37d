"""Raster drawing surface and path primitives.

Provides:
    - RectF: float rectangles
    - Matrix: affine transforms (translate, scale, skew, rotate)
    - Path: reusable outlines (circle, rect, round rect, oval, polygons)
    - Paint: color, fill/stroke style, text size and alignment
    - Region / RegionOp: pixel masks combined by difference/intersect/union/...
    - Canvas: save/restore stack, clipping, drawing and quick_reject

Convenience imports:
    from clippingapp.canvas import Canvas, Paint, Path, RectF, RegionOp
"""

from .canvas import Canvas, CanvasStateError, EdgeType
from .matrix import Matrix
from .paint import Align, Paint, Style
from .path import Direction, FillType, Path
from .rect import RectF
from .region import Region, RegionOp

__all__ = [
    'Align',
    'Canvas',
    'CanvasStateError',
    'Direction',
    'EdgeType',
    'FillType',
    'Matrix',
    'Paint',
    'Path',
    'RectF',
    'Region',
    'RegionOp',
    'Style',
]
