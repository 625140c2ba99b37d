"""CPU raster canvas: transform/clip save stack over an RGBA bitmap.

This is the drawing surface the clipping demo renders into. It is a
deterministic, pure-CPU implementation on numpy arrays; OpenCV is used only
for glyph rasterization.

Architecture:
    - Bitmap: (H, W, 4) uint8 RGBA, top-left origin, +Y down
    - State stack: (Matrix, Region) pairs; save() pushes a copy, restore() pops
    - Shapes are built as local-space contours, mapped by the current matrix,
      rasterized at pixel centers, masked by the clip, then composited
    - Text is rasterized by cv2.putText into a patch and warped into device
      space with the current matrix (so skew/rotation apply to glyphs)

Invariants:
    - Every draw call honors the current clip; draw_color() fills exactly the clip
    - Degenerate geometry (empty rects, non-positive radii) draws nothing
    - No anti-aliasing: a shape and a clip built from the same geometry cover
      exactly the same pixels

Usage:
    from clippingapp.canvas import Canvas, Paint, RectF, RegionOp
    from clippingapp.utils import color

    canvas = Canvas(400, 300)
    with canvas.saved():
        canvas.translate(10, 10)
        canvas.clip_rect(0, 0, 90, 90)
        canvas.draw_color(color.WHITE)
"""

import enum
import logging
import math
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Optional, Union

import cv2
import numpy as np

from ..utils import color as color_utils
from ..utils import geometry
from .matrix import Matrix
from .paint import TEXT_FONT, Align, Paint, Style
from .path import FillType, Path, RectLike, _as_rect
from .rect import RectF
from .region import Region, RegionOp, contour_mask

logger = logging.getLogger(__name__)

# Stroke width used for hairlines (stroke_width == 0)
HAIRLINE_WIDTH = 1.0


class EdgeType(enum.Enum):
    """Rounding used by quick_reject() when mapping bounds to pixels."""
    AA = 'aa'  # round out: treat partially covered edge pixels as touched
    BW = 'bw'  # round to nearest pixel


class CanvasStateError(RuntimeError):
    """Raised on save-stack misuse (restore without matching save)."""

    pass


@dataclass
class _State:
    matrix: Matrix
    clip: Region

    def copy(self) -> '_State':
        return _State(self.matrix.copy(), self.clip.copy())


def _rect_from_args(args: tuple) -> RectF:
    if len(args) == 1:
        return _as_rect(args[0])
    if len(args) == 4:
        return RectF(*(float(a) for a in args))
    raise TypeError("expected a rect or four edges (left, top, right, bottom)")


class Canvas:
    """Drawing surface over an RGBA bitmap.

    Parameters
    ----------
    width, height : int
        Bitmap size in pixels
    background : int
        Initial packed color, default transparent
    """

    def __init__(self, width: int, height: int, background: int = color_utils.TRANSPARENT):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self._bitmap = np.empty((self.height, self.width, 4), dtype=np.uint8)
        self._bitmap[...] = color_utils.to_rgba(background)
        self._stack: List[_State] = [
            _State(Matrix(), Region.full(self.width, self.height))
        ]

    def __repr__(self) -> str:
        if not hasattr(self, "_stack"):
            return "Canvas(<uninitialized>)"
        return f"Canvas({self.width}x{self.height}, save_count={self.save_count})"

    @property
    def bitmap(self) -> np.ndarray:
        """The (H, W, 4) uint8 RGBA pixel array (live, not a copy)."""
        return self._bitmap

    def pixel(self, x: int, y: int) -> int:
        """Packed 0xAARRGGBB color at device pixel (x, y)."""
        r, g, b, a = (int(v) for v in self._bitmap[y, x])
        return color_utils.argb(a, r, g, b)

    @property
    def _state(self) -> _State:
        return self._stack[-1]

    # ------------------------------------------------------------------
    # Save stack
    # ------------------------------------------------------------------

    @property
    def save_count(self) -> int:
        return len(self._stack)

    def save(self) -> int:
        """Push a copy of the matrix and clip; returns the count before saving."""
        count = len(self._stack)
        self._stack.append(self._state.copy())
        return count

    def restore(self) -> None:
        if len(self._stack) <= 1:
            raise CanvasStateError("Underflow in restore: no matching save()")
        self._stack.pop()

    def restore_to_count(self, count: int) -> None:
        if count < 1:
            raise CanvasStateError(f"Underflow in restore_to_count({count})")
        del self._stack[max(1, count):]

    @contextmanager
    def saved(self) -> Iterator['Canvas']:
        """Save on entry and restore to the same depth on exit."""
        count = self.save()
        try:
            yield self
        finally:
            self.restore_to_count(count)

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    @property
    def matrix(self) -> Matrix:
        """Copy of the current local → device matrix."""
        return self._state.matrix.copy()

    def translate(self, dx: float, dy: float) -> None:
        self._state.matrix.translate(dx, dy)

    def scale(self, sx: float, sy: Optional[float] = None) -> None:
        self._state.matrix.scale(sx, sy)

    def skew(self, sx: float, sy: float) -> None:
        self._state.matrix.skew(sx, sy)

    def rotate(self, degrees: float) -> None:
        self._state.matrix.rotate(degrees)

    def concat(self, matrix: Matrix) -> None:
        self._state.matrix.pre_concat(matrix)

    # ------------------------------------------------------------------
    # Clipping
    # ------------------------------------------------------------------

    def _rect_region(self, rect: RectF) -> Region:
        if rect.is_empty:
            return Region(self.width, self.height)
        m = self._state.matrix
        if m.rect_stays_rect():
            return Region.from_rect(self.width, self.height, m.map_rect(rect))
        contour = m.map_points(geometry.rect_contour(*rect.as_tuple()))
        return Region.from_contours(self.width, self.height, [contour])

    def _path_region(self, path: Path) -> Region:
        m = self._state.matrix
        contours = [m.map_points(c) for c in path.contours]
        return Region.from_contours(self.width, self.height, contours, path.fill_type)

    def clip_rect(self, *args, op: RegionOp = RegionOp.INTERSECT) -> bool:
        """Combine the clip with a rectangle in local coordinates.

        Accepts ``clip_rect(rect)`` or ``clip_rect(left, top, right, bottom)``.

        Returns
        -------
        bool
            True if the resulting clip is non-empty
        """
        rect = _rect_from_args(args)
        return self._state.clip.op(self._rect_region(rect), op)

    def clip_out_rect(self, *args) -> bool:
        """Subtract a rectangle from the clip."""
        return self.clip_rect(*args, op=RegionOp.DIFFERENCE)

    def clip_path(self, path: Path, op: RegionOp = RegionOp.INTERSECT) -> bool:
        """Combine the clip with the area enclosed by path (per its fill type)."""
        return self._state.clip.op(self._path_region(path), op)

    def clip_out_path(self, path: Path) -> bool:
        """Subtract the area enclosed by path from the clip."""
        return self.clip_path(path, op=RegionOp.DIFFERENCE)

    @property
    def clip(self) -> Region:
        """Copy of the current device-space clip region."""
        return self._state.clip.copy()

    @property
    def is_clip_empty(self) -> bool:
        return self._state.clip.is_empty

    def clip_bounds(self) -> RectF:
        """Clip bounds mapped back to local coordinates; empty RectF when nothing is drawable."""
        bounds = self._state.clip.bounds()
        inverse = self._state.matrix.invert()
        if bounds is None or inverse is None:
            return RectF(0.0, 0.0, 0.0, 0.0)
        return inverse.map_rect(RectF(*(float(b) for b in bounds)))

    def quick_reject(
        self,
        shape: Union[RectLike, Path],
        edge_type: EdgeType = EdgeType.AA
    ) -> bool:
        """Conservative test: is shape's bounding box entirely outside the clip?

        Parameters
        ----------
        shape : RectF, tuple or Path
            Bounds to test, in local coordinates
        edge_type : EdgeType
            AA rounds the device bounds outwards, BW rounds to nearest

        Returns
        -------
        bool
            True if drawing shape is guaranteed to touch no pixel. False means
            it may be visible (the clip is tested by bounds, not by exact shape).
        """
        if isinstance(shape, Path):
            if shape.is_empty:
                return True
            rect = shape.bounds()
        else:
            rect = _as_rect(shape)
        if rect.is_empty:
            return True
        clip = self._state.clip.bounds()
        if clip is None:
            return True

        dev = self._state.matrix.map_rect(rect)
        if edge_type is EdgeType.AA:
            l, t = math.floor(dev.left), math.floor(dev.top)
            r, b = math.ceil(dev.right), math.ceil(dev.bottom)
        else:
            l, t = round(dev.left), round(dev.top)
            r, b = round(dev.right), round(dev.bottom)
        if l >= r or t >= b:
            return True

        cl, ct, cr, cb = clip
        return l >= cr or r <= cl or t >= cb or b <= ct

    # ------------------------------------------------------------------
    # Compositing
    # ------------------------------------------------------------------

    def _composite(self, mask: np.ndarray, color: int) -> int:
        """Source-over color into mask ∩ clip; returns number of pixels touched."""
        mask = mask & self._state.clip.mask
        n = int(mask.sum())
        a = color_utils.alpha(color)
        if n == 0 or a == 0:
            return 0
        src = color_utils.to_rgba(color)
        if a == 255:
            self._bitmap[mask] = src
            return n
        sa = a / 255.0
        dst = self._bitmap[mask].astype(np.float32)
        out = np.empty_like(dst)
        out[:, :3] = src[:3].astype(np.float32) * sa + dst[:, :3] * (1.0 - sa)
        out[:, 3] = 255.0 * sa + dst[:, 3] * (1.0 - sa)
        self._bitmap[mask] = np.clip(np.round(out), 0, 255).astype(np.uint8)
        return n

    def _fill_contours(
        self,
        contours: List[np.ndarray],
        color: int,
        fill_type: FillType = FillType.WINDING
    ) -> int:
        m = self._state.matrix
        device = [m.map_points(c) for c in contours if c.shape[0] >= 3]
        if not device:
            return 0
        return self._composite(contour_mask(self.width, self.height, device, fill_type), color)

    @staticmethod
    def _half_stroke(paint: Paint) -> float:
        width = paint.stroke_width if paint.stroke_width > 0 else HAIRLINE_WIDTH
        return 0.5 * width

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def draw_color(self, color: int) -> None:
        """Fill the entire clip with color."""
        self._composite(np.ones((self.height, self.width), dtype=bool), color)

    def draw_line(self, x0: float, y0: float, x1: float, y1: float, paint: Paint) -> None:
        """Stroke a butt-capped segment with paint.stroke_width (style is ignored)."""
        quad = geometry.segment_quad(x0, y0, x1, y1, 2.0 * self._half_stroke(paint))
        if quad.shape[0] == 0:
            logger.debug(f"Skipping zero-length line at ({x0}, {y0})")
            return
        self._fill_contours([quad], paint.color)

    def draw_circle(self, cx: float, cy: float, radius: float, paint: Paint) -> None:
        if radius <= 0:
            logger.debug(f"Skipping circle with radius {radius}")
            return
        hw = self._half_stroke(paint)
        if paint.style is Style.FILL:
            contours = [geometry.circle_contour(cx, cy, radius)]
        elif paint.style is Style.FILL_AND_STROKE:
            contours = [geometry.circle_contour(cx, cy, radius + hw)]
        else:
            contours = [geometry.circle_contour(cx, cy, radius + hw)]
            if radius - hw > 0:
                contours.append(geometry.circle_contour(cx, cy, radius - hw, clockwise=False))
        self._fill_contours(contours, paint.color)

    def _draw_boxed(self, rect: RectF, paint: Paint, build) -> None:
        """Fill/stroke a shape described by its bounds; build(rect, grow, clockwise)."""
        if rect.is_empty:
            logger.debug(f"Skipping empty rect {rect}")
            return
        hw = self._half_stroke(paint)
        if paint.style is Style.FILL:
            contours = [build(rect, 0.0, True)]
        elif paint.style is Style.FILL_AND_STROKE:
            contours = [build(rect.inset(-hw, -hw), hw, True)]
        else:
            contours = [build(rect.inset(-hw, -hw), hw, True)]
            inner = rect.inset(hw, hw)
            if not inner.is_empty:
                contours.append(build(inner, -hw, False))
        self._fill_contours(contours, paint.color)

    def draw_rect(self, *args) -> None:
        """Draw a rectangle: ``draw_rect(rect, paint)`` or ``draw_rect(l, t, r, b, paint)``."""
        *edges, paint = args
        rect = _rect_from_args(tuple(edges))
        self._draw_boxed(
            rect, paint,
            lambda r, grow, cw: geometry.rect_contour(*r.as_tuple(), clockwise=cw)
        )

    def draw_round_rect(self, rect: RectLike, rx: float, ry: float, paint: Paint) -> None:
        self._draw_boxed(
            _as_rect(rect), paint,
            lambda r, grow, cw: geometry.round_rect_contour(
                *r.as_tuple(), rx + grow, ry + grow, clockwise=cw
            )
        )

    def draw_oval(self, rect: RectLike, paint: Paint) -> None:
        self._draw_boxed(
            _as_rect(rect), paint,
            lambda r, grow, cw: geometry.oval_contour(*r.as_tuple(), clockwise=cw)
        )

    def draw_path(self, path: Path, paint: Paint) -> None:
        """Fill and/or stroke path.

        Strokes are the union of butt-capped quads along every contour edge.
        """
        contours = path.contours
        if not contours:
            return
        m = self._state.matrix
        mask = np.zeros((self.height, self.width), dtype=bool)
        if paint.style in (Style.FILL, Style.FILL_AND_STROKE):
            mask |= contour_mask(
                self.width, self.height, [m.map_points(c) for c in contours], path.fill_type
            )
        if paint.style in (Style.STROKE, Style.FILL_AND_STROKE):
            width = 2.0 * self._half_stroke(paint)
            quads = []
            for c in contours:
                for (x0, y0), (x1, y1) in zip(c, np.roll(c, -1, axis=0)):
                    quad = geometry.segment_quad(x0, y0, x1, y1, width)
                    if quad.shape[0]:
                        quads.append(m.map_points(quad))
            mask |= contour_mask(self.width, self.height, quads)
        self._composite(mask, paint.color)

    def draw_text(self, text: str, x: float, y: float, paint: Paint) -> None:
        """Draw text with its baseline at y, aligned to x per paint.text_align.

        Notes
        -----
        Glyphs are rasterized upright into a patch with cv2.putText, then the
        patch is mapped into device space with the current matrix using
        nearest-neighbour sampling.
        """
        if not text:
            return
        width, ascent, descent = paint.measure_text(text)
        if paint.text_align is Align.CENTER:
            x -= 0.5 * width
        elif paint.text_align is Align.RIGHT:
            x -= width

        pad = paint.text_thickness + 2
        baseline = pad + int(math.ceil(ascent))
        patch_w = int(math.ceil(width)) + 2 * pad
        patch_h = baseline + int(math.ceil(descent)) + pad
        patch = np.zeros((patch_h, patch_w), dtype=np.uint8)
        cv2.putText(
            patch, text, (pad, baseline), TEXT_FONT, paint.font_scale,
            255, paint.text_thickness, cv2.LINE_8
        )

        # Patch pixel (u, v) sits at local (x - pad + u, y - baseline + v)
        place = np.array([
            [1.0, 0.0, x - pad],
            [0.0, 1.0, y - baseline],
            [0.0, 0.0, 1.0],
        ])
        affine = (self._state.matrix.values @ place)[:2]
        warped = cv2.warpAffine(
            patch, affine, (self.width, self.height),
            flags=cv2.INTER_NEAREST,
            borderMode=cv2.BORDER_CONSTANT,
            borderValue=0
        )
        self._composite(warped > 0, paint.color)
