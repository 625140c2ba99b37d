"""Grid layout of the clipping demo, computed once from resources.

All values are pixels (resources already applied density). The grid has two
columns and four rows of example cells, followed by a text row and a
quick-reject row:

    column_one = inset
    column_two = column_one + inset + clip_rect_right
    row_one    = inset
    row_n+1    = row_n + inset + clip_rect_bottom       (rows two..four)
    text_row   = row_four + 1.5 * clip_rect_bottom
    reject_row = row_four + inset + 2 * clip_rect_bottom

Configuration preconditions (logged at construction, not enforced):
    inset < clip width / 2 and inset < clip height / 2. A non-positive frame size is
    logged too; preferred_size() clamps it to 1x1.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Tuple

from ..canvas import RectF
from .resources import Resources

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClipLayout:
    """Immutable layout constants (pixels)."""

    clip_rect_left: float
    clip_rect_top: float
    clip_rect_right: float
    clip_rect_bottom: float
    rect_inset: float
    small_rect_offset: float
    circle_radius: float
    text_offset: float
    text_size: float
    stroke_width: float

    @classmethod
    def from_resources(cls, res: Resources) -> 'ClipLayout':
        """Resolve every constant; a missing name raises ResourceNotFoundError."""
        layout = cls(
            clip_rect_left=res.get_dimension('clipRectLeft'),
            clip_rect_top=res.get_dimension('clipRectTop'),
            clip_rect_right=res.get_dimension('clipRectRight'),
            clip_rect_bottom=res.get_dimension('clipRectBottom'),
            rect_inset=res.get_dimension('rectInset'),
            small_rect_offset=res.get_dimension('smallRectOffset'),
            circle_radius=res.get_dimension('circleRadius'),
            text_offset=res.get_dimension('textOffset'),
            text_size=res.get_dimension('textSize'),
            stroke_width=res.get_dimension('strokeWidth'),
        )
        for issue in layout.check_preconditions():
            logger.warning(f"Layout precondition violated: {issue}")
        return layout

    # ------------------------------------------------------------------
    # Grid
    # ------------------------------------------------------------------

    @property
    def column_one(self) -> float:
        return self.rect_inset

    @property
    def column_two(self) -> float:
        return self.column_one + self.rect_inset + self.clip_rect_right

    @property
    def row_one(self) -> float:
        return self.rect_inset

    @property
    def row_two(self) -> float:
        return self.row_one + self.rect_inset + self.clip_rect_bottom

    @property
    def row_three(self) -> float:
        return self.row_two + self.rect_inset + self.clip_rect_bottom

    @property
    def row_four(self) -> float:
        return self.row_three + self.rect_inset + self.clip_rect_bottom

    @property
    def text_row(self) -> float:
        return self.row_four + 1.5 * self.clip_rect_bottom

    @property
    def reject_row(self) -> float:
        return self.row_four + self.rect_inset + 2 * self.clip_rect_bottom

    # ------------------------------------------------------------------
    # Rectangles
    # ------------------------------------------------------------------

    @property
    def clip_rect(self) -> RectF:
        """Canonical clip rectangle every example cell draws into."""
        return RectF(
            self.clip_rect_left, self.clip_rect_top,
            self.clip_rect_right, self.clip_rect_bottom
        )

    @property
    def rect_f(self) -> RectF:
        """Base rectangle: the clip rectangle inset by rect_inset on every side."""
        return RectF(
            self.rect_inset,
            self.rect_inset,
            self.clip_rect_right - self.rect_inset,
            self.clip_rect_bottom - self.rect_inset
        )

    def inset_clip_rect(self, factor: float) -> RectF:
        """Clip rectangle inset by factor * rect_inset (the difference/outside frames)."""
        d = factor * self.rect_inset
        return RectF(d, d, self.clip_rect_right - d, self.clip_rect_bottom - d)

    @property
    def in_clip_rectangle(self) -> RectF:
        """Quick-reject probe overlapping the clip rectangle."""
        return RectF(
            self.clip_rect_right / 2,
            self.clip_rect_bottom / 2,
            self.clip_rect_right * 2,
            self.clip_rect_bottom * 2
        )

    @property
    def not_in_clip_rectangle(self) -> RectF:
        """Quick-reject probe entirely outside the clip rectangle."""
        return RectF(
            self.clip_rect_right + 1,
            self.clip_rect_bottom + 1,
            self.clip_rect_right * 2,
            self.clip_rect_bottom * 2
        )

    def _frame_extent(self) -> Tuple[float, float]:
        width = self.column_two + 2 * self.clip_rect_right + self.rect_inset
        height = self.reject_row + self.clip_rect_bottom + self.rect_inset
        return width, height

    def preferred_size(self) -> Tuple[int, int]:
        """Bitmap (width, height) that holds every cell and the text row.

        Never smaller than 1x1: a degenerate clip rectangle yields a frame
        where every example draws nothing.
        """
        width, height = self._frame_extent()
        return max(1, int(math.ceil(width))), max(1, int(math.ceil(height)))

    def check_preconditions(self) -> List[str]:
        """Human-readable list of violated configuration preconditions."""
        issues = []
        w = self.clip_rect_right - self.clip_rect_left
        h = self.clip_rect_bottom - self.clip_rect_top
        if w <= 0 or h <= 0:
            issues.append(f"clip rectangle must have positive size, got {w}x{h}")
        if self.rect_inset < 0:
            issues.append(f"rectInset must not be negative, got {self.rect_inset}")
        if not self.rect_inset < w / 2:
            issues.append(f"rectInset {self.rect_inset} must be < clip width / 2 ({w / 2})")
        if not self.rect_inset < h / 2:
            issues.append(f"rectInset {self.rect_inset} must be < clip height / 2 ({h / 2})")
        if self.circle_radius <= 0:
            issues.append(f"circleRadius must be positive, got {self.circle_radius}")
        width, height = self._frame_extent()
        if width <= 0 or height <= 0:
            issues.append(f"frame size {width}x{height} is not positive; clamped to at least 1x1")
        return issues
