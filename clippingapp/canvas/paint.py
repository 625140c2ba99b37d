"""Drawing style: color, fill/stroke mode, stroke width and text attributes."""

import copy
import enum
from dataclasses import dataclass
from typing import Tuple

import cv2

from ..utils import color as color_utils

# Hershey simplex at font scale 1.0 has roughly the cap height of a 30 px em
HERSHEY_EM_PX = 30.0
TEXT_FONT = cv2.FONT_HERSHEY_SIMPLEX


class Style(enum.Enum):
    FILL = 'fill'
    STROKE = 'stroke'
    FILL_AND_STROKE = 'fill_and_stroke'


class Align(enum.Enum):
    """Horizontal placement of text relative to its origin."""
    LEFT = 'left'
    CENTER = 'center'
    RIGHT = 'right'


@dataclass
class Paint:
    """Mutable style applied by Canvas draw calls.

    Attributes
    ----------
    color : int
        Packed 0xAARRGGBB color
    style : Style
        Fill, stroke or both, default FILL
    stroke_width : float
        Stroke width in surface units; 0 draws one device pixel wide
    text_size : float
        Em size of text in surface units
    text_align : Align
        Text alignment relative to the x origin
    """

    color: int = color_utils.BLACK
    style: Style = Style.FILL
    stroke_width: float = 0.0
    text_size: float = 12.0
    text_align: Align = Align.LEFT

    def copy(self) -> 'Paint':
        return copy.copy(self)

    @property
    def font_scale(self) -> float:
        return self.text_size / HERSHEY_EM_PX

    @property
    def text_thickness(self) -> int:
        return max(1, int(round(self.font_scale * 2)))

    def measure_text(self, text: str) -> Tuple[float, float, float]:
        """Measure text with this paint's size.

        Returns
        -------
        tuple
            (width, ascent, descent) in surface units
        """
        if not text:
            return (0.0, 0.0, 0.0)
        (w, h), baseline = cv2.getTextSize(text, TEXT_FONT, self.font_scale, self.text_thickness)
        return (float(w), float(h), float(baseline))
