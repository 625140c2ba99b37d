"""Clip-demo renderer: a grid of cells, each showing one clipping technique.

Every cell draws the same visual unit (draw_clipped_rectangle) after its own
clip/transform setup. The cells are an ordered list of ClipExample entries
iterated by render(); adding an example means appending to that list.

Frame layout (two columns):
    row one    back_and_unclipped   difference
    row two    circular             intersection
    row three  combined             rounded_rectangle
    row four   outside
    text row                        translated_text, skewed_text
    reject row quick_reject

Invariants:
    - Each example runs inside canvas.saved(): no transform or clip leaks
    - Each example builds its own Path and Paint and sets every style
      attribute it reads, so examples are order-independent and concurrent
      render() calls on one view share no mutable state
    - back_and_unclipped paints the whole surface gray before its cell; the
      gray left around every cell is the frame of the demo

Usage:
    from clippingapp.demo import ClippedView, Resources
    view = ClippedView(Resources.load())
    rgba = view.draw_to_bitmap()
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

import numpy as np

from ..canvas import Align, Canvas, Direction, EdgeType, Paint, Path
from ..utils import color
from ..utils.profiler import timer
from .layout import ClipLayout
from .resources import Resources

logger = logging.getLogger(__name__)

# Shear applied by the skewed text example
SKEW_X = 0.2
SKEW_Y = 0.3

EXAMPLE_NAMES = (
    'back_and_unclipped',
    'difference',
    'circular',
    'intersection',
    'combined',
    'rounded_rectangle',
    'outside',
    'translated_text',
    'skewed_text',
    'quick_reject',
)


@dataclass(frozen=True)
class ClipExample:
    """One grid cell.

    Attributes
    ----------
    name : str
        Stable identifier (used by render(only=...) and the CLI)
    origin : Tuple[float, float]
        Cell origin; the canvas is translated here before setup runs
    setup : Callable[[Canvas], None]
        Clip and transform preparation, in cell coordinates
    draw : Callable[[Canvas], None]
        What the cell draws once set up
    """
    name: str
    origin: Tuple[float, float]
    setup: Callable[[Canvas], None]
    draw: Callable[[Canvas], None]


class ClippedView:
    """Renderer for the clipping demo.

    Parameters
    ----------
    resources : Resources
        Source of every dimension and label. All lookups happen here, so a
        missing name fails construction with ResourceNotFoundError and
        render() never touches configuration.
    """

    def __init__(self, resources: Resources):
        self.layout = ClipLayout.from_resources(resources)
        self.clipping_label = resources.get_string('clipping')
        self.translated_label = resources.get_string('translated')
        self.skewed_label = resources.get_string('skewed')
        self.examples = self._build_examples()
        logger.info(
            f"ClippedView ready: {len(self.examples)} examples, "
            f"size={self.layout.preferred_size()}, clip=({self.layout.clip_rect_right}x"
            f"{self.layout.clip_rect_bottom}), inset={self.layout.rect_inset}"
        )

    def _build_examples(self) -> List[ClipExample]:
        lay = self.layout
        return [
            ClipExample('back_and_unclipped', (lay.column_one, lay.row_one),
                        self._setup_back, self.draw_clipped_rectangle),
            ClipExample('difference', (lay.column_two, lay.row_one),
                        self._setup_difference, self.draw_clipped_rectangle),
            ClipExample('circular', (lay.column_one, lay.row_two),
                        self._setup_circular, self.draw_clipped_rectangle),
            ClipExample('intersection', (lay.column_two, lay.row_two),
                        self._setup_intersection, self.draw_clipped_rectangle),
            ClipExample('combined', (lay.column_one, lay.row_three),
                        self._setup_combined, self.draw_clipped_rectangle),
            ClipExample('rounded_rectangle', (lay.column_two, lay.row_three),
                        self._setup_rounded_rectangle, self.draw_clipped_rectangle),
            ClipExample('outside', (lay.column_one, lay.row_four),
                        self._setup_outside, self.draw_clipped_rectangle),
            ClipExample('translated_text', (lay.column_two, lay.text_row),
                        _no_setup, self._draw_translated_text),
            ClipExample('skewed_text', (lay.column_two, lay.text_row),
                        self._setup_skew, self._draw_skewed_text),
            ClipExample('quick_reject', (lay.column_one, lay.reject_row),
                        self._setup_quick_reject, self._draw_quick_reject),
        ]

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, canvas: Canvas, only: Optional[Iterable[str]] = None) -> None:
        """Draw the frame (or the named subset of examples) onto canvas.

        Parameters
        ----------
        canvas : Canvas
            Target surface; its save count is unchanged on return
        only : Iterable[str], optional
            Example names to draw, in frame order regardless of the order given

        Raises
        ------
        ValueError
            If only names an unknown example
        """
        selected = self._select(only)
        for example in selected:
            with timer(f"example.{example.name}"), canvas.saved():
                canvas.translate(*example.origin)
                example.setup(canvas)
                example.draw(canvas)

    def _select(self, only: Optional[Iterable[str]]) -> List[ClipExample]:
        if only is None:
            return list(self.examples)
        wanted = set(only)
        unknown = wanted - {e.name for e in self.examples}
        if unknown:
            raise ValueError(
                f"Unknown example(s) {sorted(unknown)}; expected any of {list(EXAMPLE_NAMES)}"
            )
        return [e for e in self.examples if e.name in wanted]

    def draw_to_bitmap(
        self,
        only: Optional[Iterable[str]] = None,
        background: int = color.TRANSPARENT
    ) -> np.ndarray:
        """Render into a fresh canvas of the layout's preferred size.

        The background only shows where no example draws (the full frame
        paints it over with gray first).

        Returns
        -------
        np.ndarray
            (H, W, 4) uint8 RGBA
        """
        width, height = self.layout.preferred_size()
        canvas = Canvas(width, height, background=background)
        with timer("frame"):
            self.render(canvas, only=only)
        return canvas.bitmap

    def _paint(self, paint_color: int, align: Align = Align.LEFT) -> Paint:
        return Paint(
            color=paint_color,
            stroke_width=self.layout.stroke_width,
            text_size=self.layout.text_size,
            text_align=align,
        )

    def draw_clipped_rectangle(self, canvas: Canvas) -> None:
        """The shared cell content, drawn under whatever clip the caller set up.

        Clips to the canonical rectangle, fills it white, then draws a red
        diagonal, a green circle in the bottom-left corner and the blue
        right-aligned label.
        """
        lay = self.layout
        canvas.clip_rect(lay.clip_rect)
        canvas.draw_color(color.WHITE)

        canvas.draw_line(
            lay.clip_rect_left, lay.clip_rect_top,
            lay.clip_rect_right, lay.clip_rect_bottom,
            self._paint(color.RED)
        )
        canvas.draw_circle(
            lay.circle_radius, lay.clip_rect_bottom - lay.circle_radius,
            lay.circle_radius, self._paint(color.GREEN)
        )
        canvas.draw_text(
            self.clipping_label, lay.clip_rect_right, lay.text_offset,
            self._paint(color.BLUE, Align.RIGHT)
        )

    # ------------------------------------------------------------------
    # Example setups
    # ------------------------------------------------------------------

    def _setup_back(self, canvas: Canvas) -> None:
        # draw_color fills the clip, which is still the whole surface here
        canvas.draw_color(color.GRAY)

    def _setup_difference(self, canvas: Canvas) -> None:
        canvas.clip_rect(self.layout.inset_clip_rect(2))
        canvas.clip_out_rect(self.layout.inset_clip_rect(4))

    def _setup_circular(self, canvas: Canvas) -> None:
        lay = self.layout
        path = Path()
        path.add_circle(
            lay.circle_radius, lay.clip_rect_bottom - lay.circle_radius,
            lay.circle_radius, Direction.CCW
        )
        canvas.clip_out_path(path)

    def _setup_intersection(self, canvas: Canvas) -> None:
        lay = self.layout
        off = lay.small_rect_offset
        canvas.clip_rect(
            lay.clip_rect_left, lay.clip_rect_top,
            lay.clip_rect_right - off, lay.clip_rect_bottom - off
        )
        canvas.clip_rect(
            lay.clip_rect_left + off, lay.clip_rect_top + off,
            lay.clip_rect_right, lay.clip_rect_bottom
        )

    def _setup_combined(self, canvas: Canvas) -> None:
        lay = self.layout
        r = lay.circle_radius
        path = Path()
        path.add_circle(
            lay.clip_rect_left + lay.rect_inset + r,
            lay.clip_rect_top + r + lay.rect_inset,
            r, Direction.CCW
        )
        path.add_rect(
            lay.clip_rect_right / 2 - r,
            lay.clip_rect_top + r + lay.rect_inset,
            lay.clip_rect_right / 2 + r,
            lay.clip_rect_bottom - lay.rect_inset,
            direction=Direction.CCW
        )
        canvas.clip_path(path)

    def _setup_rounded_rectangle(self, canvas: Canvas) -> None:
        radius = self.layout.clip_rect_right / 4
        path = Path()
        path.add_round_rect(self.layout.rect_f, radius, radius, Direction.CCW)
        canvas.clip_path(path)

    def _setup_outside(self, canvas: Canvas) -> None:
        canvas.clip_rect(self.layout.inset_clip_rect(2))

    def _setup_skew(self, canvas: Canvas) -> None:
        canvas.skew(SKEW_X, SKEW_Y)

    def _setup_quick_reject(self, canvas: Canvas) -> None:
        canvas.clip_rect(self.layout.clip_rect)

    # ------------------------------------------------------------------
    # Example draws
    # ------------------------------------------------------------------

    def _draw_translated_text(self, canvas: Canvas) -> None:
        lay = self.layout
        canvas.draw_text(
            self.translated_label, lay.clip_rect_left, lay.clip_rect_top,
            self._paint(color.GREEN, Align.LEFT)
        )

    def _draw_skewed_text(self, canvas: Canvas) -> None:
        lay = self.layout
        canvas.draw_text(
            self.skewed_label, lay.clip_rect_left, lay.clip_rect_top,
            self._paint(color.YELLOW, Align.RIGHT)
        )

    def _draw_quick_reject(self, canvas: Canvas) -> None:
        in_clip = self.layout.in_clip_rectangle
        # Built for parity with the in-clip probe; no branch depends on it
        not_in_clip = self.layout.not_in_clip_rectangle  # noqa: F841

        if canvas.quick_reject(in_clip, EdgeType.AA):
            canvas.draw_color(color.WHITE)
        else:
            canvas.draw_color(color.BLACK)
            canvas.draw_rect(in_clip, self._paint(color.GREEN))


def _no_setup(canvas: Canvas) -> None:
    pass
