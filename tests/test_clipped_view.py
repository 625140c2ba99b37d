"""Test the clip-demo renderer end to end.

Test suites:
1. Construction (ordered examples, logging)
2. Clip setups (ring, intersection, circular hole, union, quick reject)
3. Rendered frame (gray frame, cell content, text examples)
4. Render contract (save stack, subsets, determinism, concurrency)

Fixtures (conftest.py):
- view: ClippedView over density-1 resources (clip rect 90x90, inset 8)
- cell_canvas: 100x100 blank canvas for clip-only checks
- frame_canvas: blank canvas of the full frame size

Run:
    pytest tests/test_clipped_view.py -v
"""

import logging
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from clippingapp.canvas import Canvas, EdgeType, Paint
from clippingapp.demo import EXAMPLE_NAMES, ClippedView, Resources
from clippingapp.utils import color, hashing

from conftest import make_values


def example(view: ClippedView, name: str):
    return {e.name: e for e in view.examples}[name]


def setup_mask(view: ClippedView, name: str, size: int = 100) -> np.ndarray:
    """Clip left by an example's setup plus the canonical clip rectangle, at the origin."""
    canvas = Canvas(size, size)
    example(view, name).setup(canvas)
    canvas.clip_rect(view.layout.clip_rect)
    return canvas.clip.mask.copy()


def painted(bitmap: np.ndarray, c: int) -> np.ndarray:
    return np.all(bitmap == color.to_rgba(c), axis=-1)


def cell_pixel(view: ClippedView, bitmap: np.ndarray, name: str, x: float, y: float) -> int:
    """Packed color at cell-local (x, y) of the named example."""
    ox, oy = example(view, name).origin
    r, g, b, a = (int(v) for v in bitmap[int(oy + y), int(ox + x)])
    return color.argb(a, r, g, b)


@pytest.fixture
def frame(view):
    return view.draw_to_bitmap()


# ============================================================================
# TEST SUITE 1: Construction
# ============================================================================

def test_examples_in_frame_order(view):
    assert [e.name for e in view.examples] == list(EXAMPLE_NAMES)


def test_example_origins(view):
    lay = view.layout
    origins = {e.name: e.origin for e in view.examples}
    assert origins['back_and_unclipped'] == (lay.column_one, lay.row_one)
    assert origins['difference'] == (lay.column_two, lay.row_one)
    assert origins['circular'] == (lay.column_one, lay.row_two)
    assert origins['intersection'] == (lay.column_two, lay.row_two)
    assert origins['combined'] == (lay.column_one, lay.row_three)
    assert origins['rounded_rectangle'] == (lay.column_two, lay.row_three)
    assert origins['outside'] == (lay.column_one, lay.row_four)
    assert origins['translated_text'] == (lay.column_two, lay.text_row)
    assert origins['skewed_text'] == (lay.column_two, lay.text_row)
    assert origins['quick_reject'] == (lay.column_one, lay.reject_row)


def test_layout_logged_once(resources, caplog):
    with caplog.at_level(logging.INFO, logger="clippingapp.demo.clipped_view"):
        ClippedView(resources)
    records = [r for r in caplog.records if r.name == "clippingapp.demo.clipped_view"]
    assert len(records) == 1
    assert "10 examples" in records[0].getMessage()


# ============================================================================
# TEST SUITE 2: Clip setups
# ============================================================================

@pytest.mark.parametrize("inset, right, bottom", [
    (8, 90, 90),
    (4, 60, 40),
    (10, 100, 100),
    (3, 50, 80),
])
def test_difference_ring_inside_outside_rect(inset, right, bottom):
    view = ClippedView(Resources.from_dict(
        make_values(rectInset=inset, clipRectRight=right, clipRectBottom=bottom)
    ))
    ring = setup_mask(view, 'difference', size=120)
    outside = setup_mask(view, 'outside', size=120)
    assert ring.any()
    assert not (ring & ~outside).any()
    assert (outside & ~ring).any()


def test_intersection_equals_direct_rect(view):
    lay = view.layout
    off = lay.small_rect_offset
    sequential = setup_mask(view, 'intersection')

    direct = Canvas(100, 100)
    direct.clip_rect(
        lay.clip_rect_left + off, lay.clip_rect_top + off,
        lay.clip_rect_right - off, lay.clip_rect_bottom - off
    )
    assert sequential.any()
    assert np.array_equal(sequential, direct.clip.mask)


def test_circular_hole_matches_drawn_circle(view):
    lay = view.layout
    hole = ~setup_mask(view, 'circular')

    circle = Canvas(100, 100)
    circle.draw_circle(
        lay.circle_radius, lay.clip_rect_bottom - lay.circle_radius,
        lay.circle_radius, Paint(color=color.GREEN)
    )
    drawn = painted(circle.bitmap, color.GREEN)
    assert drawn.any()
    assert not (drawn & ~hole).any()


def test_circular_example_hides_circle(view, frame_canvas):
    view.render(frame_canvas, only=['circular'])
    assert painted(frame_canvas.bitmap, color.GREEN).sum() == 0
    # The rest of the cell is still drawn
    assert painted(frame_canvas.bitmap, color.WHITE).sum() > 0


def test_baseline_cell_shows_circle(view, frame_canvas):
    view.render(frame_canvas, only=['back_and_unclipped'])
    assert painted(frame_canvas.bitmap, color.GREEN).sum() > 0


def test_combined_clip_is_union(view):
    mask = setup_mask(view, 'combined')
    # Circle centered (38, 38) r=30; rectangle [15, 38, 75, 82]
    assert mask[15, 25]          # inside circle only
    assert mask[80, 70]          # inside rectangle only
    assert mask[50, 40]          # inside both
    assert not mask[10, 85]      # inside neither
    assert not mask[85, 5]


def test_rounded_rectangle_clip(view):
    mask = setup_mask(view, 'rounded_rectangle')
    assert mask[45, 45]
    assert mask[8, 45]           # straight top edge of rect_f
    assert not mask[8, 8]        # rounded corner cut away
    assert not mask[85, 45]      # outside rect_f


def test_quick_reject_not_rejected(view, cell_canvas):
    example(view, 'quick_reject').setup(cell_canvas)
    assert not cell_canvas.quick_reject(view.layout.in_clip_rectangle, EdgeType.AA)
    assert cell_canvas.quick_reject(view.layout.not_in_clip_rectangle, EdgeType.AA)


def test_quick_reject_draws_black_then_rectangle(view, frame_canvas):
    view.render(frame_canvas, only=['quick_reject'])
    bitmap = frame_canvas.bitmap
    assert painted(bitmap, color.WHITE).sum() == 0
    assert cell_pixel(view, bitmap, 'quick_reject', 10, 10) == color.BLACK
    assert cell_pixel(view, bitmap, 'quick_reject', 60, 60) == color.GREEN
    assert cell_pixel(view, bitmap, 'quick_reject', 10, 60) == color.BLACK
    # Drawing is clipped to the canonical rectangle
    assert cell_pixel(view, bitmap, 'quick_reject', 95, 60) == color.TRANSPARENT
    assert painted(bitmap, color.BLACK).sum() + painted(bitmap, color.GREEN).sum() == 90 * 90


# ============================================================================
# TEST SUITE 3: Rendered frame
# ============================================================================

def test_frame_size(view, frame):
    assert frame.shape == (588, 294, 4)
    assert frame.dtype == np.uint8


def test_gray_frame_around_cells(view, frame):
    assert frame[0, 0].tolist() == color.to_rgba(color.GRAY).tolist()
    # Gap between the two columns
    assert frame[20, 102].tolist() == color.to_rgba(color.GRAY).tolist()
    # Inside the first cell the background is replaced
    assert cell_pixel(view, frame, 'back_and_unclipped', 60, 45) == color.WHITE
    assert not painted(frame, color.TRANSPARENT).any()


def test_difference_cell_hole_shows_background(view, frame):
    assert cell_pixel(view, frame, 'difference', 45, 45) == color.GRAY
    assert cell_pixel(view, frame, 'difference', 20, 45) != color.GRAY
    assert cell_pixel(view, frame, 'difference', 5, 45) == color.GRAY


def test_intersection_cell(view, frame):
    assert cell_pixel(view, frame, 'intersection', 45, 45) != color.GRAY
    assert cell_pixel(view, frame, 'intersection', 20, 20) == color.GRAY
    assert cell_pixel(view, frame, 'intersection', 70, 70) == color.GRAY


def test_combined_cell(view, frame):
    assert cell_pixel(view, frame, 'combined', 25, 15) != color.GRAY
    assert cell_pixel(view, frame, 'combined', 70, 80) != color.GRAY
    assert cell_pixel(view, frame, 'combined', 85, 10) == color.GRAY


def test_baseline_cell_content(view, frame):
    assert cell_pixel(view, frame, 'back_and_unclipped', 75, 75) == color.RED
    assert cell_pixel(view, frame, 'back_and_unclipped', 30, 60) == color.GREEN
    blue = painted(frame, color.BLUE)
    ox, oy = example(view, 'back_and_unclipped').origin
    assert blue[int(oy):int(oy) + 30, int(ox):int(ox) + 90].any()


def test_translated_text_green_left_aligned(view, frame_canvas):
    view.render(frame_canvas, only=['translated_text'])
    green = painted(frame_canvas.bitmap, color.GREEN)
    ys, xs = np.nonzero(green)
    assert xs.size > 0
    assert xs.min() >= view.layout.column_two - 3
    assert ys.max() <= view.layout.text_row + 8


def test_skewed_text_yellow_right_aligned(view, frame_canvas):
    view.render(frame_canvas, only=['skewed_text'])
    yellow = painted(frame_canvas.bitmap, color.YELLOW)
    ys, xs = np.nonzero(yellow)
    assert xs.size > 0
    # Right aligned at the cell origin: glyphs sit to its left
    assert xs.max() <= view.layout.column_two + 3
    # Vertical shear pulls the left end of the text upwards
    left = ys[xs < np.median(xs)].mean()
    right = ys[xs >= np.median(xs)].mean()
    assert left < right


# ============================================================================
# TEST SUITE 4: Render contract
# ============================================================================

def test_render_restores_save_stack(view, frame_canvas):
    view.render(frame_canvas)
    assert frame_canvas.save_count == 1
    assert frame_canvas.matrix.is_identity()
    assert frame_canvas.clip.area == frame_canvas.width * frame_canvas.height


def test_render_unknown_example(view, frame_canvas):
    with pytest.raises(ValueError, match="bogus"):
        view.render(frame_canvas, only=['outside', 'bogus'])


def test_render_subset_order_independent(view):
    a = view.draw_to_bitmap(only=['outside', 'back_and_unclipped'])
    b = view.draw_to_bitmap(only=['back_and_unclipped', 'outside'])
    assert np.array_equal(a, b)


def test_render_empty_subset(view):
    assert not view.draw_to_bitmap(only=[]).any()


def test_examples_independent_of_order(view):
    """Each example draws the same pixels alone as inside the full frame."""
    full = view.draw_to_bitmap()
    lay = view.layout
    for name in ('difference', 'circular', 'intersection', 'combined', 'rounded_rectangle'):
        alone = Canvas(*lay.preferred_size(), background=color.GRAY)
        view.render(alone, only=[name])
        ox, oy = (int(v) for v in example(view, name).origin)
        cell = (slice(oy, oy + 90), slice(ox, ox + 90))
        assert np.array_equal(alone.bitmap[cell], full[cell]), name


def test_render_deterministic(view, resources):
    a = hashing.sha256_array(view.draw_to_bitmap())
    b = hashing.sha256_array(view.draw_to_bitmap())
    c = hashing.sha256_array(ClippedView(resources).draw_to_bitmap())
    assert a == b == c


def test_concurrent_renders_identical(view):
    expected = view.draw_to_bitmap()
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda _: view.draw_to_bitmap(), range(4)))
    for bitmap in results:
        assert np.array_equal(bitmap, expected)


def test_default_resources_render():
    view = ClippedView(Resources.load())
    bitmap = view.draw_to_bitmap(only=['back_and_unclipped'])
    assert bitmap.shape[:2] == view.layout.preferred_size()[::-1]
    assert painted(bitmap, color.GREEN).any()


@pytest.mark.parametrize("dimens", [
    {'rectInset': 50},
    {'rectInset': 45, 'clipRectBottom': 60},
    {'circleRadius': 0},
    {'circleRadius': -3},
    {'textSize': 0},
    {'strokeWidth': 0},
    {'clipRectRight': 0, 'clipRectBottom': 0, 'rectInset': 0},
    {'clipRectRight': -200},
    {'clipRectBottom': -90, 'rectInset': -8},
], ids=lambda d: ",".join(f"{k}={v}" for k, v in d.items()))
def test_degenerate_config_renders(dimens):
    """Broken preconditions are logged at construction; rendering still completes."""
    view = ClippedView(Resources.from_dict(make_values(**dimens)))
    width, height = view.layout.preferred_size()
    assert width >= 1 and height >= 1

    bitmap = view.draw_to_bitmap()
    assert bitmap.shape == (height, width, 4)

    canvas = Canvas(width, height)
    view.render(canvas)
    assert canvas.save_count == 1
