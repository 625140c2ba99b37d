"""Test the reusable Path outline.

Tests for clippingapp.canvas.path:
    - reset() vs rewind() fill-type handling
    - Degenerate primitives append nothing
    - Same-direction contours form a union, opposite directions a hole
    - Rebuilding a path is idempotent at pixel level

Run:
    pytest tests/test_path.py -v
"""

import numpy as np
import pytest

from clippingapp.canvas import Canvas, Direction, FillType, Paint, Path, RectF
from clippingapp.utils import color


# ============================================================================
# STATE
# ============================================================================

def test_new_path_empty():
    path = Path()
    assert path.is_empty
    assert path.fill_type is FillType.WINDING
    assert path.bounds().is_empty
    assert not path.contains(0.0, 0.0)


def test_reset_restores_default_fill_type():
    path = Path(FillType.EVEN_ODD)
    path.add_rect(0.0, 0.0, 10.0, 10.0)
    path.reset()
    assert path.is_empty
    assert path.fill_type is FillType.WINDING


def test_rewind_keeps_fill_type():
    path = Path(FillType.EVEN_ODD)
    path.add_rect(0.0, 0.0, 10.0, 10.0)
    path.rewind()
    assert path.is_empty
    assert path.fill_type is FillType.EVEN_ODD


@pytest.mark.parametrize("build", [
    lambda p: p.add_circle(5.0, 5.0, 0.0),
    lambda p: p.add_circle(5.0, 5.0, -3.0),
    lambda p: p.add_rect(10.0, 0.0, 0.0, 10.0),
    lambda p: p.add_rect(RectF(0.0, 0.0, 0.0, 0.0)),
    lambda p: p.add_round_rect(RectF(0.0, 5.0, 10.0, 5.0), 2.0, 2.0),
    lambda p: p.add_oval((0.0, 0.0, -1.0, 4.0)),
])
def test_degenerate_primitives_append_nothing(build):
    path = Path()
    build(path)
    assert path.is_empty


def test_add_rect_forms():
    a = Path()
    a.add_rect(RectF(0.0, 0.0, 10.0, 20.0), Direction.CCW)
    b = Path()
    b.add_rect(0.0, 0.0, 10.0, 20.0, direction=Direction.CCW)
    c = Path()
    c.add_rect(0.0, 0.0, 10.0, 20.0, Direction.CCW)
    assert np.array_equal(a.contours[0], b.contours[0])
    assert np.array_equal(a.contours[0], c.contours[0])
    assert a.bounds() == RectF(0.0, 0.0, 10.0, 20.0)
    with pytest.raises(TypeError):
        a.add_rect(1.0, 2.0)


def test_free_form_contour():
    path = Path()
    path.move_to(0.0, 0.0)
    path.line_to(10.0, 0.0)
    path.line_to(0.0, 10.0)
    path.close()
    assert len(path.contours) == 1
    assert path.contains(2.0, 2.0)
    assert not path.contains(8.0, 8.0)


# ============================================================================
# COMPOSITION
# ============================================================================

def test_same_direction_is_union():
    path = Path()
    path.add_circle(10.0, 10.0, 8.0, Direction.CCW)
    path.add_rect(15.0, 5.0, 40.0, 15.0, Direction.CCW)
    assert path.contains(5.0, 10.0)    # circle only
    assert path.contains(35.0, 10.0)   # rect only
    assert path.contains(16.0, 10.0)   # both
    assert not path.contains(35.0, 30.0)


def test_opposite_direction_is_hole():
    path = Path()
    path.add_rect(0.0, 0.0, 40.0, 40.0, Direction.CW)
    path.add_circle(20.0, 20.0, 10.0, Direction.CCW)
    assert path.contains(2.0, 2.0)
    assert not path.contains(20.0, 20.0)


def test_even_odd_excludes_overlap():
    path = Path(FillType.EVEN_ODD)
    path.add_rect(0.0, 0.0, 20.0, 20.0)
    path.add_rect(10.0, 10.0, 30.0, 30.0)
    assert path.contains(5.0, 5.0)
    assert path.contains(25.0, 25.0)
    assert not path.contains(15.0, 15.0)


# ============================================================================
# IDEMPOTENT REBUILD
# ============================================================================

def build_shape(path: Path) -> None:
    path.add_circle(30.0, 30.0, 20.0, Direction.CCW)
    path.add_round_rect(RectF(20.0, 20.0, 70.0, 60.0), 10.0, 10.0, Direction.CCW)


def render(path: Path) -> np.ndarray:
    canvas = Canvas(80, 80)
    canvas.draw_path(path, Paint(color=color.GREEN))
    return canvas.bitmap.copy()


def test_rewind_and_rebuild_is_pixel_identical():
    once = Path()
    build_shape(once)

    rebuilt = Path()
    build_shape(rebuilt)
    rebuilt.rewind()
    build_shape(rebuilt)

    assert len(rebuilt.contours) == len(once.contours)
    assert np.array_equal(render(rebuilt), render(once))


def test_same_geometry_twice_is_pixel_identical():
    once = Path()
    build_shape(once)
    twice = Path()
    build_shape(twice)
    build_shape(twice)
    assert np.array_equal(render(twice), render(once))


def test_clip_from_rebuilt_path_identical():
    once = Path()
    build_shape(once)
    rebuilt = Path()
    build_shape(rebuilt)
    rebuilt.rewind()
    build_shape(rebuilt)

    a = Canvas(80, 80)
    a.clip_path(once)
    b = Canvas(80, 80)
    b.clip_path(rebuilt)
    assert np.array_equal(a.clip.mask, b.clip.mask)
