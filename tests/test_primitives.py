"""Test the value types the canvas is built on: RectF, Matrix and Paint.

Test cases:
    - RectF: emptiness, inset/offset, half-open containment, intersection
    - Matrix: pre-concatenation order, skew, inversion, rect mapping
    - Paint: text measurement scales with text size, copies are independent

Run:
    pytest tests/test_primitives.py -v
"""

import numpy as np
import pytest

from clippingapp.canvas import Align, Matrix, Paint, RectF, Style
from clippingapp.canvas.paint import HERSHEY_EM_PX
from clippingapp.utils import color


# ============================================================================
# RECTF
# ============================================================================

def test_rect_dimensions():
    r = RectF(10.0, 20.0, 50.0, 80.0)
    assert r.width == 40.0
    assert r.height == 60.0
    assert (r.center_x, r.center_y) == (30.0, 50.0)
    assert RectF.from_xywh(10.0, 20.0, 40.0, 60.0) == r


@pytest.mark.parametrize("rect", [
    RectF(0.0, 0.0, 0.0, 10.0),
    RectF(0.0, 0.0, 10.0, 0.0),
    RectF(10.0, 0.0, 0.0, 10.0),
])
def test_rect_empty(rect):
    assert rect.is_empty


def test_rect_inset_and_offset():
    r = RectF(0.0, 0.0, 90.0, 90.0)
    assert r.inset(16.0, 16.0) == RectF(16.0, 16.0, 74.0, 74.0)
    assert r.inset(-2.0, -2.0) == RectF(-2.0, -2.0, 92.0, 92.0)
    assert r.offset(5.0, -5.0) == RectF(5.0, -5.0, 95.0, 85.0)


def test_rect_contains_half_open():
    r = RectF(0.0, 0.0, 10.0, 10.0)
    assert r.contains(0.0, 0.0)
    assert r.contains(9.99, 9.99)
    assert not r.contains(10.0, 5.0)
    assert not r.contains(5.0, 10.0)


def test_rect_intersect():
    a = RectF(0.0, 0.0, 50.0, 50.0)
    b = RectF(40.0, 40.0, 90.0, 90.0)
    assert a.intersect(b) == RectF(40.0, 40.0, 50.0, 50.0)
    assert a.intersect(RectF(50.0, 0.0, 60.0, 10.0)) is None
    assert a.union(b) == RectF(0.0, 0.0, 90.0, 90.0)
    assert a.union(RectF(0.0, 0.0, 0.0, 0.0)) == a


def test_rect_sorted():
    assert RectF(10.0, 20.0, 0.0, 5.0).sorted() == RectF(0.0, 5.0, 10.0, 20.0)


# ============================================================================
# MATRIX
# ============================================================================

def test_matrix_identity():
    m = Matrix()
    assert m.is_identity()
    assert m.rect_stays_rect()
    pts = np.array([[1.0, 2.0], [3.0, 4.0]])
    assert np.array_equal(m.map_points(pts), pts)


def test_matrix_translate_then_skew_applies_skew_first():
    m = Matrix().translate(10.0, 20.0).skew(0.2, 0.3)
    mapped = m.map_points(np.array([[10.0, 0.0], [0.0, 10.0]]))
    assert np.allclose(mapped, [[20.0, 23.0], [12.0, 30.0]])
    assert not m.rect_stays_rect()


def test_matrix_scale_keeps_rects():
    m = Matrix().scale(2.0, 3.0)
    assert m.rect_stays_rect()
    assert m.map_rect(RectF(1.0, 1.0, 2.0, 2.0)) == RectF(2.0, 3.0, 4.0, 6.0)
    assert Matrix().scale(2.0).map_rect(RectF(0.0, 0.0, 1.0, 1.0)) == RectF(0.0, 0.0, 2.0, 2.0)


def test_matrix_invert():
    m = Matrix().translate(5.0, -3.0).scale(2.0).skew(0.2, 0.0)
    inv = m.invert()
    pts = np.array([[1.0, 1.0], [7.0, -2.0]])
    assert np.allclose(inv.map_points(m.map_points(pts)), pts)
    assert Matrix().scale(0.0, 1.0).invert() is None


def test_matrix_rotate():
    m = Matrix().rotate(90.0)
    assert np.allclose(m.map_points(np.array([[1.0, 0.0]])), [[0.0, 1.0]])


def test_matrix_copy_independent():
    m = Matrix().translate(1.0, 1.0)
    c = m.copy()
    c.translate(1.0, 1.0)
    assert m != c
    assert m == Matrix().translate(1.0, 1.0)


def test_map_rect_bounds_skewed():
    r = Matrix().skew(0.5, 0.0).map_rect(RectF(0.0, 0.0, 10.0, 10.0))
    assert r == RectF(0.0, 0.0, 15.0, 10.0)


# ============================================================================
# PAINT
# ============================================================================

def test_paint_defaults():
    p = Paint()
    assert p.color == color.BLACK
    assert p.style is Style.FILL
    assert p.text_align is Align.LEFT
    assert p.font_scale == pytest.approx(12.0 / HERSHEY_EM_PX)


def test_measure_text_scales():
    small = Paint(text_size=18.0).measure_text("Clipping")
    large = Paint(text_size=36.0).measure_text("Clipping")
    assert small[0] > 0 and small[1] > 0
    assert large[0] > small[0]
    assert large[1] > small[1]
    assert Paint().measure_text("") == (0.0, 0.0, 0.0)


def test_paint_copy_independent():
    p = Paint(color=color.RED, stroke_width=4.0)
    q = p.copy()
    q.color = color.BLUE
    assert p.color == color.RED
    assert q.stroke_width == 4.0
