"""Contour construction and pixel-center coverage for 2D outlines.

Provides:
    - Closed contour builders: circle, rect, round rect, oval (numpy (N, 2) arrays)
    - Segment count selection for curved primitives
    - Winding-number coverage of pixel centers (nonzero / even-odd rules)
    - Bounding boxes of point sets
    - Stroke outlines: segment → quad with butt caps

Used by:
    - Path: contour storage for add_circle/add_rect/add_round_rect
    - Region: path → pixel mask for clipping
    - Canvas: filling shapes and stroking lines

All contours are closed implicitly (last vertex connects to first).
Screen frame: top-left origin, +Y down. A clockwise contour on screen has
increasing angle in this frame.

Pixel (i, j) is covered when its center (i + 0.5, j + 0.5) is inside the
outline. Two outlines built from identical inputs always cover identical pixels.
"""

import math
from typing import Sequence, Tuple

import numpy as np

# Max chord length (surface units) used when flattening arcs
MAX_CHORD = 1.0
MIN_SEGMENTS = 16
MAX_SEGMENTS = 256


def arc_segments(radius: float, sweep: float = 2.0 * math.pi) -> int:
    """Number of chords used to flatten an arc of the given radius and sweep."""
    n = int(math.ceil(abs(sweep) * radius / MAX_CHORD))
    full = max(MIN_SEGMENTS, min(MAX_SEGMENTS, n))
    # Scale the bounds for partial arcs (round rect corners)
    frac = abs(sweep) / (2.0 * math.pi)
    return max(2, int(math.ceil(full * frac)))


def circle_contour(cx: float, cy: float, r: float, clockwise: bool = True) -> np.ndarray:
    """Closed polygon approximating a circle.

    Parameters
    ----------
    cx, cy : float
        Center
    r : float
        Radius (> 0)
    clockwise : bool
        Screen-space winding direction, default True

    Returns
    -------
    np.ndarray
        Vertices, shape (N, 2), float64
    """
    n = arc_segments(r)
    t = np.arange(n, dtype=np.float64) * (2.0 * math.pi / n)
    pts = np.stack([cx + r * np.cos(t), cy + r * np.sin(t)], axis=1)
    # Counter-clockwise reuses the exact clockwise vertices in reverse order
    return pts if clockwise else pts[::-1].copy()


def oval_contour(
    left: float, top: float, right: float, bottom: float, clockwise: bool = True
) -> np.ndarray:
    """Closed polygon approximating the ellipse inscribed in a rectangle."""
    rx = 0.5 * (right - left)
    ry = 0.5 * (bottom - top)
    n = arc_segments(max(rx, ry))
    t = np.arange(n, dtype=np.float64) * (2.0 * math.pi / n)
    cx = 0.5 * (left + right)
    cy = 0.5 * (top + bottom)
    pts = np.stack([cx + rx * np.cos(t), cy + ry * np.sin(t)], axis=1)
    return pts if clockwise else pts[::-1].copy()


def rect_contour(
    left: float, top: float, right: float, bottom: float, clockwise: bool = True
) -> np.ndarray:
    """Four-vertex rectangle contour starting at the top-left corner."""
    if clockwise:
        pts = [(left, top), (right, top), (right, bottom), (left, bottom)]
    else:
        pts = [(left, top), (left, bottom), (right, bottom), (right, top)]
    return np.array(pts, dtype=np.float64)


def round_rect_contour(
    left: float,
    top: float,
    right: float,
    bottom: float,
    rx: float,
    ry: float,
    clockwise: bool = True
) -> np.ndarray:
    """Rectangle with elliptical corners.

    Parameters
    ----------
    left, top, right, bottom : float
        Outer bounds
    rx, ry : float
        Corner radii; clamped to half the width/height
    clockwise : bool
        Screen-space winding direction

    Returns
    -------
    np.ndarray
        Vertices, shape (N, 2)

    Notes
    -----
    Zero radii degrade to a plain rectangle contour.
    """
    w = right - left
    h = bottom - top
    rx = min(max(rx, 0.0), 0.5 * w)
    ry = min(max(ry, 0.0), 0.5 * h)
    if rx <= 0.0 or ry <= 0.0:
        return rect_contour(left, top, right, bottom, clockwise)

    n = arc_segments(max(rx, ry), 0.5 * math.pi)
    # Corner centers in clockwise order: top-right, bottom-right, bottom-left, top-left
    corners = [
        (right - rx, top + ry, -0.5 * math.pi),
        (right - rx, bottom - ry, 0.0),
        (left + rx, bottom - ry, 0.5 * math.pi),
        (left + rx, top + ry, math.pi),
    ]
    pts = []
    for ccx, ccy, start in corners:
        t = start + np.arange(n + 1, dtype=np.float64) * (0.5 * math.pi / n)
        pts.append(np.stack([ccx + rx * np.cos(t), ccy + ry * np.sin(t)], axis=1))
    contour = np.concatenate(pts, axis=0)
    if not clockwise:
        contour = contour[::-1].copy()
    return contour


def segment_quad(
    x0: float, y0: float, x1: float, y1: float, width: float
) -> np.ndarray:
    """Butt-capped outline of a line segment with the given stroke width.

    Returns an empty (0, 2) array for zero-length segments.
    Quads from different segments share the same winding sign, so their
    union fills correctly under the nonzero rule.
    """
    dx = x1 - x0
    dy = y1 - y0
    length = math.hypot(dx, dy)
    if length == 0.0 or width <= 0.0:
        return np.zeros((0, 2), dtype=np.float64)
    hw = 0.5 * width
    nx = -dy / length * hw
    ny = dx / length * hw
    return np.array([
        (x0 + nx, y0 + ny),
        (x1 + nx, y1 + ny),
        (x1 - nx, y1 - ny),
        (x0 - nx, y0 - ny),
    ], dtype=np.float64)


def points_bbox(points: np.ndarray) -> Tuple[float, float, float, float]:
    """Axis-aligned bounds (xmin, ymin, xmax, ymax); (0, 0, 0, 0) when empty."""
    if points.shape[0] == 0:
        return (0.0, 0.0, 0.0, 0.0)
    xmin, ymin = points.min(axis=0)
    xmax, ymax = points.max(axis=0)
    return (float(xmin), float(ymin), float(xmax), float(ymax))


def winding_numbers(
    contours: Sequence[np.ndarray],
    xs: np.ndarray,
    ys: np.ndarray
) -> np.ndarray:
    """Accumulated winding number of every sample point.

    Parameters
    ----------
    contours : sequence of np.ndarray
        Closed polygons, each shape (N, 2)
    xs : np.ndarray
        Sample x coordinates, shape (W,)
    ys : np.ndarray
        Sample y coordinates, shape (H,)

    Returns
    -------
    np.ndarray
        Winding numbers, shape (H, W), int32

    Notes
    -----
    Crossing-number formulation: an edge contributes +1 when it crosses the
    sample's horizontal ray upwards with the sample on its left, -1 when it
    crosses downwards with the sample on its right.
    """
    px = xs[np.newaxis, :]
    py = ys[:, np.newaxis]
    wn = np.zeros((ys.shape[0], xs.shape[0]), dtype=np.int32)
    for contour in contours:
        if contour.shape[0] < 3:
            continue
        nxt = np.roll(contour, -1, axis=0)
        for (x0, y0), (x1, y1) in zip(contour, nxt):
            if y0 == y1:
                continue
            # Rows whose sample y falls inside the edge's half-open y span
            if y0 < y1:
                rows = (py >= y0) & (py < y1)
            else:
                rows = (py >= y1) & (py < y0)
            if not rows.any():
                continue
            side = (x1 - x0) * (py - y0) - (px - x0) * (y1 - y0)
            if y0 < y1:
                wn += (rows & (side > 0)).astype(np.int32)
            else:
                wn -= (rows & (side < 0)).astype(np.int32)
    return wn
