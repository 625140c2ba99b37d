"""Clipping demo: a grid of 2D clipping, path and transform examples.

The package renders a single deterministic frame in which every cell shows
one clipping technique (rectangle difference, circular hole, intersection,
path union, rounded rectangle, translated and skewed text, quick reject).

Architecture layers (strict one-way dependency):
    scripts/ → clippingapp/demo/ → clippingapp/canvas/ → clippingapp/utils/

Key invariants:
    - Device pixels, top-left origin, +Y down
    - A pixel belongs to a shape when its center lies inside it (no anti-aliasing)
    - YAML-only resource files, validated before rendering starts
    - Bitmaps are (H, W, 4) uint8 RGBA
"""

__version__ = "1.0.0"
