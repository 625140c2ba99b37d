"""Packed ARGB colors and conversions to bitmap pixels.

Provides:
    - Named color constants (WHITE, BLACK, GRAY, RED, GREEN, BLUE, YELLOW, ...)
    - argb()/rgb() packing and alpha/red/green/blue channel extraction
    - to_rgba(): packed int → (4,) uint8 RGBA pixel
    - parse_color(): "#RRGGBB", "#AARRGGBB" or a color name → packed int

Used by:
    - Canvas: draw_color() and paint compositing
    - Validators: color values in YAML configs
    - Tests: pixel comparisons against expected colors

Invariants:
    - Colors are 32-bit ints laid out as 0xAARRGGBB
    - Bitmap pixels are uint8 RGBA in [0, 255]
"""

from typing import Union

import numpy as np

TRANSPARENT = 0x00000000
BLACK = 0xFF000000
DKGRAY = 0xFF444444
GRAY = 0xFF888888
LTGRAY = 0xFFCCCCCC
WHITE = 0xFFFFFFFF
RED = 0xFFFF0000
GREEN = 0xFF00FF00
BLUE = 0xFF0000FF
YELLOW = 0xFFFFFF00
CYAN = 0xFF00FFFF
MAGENTA = 0xFFFF00FF

_NAMED = {
    'transparent': TRANSPARENT,
    'black': BLACK,
    'darkgray': DKGRAY,
    'gray': GRAY,
    'lightgray': LTGRAY,
    'white': WHITE,
    'red': RED,
    'green': GREEN,
    'blue': BLUE,
    'yellow': YELLOW,
    'cyan': CYAN,
    'magenta': MAGENTA,
}


def argb(a: int, r: int, g: int, b: int) -> int:
    """Pack channels in [0, 255] into a 0xAARRGGBB int."""
    for name, v in (('alpha', a), ('red', r), ('green', g), ('blue', b)):
        if not 0 <= v <= 255:
            raise ValueError(f"{name} channel must be in [0, 255], got {v}")
    return (a << 24) | (r << 16) | (g << 8) | b


def rgb(r: int, g: int, b: int) -> int:
    """Pack an opaque color."""
    return argb(255, r, g, b)


def alpha(color: int) -> int:
    return (color >> 24) & 0xFF


def red(color: int) -> int:
    return (color >> 16) & 0xFF


def green(color: int) -> int:
    return (color >> 8) & 0xFF


def blue(color: int) -> int:
    return color & 0xFF


def to_rgba(color: int) -> np.ndarray:
    """Convert packed color to an RGBA pixel.

    Parameters
    ----------
    color : int
        Packed 0xAARRGGBB color

    Returns
    -------
    np.ndarray
        Pixel, shape (4,), dtype uint8, channel order R, G, B, A
    """
    return np.array(
        [red(color), green(color), blue(color), alpha(color)],
        dtype=np.uint8
    )


def parse_color(value: Union[str, int]) -> int:
    """Parse a color from config.

    Parameters
    ----------
    value : str or int
        "#RRGGBB", "#AARRGGBB", a lowercase color name, or an already packed int

    Returns
    -------
    int
        Packed 0xAARRGGBB color

    Raises
    ------
    ValueError
        If the value is not a recognized color

    Examples
    --------
    >>> hex(parse_color("#00FF00"))
    '0xff00ff00'
    >>> parse_color("gray") == GRAY
    True
    """
    if isinstance(value, int):
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"Packed color out of range: {value:#x}")
        return value

    s = value.strip()
    if s.startswith('#'):
        digits = s[1:]
        if len(digits) not in (6, 8):
            raise ValueError(f"Unknown color: {value!r}")
        try:
            packed = int(digits, 16)
        except ValueError as e:
            raise ValueError(f"Unknown color: {value!r}") from e
        if len(digits) == 6:
            packed |= 0xFF000000
        return packed

    try:
        return _NAMED[s.lower()]
    except KeyError:
        raise ValueError(f"Unknown color: {value!r}") from None
