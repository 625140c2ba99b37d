"""Clipping demo renderer and the resources it is configured from.

Provides:
    - Resources: named dimensions (px/dp/sp) and strings from YAML
    - ClipLayout: grid and rectangles computed once from resources
    - ClippedView: renders the ordered list of clipping examples

Convenience imports:
    from clippingapp.demo import ClippedView, Resources
"""

from ..utils.validators import ConfigError
from .clipped_view import EXAMPLE_NAMES, ClipExample, ClippedView
from .layout import ClipLayout
from .resources import DEFAULT_RESOURCES_PATH, ResourceNotFoundError, Resources

__all__ = [
    'ClipExample',
    'ClipLayout',
    'ClippedView',
    'ConfigError',
    'DEFAULT_RESOURCES_PATH',
    'EXAMPLE_NAMES',
    'ResourceNotFoundError',
    'Resources',
]
