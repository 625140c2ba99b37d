"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Packed ARGB colors (color)
    - Contour construction and pixel coverage (geometry)
    - Atomic I/O and YAML (fs)
    - Hashing for frame provenance (hashing)
    - Unified logging (logging_config)
    - Timers (profiler)
    - Config validation (validators)

No module in utils/ may import from upper layers (canvas, demo).

Convenience imports:
    from clippingapp.utils import color, fs, validators
    from clippingapp.utils.logging_config import setup_logging, push_context
"""

from . import color
from . import fs
from . import geometry
from . import hashing
from . import logging_config
from . import profiler
from . import validators

from .logging_config import push_context, setup_logging

__all__ = [
    # Modules
    'color',
    'fs',
    'geometry',
    'hashing',
    'logging_config',
    'profiler',
    'validators',
    # Direct exports
    'setup_logging',
    'push_context',
]
