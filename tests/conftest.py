"""Shared fixtures: density-1 resources, a view built from them, blank canvases."""

import copy
import logging
import sys

import pytest

from clippingapp.canvas import Canvas
from clippingapp.demo import ClippedView, Resources
from clippingapp.utils import logging_config

# Same dimensions as the packaged defaults, at density 1 so dp == px
BASE_VALUES = {
    'schema': 'resources.v1',
    'density': 1.0,
    'dimens': {
        'clipRectRight': '90dp',
        'clipRectBottom': '90dp',
        'clipRectTop': '0dp',
        'clipRectLeft': '0dp',
        'rectInset': '8dp',
        'smallRectOffset': '40dp',
        'circleRadius': '30dp',
        'textOffset': '20dp',
        'strokeWidth': '4dp',
        'textSize': '18sp',
    },
    'strings': {
        'clipping': 'Clipping',
        'translated': 'Translated Text',
        'skewed': 'Skewed Text',
    },
}


def make_values(**dimens) -> dict:
    """BASE_VALUES with some dimensions replaced (keyword value → '<value>px')."""
    values = copy.deepcopy(BASE_VALUES)
    for name, value in dimens.items():
        values['dimens'][name] = f"{value}px"
    return values


@pytest.fixture
def resource_values():
    return copy.deepcopy(BASE_VALUES)


@pytest.fixture
def resources(resource_values):
    return Resources.from_dict(resource_values, source="<test>")


@pytest.fixture
def view(resources):
    return ClippedView(resources)


@pytest.fixture
def cell_canvas():
    """Blank canvas large enough for one example cell at density 1."""
    return Canvas(100, 100)


@pytest.fixture
def frame_canvas(view):
    """Blank canvas of the full frame size."""
    width, height = view.layout.preferred_size()
    return Canvas(width, height)


@pytest.fixture
def reset_logging():
    """Remove handlers and context installed by setup_logging() during a test."""
    yield
    logging_config.setup_logging(log_level="WARNING", to_stderr=False, capture_warnings=False)
    logging_config.pop_context()
    logging.captureWarnings(False)
    sys.excepthook = sys.__excepthook__
