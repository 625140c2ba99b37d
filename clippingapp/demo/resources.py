"""Named dimension and string lookup for the clipping demo.

Resources play the role of the host's resource table: the renderer asks for
``get_dimension("clipRectRight")`` or ``get_string("clipping")`` once, at
construction, and never touches configuration again while drawing.

Dimensions are stored with units and converted to pixels on lookup:
    px → value, dp → value × density, sp → value × scaled_density

Usage:
    from clippingapp.demo.resources import Resources
    res = Resources.load()                     # packaged defaults
    res = Resources.load("my_values.yaml", density=3.0)
    res.get_dimension("rectInset")             # → 24.0
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..utils import validators
from ..utils.validators import ConfigError, ResourcesFileV1

logger = logging.getLogger(__name__)

DEFAULT_RESOURCES_PATH = Path(__file__).resolve().parent.parent / 'res' / 'values.v1.yaml'


class ResourceNotFoundError(ConfigError):
    """Raised when a named dimension or string is not defined."""

    def __init__(self, kind: str, name: str, source: str):
        super().__init__(f"No {kind} named {name!r} in {source}")
        self.kind = kind
        self.name = name


class Resources:
    """Resolved resource table.

    Parameters
    ----------
    values : ResourcesFileV1
        Validated resource values
    density : float, optional
        Overrides the file's density; scaled density keeps the file's ratio
    source : str
        Where the values came from (for error messages)
    """

    def __init__(
        self,
        values: ResourcesFileV1,
        density: Optional[float] = None,
        source: str = "<resources>"
    ):
        self._values = values
        self.source = source
        self.density = float(values.density)
        self.scaled_density = float(values.scaled_density)
        if density is not None:
            if density <= 0:
                raise ConfigError(f"Density must be positive, got {density}")
            ratio = self.scaled_density / self.density
            self.density = float(density)
            self.scaled_density = float(density) * ratio

    def __repr__(self) -> str:
        return (
            f"Resources(source={self.source!r}, density={self.density}, "
            f"dimens={len(self._values.dimens)}, strings={len(self._values.strings)})"
        )

    @classmethod
    def load(
        cls,
        path: Optional[Union[str, Path]] = None,
        density: Optional[float] = None
    ) -> 'Resources':
        """Load a resources YAML file (the packaged defaults when path is None)."""
        path = Path(path) if path is not None else DEFAULT_RESOURCES_PATH
        values = validators.load_resources_file(path)
        logger.debug(f"Loaded resources from {path}")
        return cls(values, density=density, source=str(path))

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        density: Optional[float] = None,
        source: str = "<dict>"
    ) -> 'Resources':
        return cls(validators.validate_resources(data, source), density=density, source=source)

    @property
    def dimension_names(self) -> list:
        return sorted(self._values.dimens)

    @property
    def string_names(self) -> list:
        return sorted(self._values.strings)

    def get_dimension(self, name: str) -> float:
        """Resolve a named dimension to pixels.

        Raises
        ------
        ResourceNotFoundError
            If name is not defined
        """
        try:
            raw = self._values.dimens[name]
        except KeyError:
            raise ResourceNotFoundError("dimension", name, self.source) from None
        value, unit = validators.parse_dimension(raw)
        if unit == 'dp':
            return value * self.density
        if unit == 'sp':
            return value * self.scaled_density
        return value

    def get_string(self, name: str) -> str:
        """Resolve a named string.

        Raises
        ------
        ResourceNotFoundError
            If name is not defined
        """
        try:
            return self._values.strings[name]
        except KeyError:
            raise ResourceNotFoundError("string", name, self.source) from None
