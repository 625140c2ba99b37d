"""YAML schema validation for resource files.

Provides centralized validation using pydantic:
    - Resources schema (resources.v1): screen density, named dimensions, named strings
    - Dimension strings: "<number><unit>" with unit px, dp or sp

All loaders fail fast with a ConfigError naming the file and offending keys,
before any rendering starts.

Units:
    - px: device pixels (used as is)
    - dp: density-independent pixels (× density)
    - sp: scale-independent pixels for text (× scaled_density)

Usage:
    from clippingapp.utils import validators
    res = validators.load_resources_file("clippingapp/res/values.v1.yaml")
    value, unit = validators.parse_dimension("90dp")
"""

import re
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from . import fs

DIMENSION_RE = re.compile(r'^\s*(-?\d+(?:\.\d+)?)\s*(px|dp|sp)\s*$')
DIMENSION_UNITS = ('px', 'dp', 'sp')


class ConfigError(Exception):
    """Raised when configuration loading or validation fails."""

    pass


def parse_dimension(value: str) -> Tuple[float, str]:
    """Split a dimension string into its value and unit.

    Parameters
    ----------
    value : str
        e.g. "90dp", "18sp", "4.5px"

    Returns
    -------
    Tuple[float, str]
        (value, unit)

    Raises
    ------
    ValueError
        If the string is not "<number><px|dp|sp>"
    """
    m = DIMENSION_RE.match(value)
    if m is None:
        raise ValueError(
            f"Invalid dimension {value!r}: expected <number><unit>, unit one of {DIMENSION_UNITS}"
        )
    return float(m.group(1)), m.group(2)


# ============================================================================
# RESOURCES SCHEMA V1
# ============================================================================

class ResourcesFileV1(BaseModel):
    """Named dimensions and strings (resources.v1 schema).

    Dimensions stay as unit strings here; conversion to pixels happens in
    clippingapp.demo.resources.Resources with the file's densities.
    """
    model_config = ConfigDict(populate_by_name=True, extra='forbid')

    schema_version: str = Field("resources.v1", alias="schema", description="Schema version")
    density: float = Field(1.0, gt=0.0, le=8.0, description="dp → px factor")
    scaled_density: Optional[float] = Field(
        None, gt=0.0, le=16.0, description="sp → px factor (defaults to density)"
    )
    dimens: Dict[str, str] = Field(default_factory=dict, description="name → dimension string")
    strings: Dict[str, str] = Field(default_factory=dict, description="name → text")

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "resources.v1":
            raise ValueError(f"Expected schema 'resources.v1', got '{v}'")
        return v

    @field_validator('dimens')
    @classmethod
    def validate_dimens(cls, v: Dict[str, str]) -> Dict[str, str]:
        bad = [f"{name}={value!r}" for name, value in v.items() if not DIMENSION_RE.match(str(value))]
        if bad:
            raise ValueError(
                f"Invalid dimensions (expected <number><px|dp|sp>): {', '.join(bad)}"
            )
        return {name: str(value).strip() for name, value in v.items()}

    @model_validator(mode='after')
    def default_scaled_density(self) -> 'ResourcesFileV1':
        if self.scaled_density is None:
            self.scaled_density = self.density
        return self


def validate_resources(data: dict, source: str = "<dict>") -> ResourcesFileV1:
    """Validate an already-parsed resources mapping.

    Raises
    ------
    ConfigError
        On any schema violation, with the source named in the message
    """
    try:
        return ResourcesFileV1.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid resources file {source}:\n{e}") from e


def load_resources_file(path: Union[str, Path]) -> ResourcesFileV1:
    """Load and validate a resources YAML file.

    Parameters
    ----------
    path : Union[str, Path]
        YAML file path

    Returns
    -------
    ResourcesFileV1
        Validated resources

    Raises
    ------
    ConfigError
        If the file is missing, unparsable or fails validation
    """
    path = Path(path)
    try:
        data = fs.load_yaml(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot load resources file {path}: {e}") from e
    return validate_resources(data, source=str(path))
