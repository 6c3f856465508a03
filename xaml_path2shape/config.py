"""Configuration for xaml-path2shape.

Two layers of configuration exist:

- :class:`Config` describes the vocabulary of the documents (source element
  names, output template, output naming). It is static per run and can be
  loaded from a YAML file.
- :class:`ConversionOptions` carries the per-run switches chosen on the
  command line (pretty printing, attribute layout, failure policy, output
  directory).

Both are passed explicitly to every component that needs them.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from xaml_path2shape.exceptions import ConfigError
from xaml_path2shape.xaml.geometry import GeometryKind

PRESENTATION_NAMESPACE = "http://schemas.microsoft.com/winfx/2006/xaml/presentation"
XAML_NAMESPACE = "http://schemas.microsoft.com/winfx/2006/xaml"
SHAPE_NAMESPACE = "clr-namespace:ShapeLibrary.Shapes;assembly=ShapeLibrary"


@dataclass
class SourceSettings:
    """Names used to locate the geometry in input documents."""

    path_element: str = "Path"
    data_attribute: str = "Data"

    @property
    def data_element(self) -> str:
        """Property element holding node-based geometry, e.g. ``Path.Data``."""
        return f"{self.path_element}.{self.data_attribute}"


@dataclass
class TemplateSettings:
    """Fixed output template and the attributes injected into it."""

    root_element: str = "CustomShape"
    namespace: str = SHAPE_NAMESPACE
    prefix: str = "x"
    prefixed_namespace: str = XAML_NAMESPACE
    display_name_attribute: str = "DisplayName"
    geometry_attribute: str = "Geometry"
    grafting_namespace: str = PRESENTATION_NAMESPACE


@dataclass
class OutputSettings:
    """Output file naming and formatting."""

    extension: str = ".xaml"
    collision_suffix: str = "_converted"
    indent: str = "  "
    pattern: str = "*.xaml"


@dataclass
class Config:
    """Complete document vocabulary for a conversion run."""

    source: SourceSettings = field(default_factory=SourceSettings)
    template: TemplateSettings = field(default_factory=TemplateSettings)
    output: OutputSettings = field(default_factory=OutputSettings)

    @classmethod
    def load(cls, path: Path | None = None) -> Config:
        """Load configuration from ``path``, or return the defaults."""
        if path is None:
            return cls()
        return load_config(path)


class AttributeLayout(str, Enum):
    """How attributes are laid out in pretty-printed output."""

    AUTO = "auto"
    INLINE = "inline"
    MULTILINE = "multiline"


@dataclass
class ConversionOptions:
    """Per-run switches."""

    output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty: bool = False
    attribute_layout: AttributeLayout = AttributeLayout.AUTO
    continue_on_error: bool = False


def resolve_attribute_layout(layout: AttributeLayout, kind: GeometryKind) -> bool:
    """Return True when every attribute should go on its own line.

    ``AUTO`` reproduces the historical behavior where node-based geometry
    gets one attribute per line and attribute-based geometry does not.
    """
    if layout is AttributeLayout.MULTILINE:
        return True
    if layout is AttributeLayout.INLINE:
        return False
    return kind is GeometryKind.NODES


_SECTIONS: dict[str, type] = {
    "source": SourceSettings,
    "template": TemplateSettings,
    "output": OutputSettings,
}


def _parse_section(name: str, raw: Any, section_cls: type) -> Any:
    if raw is None:
        return section_cls()
    if not isinstance(raw, dict):
        raise ConfigError(f"{name}: expected mapping, got {type(raw).__name__}")

    known = {f.name for f in fields(section_cls)}
    values: dict[str, str] = {}
    for key, value in raw.items():
        if key not in known:
            raise ConfigError(f"{name}.{key}: unknown setting")
        if not isinstance(value, str):
            raise ConfigError(
                f"{name}.{key}: expected string, got {type(value).__name__}"
            )
        if not value:
            raise ConfigError(f"{name}.{key}: must not be empty")
        values[key] = value
    return section_cls(**values)


def _validate(config: Config) -> None:
    if not config.output.extension.startswith("."):
        raise ConfigError("output.extension: must start with '.'")
    if config.output.indent.strip():
        raise ConfigError("output.indent: must contain only whitespace")
    if config.template.namespace == config.template.grafting_namespace:
        raise ConfigError(
            "template.grafting_namespace: must differ from template.namespace"
        )


def load_config(path: Path) -> Config:
    """Load and validate a YAML configuration file.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed configuration, with defaults for every omitted key.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If the YAML is invalid or holds invalid values.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax in {path}: {e}") from e

    if data is None:
        raise ConfigError(f"Empty YAML config file: {path}")
    if not isinstance(data, dict):
        raise ConfigError(
            f"Config root: expected mapping, got {type(data).__name__}"
        )

    for key in data:
        if key not in _SECTIONS:
            raise ConfigError(f"{key}: unknown section")

    config = Config(
        **{
            name: _parse_section(name, data.get(name), section_cls)
            for name, section_cls in _SECTIONS.items()
        }
    )
    _validate(config)
    return config
