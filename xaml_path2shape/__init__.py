"""xaml-path2shape: Convert XAML path markup into custom shape definitions.

The converter reads a XAML document holding a single ``Path``, extracts its
geometry (either the ``Data`` attribute or a nested ``<Path.Data>`` element)
and writes it into the shape definition template, keeping the encoding of the
input.

Example:
    >>> from xaml_path2shape import ShapeConverter
    >>> converter = ShapeConverter()
    >>> converter.convert_string('<Path xmlns="urn:p" Data="M0,0 L1,1"/>', "line")
"""

from xaml_path2shape.api import ConversionResult, ShapeConverter
from xaml_path2shape.config import AttributeLayout, Config, ConversionOptions
from xaml_path2shape.exceptions import (
    ConfigError,
    MalformedInputError,
    OutputError,
    Path2ShapeError,
    UnsafeInputError,
)

__version__ = "0.1.0"

__all__ = [
    # Main API
    "ShapeConverter",
    "ConversionResult",
    "Config",
    "ConversionOptions",
    "AttributeLayout",
    # Exceptions
    "Path2ShapeError",
    "ConfigError",
    "MalformedInputError",
    "UnsafeInputError",
    "OutputError",
    # Metadata
    "__version__",
]
