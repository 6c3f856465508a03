"""XAML document handling for xaml-path2shape.

This subpackage provides:
- Safe parsing of source documents and geometry extraction
- Output template instantiation and geometry injection
- Compact, indented and attribute-per-line serialization
"""

from xaml_path2shape.xaml.builder import ShapeDocument, build_shape
from xaml_path2shape.xaml.geometry import (
    GeometryKind,
    GeometryPayload,
    SourceDocument,
    extract_geometry,
    load_source,
    parse_source,
)
from xaml_path2shape.xaml.serializer import (
    serialize_shape,
    strip_grafting_namespace,
    write_shape,
)

__all__ = [
    "GeometryKind",
    "GeometryPayload",
    "SourceDocument",
    "ShapeDocument",
    "build_shape",
    "extract_geometry",
    "load_source",
    "parse_source",
    "serialize_shape",
    "strip_grafting_namespace",
    "write_shape",
]
