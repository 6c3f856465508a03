"""Geometry extraction from source XAML documents.

A source document holds one ``Path`` element whose geometry is written in
one of two equivalent ways::

    <Path Data="M0,0 L10,0 L10,10 Z" />

    <Path>
      <Path.Data>
        <PathGeometry Figures="M0,0 L10,0 L10,10 Z" />
      </Path.Data>
    </Path>

:func:`extract_geometry` tells them apart and returns a tagged
:class:`GeometryPayload`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING
from xml.sax.saxutils import escape

import defusedxml
import defusedxml.ElementTree as SafeET
from lxml import etree

from xaml_path2shape.exceptions import MalformedInputError, UnsafeInputError

if TYPE_CHECKING:
    from xaml_path2shape.config import SourceSettings

logger = logging.getLogger(__name__)

# Prefix bound to the document's default namespace in XPath queries.
SOURCE_PREFIX = "src"


class GeometryKind(str, Enum):
    """Encoding of the path geometry."""

    ATTRIBUTE = "attribute"
    NODES = "nodes"


@dataclass(frozen=True)
class GeometryPayload:
    """Geometry extracted from a source document.

    ``data`` is the attribute value for ``ATTRIBUTE`` payloads and the
    serialized inner markup of the geometry property element for ``NODES``
    payloads.
    """

    kind: GeometryKind
    data: str


@dataclass
class SourceDocument:
    """A parsed input document."""

    root: etree._Element
    path: Path | None = None

    @property
    def namespace(self) -> str | None:
        """Default namespace declared on the root element, if any."""
        return self.root.nsmap.get(None)


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(
        remove_blank_text=True,
        resolve_entities=False,
        no_network=True,
    )


def parse_source(raw: bytes, path: Path | None = None) -> SourceDocument:
    """Parse raw document bytes into a :class:`SourceDocument`.

    The bytes are vetted by defusedxml before lxml builds the tree that the
    rest of the pipeline works on.

    Raises:
        UnsafeInputError: If the document uses entity declarations or
            external references.
        MalformedInputError: If the document is not well-formed XML.
    """
    label = str(path) if path is not None else "<string>"
    try:
        SafeET.fromstring(raw)
    except defusedxml.DefusedXmlException as e:
        raise UnsafeInputError(
            f"Refusing to parse {label}: {e}", path=path
        ) from e
    except SafeET.ParseError as e:
        raise MalformedInputError(
            f"Failed to parse {label}: {e}", path=path
        ) from e

    try:
        root = etree.fromstring(raw, _make_parser())
    except etree.XMLSyntaxError as e:
        raise MalformedInputError(f"Failed to parse {label}: {e}", path=path) from e

    return SourceDocument(root=root, path=path)


def load_source(path: Path) -> SourceDocument:
    """Read and parse the document at ``path``."""
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise MalformedInputError(f"Cannot read {path}: {e}", path=path) from e
    return parse_source(raw, path=path)


def _find_path_node(doc: SourceDocument, settings: SourceSettings) -> etree._Element:
    namespace = doc.namespace
    if namespace is None:
        matches = doc.root.xpath(f"descendant-or-self::{settings.path_element}")
    else:
        matches = doc.root.xpath(
            f"descendant-or-self::{SOURCE_PREFIX}:{settings.path_element}",
            namespaces={SOURCE_PREFIX: namespace},
        )
    logger.debug(
        "Default namespace %s, %d <%s> node(s)",
        namespace,
        len(matches),
        settings.path_element,
    )

    if not matches:
        raise MalformedInputError(
            f"No <{settings.path_element}> element found in {doc.path or '<string>'}",
            path=doc.path,
            details={"namespace": namespace},
        )
    if len(matches) > 1:
        logger.warning(
            "%s has %d <%s> elements, using the first one",
            doc.path or "<string>",
            len(matches),
            settings.path_element,
        )
    return matches[0]


def inner_xml(element: etree._Element) -> str:
    """Serialize the content of ``element`` without its own start/end tags.

    Each child is written with the namespace declarations in scope, so the
    result can be parsed on its own.
    """
    parts = [escape(element.text)] if element.text else []
    for child in element:
        parts.append(etree.tostring(child, encoding="unicode", with_tail=True))
    return "".join(parts)


def extract_geometry(doc: SourceDocument, settings: SourceSettings) -> GeometryPayload:
    """Locate the path node of ``doc`` and return its geometry.

    Args:
        doc: Parsed source document.
        settings: Element and attribute names to look for.

    Returns:
        ``ATTRIBUTE`` payload when the node carries the data attribute,
        ``NODES`` payload built from the property element otherwise.

    Raises:
        MalformedInputError: If there is no path node, or it has no geometry.
    """
    node = _find_path_node(doc, settings)

    data = node.get(settings.data_attribute)
    if data is not None:
        return GeometryPayload(GeometryKind.ATTRIBUTE, data)

    qualified = etree.QName(node).namespace
    tag = (
        f"{{{qualified}}}{settings.data_element}"
        if qualified
        else settings.data_element
    )
    data_element = next(node.iterchildren(tag), None)
    if data_element is None:
        raise MalformedInputError(
            f"<{settings.path_element}> in {doc.path or '<string>'} has neither a "
            f"{settings.data_attribute} attribute nor a <{settings.data_element}> element",
            path=doc.path,
        )
    has_elements = any(isinstance(child.tag, str) for child in data_element)
    if not has_elements and not (data_element.text or "").strip():
        raise MalformedInputError(
            f"<{settings.data_element}> in {doc.path or '<string>'} is empty",
            path=doc.path,
        )
    return GeometryPayload(GeometryKind.NODES, inner_xml(data_element))
