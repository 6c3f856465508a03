"""Render shape documents to text and write them to disk."""

from __future__ import annotations

import copy
import logging
import re
from pathlib import Path
from xml.sax.saxutils import escape

from lxml import etree

from xaml_path2shape.exceptions import OutputError
from xaml_path2shape.xaml.builder import ShapeDocument

logger = logging.getLogger(__name__)

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

_ATTR_ENTITIES = {'"': "&quot;", "\n": "&#10;", "\r": "&#13;", "\t": "&#9;"}


def _quote(value: str) -> str:
    return '"' + escape(value, _ATTR_ENTITIES) + '"'


def _qualified_name(name: str, nsmap: dict[str | None, str], is_attribute: bool) -> str:
    qname = etree.QName(name)
    uri = qname.namespace
    if uri is None:
        return qname.localname
    if uri == XML_NAMESPACE:
        return f"xml:{qname.localname}"
    # Unprefixed attributes never belong to the default namespace.
    candidates = [
        prefix
        for prefix, value in nsmap.items()
        if value == uri and not (is_attribute and prefix is None)
    ]
    if not candidates:
        raise ValueError(f"No prefix in scope for namespace {uri!r}")
    prefix = None if None in candidates else sorted(candidates)[0]
    return qname.localname if prefix is None else f"{prefix}:{qname.localname}"


def _new_declarations(
    element: etree._Element, parent_nsmap: dict[str | None, str]
) -> list[tuple[str | None, str]]:
    declared = [
        (prefix, uri)
        for prefix, uri in element.nsmap.items()
        if parent_nsmap.get(prefix) != uri
    ]
    return sorted(declared, key=lambda item: (item[0] is not None, item[0] or ""))


def _write_multiline(
    element: etree._Element,
    out: list[str],
    indent: str,
    depth: int,
    parent_nsmap: dict[str | None, str],
) -> None:
    if not isinstance(element.tag, str):
        # Comments and processing instructions.
        out.append(etree.tostring(element, encoding="unicode", with_tail=False))
        return

    nsmap = element.nsmap
    items = [
        (f"xmlns:{prefix}" if prefix else "xmlns", uri)
        for prefix, uri in _new_declarations(element, parent_nsmap)
    ]
    items.extend(
        (_qualified_name(name, nsmap, is_attribute=True), value)
        for name, value in element.attrib.items()
    )

    tag = _qualified_name(element.tag, nsmap, is_attribute=False)
    pad = "\n" + indent * (depth + 1)
    out.append("<" + tag)
    out.extend(f"{pad}{name}={_quote(value)}" for name, value in items)

    if element.text is None and len(element) == 0:
        out.append(" />")
        return

    out.append(">")
    if element.text:
        out.append(escape(element.text))
    for child in element:
        _write_multiline(child, out, indent, depth + 1, nsmap)
        if child.tail:
            out.append(escape(child.tail))
    out.append(f"</{tag}>")


def strip_grafting_namespace(text: str, namespace: str) -> str:
    """Remove every literal ``xmlns="<namespace>"`` from ``text``.

    Whitespace in front of each occurrence goes with it, so a declaration
    that sits on its own line leaves no blank line behind.
    """
    fragment = f'xmlns="{namespace}"'
    return re.sub(r"\s*" + re.escape(fragment), "", text)


def serialize_shape(
    doc: ShapeDocument,
    pretty: bool,
    attributes_on_own_line: bool,
    indent: str = "  ",
) -> str:
    """Render ``doc`` to text without an XML declaration.

    Args:
        doc: Document to render. It is not modified.
        pretty: Indent nested elements on their own lines.
        attributes_on_own_line: With ``pretty``, write every attribute and
            namespace declaration on its own line.
        indent: Indentation unit for pretty output.

    Returns:
        The rendered document. The grafting namespace declaration is left in
        place, see :func:`strip_grafting_namespace`.
    """
    if not pretty:
        return etree.tostring(doc.root, encoding="unicode")

    root = copy.deepcopy(doc.root)
    etree.indent(root, space=indent)
    if not attributes_on_own_line:
        return etree.tostring(root, encoding="unicode")

    out: list[str] = []
    _write_multiline(root, out, indent, 0, {})
    return "".join(out)


def write_shape(text: str, path: Path) -> None:
    """Write ``text`` to ``path`` as UTF-8 without a byte-order mark."""
    try:
        path.write_bytes(text.encode("utf-8"))
    except OSError as e:
        raise OutputError(f"Cannot write {path}: {e}", path=path) from e
    logger.debug("Wrote %d bytes to %s", len(text.encode("utf-8")), path)
