"""Build output shape documents from extracted geometry."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING
from xml.sax.saxutils import quoteattr

from lxml import etree

from xaml_path2shape.xaml.geometry import GeometryKind, GeometryPayload

if TYPE_CHECKING:
    from xaml_path2shape.config import TemplateSettings

_WRAPPER = "_fragment"


@dataclass
class ShapeDocument:
    """An output document and the payload kind it was built from."""

    root: etree._Element
    kind: GeometryKind
    name: str


def _namespace_declarations(nsmap: dict[str | None, str]) -> str:
    parts = []
    for prefix, uri in nsmap.items():
        name = "xmlns" if prefix is None else f"xmlns:{prefix}"
        parts.append(f"{name}={quoteattr(uri)}")
    return " ".join(parts)


def new_template(settings: TemplateSettings) -> etree._Element:
    """Instantiate a fresh copy of the empty output template."""
    markup = (
        f"<{settings.root_element} "
        f"xmlns={quoteattr(settings.namespace)} "
        f"xmlns:{settings.prefix}={quoteattr(settings.prefixed_namespace)} />"
    )
    return etree.fromstring(markup)


def set_inner_xml(element: etree._Element, fragment: str) -> None:
    """Replace the content of ``element`` with the markup in ``fragment``.

    The fragment is parsed in the namespace context of ``element``. Elements
    that declare their own default namespace keep it.
    """
    wrapper = etree.fromstring(
        f"<{_WRAPPER} {_namespace_declarations(element.nsmap)}>{fragment}</{_WRAPPER}>"
    )
    for child in list(element):
        element.remove(child)
    element.text = wrapper.text
    for child in list(wrapper):
        element.append(child)


def _apply_attribute(
    root: etree._Element, payload: GeometryPayload, settings: TemplateSettings
) -> None:
    root.set(settings.geometry_attribute, payload.data)


def _apply_nodes(
    root: etree._Element, payload: GeometryPayload, settings: TemplateSettings
) -> None:
    set_inner_xml(root, payload.data)


_APPLIERS: dict[
    GeometryKind,
    Callable[[etree._Element, GeometryPayload, TemplateSettings], None],
] = {
    GeometryKind.ATTRIBUTE: _apply_attribute,
    GeometryKind.NODES: _apply_nodes,
}


def build_shape(
    payload: GeometryPayload, name: str, settings: TemplateSettings
) -> ShapeDocument:
    """Inject ``name`` and ``payload`` into a new template document.

    Args:
        payload: Geometry extracted from the source document.
        name: Display name, normally the input file stem.
        settings: Template vocabulary.

    Returns:
        The populated output document.
    """
    try:
        apply = _APPLIERS[payload.kind]
    except KeyError:
        raise ValueError(f"Unsupported geometry kind: {payload.kind!r}") from None

    root = new_template(settings)
    root.set(settings.display_name_attribute, name)
    apply(root, payload, settings)
    return ShapeDocument(root=root, kind=payload.kind, name=name)
