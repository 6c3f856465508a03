"""High-level conversion API.

Example:
    >>> from pathlib import Path
    >>> from xaml_path2shape import ConversionOptions, ShapeConverter
    >>> converter = ShapeConverter(options=ConversionOptions(pretty=True))
    >>> results = converter.convert(Path("icons/"))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from xaml_path2shape.config import Config, ConversionOptions, resolve_attribute_layout
from xaml_path2shape.exceptions import Path2ShapeError
from xaml_path2shape.paths import collect_inputs, ensure_output_dir, resolve_output_path
from xaml_path2shape.xaml.builder import build_shape
from xaml_path2shape.xaml.geometry import (
    GeometryKind,
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

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Outcome of converting one input file."""

    input_path: Path
    output_path: Path | None = None
    shape_name: str = ""
    kind: GeometryKind | None = None
    success: bool = True
    errors: list[str] = field(default_factory=list)


class ShapeConverter:
    """Convert XAML path documents into custom shape definitions.

    Args:
        config: Document vocabulary. Defaults to :class:`Config` defaults.
        options: Per-run switches. Defaults to compact output in ``./output``.
    """

    def __init__(
        self,
        config: Config | None = None,
        options: ConversionOptions | None = None,
    ) -> None:
        self.config = config or Config()
        self.options = options or ConversionOptions()

    def _render(self, doc: SourceDocument, name: str) -> tuple[str, GeometryKind]:
        payload = extract_geometry(doc, self.config.source)
        shape = build_shape(payload, name, self.config.template)
        multiline = resolve_attribute_layout(self.options.attribute_layout, payload.kind)
        logger.debug(
            "%s: %s geometry, pretty=%s, attributes on own line=%s",
            name,
            payload.kind.value,
            self.options.pretty,
            multiline,
        )
        text = serialize_shape(
            shape,
            pretty=self.options.pretty,
            attributes_on_own_line=multiline,
            indent=self.config.output.indent,
        )
        return strip_grafting_namespace(text, self.config.template.grafting_namespace), payload.kind

    def convert_string(self, source: str | bytes, name: str) -> str:
        """Convert an in-memory document and return the output text."""
        raw = source.encode("utf-8") if isinstance(source, str) else source
        text, _kind = self._render(parse_source(raw), name)
        return text

    def convert_file(
        self, input_path: Path, output_dir: Path | None = None
    ) -> ConversionResult:
        """Convert one file into ``output_dir``.

        The output directory must already exist, see :meth:`convert`.

        Raises:
            MalformedInputError: If the input has no usable path geometry.
            OutputError: If the output file cannot be written.
        """
        output_dir = output_dir or self.options.output_dir
        name = input_path.stem
        output_path = resolve_output_path(
            name, output_dir, input_path, self.config.output
        )

        text, kind = self._render(load_source(input_path), name)
        write_shape(text, output_path)

        logger.info("%s -> %s (%s)", input_path, output_path, kind.value)
        return ConversionResult(
            input_path=input_path,
            output_path=output_path,
            shape_name=name,
            kind=kind,
        )

    def convert(self, input_path: Path) -> list[ConversionResult]:
        """Convert a file, or every matching file in a directory.

        The output directory is created once before any file is processed.
        The first failure aborts the run unless
        ``options.continue_on_error`` is set, in which case the failure is
        logged and recorded on its result.
        """
        inputs = collect_inputs(input_path, self.config.output.pattern)
        ensure_output_dir(self.options.output_dir)

        results: list[ConversionResult] = []
        for path in inputs:
            try:
                results.append(self.convert_file(path))
            except Path2ShapeError as e:
                if not self.options.continue_on_error:
                    raise
                logger.warning("Skipping %s: %s", path, e)
                results.append(
                    ConversionResult(
                        input_path=path,
                        shape_name=path.stem,
                        success=False,
                        errors=[str(e)],
                    )
                )
        return results
