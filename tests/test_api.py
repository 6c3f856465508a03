"""Tests for the ShapeConverter API.

Covers single-file and directory conversion, naming rules, encoding
round-trips and the batch failure policy.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from lxml import etree

from tests.conftest import GRAFTING_DECLARATION, PRESENTATION_NS, SHAPE_NS, XAML_NS, structure
from xaml_path2shape import (
    AttributeLayout,
    ConversionOptions,
    MalformedInputError,
    ShapeConverter,
)
from xaml_path2shape.xaml.geometry import GeometryKind


def converter_for(output_dir: Path, **kwargs) -> ShapeConverter:
    return ShapeConverter(options=ConversionOptions(output_dir=output_dir, **kwargs))


class TestConvertString:
    """Tests for in-memory conversion."""

    def test_attribute_round_trip(self, attribute_xaml_content: str) -> None:
        """Attribute geometry comes out as the same attribute string."""
        text = ShapeConverter().convert_string(attribute_xaml_content, "star")
        assert text == (
            f'<CustomShape xmlns="{SHAPE_NS}" xmlns:x="{XAML_NS}" '
            f'DisplayName="star" Geometry="M0,0 L1,1"/>'
        )

    def test_accepts_bytes(self, attribute_xaml_content: str) -> None:
        """Raw bytes are accepted as input."""
        text = ShapeConverter().convert_string(
            attribute_xaml_content.encode("utf-8"), "star"
        )
        assert 'Geometry="M0,0 L1,1"' in text

    def test_nodes_round_trip(self, nodes_xaml_content: str) -> None:
        """Node geometry comes out as a structurally identical fragment."""
        text = ShapeConverter().convert_string(nodes_xaml_content, "triangle")
        assert GRAFTING_DECLARATION not in text

        output = etree.fromstring(text)
        source = etree.fromstring(nodes_xaml_content.encode("utf-8"))
        source_geometry = source.find(
            f".//{{{PRESENTATION_NS}}}Path.Data/{{{PRESENTATION_NS}}}PathGeometry"
        )
        assert output.get("DisplayName") == "triangle"
        assert output.get("Geometry") is None
        assert [structure(child) for child in output] == [structure(source_geometry)]

    def test_malformed_input(self, no_path_xaml_content: str) -> None:
        """Documents without a Path raise MalformedInputError."""
        with pytest.raises(MalformedInputError):
            ShapeConverter().convert_string(no_path_xaml_content, "empty")


class TestConvertFile:
    """Tests for single-file conversion."""

    def test_example_scenario(self, attribute_xaml: Path, tmp_path: Path) -> None:
        """star.xaml becomes output/star.xaml, compact, UTF-8 without BOM."""
        output_dir = tmp_path / "output"
        results = converter_for(output_dir).convert(attribute_xaml)

        assert len(results) == 1
        result = results[0]
        assert result.success is True
        assert result.output_path == output_dir / "star.xaml"
        assert result.shape_name == "star"
        assert result.kind is GeometryKind.ATTRIBUTE

        data = result.output_path.read_bytes()
        assert not data.startswith(b"\xef\xbb\xbf")
        text = data.decode("utf-8")
        assert not text.startswith("<?xml")
        assert "\n" not in text
        root = etree.fromstring(data)
        assert root.get("DisplayName") == "star"
        assert root.get("Geometry") == "M0,0 L1,1"

    def test_display_name_preserves_case(
        self, tmp_path: Path, attribute_xaml_content: str
    ) -> None:
        """The display name is the file name without extension, case kept."""
        source = tmp_path / "MyIcon.Large.xaml"
        source.write_text(attribute_xaml_content, encoding="utf-8")
        result = converter_for(tmp_path / "out").convert(source)[0]
        assert result.output_path.name == "MyIcon.Large.xaml"
        assert etree.parse(str(result.output_path)).getroot().get("DisplayName") == (
            "MyIcon.Large"
        )

    def test_collision_safe_naming(self, attribute_xaml: Path) -> None:
        """Converting into the input's own directory does not overwrite it."""
        original = attribute_xaml.read_bytes()
        result = converter_for(attribute_xaml.parent).convert(attribute_xaml)[0]

        assert result.output_path == attribute_xaml.parent / "star_converted.xaml"
        assert attribute_xaml.read_bytes() == original
        root = etree.parse(str(result.output_path)).getroot()
        assert root.get("DisplayName") == "star"

    def test_pretty_nodes_use_multiline_attributes(
        self, nodes_xaml: Path, tmp_path: Path
    ) -> None:
        """With AUTO layout, node geometry gets one attribute per line."""
        result = converter_for(tmp_path / "out", pretty=True).convert(nodes_xaml)[0]
        text = result.output_path.read_text(encoding="utf-8")
        assert text.startswith("<CustomShape\n  xmlns=")
        assert '\n  DisplayName="triangle">' in text
        assert GRAFTING_DECLARATION not in text

    def test_pretty_attribute_stays_inline(
        self, attribute_xaml: Path, tmp_path: Path
    ) -> None:
        """With AUTO layout, attribute geometry keeps attributes inline."""
        result = converter_for(tmp_path / "out", pretty=True).convert(attribute_xaml)[0]
        text = result.output_path.read_text(encoding="utf-8")
        assert "\n" not in text.strip()

    def test_explicit_inline_layout(self, nodes_xaml: Path, tmp_path: Path) -> None:
        """INLINE layout decouples attribute placement from geometry kind."""
        converter = converter_for(
            tmp_path / "out", pretty=True, attribute_layout=AttributeLayout.INLINE
        )
        text = converter.convert(nodes_xaml)[0].output_path.read_text(encoding="utf-8")
        first_line = text.splitlines()[0]
        assert first_line.startswith("<CustomShape xmlns=")
        assert first_line.endswith('DisplayName="triangle">')

    @pytest.mark.parametrize("layout", list(AttributeLayout))
    def test_pretty_and_compact_equivalent(
        self, nodes_xaml: Path, tmp_path: Path, layout: AttributeLayout
    ) -> None:
        """Pretty output re-parses to the same structure as compact output."""
        compact = converter_for(tmp_path / "compact").convert(nodes_xaml)[0]
        pretty = converter_for(
            tmp_path / "pretty", pretty=True, attribute_layout=layout
        ).convert(nodes_xaml)[0]

        compact_root = etree.parse(str(compact.output_path)).getroot()
        pretty_root = etree.parse(str(pretty.output_path)).getroot()
        assert structure(pretty_root) == structure(compact_root)


class TestConvertDirectory:
    """Tests for directory conversion and the batch failure policy."""

    def test_one_output_per_input(self, xaml_folder: Path, tmp_path: Path) -> None:
        """Every matching file produces exactly one output."""
        output_dir = tmp_path / "out"
        results = converter_for(output_dir).convert(xaml_folder)

        assert [r.success for r in results] == [True, True]
        assert sorted(p.name for p in output_dir.iterdir()) == [
            "star.xaml",
            "triangle.xaml",
        ]
        assert [r.kind for r in results] == [
            GeometryKind.ATTRIBUTE,
            GeometryKind.NODES,
        ]

    def test_output_into_input_directory(self, xaml_folder: Path) -> None:
        """Converting a directory into itself only converts the original files."""
        results = converter_for(xaml_folder).convert(xaml_folder)
        assert [r.output_path.name for r in results] == [
            "star_converted.xaml",
            "triangle_converted.xaml",
        ]
        assert len(list(xaml_folder.glob("*.xaml"))) == 4

    def test_repeated_runs_into_new_directory(
        self, xaml_folder: Path, tmp_path: Path
    ) -> None:
        """Running twice against a fresh output directory succeeds both times."""
        output_dir = tmp_path / "new" / "nested"
        converter = converter_for(output_dir)
        converter.convert(xaml_folder)
        results = converter.convert(xaml_folder)
        assert all(r.success for r in results)

    def test_samples_convert(self, samples_dir: Path, tmp_path: Path) -> None:
        """The bundled samples convert cleanly."""
        results = converter_for(tmp_path / "out", pretty=True).convert(samples_dir)
        assert {r.shape_name: r.kind for r in results} == {
            "arrow": GeometryKind.NODES,
            "star": GeometryKind.ATTRIBUTE,
        }

    def test_first_failure_aborts(
        self, xaml_folder: Path, tmp_path: Path, no_path_xaml_content: str
    ) -> None:
        """By default the run stops at the first failing file."""
        (xaml_folder / "sun.xaml").write_text(no_path_xaml_content, encoding="utf-8")
        output_dir = tmp_path / "out"

        with pytest.raises(MalformedInputError) as excinfo:
            converter_for(output_dir).convert(xaml_folder)

        assert excinfo.value.path == xaml_folder / "sun.xaml"
        # Files are processed in name order: star then sun, never triangle.
        assert sorted(p.name for p in output_dir.iterdir()) == ["star.xaml"]

    def test_continue_on_error_skips(
        self, xaml_folder: Path, tmp_path: Path, no_path_xaml_content: str
    ) -> None:
        """With continue_on_error failing files are recorded and skipped."""
        (xaml_folder / "sun.xaml").write_text(no_path_xaml_content, encoding="utf-8")
        output_dir = tmp_path / "out"

        results = converter_for(output_dir, continue_on_error=True).convert(xaml_folder)

        assert [(r.shape_name, r.success) for r in results] == [
            ("star", True),
            ("sun", False),
            ("triangle", True),
        ]
        failed = results[1]
        assert failed.output_path is None
        assert "No <Path> element found" in failed.errors[0]
        assert sorted(p.name for p in output_dir.iterdir()) == [
            "star.xaml",
            "triangle.xaml",
        ]
