"""Pytest configuration and shared fixtures for xaml-path2shape tests."""

from pathlib import Path

import pytest
from lxml import etree

# Paths
PROJECT_ROOT = Path(__file__).parent.parent
SAMPLES_DIR = PROJECT_ROOT / "samples"

PRESENTATION_NS = "http://schemas.microsoft.com/winfx/2006/xaml/presentation"
XAML_NS = "http://schemas.microsoft.com/winfx/2006/xaml"
SHAPE_NS = "clr-namespace:ShapeLibrary.Shapes;assembly=ShapeLibrary"
GRAFTING_DECLARATION = f'xmlns="{PRESENTATION_NS}"'


def structure(element: etree._Element) -> tuple:
    """Reduce an element to (local name, attributes, text, children), ignoring
    whitespace-only text and namespace declarations."""
    return (
        etree.QName(element).localname,
        sorted(element.attrib.items()),
        (element.text or "").strip(),
        [structure(child) for child in element],
    )


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def samples_dir() -> Path:
    """Return the samples directory containing example XAML inputs."""
    return SAMPLES_DIR


@pytest.fixture
def attribute_xaml_content() -> str:
    """Return a XAML document with attribute-based geometry."""
    return f"""<Path xmlns="{PRESENTATION_NS}" Data="M0,0 L1,1"/>"""


@pytest.fixture
def nodes_xaml_content() -> str:
    """Return a XAML document with node-based geometry."""
    return f"""<?xml version="1.0" encoding="utf-8"?>
<Canvas xmlns="{PRESENTATION_NS}" xmlns:x="{XAML_NS}">
  <Path x:Name="Triangle" Fill="Black">
    <Path.Data>
      <PathGeometry FillRule="EvenOdd" Figures="M0,0 L10,0 L10,10 Z" />
    </Path.Data>
  </Path>
</Canvas>"""


@pytest.fixture
def no_path_xaml_content() -> str:
    """Return a XAML document without any Path element."""
    return f"""<Canvas xmlns="{PRESENTATION_NS}">
  <Rectangle Width="10" Height="10" />
</Canvas>"""


@pytest.fixture
def attribute_xaml(tmp_path: Path, attribute_xaml_content: str) -> Path:
    """Create a temporary attribute-based XAML file named star.xaml."""
    path = tmp_path / "star.xaml"
    path.write_text(attribute_xaml_content, encoding="utf-8")
    return path


@pytest.fixture
def nodes_xaml(tmp_path: Path, nodes_xaml_content: str) -> Path:
    """Create a temporary node-based XAML file named triangle.xaml."""
    path = tmp_path / "triangle.xaml"
    path.write_text(nodes_xaml_content, encoding="utf-8")
    return path


@pytest.fixture
def xaml_folder(
    tmp_path: Path, attribute_xaml_content: str, nodes_xaml_content: str
) -> Path:
    """Create a folder with two valid XAML files and one unrelated file."""
    folder = tmp_path / "icons"
    folder.mkdir()
    (folder / "star.xaml").write_text(attribute_xaml_content, encoding="utf-8")
    (folder / "triangle.xaml").write_text(nodes_xaml_content, encoding="utf-8")
    (folder / "notes.txt").write_text("not a shape", encoding="utf-8")
    return folder
