"""Input discovery and output path resolution."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from xaml_path2shape.config import OutputSettings
from xaml_path2shape.exceptions import OutputError

logger = logging.getLogger(__name__)


def _same_file(a: Path, b: Path) -> bool:
    return os.path.normcase(a.resolve()) == os.path.normcase(b.resolve())


def resolve_output_path(
    stem: str,
    output_dir: Path,
    input_path: Path,
    settings: OutputSettings | None = None,
) -> Path:
    """Return the output path for an input file.

    The result is ``<output_dir>/<stem><extension>``, unless that is the
    input file itself, in which case the collision suffix is appended to the
    stem so the source is never overwritten.
    """
    settings = settings or OutputSettings()
    candidate = output_dir / f"{stem}{settings.extension}"
    if _same_file(candidate, input_path):
        candidate = output_dir / f"{stem}{settings.collision_suffix}{settings.extension}"
        logger.debug("Output would overwrite %s, writing %s", input_path, candidate)
    return candidate


def ensure_output_dir(output_dir: Path) -> None:
    """Create ``output_dir`` and its parents. Existing directories are fine."""
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputError(
            f"Cannot create output directory {output_dir}: {e}", path=output_dir
        ) from e


def collect_inputs(input_path: Path, pattern: str = "*.xaml") -> list[Path]:
    """List the files to convert.

    A file is returned as is. A directory yields its regular files matching
    ``pattern`` (non-recursive), sorted by name. The listing is taken once,
    so files written into the same directory later are not picked up.
    """
    if not input_path.is_dir():
        return [input_path]
    files = sorted(p for p in input_path.glob(pattern) if p.is_file())
    logger.debug("Found %d file(s) matching %s in %s", len(files), pattern, input_path)
    return files
