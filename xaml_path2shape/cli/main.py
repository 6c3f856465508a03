"""xaml-path2shape command line entry point."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from xaml_path2shape import __version__
from xaml_path2shape.api import ShapeConverter
from xaml_path2shape.config import AttributeLayout, Config, ConversionOptions
from xaml_path2shape.exceptions import ConfigError, Path2ShapeError

console = Console()

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def setup_logging(level: str) -> None:
    """Route package logs to stderr through rich at ``level``."""
    package_logger = logging.getLogger("xaml_path2shape")
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "-i",
    "-in",
    "--input",
    "input_path",
    required=True,
    type=click.Path(exists=True, path_type=Path),
    help="XAML file or directory of XAML files to convert",
)
@click.option(
    "-o",
    "-out",
    "--output-dir",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("output"),
    show_default=True,
    help="Output directory, created if missing",
)
@click.option(
    "-p",
    "-pretty",
    "--pretty",
    "pretty",
    is_flag=True,
    help="Indent the output for readability",
)
@click.option(
    "--attribute-layout",
    type=click.Choice([layout.value for layout in AttributeLayout]),
    default=AttributeLayout.AUTO.value,
    show_default=True,
    help="Attribute placement in pretty output (auto: one per line for nested geometry)",
)
@click.option(
    "--pattern",
    default=None,
    help="File pattern for directory inputs (default from config: *.xaml)",
)
@click.option(
    "--continue-on-error",
    is_flag=True,
    help="Skip files that fail to convert instead of aborting",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML configuration file",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level",
)
@click.version_option(__version__, prog_name="xaml-path2shape")
def cli(
    input_path: Path,
    output_dir: Path,
    pretty: bool,
    attribute_layout: str,
    pattern: str | None,
    continue_on_error: bool,
    config_path: Path | None,
    log_level: str,
) -> None:
    """Convert XAML path markup into custom shape definition files.

    Each input file produces one output file named after it. The shape's
    display name is the input file name without its extension.
    """
    setup_logging(log_level.upper())

    try:
        config = Config.load(config_path)
    except ConfigError as e:
        raise click.BadParameter(str(e), param_hint="'--config'") from e
    if pattern:
        config.output.pattern = pattern

    options = ConversionOptions(
        output_dir=output_dir,
        pretty=pretty,
        attribute_layout=AttributeLayout(attribute_layout),
        continue_on_error=continue_on_error,
    )
    converter = ShapeConverter(config=config, options=options)

    try:
        results = converter.convert(input_path)
    except Path2ShapeError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from None

    success_count = sum(1 for r in results if r.success)
    error_count = len(results) - success_count

    console.print("[bold]Conversion complete:[/bold]")
    console.print(f"  [green]Converted:[/green] {success_count}")
    console.print(f"  [red]Failed:[/red] {error_count}")
    console.print(f"  [blue]Output:[/blue] {escape(str(output_dir))}")

    for result in results:
        if not result.success:
            console.print(
                f"  [red]x[/red] {escape(str(result.input_path))}: "
                f"{escape('; '.join(result.errors))}"
            )

    if error_count > 0:
        raise SystemExit(1)
