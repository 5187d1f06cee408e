"""
Renders a markdown file as styled terminal lines.
With --size, prints the width and height the rendered document needs instead.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console

from .config import ConfigError, build_config
from .exceptions import ThemeError
from .filesystem import get_max_file_size, read_markdown
from .renderer import Document
from .theme import default_theme, load_theme

__all__ = ["cli"]


@click.command()
@click.version_option(package_name="markdown-cells")
@click.option(
    "--theme",
    "theme_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="TOML file mapping style keys to rich styles",
)
@click.option("--no-theme", is_flag=True, help="Render without any styling")
@click.option("--size", is_flag=True, help="Print the required WIDTH HEIGHT and exit")
@click.option("--width", type=int, help="Viewport width used by --size")
@click.option("--tab-width", type=int, help="Spaces per tab in code blocks")
@click.option("--max-width", type=int, help="Widest text area reported by --size")
@click.option("-v", "--verbose", is_flag=True, help="Log rendering diagnostics")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def cli(
    filepath: Path,
    theme_path: Path | None = None,
    no_theme: bool = False,
    size: bool = False,
    width: int | None = None,
    tab_width: int | None = None,
    max_width: int | None = None,
    verbose: bool = False,
):
    """
    Entry point for rendering a Markdown file to the terminal.

    Args:
        filepath: Path to the Markdown file to render.
        theme_path: TOML theme replacing the built-in theme.
        no_theme: Render every span unstyled.
        size: Print the required size instead of the rendered lines.
        width: Viewport width for size estimation; defaults to the terminal width.
        tab_width: Override for the tab expansion width.
        max_width: Override for the widest reported text area.
        verbose: Enable debug logging.

    Returns:
        None.

    Raises:
        click.BadParameter: If configuration values or the theme are invalid.
        click.ClickException: If the file cannot be read.

    Examples:
        markdown-cells README.md --theme dark.toml
        markdown-cells README.md --size --width 80
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = build_config(filepath.parent, tab_width=tab_width, max_width=max_width)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        source = read_markdown(filepath, get_max_file_size())
    except (IOError, ValueError) as error:
        raise click.ClickException(str(error)) from error

    console = Console(highlight=False, soft_wrap=True)
    document = Document(source, config=config)

    if size:
        required_width, required_height = document.required_size(width or console.width)
        click.echo(f"{required_width} {required_height}")
        return

    style_resolver = None
    if not no_theme:
        try:
            theme = load_theme(theme_path) if theme_path else default_theme()
            theme = theme.merged(config.theme)
        except ThemeError as error:
            raise click.BadParameter(str(error)) from error
        style_resolver = theme.get

    for line in document.render(style_resolver):
        console.print(line.to_text())


if __name__ == "__main__":
    cli()
