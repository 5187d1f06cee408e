"""
markdown-cells: render Markdown into styled lines for a terminal cell grid.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    markdown-cells README.md

Library Usage:
    from pathlib import Path
    from markdown_cells import Document, default_theme

    document = Document(Path("README.md").read_text())
    lines = document.render(default_theme().get)
    width, height = document.required_size(80)
"""

from .config import ConfigError, RenderConfig
from .exceptions import ThemeError
from .highlight import render_fragment
from .models import StyledLine, StyledSpan
from .renderer import Document, measure, render_markdown
from .syntax import SyntaxEngine, merge
from .theme import Theme, default_theme, load_theme

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "render_markdown",
    "render_fragment",
    "measure",
    "Document",
    "SyntaxEngine",
    "merge",
    # Data models
    "StyledLine",
    "StyledSpan",
    # Styling
    "Theme",
    "default_theme",
    "load_theme",
    # Configuration
    "RenderConfig",
    # Exceptions
    "ConfigError",
    "ThemeError",
    # Version
    "__version__",
]
