import pytest
from click.testing import CliRunner

from markdown_cells.theme import Theme

from .styles import (
    CODE_BLOCK,
    CURSOR,
    CURSOR_PRIMARY,
    FUNCTION,
    HEADING_1,
    HEADING_3,
    INLINE_CODE,
    KEYWORD,
    MATCH,
    SELECTION,
    SELECTION_PRIMARY,
    TEXT,
    VARIABLE,
)


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def theme() -> Theme:
    """Provides a theme with a distinct style per key."""
    return Theme(
        {
            "ui.text": TEXT,
            "markup.heading.1": HEADING_1,
            "markup.heading.3": HEADING_3,
            "markup.raw.inline": INLINE_CODE,
            "markup.raw.block": CODE_BLOCK,
            "keyword": KEYWORD,
            "function": FUNCTION,
            "variable": VARIABLE,
            "search.match": MATCH,
            "ui.cursor": CURSOR,
            "ui.cursor.primary": CURSOR_PRIMARY,
            "ui.selection": SELECTION,
            "ui.selection.primary": SELECTION_PRIMARY,
        }
    )
