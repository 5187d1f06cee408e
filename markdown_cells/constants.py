"""Constants used across the markdown-cells package."""

# Style keys looked up in the theme
TEXT_STYLE = "ui.text"
INLINE_CODE_STYLE = "markup.raw.inline"
CODE_BLOCK_STYLE = "markup.raw.block"
HEADING_STYLES = (
    "markup.heading.1",
    "markup.heading.2",
    "markup.heading.3",
    "markup.heading.4",
    "markup.heading.5",
    "markup.heading.6",
)

# Editor state fixtures
CURSOR_STYLE = "ui.cursor"
CURSOR_PRIMARY_STYLE = "ui.cursor.primary"
SELECTION_STYLE = "ui.selection"
SELECTION_PRIMARY_STYLE = "ui.selection.primary"
