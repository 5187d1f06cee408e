"""Style lookup for rendered markdown and code."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
import tomllib

from rich.errors import StyleSyntaxError
from rich.style import Style

from .exceptions import ThemeError

StyleLookup = Callable[[str], Style]

DEFAULT_THEME = {
    "ui.text": "default",
    "ui.cursor": "reverse",
    "ui.cursor.primary": "reverse bold",
    "ui.selection": "on grey23",
    "ui.selection.primary": "on grey35",
    "markup.heading": "bold blue",
    "markup.heading.1": "bold magenta",
    "markup.heading.2": "bold blue",
    "markup.raw": "cyan",
    "comment": "italic grey50",
    "keyword": "magenta",
    "operator": "bright_white",
    "punctuation": "grey70",
    "string": "green",
    "constant": "yellow",
    "constant.numeric": "bright_yellow",
    "function": "blue",
    "function.builtin": "bright_blue",
    "type": "bright_cyan",
    "variable": "default",
    "attribute": "yellow",
    "namespace": "bright_cyan",
    "tag": "red",
    "diff.plus": "green",
    "diff.minus": "red",
    "error": "bold red",
    "search.match": "black on yellow",
}


class Theme:
    """A mapping of style keys to rich styles.

    Keys are dotted scope names. A lookup that misses falls back to ever
    shorter prefixes, so ``markup.heading.3`` resolves to ``markup.heading``
    when only the latter is defined. Unknown keys resolve to `Style.null()`.
    """

    def __init__(self, styles: Mapping[str, Style] | None = None):
        self._styles = dict(styles or {})

    @classmethod
    def from_dict(cls, raw: Mapping[str, str]) -> Theme:
        """Build a theme from rich style strings.

        Raises:
            ThemeError: If a value is not a valid rich style definition.

        Examples:
            Theme.from_dict({"ui.text": "white", "keyword": "bold magenta"})
        """
        styles = {}
        for key, definition in raw.items():
            if not isinstance(definition, str):
                raise ThemeError("Style definition must be a string", key)
            try:
                styles[key] = Style.parse(definition)
            except StyleSyntaxError as error:
                raise ThemeError(f"Invalid style {definition!r}: {error}", key) from error
        return cls(styles)

    def merged(self, overrides: Mapping[str, str]) -> Theme:
        """Return a copy of the theme with `overrides` applied on top."""
        styles = dict(self._styles)
        styles.update(Theme.from_dict(overrides)._styles)
        return Theme(styles)

    def get(self, key: str) -> Style:
        name = key
        while True:
            style = self._styles.get(name)
            if style is not None:
                return style
            name, sep, _ = name.rpartition(".")
            if not sep:
                return Style.null()

    __call__ = get

    def __contains__(self, key: str) -> bool:
        return key in self._styles

    def __len__(self) -> int:
        return len(self._styles)


def load_theme(path: Path) -> Theme:
    """Load a theme from a TOML file.

    Style definitions may live at the top level of the file or in a
    ``[theme]`` table.

    Args:
        path: TOML file to read.

    Returns:
        Theme: Parsed theme.

    Raises:
        ThemeError: If the file cannot be read or decoded, or holds an invalid
            style definition.

    Examples:
        load_theme(Path("themes/dark.toml"))
    """
    try:
        with open(path, "rb") as stream:
            data = tomllib.load(stream)
    except OSError as error:
        raise ThemeError(f"Unable to read theme {path}: {error}") from error
    except tomllib.TOMLDecodeError as error:
        raise ThemeError(f"Invalid TOML in theme {path}: {error}") from error

    table = data.get("theme", data)
    if not isinstance(table, dict):
        raise ThemeError(f"Invalid `[theme]` table in {path}")
    return Theme.from_dict(table)


def default_theme() -> Theme:
    return Theme.from_dict(DEFAULT_THEME)
