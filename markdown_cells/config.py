"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
import tomllib

@dataclass
class RenderConfig:
    """Configuration for rendering markdown into styled lines.

    Attributes:
        indent: Indentation unit repeated once per nested list level.
        tab_width: Number of spaces a tab in a code block expands to.
        max_width: Widest text area reported by size estimation.
        padding: Cells added to both axes by size estimation.
        rule: Text drawn for a thematic break.
        editor_state_language: Code block language that renders an editor
            state fixture instead of syntax highlighting.
        theme: Style key to rich style string overrides, e.g.
            ``{"markup.heading.1": "bold yellow"}``.

    Examples:
        RenderConfig(tab_width=2, theme={"ui.text": "white"})
    """

    # Layout
    indent: str = "  "
    tab_width: int = 4
    rule: str = "---"

    # Size estimation
    max_width: int = 120
    padding: int = 2

    # Code blocks
    editor_state_language: str = "editor-state"

    # Styling
    theme: dict[str, str] = field(default_factory=dict)


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Attributes:
        args: Arguments provided to the underlying `ValueError`.

    Examples:
        raise ConfigError("`tab_width` must be a positive integer")
    """


def load_config(search_path: Path) -> RenderConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.markdown-cells]`` table from `pyproject.toml` and the
    ``[markdown-cells]`` or ``[tool.markdown-cells]`` table from
    `.markdown-cells.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        RenderConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "markdown-cells")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".markdown-cells.toml",
            table_paths=[("markdown-cells",), ("tool", "markdown-cells")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return RenderConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> RenderConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> RenderConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return RenderConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return RenderConfig()

    try:
        return RenderConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: RenderConfig) -> None:
    """Validate a `RenderConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If numeric settings are not positive integers, text
            settings have the wrong type, or theme entries are not strings.

    Examples:
        validate_config(RenderConfig(tab_width=8))
    """
    _ensure_integers(
        {
            "tab_width": config.tab_width,
            "max_width": config.max_width,
            "padding": config.padding,
        }
    )
    _ensure_positive({"tab_width": config.tab_width, "max_width": config.max_width})
    if config.padding < 0:
        raise ConfigError("`padding` must be >= 0")

    for key in ("indent", "rule", "editor_state_language"):
        if not isinstance(getattr(config, key), str):
            raise ConfigError(f"`{key}` must be a string")
    if config.indent.strip():
        raise ConfigError("`indent` must only contain whitespace")
    if not config.editor_state_language:
        raise ConfigError("`editor_state_language` must not be empty")

    if not isinstance(config.theme, dict):
        raise ConfigError("`theme` must be a table of style strings")
    for key, value in config.theme.items():
        if not isinstance(value, str):
            raise ConfigError(f"`theme.{key}` must be a style string")


def apply_overrides(config: RenderConfig, **overrides: object) -> RenderConfig:
    """Apply override values to a `RenderConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        RenderConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `RenderConfig`.

    Examples:
        updated = apply_overrides(config, tab_width=2, max_width=None)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> RenderConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        RenderConfig: Validated configuration ready for rendering.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), tab_width=2)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
