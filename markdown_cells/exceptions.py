"""Package-specific exception types."""

from __future__ import annotations


class ThemeError(ValueError):
    """Raised when a theme cannot be loaded or contains an invalid style.

    Args:
        message: Description of the problem.
        key: Style key that failed to parse, if any.
    """

    def __init__(self, message: str, key: str | None = None):
        self.key = key
        super().__init__(message if key is None else f"{message} (key: {key})")
