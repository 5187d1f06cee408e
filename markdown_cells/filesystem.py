"""Filesystem helpers for markdown-cells."""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
MAX_FILE_SIZE_ENV_VAR = "MARKDOWN_CELLS_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["MARKDOWN_CELLS_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def read_markdown(filepath: Path, max_file_size: int) -> str:
    """Read a Markdown file after checking its size.

    Args:
        filepath: File to read.
        max_file_size: Largest accepted size in bytes.

    Returns:
        str: File contents decoded as UTF-8.

    Raises:
        IOError: If the file is too large or cannot be read or decoded.

    Examples:
        read_markdown(Path("README.md"), 1024 * 1024)
    """
    try:
        size = filepath.stat().st_size
    except OSError as error:
        raise IOError(f"Unable to access {filepath}: {error}") from error

    if size > max_file_size:
        raise IOError(
            f"{filepath} is too large ({size} bytes). Maximum allowed size is {max_file_size} bytes."
        )

    try:
        return filepath.read_text(encoding="utf-8")
    except UnicodeDecodeError as error:
        raise IOError(f"Invalid UTF-8 sequence in {filepath}: {error}") from error
    except OSError as error:
        raise IOError(f"Unable to read {filepath}: {error}") from error
