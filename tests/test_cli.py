from __future__ import annotations

import textwrap
from pathlib import Path

from markdown_cells.cli import cli


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_cli_prints_rendered_lines(cli_runner, tmp_path):
    target = _write(
        tmp_path,
        "doc.md",
        """
        # Title

        1. first
        2. second
        """,
    )

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output.splitlines() == ["Title", "", "1. first", "2. second"]


def test_cli_without_theme(cli_runner, tmp_path):
    target = _write(
        tmp_path,
        "code.md",
        """
        ```python
        print("hi")
        ```
        """,
    )

    result = cli_runner.invoke(cli, ["--no-theme", str(target)])

    assert result.exit_code == 0
    assert result.output == 'print("hi")\n'


def test_cli_size_reports_required_size(cli_runner, tmp_path):
    target = _write(tmp_path, "size.md", "# Title\n")

    result = cli_runner.invoke(cli, ["--size", "--width", "80", str(target)])

    assert result.exit_code == 0
    assert result.output == "7 3\n"


def test_cli_size_respects_max_width(cli_runner, tmp_path):
    target = _write(tmp_path, "wide.md", "x" * 200 + "\n")

    result = cli_runner.invoke(cli, ["--size", "--width", "500", "--max-width", "60", str(target)])

    assert result.exit_code == 0
    assert result.output == "62 3\n"


def test_cli_tab_width_override(cli_runner, tmp_path):
    target = tmp_path / "tabs.md"
    target.write_text("```\n\tx\n```\n", encoding="utf-8")

    result = cli_runner.invoke(cli, ["--no-theme", "--tab-width", "2", str(target)])

    assert result.exit_code == 0
    assert result.output == "  x\n"


def test_cli_reads_config_from_pyproject(cli_runner, tmp_path):
    _write_pyproject(
        tmp_path,
        """
        [tool.markdown-cells]
        rule = "***"
        """,
    )
    target = _write(tmp_path, "rule.md", "a\n\n---\n\nb\n")

    result = cli_runner.invoke(cli, ["--no-theme", str(target)])

    assert result.exit_code == 0
    assert result.output.splitlines() == ["a", "", "***", "", "b"]


def test_cli_rejects_invalid_config(cli_runner, tmp_path):
    _write_pyproject(
        tmp_path,
        """
        [tool.markdown-cells]
        tab_width = 0
        """,
    )
    target = _write(tmp_path, "doc.md", "text\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "tab_width" in result.output


def test_cli_loads_theme_file(cli_runner, tmp_path):
    theme = tmp_path / "theme.toml"
    theme.write_text('[theme]\n"ui.text" = "bold"\n', encoding="utf-8")
    target = _write(tmp_path, "doc.md", "text\n")

    result = cli_runner.invoke(cli, ["--theme", str(theme), str(target)])

    assert result.exit_code == 0
    assert result.output == "text\n"


def test_cli_rejects_invalid_theme(cli_runner, tmp_path):
    theme = tmp_path / "theme.toml"
    theme.write_text('"ui.text" = "not-a-colour-xyz"\n', encoding="utf-8")
    target = _write(tmp_path, "doc.md", "text\n")

    result = cli_runner.invoke(cli, ["--theme", str(theme), str(target)])

    assert result.exit_code != 0
    assert "ui.text" in result.output


def test_cli_rejects_oversized_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.setenv("MARKDOWN_CELLS_MAX_FILE_SIZE", "4")
    target = _write(tmp_path, "big.md", "more than four bytes\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "too large" in result.output


def test_cli_rejects_missing_file(cli_runner, tmp_path):
    result = cli_runner.invoke(cli, [str(tmp_path / "missing.md")])

    assert result.exit_code != 0
