from __future__ import annotations

import string

from hypothesis import given
from hypothesis import strategies as st
from markdown_cells.highlight import render_fragment
from markdown_cells.renderer import Document, render_markdown
from markdown_cells.theme import default_theme

markdown_alphabet = string.ascii_letters + string.digits + " \t\n#*_-`~>[]()!.<>/"


@given(st.text(max_size=300))
def test_render_never_ends_with_blank_line(source: str):
    lines = render_markdown(source)

    assert not lines or not lines[-1].is_blank


@given(st.text(alphabet=markdown_alphabet, max_size=300))
def test_render_with_theme_never_raises(source: str):
    lines = render_markdown(source, default_theme().get)

    assert all("\n" not in span.content for line in lines for span in line.spans)


@given(st.text(max_size=200), st.integers(min_value=0, max_value=200))
def test_required_size_is_deterministic(source: str, width: int):
    document = Document(source)

    assert document.required_size(width) == document.required_size(width)


@given(st.integers(min_value=1, max_value=30))
def test_ordered_list_bullets_count_up(count: int):
    source = "1. item\n" * count

    assert [line.plain for line in render_markdown(source)] == [
        f"{number}. item" for number in range(1, count + 1)
    ]


@given(st.integers(min_value=1, max_value=6))
def test_nesting_depth_sets_indentation(depth: int):
    source = "".join(f"{'  ' * level}- x{level}\n" for level in range(depth))

    assert [line.plain for line in render_markdown(source)] == [
        f"{'  ' * level}- x{level}" for level in range(depth)
    ]


@given(
    st.text(alphabet="ab \t\n\r", max_size=80),
    st.sampled_from(["", "no-such-language", "python", "rust"]),
)
def test_tab_expansion_matches_pre_expanded_text(fragment: str, language: str):
    expanded = fragment.replace("\t", "    ")

    assert render_fragment(fragment, language) == render_fragment(expanded, language)


@given(
    st.text(alphabet="ab \t\n\r", max_size=80),
    st.sampled_from(["", "no-such-language", "python", "rust", "go", "yaml", "make"]),
)
def test_tab_expansion_matches_pre_expanded_text_when_highlighted(fragment: str, language: str):
    theme = default_theme()
    expanded = fragment.replace("\t", "    ")

    assert render_fragment(fragment, language, theme.get) == render_fragment(
        expanded, language, theme.get
    )


@given(st.text(alphabet=markdown_alphabet, max_size=300))
def test_rendered_spans_are_never_empty(source: str):
    lines = render_markdown(source, default_theme().get)

    assert all(span.content for line in lines for span in line.spans)


@given(st.text(alphabet="ab =\t\n", max_size=80))
def test_highlighted_lines_never_keep_carriage_returns(fragment: str):
    theme = default_theme()
    lines = render_fragment(fragment.replace("\n", "\r\n"), "python", theme.get)

    assert all(not span.content.endswith("\r") for line in lines for span in line.spans[-1:])
