"""Render code fragments into styled lines."""

from __future__ import annotations

import logging
from bisect import bisect_left
from collections.abc import Iterable, Sequence

from rich.style import Style

from . import editor_state
from .config import RenderConfig
from .constants import (
    CODE_BLOCK_STYLE,
    CURSOR_PRIMARY_STYLE,
    CURSOR_STYLE,
    SELECTION_PRIMARY_STYLE,
    SELECTION_STYLE,
    TEXT_STYLE,
)
from .models import HighlightEvent, ScopeClose, ScopeOpen, StyledLine, StyledSpan
from .syntax import DEFAULT_ENGINE, OverlaySpan, SyntaxEngine, merge
from .theme import StyleLookup

logger = logging.getLogger(__name__)


def render_fragment(
    text: str,
    language: str,
    style_resolver: StyleLookup | None = None,
    extra_ranges: Sequence[OverlaySpan] | None = None,
    *,
    engine: SyntaxEngine | None = None,
    config: RenderConfig | None = None,
) -> list[StyledLine]:
    """Render a code fragment as styled lines.

    Without a style resolver, or when no grammar matches `language`, every
    line gets the code block style. The editor state language renders a
    selection fixture instead of syntax highlighting. Tabs always expand to
    ``config.tab_width`` spaces.

    Args:
        text: Fragment source.
        language: Language name; empty for indented code blocks.
        style_resolver: Style lookup, or None to render unstyled.
        extra_ranges: ``(scope, (start, end))`` overlay ranges, e.g. search
            matches, merged into the syntax highlighting.
        engine: Syntax engine; defaults to the shared Pygments engine.
        config: Render settings; defaults to `RenderConfig()`.

    Returns:
        list[StyledLine]: One line per source line.

    Examples:
        render_fragment("let x = 1;\\n", "rust", theme.get)
        render_fragment("a\\tb", "", None)  # [StyledLine((StyledSpan("a    b"),))]
    """
    config = config or RenderConfig()
    tab = " " * config.tab_width

    if style_resolver is None:
        return styled_multiline_text(text, Style.null(), tab)

    if language == config.editor_state_language:
        return _render_editor_state(text, style_resolver, tab)

    # Grammars lex the expanded text so a tab always styles like its spaces
    if extra_ranges:
        extra_ranges = _expand_ranges(text, extra_ranges, len(tab))
    text = text.replace("\t", tab)

    events = (engine or DEFAULT_ENGINE).highlight(text, language)
    if events is None:
        return styled_multiline_text(text, style_resolver(CODE_BLOCK_STYLE), tab)

    if extra_ranges:
        events = merge(events, extra_ranges)

    return _render_highlights(text, events, style_resolver)


def _expand_ranges(
    text: str, ranges: Sequence[OverlaySpan], tab_width: int
) -> list[OverlaySpan]:
    """Move overlay offsets from `text` onto its tab-expanded form."""
    tabs = [index for index, char in enumerate(text) if char == "\t"]
    if not tabs:
        return list(ranges)

    def shift(offset: int) -> int:
        return offset + bisect_left(tabs, offset) * (tab_width - 1)

    return [(scope, (shift(start), shift(end))) for scope, (start, end) in ranges]


def styled_multiline_text(text: str, style: Style, tab: str = "    ") -> list[StyledLine]:
    """Split `text` on line feeds and style every line uniformly."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()

    result = []
    for line in lines:
        line = line.removesuffix("\r").replace("\t", tab)
        result.append(StyledLine((StyledSpan(line, style),) if line else ()))
    return result


def _push_span(spans: list[StyledSpan], content: str, style: Style) -> None:
    if not content:
        return
    if spans and spans[-1].style == style:
        spans[-1] = StyledSpan(spans[-1].content + content, style)
    else:
        spans.append(StyledSpan(content, style))


def _end_line(spans: list[StyledSpan]) -> StyledLine:
    """Close a highlighted line, dropping the CR of a CRLF ending."""
    if spans and spans[-1].content.endswith("\r"):
        last = spans.pop()
        if len(last.content) > 1:
            spans.append(StyledSpan(last.content[:-1], last.style))
    return StyledLine(tuple(spans))


def _render_highlights(
    text: str, events: Iterable[HighlightEvent], style_resolver: StyleLookup
) -> list[StyledLine]:
    text_style = style_resolver(TEXT_STYLE)
    scopes: list[str] = []
    spans: list[StyledSpan] = []
    lines: list[StyledLine] = []

    for event in events:
        if isinstance(event, ScopeOpen):
            scopes.append(event.scope)
            continue
        if isinstance(event, ScopeClose):
            if scopes:
                scopes.pop()
            else:
                logger.debug("ignoring unmatched scope close")
            continue

        style = text_style
        for scope in scopes:
            style = style + style_resolver(scope)

        *finished, rest = text[event.start : event.end].split("\n")
        for segment in finished:
            _push_span(spans, segment, style)
            lines.append(_end_line(spans))
            spans = []
        _push_span(spans, rest, style)

    if scopes:
        logger.debug("dropping %d unclosed scopes at end of fragment", len(scopes))

    if spans:
        lines.append(_end_line(spans))

    return lines


def _render_editor_state(text: str, style_resolver: StyleLookup, tab: str) -> list[StyledLine]:
    plain, selection = editor_state.decode(text)

    style_text = style_resolver(TEXT_STYLE)
    style_cursor = style_resolver(CURSOR_STYLE)
    style_cursor_primary = style_resolver(CURSOR_PRIMARY_STYLE)
    style_selection = style_resolver(SELECTION_STYLE)
    style_selection_primary = style_resolver(SELECTION_PRIMARY_STYLE)

    # offset -> whether the primary range claims it
    cursors: dict[int, bool] = {}
    selected: dict[int, bool] = {}
    for index, selection_range in enumerate(selection.ranges):
        is_primary = index == selection.primary_index
        for offset in range(selection_range.start, selection_range.end):
            selected[offset] = selected.get(offset, False) or is_primary
        cursor = selection_range.cursor
        cursors[cursor] = cursors.get(cursor, False) or is_primary

    spans: list[StyledSpan] = []
    lines: list[StyledLine] = []

    for offset, char in enumerate(plain):
        if char == "\r" and plain[offset + 1 : offset + 2] == "\n":
            continue
        if char == "\n":
            lines.append(StyledLine(tuple(spans)))
            spans = []
            continue

        if offset in cursors:
            style = style_cursor_primary if cursors[offset] else style_cursor
        elif offset in selected:
            style = style_selection_primary if selected[offset] else style_selection
        else:
            style = style_text
        _push_span(spans, tab if char == "\t" else char, style)

    if spans:
        lines.append(StyledLine(tuple(spans)))

    return lines
