"""Render markdown documents into styled lines for a character grid."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from rich.style import Style

from .config import RenderConfig
from .constants import HEADING_STYLES, INLINE_CODE_STYLE, TEXT_STYLE
from .events import iter_events
from .highlight import render_fragment
from .models import Event, EventKind, ParseContext, StyledLine, StyledSpan, Tag, TagKind
from .syntax import SyntaxEngine
from .theme import StyleLookup

logger = logging.getLogger(__name__)

# Closing these ends the current line; all but ITEM also leave a blank line
_LINE_ENDING_TAGS = {
    TagKind.HEADING,
    TagKind.PARAGRAPH,
    TagKind.CODE_BLOCK,
    TagKind.HTML_BLOCK,
    TagKind.ITEM,
}
_SEPARATED_TAGS = _LINE_ENDING_TAGS - {TagKind.ITEM}

_ITALIC = Style(italic=True)
_BOLD = Style(bold=True)
_CROSSED_OUT = Style(strike=True)


@dataclass(frozen=True)
class _Styles:
    text: Style
    inline_code: Style
    headings: tuple[Style, ...]

    @classmethod
    def resolve(cls, style_resolver: StyleLookup | None) -> _Styles:
        if style_resolver is None:
            null = Style.null()
            return cls(null, null, (null,) * len(HEADING_STYLES))
        return cls(
            text=style_resolver(TEXT_STYLE),
            inline_code=style_resolver(INLINE_CODE_STYLE),
            headings=tuple(style_resolver(key) for key in HEADING_STYLES),
        )

    def for_tag(self, tag: Tag | None) -> Style:
        """Style for plain text whose innermost open construct is `tag`."""
        if tag is None:
            return self.text
        if tag.kind is TagKind.HEADING:
            level = min(max(tag.level, 1), len(self.headings))
            return self.headings[level - 1]
        if tag.kind is TagKind.EMPHASIS:
            return self.text + _ITALIC
        if tag.kind is TagKind.STRONG:
            return self.text + _BOLD
        if tag.kind is TagKind.STRIKETHROUGH:
            return self.text + _CROSSED_OUT
        return self.text


def _indent(config: RenderConfig, depth: int) -> str:
    if depth < 1:
        return ""
    return config.indent * (depth - 1)


def _push_line(ctx: ParseContext) -> None:
    """Move pending spans into a finished line, if there are any."""
    if ctx.spans:
        ctx.lines.append(StyledLine(tuple(ctx.spans)))
        ctx.spans.clear()


def _push_indent(ctx: ParseContext, config: RenderConfig) -> None:
    indent = _indent(config, len(ctx.list_stack))
    if indent:
        ctx.spans.append(StyledSpan(indent))


def _start_list(ctx: ParseContext, tag: Tag) -> None:
    # A nested list never shares a line with its parent item
    if ctx.list_stack:
        _push_line(ctx)
    ctx.list_stack.append(tag.start)


def _end_list(ctx: ParseContext) -> None:
    if ctx.list_stack:
        ctx.list_stack.pop()
    if not ctx.list_stack:
        ctx.lines.append(StyledLine())


def _start_item(ctx: ParseContext, tag: Tag, config: RenderConfig) -> None:
    if not ctx.list_stack:
        logger.warning("markdown parsing error, list item without list")

    ctx.open_tags.append(tag)

    number = ctx.list_stack[-1] if ctx.list_stack else None
    if number is None:
        bullet = "- "
    else:
        bullet = f"{number}. "
        ctx.list_stack[-1] = number + 1

    ctx.spans.append(StyledSpan(_indent(config, len(ctx.list_stack)) + bullet))


def _end_tag(ctx: ParseContext, tag: Tag) -> None:
    if ctx.open_tags:
        ctx.open_tags.pop()
    else:
        logger.warning("markdown parsing error, unmatched end of %s", tag.kind.name.lower())

    if tag.kind in _LINE_ENDING_TAGS:
        _push_line(ctx)
    if tag.kind in _SEPARATED_TAGS:
        ctx.lines.append(StyledLine())


def _splice_code(
    ctx: ParseContext,
    text: str,
    language: str,
    style_resolver: StyleLookup | None,
    engine: SyntaxEngine | None,
    config: RenderConfig,
) -> None:
    # Code lines follow anything already on the line; a bare indent is dropped
    if any(span.content.strip() for span in ctx.spans):
        _push_line(ctx)
    ctx.spans.clear()
    ctx.lines.extend(
        render_fragment(text, language, style_resolver, engine=engine, config=config)
    )


def _render_events(
    events: Iterable[Event],
    style_resolver: StyleLookup | None,
    engine: SyntaxEngine | None,
    config: RenderConfig,
) -> list[StyledLine]:
    styles = _Styles.resolve(style_resolver)
    ctx = ParseContext()

    for event in events:
        kind = event.kind

        if kind is EventKind.START and event.tag is not None:
            tag = event.tag
            if tag.kind is TagKind.LIST:
                _start_list(ctx, tag)
            elif tag.kind is TagKind.ITEM:
                _start_item(ctx, tag, config)
            else:
                ctx.open_tags.append(tag)
                if not ctx.spans and ctx.list_stack:
                    _push_indent(ctx, config)
        elif kind is EventKind.END and event.tag is not None:
            if event.tag.kind is TagKind.LIST:
                _end_list(ctx)
            else:
                _end_tag(ctx, event.tag)
        elif kind is EventKind.TEXT:
            innermost = ctx.open_tags[-1] if ctx.open_tags else None
            if innermost is not None and innermost.kind is TagKind.CODE_BLOCK:
                _splice_code(ctx, event.text, innermost.language, style_resolver, engine, config)
            else:
                ctx.spans.append(StyledSpan(event.text, styles.for_tag(innermost)))
        elif kind in (EventKind.CODE, EventKind.HTML):
            ctx.spans.append(StyledSpan(event.text, styles.inline_code))
        elif kind in (EventKind.SOFT_BREAK, EventKind.HARD_BREAK):
            _push_line(ctx)
            if ctx.list_stack:
                _push_indent(ctx, config)
        elif kind is EventKind.RULE:
            ctx.lines.append(StyledLine((StyledSpan(config.rule, styles.inline_code),)))
            ctx.lines.append(StyledLine())
        else:
            logger.warning("unhandled markdown event %s", event.text or kind.name.lower())

    _push_line(ctx)

    # No blank lines at the end of the document
    while ctx.lines and ctx.lines[-1].is_blank:
        ctx.lines.pop()

    return ctx.lines


def render_markdown(
    source: str,
    style_resolver: StyleLookup | None = None,
    *,
    engine: SyntaxEngine | None = None,
    config: RenderConfig | None = None,
) -> list[StyledLine]:
    """Render markdown into styled lines.

    Never raises for any markdown input: structural anomalies and unknown
    events are logged as warnings and rendering continues.

    Args:
        source: Markdown text.
        style_resolver: Style lookup, e.g. ``Theme.get``. None renders every
            span with `Style.null()`.
        engine: Syntax engine for fenced code blocks.
        config: Render settings; defaults to `RenderConfig()`.

    Returns:
        list[StyledLine]: Logical lines without a trailing blank line.

    Examples:
        render_markdown("# Title\\n\\nSome *text*.", theme.get)
    """
    config = config or RenderConfig()
    return _render_events(iter_events(source), style_resolver, engine, config)


def measure(lines: Iterable[StyledLine], max_width: int) -> tuple[int, int]:
    """Return the ``(width, height)`` of `lines`, clamping width to `max_width`.

    Examples:
        measure(render_markdown("a\\n\\nbcd"), 120)  # (3, 3)
    """
    lines = list(lines)
    width = 0
    for line in lines:
        if line.width > max_width:
            width = max_width
            break
        width = max(width, line.width)
    return width, len(lines)


class Document:
    """A markdown source ready to be rendered or measured.

    Args:
        source: Markdown text.
        engine: Syntax engine for fenced code blocks.
        config: Render settings; defaults to `RenderConfig()`.
    """

    def __init__(
        self,
        source: str,
        engine: SyntaxEngine | None = None,
        config: RenderConfig | None = None,
    ):
        self.source = source
        self.engine = engine
        self.config = config or RenderConfig()

    def render(self, style_resolver: StyleLookup | None = None) -> list[StyledLine]:
        return render_markdown(
            self.source, style_resolver, engine=self.engine, config=self.config
        )

    def required_size(self, max_width: int) -> tuple[int, int]:
        """Size needed to display the document in a viewport `max_width` wide.

        Renders without a theme, measures against the viewport width minus
        padding (never more than ``config.max_width``) and adds the padding
        back on both axes.

        Args:
            max_width: Width of the available viewport in cells.

        Returns:
            tuple[int, int]: Required width and height in cells.

        Examples:
            Document("# Title").required_size(80)  # (7, 3)
        """
        padding = self.config.padding
        max_text_width = min(max(max_width - padding, 0), self.config.max_width)
        width, height = measure(self.render(None), max_text_width)
        return width + padding, height + padding
