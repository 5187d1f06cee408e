"""Markdown event stream built on markdown-it-py tokens.

markdown-it produces a flat list of block tokens with open/close pairs and
nested ``inline`` tokens. The renderer consumes a single stream of start, end
and content events instead, so this module walks the token tree in document
order and translates each token.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from markdown_it import MarkdownIt
from markdown_it.token import Token

from .models import Event, EventKind, Tag, TagKind

_md = MarkdownIt("commonmark").enable("strikethrough")

# Open/close pairs that translate to a tag without extra data
_PAIRED_TAGS = {
    "paragraph": TagKind.PARAGRAPH,
    "blockquote": TagKind.BLOCK_QUOTE,
    "bullet_list": TagKind.LIST,
    "list_item": TagKind.ITEM,
    "em": TagKind.EMPHASIS,
    "strong": TagKind.STRONG,
    "s": TagKind.STRIKETHROUGH,
    "link": TagKind.LINK,
}

_SIMPLE_EVENTS = {
    "text": EventKind.TEXT,
    "code_inline": EventKind.CODE,
    "html_inline": EventKind.HTML,
}

_BREAKS = {
    "softbreak": EventKind.SOFT_BREAK,
    "hardbreak": EventKind.HARD_BREAK,
}


def iter_events(source: str) -> Iterator[Event]:
    """Yield markdown events for `source` in document order.

    Args:
        source: Markdown text.

    Returns:
        Iterator[Event]: Events, with inline ``<code>`` HTML folded into
            inline code events.

    Examples:
        [event.kind for event in iter_events("*hi*")]
        # [START, START, TEXT, END, END]
    """
    return _fold_code_html(_walk(_md.parse(source)))


def _walk(tokens: Iterable[Token]) -> Iterator[Event]:
    for token in tokens:
        # Paragraphs inside tight lists are hidden
        if token.hidden:
            continue

        if token.type == "inline":
            yield from _walk(token.children or [])
            continue

        tag = _tag_for(token)
        if tag is not None:
            kind = EventKind.START if token.nesting == 1 else EventKind.END
            yield Event(kind, tag=tag)
            continue

        simple = _SIMPLE_EVENTS.get(token.type)
        if simple is not None:
            yield from _split_lines(simple, token.content)
            continue

        if token.type in _BREAKS:
            yield Event(_BREAKS[token.type])
            continue

        if token.type in ("fence", "code_block"):
            tag = Tag(TagKind.CODE_BLOCK, language=_fence_language(token))
            yield Event(EventKind.START, tag=tag)
            if token.content:
                yield Event(EventKind.TEXT, text=token.content)
            yield Event(EventKind.END, tag=tag)
        elif token.type == "html_block":
            yield from _html_block(token.content)
        elif token.type == "image":
            tag = Tag(TagKind.IMAGE)
            yield Event(EventKind.START, tag=tag)
            yield from _walk(token.children or [])
            yield Event(EventKind.END, tag=tag)
        elif token.type == "hr":
            yield Event(EventKind.RULE)
        else:
            yield Event(EventKind.UNKNOWN, text=token.type)


def _tag_for(token: Token) -> Tag | None:
    if token.nesting == 1:
        name = token.type.removesuffix("_open")
    elif token.nesting == -1:
        name = token.type.removesuffix("_close")
    else:
        return None

    if name == "heading":
        return Tag(TagKind.HEADING, level=int(token.tag[1:]))
    if name == "ordered_list":
        start = token.attrGet("start")
        return Tag(TagKind.LIST, start=1 if start is None else int(start))
    kind = _PAIRED_TAGS.get(name)
    return Tag(kind) if kind is not None else None


def _split_lines(kind: EventKind, content: str) -> Iterator[Event]:
    """Yield a content event per non-empty line, joined by soft breaks."""
    if "\n" not in content:
        # markdown-it leaves empty text tokens next to emphasis delimiters
        if content:
            yield Event(kind, text=content)
        return
    for index, line in enumerate(content.split("\n")):
        if index:
            yield Event(EventKind.SOFT_BREAK)
        if line:
            yield Event(kind, text=line)


def _fence_language(token: Token) -> str:
    if token.type != "fence":
        return ""
    words = token.info.split(maxsplit=1)
    return words[0] if words else ""


def _html_block(content: str) -> Iterator[Event]:
    tag = Tag(TagKind.HTML_BLOCK)
    yield Event(EventKind.START, tag=tag)
    for index, line in enumerate(content.rstrip("\n").split("\n")):
        if index:
            yield Event(EventKind.SOFT_BREAK)
        if line:
            yield Event(EventKind.HTML, text=line)
    yield Event(EventKind.END, tag=tag)


def _is_code_open(html: str) -> bool:
    return html.startswith("<code") and html[5:6] in (" ", ">")


def _fold_code_html(events: Iterable[Event]) -> Iterator[Event]:
    """Turn text between inline ``<code>`` and ``</code>`` into inline code."""
    in_code = False
    for event in events:
        if event.kind is EventKind.HTML and _is_code_open(event.text):
            in_code = True
            continue
        if event.kind is EventKind.HTML and event.text == "</code>":
            in_code = False
            continue
        if in_code and event.kind is EventKind.TEXT:
            yield Event(EventKind.CODE, text=event.text)
            continue
        yield event
