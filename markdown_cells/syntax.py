"""Highlight event streams from Pygments lexers.

Pygments yields a flat sequence of ``(token_type, value)`` pairs. The
compositor works on scope events instead, so every token with a known
category becomes a ``ScopeOpen``/``Source``/``ScopeClose`` triple and
uncategorized tokens become bare ``Source`` events. Offsets are character
indices into the fragment text.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from collections.abc import Iterable, Iterator, Mapping
from functools import lru_cache

from pygments.lexer import Lexer
from pygments.lexers import find_lexer_class_by_name
from pygments.token import (
    Comment,
    Error,
    Generic,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    _TokenType,
)
from pygments.util import ClassNotFound

from .models import HighlightEvent, ScopeClose, ScopeOpen, Source

logger = logging.getLogger(__name__)

OverlaySpan = tuple[str, tuple[int, int]]

# Most specific token types win; lookups walk up the token hierarchy.
TOKEN_SCOPES: dict[_TokenType, str] = {
    Comment: "comment",
    Keyword: "keyword",
    Keyword.Constant: "constant.builtin",
    Keyword.Type: "type.builtin",
    Name.Attribute: "attribute",
    Name.Builtin: "function.builtin",
    Name.Builtin.Pseudo: "variable.builtin",
    Name.Class: "type",
    Name.Constant: "constant",
    Name.Decorator: "attribute",
    Name.Exception: "type",
    Name.Function: "function",
    Name.Namespace: "namespace",
    Name.Tag: "tag",
    Name.Variable: "variable",
    String: "string",
    String.Escape: "constant.character.escape",
    Number: "constant.numeric",
    Operator: "operator",
    Operator.Word: "keyword.operator",
    Punctuation: "punctuation",
    Generic.Deleted: "diff.minus",
    Generic.Inserted: "diff.plus",
    Generic.Heading: "markup.heading",
    Generic.Emph: "markup.italic",
    Generic.Strong: "markup.bold",
    Error: "error",
}


def scope_for(token_type: _TokenType) -> str | None:
    """Return the theme scope for a Pygments token type, if it has one.

    Examples:
        scope_for(Name.Function.Magic)  # "function"
        scope_for(Text)  # None
    """
    current = token_type
    while current is not None:
        scope = TOKEN_SCOPES.get(current)
        if scope is not None:
            return scope
        current = current.parent
    return None


@lru_cache(maxsize=128)
def _lexer_class(language: str) -> type[Lexer] | None:
    try:
        return find_lexer_class_by_name(language)
    except ClassNotFound:
        return None


class SyntaxEngine:
    """Produce highlight events for code fragments.

    Args:
        aliases: Extra language names mapped onto Pygments lexer aliases,
            e.g. ``{"py3": "python"}``.
    """

    def __init__(self, aliases: Mapping[str, str] | None = None):
        self.aliases = dict(aliases or {})

    def lexer_for(self, language: str) -> Lexer | None:
        """Return a lexer for `language`, or None when no grammar is available."""
        language = language.strip().lower()
        if not language:
            return None
        cls = _lexer_class(self.aliases.get(language, language))
        if cls is None:
            return None
        return cls(stripnl=False, ensurenl=False)

    def highlight(self, text: str, language: str) -> Iterator[HighlightEvent] | None:
        """Highlight `text` as `language`.

        Args:
            text: Fragment source.
            language: Language name or alias.

        Returns:
            Iterator[HighlightEvent] | None: Balanced scope and source events
                covering the whole text, or None when no lexer matches.

        Examples:
            events = SyntaxEngine().highlight("let x = 1;", "rust")
        """
        lexer = self.lexer_for(language)
        if lexer is None:
            logger.debug("no grammar for language %r", language)
            return None
        return _token_events(lexer, text)


def _token_events(lexer: Lexer, text: str) -> Iterator[HighlightEvent]:
    position = 0
    for _, token_type, value in lexer.get_tokens_unprocessed(text):
        if not value:
            continue
        start, position = position, min(position + len(value), len(text))
        scope = scope_for(token_type)
        if scope is None:
            yield Source(start, position)
        else:
            yield ScopeOpen(scope)
            yield Source(start, position)
            yield ScopeClose()


def merge(events: Iterable[HighlightEvent], spans: Iterable[OverlaySpan]) -> Iterator[HighlightEvent]:
    """Splice overlay ranges into a highlight event stream.

    Every ``Source`` event is cut at overlay boundaries. Each piece covered by
    overlays is wrapped in scope events for those overlays, opened outermost
    first (earlier start, then longer range), inside whatever syntax scopes
    are already open. The result stays balanced when `events` is balanced.

    Args:
        events: Highlight events from the syntax engine.
        spans: ``(scope, (start, end))`` overlay ranges over the same text.

    Returns:
        Iterator[HighlightEvent]: The merged stream.

    Examples:
        merge(events, [("search.match", (4, 9))])
    """
    overlays = sorted(
        ((scope, start, end) for scope, (start, end) in spans if end > start),
        key=lambda overlay: (overlay[1], -overlay[2]),
    )
    if not overlays:
        yield from events
        return

    boundaries = sorted({offset for _, start, end in overlays for offset in (start, end)})

    for event in events:
        if not isinstance(event, Source):
            yield event
            continue

        start = event.start
        index = bisect_right(boundaries, start)
        while start < event.end:
            cut = event.end
            if index < len(boundaries) and boundaries[index] < event.end:
                cut = boundaries[index]
                index += 1

            active = [scope for scope, lower, upper in overlays if lower <= start < upper]
            for scope in active:
                yield ScopeOpen(scope)
            yield Source(start, cut)
            for _ in active:
                yield ScopeClose()
            start = cut


DEFAULT_ENGINE = SyntaxEngine()
