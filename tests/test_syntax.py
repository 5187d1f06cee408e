from __future__ import annotations

from pygments.token import Keyword, Name, String, Text

from markdown_cells.models import ScopeClose, ScopeOpen, Source
from markdown_cells.syntax import SyntaxEngine, merge, scope_for


def test_scope_for_walks_up_token_hierarchy():
    assert scope_for(Name.Function.Magic) == "function"
    assert scope_for(String.Double) == "string"
    assert scope_for(Keyword.Constant) == "constant.builtin"
    assert scope_for(Keyword.Reserved) == "keyword"


def test_scope_for_plain_tokens_is_none():
    assert scope_for(Text) is None
    assert scope_for(Name) is None


def test_highlight_unknown_language_is_none():
    engine = SyntaxEngine()

    assert engine.highlight("x", "no-such-language") is None
    assert engine.highlight("x", "") is None


def test_highlight_accepts_aliases():
    engine = SyntaxEngine(aliases={"snake": "python"})

    assert engine.lexer_for("snake") is not None
    assert engine.lexer_for("Python") is not None


def test_highlight_events_are_balanced_and_cover_text():
    text = "def f(x):\n    return 'x'\n"
    events = list(SyntaxEngine().highlight(text, "python"))

    depth = 0
    covered = []
    for event in events:
        if isinstance(event, ScopeOpen):
            depth += 1
        elif isinstance(event, ScopeClose):
            depth -= 1
            assert depth >= 0
        else:
            covered.append(text[event.start : event.end])

    assert depth == 0
    assert "".join(covered) == text
    assert ScopeOpen("keyword") in events


def test_merge_without_spans_passes_events_through():
    events = [ScopeOpen("keyword"), Source(0, 3), ScopeClose()]

    assert list(merge(events, [])) == events


def test_merge_splits_source_at_overlay_boundaries():
    merged = list(merge([Source(0, 10)], [("match", (2, 5))]))

    assert merged == [
        Source(0, 2),
        ScopeOpen("match"),
        Source(2, 5),
        ScopeClose(),
        Source(5, 10),
    ]


def test_merge_opens_overlay_inside_syntax_scopes():
    events = [ScopeOpen("keyword"), Source(0, 3), ScopeClose(), Source(3, 6)]

    merged = list(merge(events, [("match", (1, 5))]))

    assert merged == [
        ScopeOpen("keyword"),
        Source(0, 1),
        ScopeOpen("match"),
        Source(1, 3),
        ScopeClose(),
        ScopeClose(),
        ScopeOpen("match"),
        Source(3, 5),
        ScopeClose(),
        Source(5, 6),
    ]


def test_merge_nests_overlapping_overlays_outermost_first():
    merged = list(merge([Source(0, 6)], [("inner", (2, 4)), ("outer", (0, 6))]))

    assert merged == [
        ScopeOpen("outer"),
        Source(0, 2),
        ScopeClose(),
        ScopeOpen("outer"),
        ScopeOpen("inner"),
        Source(2, 4),
        ScopeClose(),
        ScopeClose(),
        ScopeOpen("outer"),
        Source(4, 6),
        ScopeClose(),
    ]


def test_merge_clips_overlay_past_end_of_text():
    merged = list(merge([Source(0, 10)], [("match", (8, 20)), ("empty", (3, 3))]))

    assert merged == [Source(0, 8), ScopeOpen("match"), Source(8, 10), ScopeClose()]
