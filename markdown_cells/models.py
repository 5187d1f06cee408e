"""Data models for markdown-cells."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from rich.cells import cell_len
from rich.style import Style
from rich.text import Text


@dataclass(frozen=True)
class StyledSpan:
    """A run of text rendered with a single resolved style.

    Attributes:
        content: Text of the run. Never contains a line feed.
        style: Resolved visual style.
    """

    content: str
    style: Style = field(default_factory=Style.null)

    @property
    def width(self) -> int:
        return cell_len(self.content)


@dataclass(frozen=True)
class StyledLine:
    """One physical output row made of styled spans.

    An empty line is a deliberate blank separator.

    Attributes:
        spans: Spans in display order.
    """

    spans: tuple[StyledSpan, ...] = ()

    @property
    def width(self) -> int:
        return sum(span.width for span in self.spans)

    @property
    def plain(self) -> str:
        return "".join(span.content for span in self.spans)

    @property
    def is_blank(self) -> bool:
        return not self.spans

    def to_text(self) -> Text:
        """Convert the line to a rich `Text` for printing."""
        text = Text(no_wrap=True, end="")
        for span in self.spans:
            text.append(span.content, span.style)
        return text


class TagKind(Enum):
    """Markdown constructs that open and close around other events."""

    HEADING = auto()
    PARAGRAPH = auto()
    CODE_BLOCK = auto()
    LIST = auto()
    ITEM = auto()
    EMPHASIS = auto()
    STRONG = auto()
    STRIKETHROUGH = auto()
    BLOCK_QUOTE = auto()
    LINK = auto()
    IMAGE = auto()
    HTML_BLOCK = auto()


@dataclass(frozen=True)
class Tag:
    """An open/close markdown construct.

    Attributes:
        kind: Construct type.
        level: Heading level (1-6); zero for other constructs.
        language: Code block language; empty for indented blocks.
        start: First number of an ordered list; None for bullet lists.
    """

    kind: TagKind
    level: int = 0
    language: str = ""
    start: int | None = None


class EventKind(Enum):
    """Kinds of markdown events, in the order a renderer dispatches them.

    Attributes:
        START: A construct opens.
        END: A construct closes.
        TEXT: Plain text, or the full content of a code block.
        CODE: Inline code span.
        HTML: Raw HTML, inline or one line of an HTML block.
        SOFT_BREAK: Line ending inside a paragraph.
        HARD_BREAK: Forced line break.
        RULE: Thematic break.
        UNKNOWN: A parser token with no rendering.
    """

    START = auto()
    END = auto()
    TEXT = auto()
    CODE = auto()
    HTML = auto()
    SOFT_BREAK = auto()
    HARD_BREAK = auto()
    RULE = auto()
    UNKNOWN = auto()


@dataclass(frozen=True)
class Event:
    """A single markdown event.

    Attributes:
        kind: Event type.
        tag: Construct for START and END events.
        text: Content for text-like events, token type for UNKNOWN events.
    """

    kind: EventKind
    tag: Tag | None = None
    text: str = ""


@dataclass(frozen=True)
class ScopeOpen:
    """A highlight scope opens."""

    scope: str


@dataclass(frozen=True)
class ScopeClose:
    """The innermost highlight scope closes."""


@dataclass(frozen=True)
class Source:
    """Source text between two character offsets of a fragment."""

    start: int
    end: int


HighlightEvent = ScopeOpen | ScopeClose | Source


@dataclass
class ParseContext:
    """Mutable state of a single document render.

    Attributes:
        open_tags: Currently open constructs, innermost last.
        list_stack: One entry per open list: the next number for ordered lists,
            None for bullet lists.
        spans: Spans of the line being built.
        lines: Finished lines.
    """

    open_tags: list[Tag] = field(default_factory=list)
    list_stack: list[int | None] = field(default_factory=list)
    spans: list[StyledSpan] = field(default_factory=list)
    lines: list[StyledLine] = field(default_factory=list)
