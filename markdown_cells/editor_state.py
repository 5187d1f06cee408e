"""Decoder for editor state fixtures.

A fixture is plain text with selection markup embedded in it:

- ``#[`` ... ``]#`` marks the primary selection range,
- ``#(`` ... ``)#`` marks a secondary selection range,
- ``|`` directly after the opener or directly before the closer marks the
  head; the other end is the anchor.

``"#[|he]#llo #(wor|)#ld"`` decodes to ``"hello world"`` with a backward
primary range over ``he`` and a forward secondary range over ``wor``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_CLOSERS = {"[": "]#", "(": ")#"}


@dataclass(frozen=True)
class SelectionRange:
    """A selection between an anchor and a head, both character offsets."""

    anchor: int
    head: int

    @property
    def start(self) -> int:
        return min(self.anchor, self.head)

    @property
    def end(self) -> int:
        return max(self.anchor, self.head)

    @property
    def cursor(self) -> int:
        """Offset of the character drawn as the cursor.

        The last selected character for a forward range, the head otherwise.
        """
        if self.head > self.anchor:
            return self.head - 1
        return self.head


@dataclass(frozen=True)
class Selection:
    """Selection ranges plus the index of the primary one."""

    ranges: tuple[SelectionRange, ...] = ()
    primary_index: int = 0

    @property
    def primary(self) -> SelectionRange | None:
        if not self.ranges:
            return None
        return self.ranges[self.primary_index]


def decode(text: str) -> tuple[str, Selection]:
    """Strip selection markup from `text`.

    Malformed markup never raises: an opener without a closer is kept as
    literal text, a second primary marker is treated as secondary, and a
    fixture without a primary marker uses its first range as primary.

    Args:
        text: Fixture text with selection markup.

    Returns:
        tuple[str, Selection]: The plain text and its selection.

    Examples:
        decode("#[a|]#bc")  # ("abc", Selection((SelectionRange(0, 1),), 0))
    """
    plain: list[str] = []
    ranges: list[SelectionRange] = []
    primary_index: int | None = None
    length = 0
    i = 0

    while i < len(text):
        opener = text[i + 1 : i + 2]
        if text[i] != "#" or opener not in _CLOSERS:
            plain.append(text[i])
            length += 1
            i += 1
            continue

        close_at = text.find(_CLOSERS[opener], i + 2)
        if close_at == -1:
            logger.debug("unclosed selection marker at offset %d", i)
            plain.append(text[i])
            length += 1
            i += 1
            continue

        body = text[i + 2 : close_at]
        start = length
        if body.startswith("|"):
            body = body[1:]
            anchor, head = start + len(body), start
        else:
            body = body.removesuffix("|")
            anchor, head = start, start + len(body)

        if opener == "[":
            if primary_index is None:
                primary_index = len(ranges)
            else:
                logger.debug("duplicate primary selection at offset %d", i)

        ranges.append(SelectionRange(anchor, head))
        plain.append(body)
        length += len(body)
        i = close_at + 2

    return "".join(plain), Selection(tuple(ranges), primary_index or 0)
