"""Span tracking over resource strings.

This module provides the small lexical layer used by the address parsers:
:class:`Span`, a half-open ``[start, end)`` index range into the original
input, and :class:`SpanCursor`, a forward-only cursor that hands out one
character at a time while remembering where the current field started.

Indices are Python string indices. VISA resource strings are ASCII, so they
are also byte offsets.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    """Half-open ``[start, end)`` range into an input string.

    Attributes:
        start: Index of the first character in the range.
        end: Index one past the last character in the range.

    Raises:
        ValueError: If ``start`` is negative or greater than ``end``.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate the range bounds.

        Raises:
            ValueError: If ``start`` is negative or greater than ``end``.
        """
        if self.start < 0 or self.start > self.end:
            raise ValueError(f"invalid span [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return f"[{self.start}, {self.end})"

    def slice(self, text: str) -> str:
        """Return the part of *text* covered by this span."""
        return text[self.start : self.end]


class SpanCursor:
    """Forward-only cursor over the characters of a string.

    The cursor tracks two positions: the index of the next character to be
    read and the start of the field currently being accumulated. Parsers
    call :meth:`mark` at each field boundary and :meth:`span` to get the
    field's range once its terminator has been seen.

    Args:
        text: The string to walk.

    Example:
        >>> cursor = SpanCursor("USB::0x1")
        >>> cursor.advance()
        (0, 'U')
        >>> cursor.peek()
        'S'
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._index = 0
        self._start = 0

    @property
    def text(self) -> str:
        """The string being walked."""
        return self._text

    @property
    def position(self) -> int:
        """Index of the next character to be read."""
        return self._index

    @property
    def start(self) -> int:
        """Start index of the field currently being accumulated."""
        return self._start

    def at_end(self) -> bool:
        """Return True if every character has been consumed."""
        return self._index >= len(self._text)

    def advance(self) -> tuple[int, str] | None:
        """Consume the next character.

        Returns:
            ``(index, character)``, or None at end of input.
        """
        if self.at_end():
            return None
        index = self._index
        self._index += 1
        return index, self._text[index]

    def peek(self) -> str | None:
        """Return the next character without consuming it, or None at end."""
        if self.at_end():
            return None
        return self._text[self._index]

    def mark(self) -> None:
        """Start a new field at the current position."""
        self._start = self._index

    def span(self, end: int | None = None) -> Span:
        """Return the range of the current field.

        Args:
            end: Exclusive end index. Defaults to the current position.

        Returns:
            Span from the last :meth:`mark` to *end*.
        """
        return Span(self._start, self._index if end is None else end)

    def skip_until(self, stop: str) -> int:
        """Consume characters up to the next *stop* character.

        The stop character itself is left unconsumed.

        Args:
            stop: Character to stop in front of.

        Returns:
            Index of the stop character, or the input length if it never
            appears.
        """
        found = self._text.find(stop, self._index)
        self._index = len(self._text) if found < 0 else found
        return self._index
