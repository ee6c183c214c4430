"""
Formatting rules applied around cut points

Point formatters look at a single cut point in the post-removal text and
return the byte range ``(start, end)`` they would like to delete around it;
``(pos, pos)`` means "nothing". Block formatters look at the span between the
two cut points of an unwrap-block and return ranges of indentation to delete.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from ..models.markers import ByteRange
from .positions import (
    NEWLINE,
    SPACE,
    TAB,
    charBoundary_assert,
    charBoundary_is,
    char_findNext,
    lineBreak_findNext,
    lineBreak_findPrev,
)


class Formatter(ABC):
    @abstractmethod
    def format(self, content: bytes, position: int, prev_position: int) -> Tuple[int, int]:
        ...


class BlockFormatter(ABC):
    @abstractmethod
    def format(self, content: bytes, start: int, end: int) -> List[ByteRange]:
        ...


def _lineBreak_second(content: bytes, position: int, forward: bool) -> Optional[int]:
    """Line break after the one that directly touches ``position`` (pausing on text)"""
    if forward:
        first: Optional[int] = lineBreak_findNext(content, position, True)
        return None if first is None else lineBreak_findNext(content, first + 1, True)
    first = lineBreak_findPrev(content, position, True)
    return None if first is None else lineBreak_findPrev(content, first, True)


class IndentRemover(Formatter):
    """
    Remove the indentation left on a line that became empty

    When the cut point sits on a ``\\n`` and everything before it on the
    same line is spaces or tabs, that whitespace is deleted.
    """

    def format(self, content: bytes, position: int, prev_position: int) -> Tuple[int, int]:
        if position >= len(content) or not charBoundary_is(content, position):
            return position, position
        if content[position] != NEWLINE:
            return position, position

        cursor: int = position
        while cursor > 0:
            cursor -= 1
            if not charBoundary_is(content, cursor):
                continue
            byte: int = content[cursor]
            if byte in (SPACE, TAB):
                continue
            if byte == NEWLINE:
                return cursor + 1, position
            break
        return position, position


class EmptyLineRemover(Formatter):
    """
    Remove the line break of a line that became empty

    Only applies when the lines around the cut point are not themselves
    blank, so that intentional blank lines survive. A blank line above that
    lies before the previous cut point does not count.
    """

    def format(self, content: bytes, position: int, prev_position: int) -> Tuple[int, int]:
        charBoundary_assert(content, position)
        if position >= len(content) or content[position] != NEWLINE:
            return position, position

        next_empty: Optional[int] = _lineBreak_second(content, position, True)
        prev_empty: Optional[int] = _lineBreak_second(content, position, False)

        next_has_text: bool = next_empty is None
        prev_has_text: bool = prev_empty is None or prev_empty <= prev_position
        if next_has_text and prev_has_text:
            return position, position + 1
        return position, position


class PrevLineBreakRemover(Formatter):
    """Collapse a blank line directly above the cut point"""

    def format(self, content: bytes, position: int, prev_position: int) -> Tuple[int, int]:
        found: Optional[int] = _lineBreak_second(content, position, False)
        if found is None:
            return position, position
        return found + 1, position


class NextLineBreakRemover(Formatter):
    """Collapse a blank line directly below the cut point"""

    def format(self, content: bytes, position: int, prev_position: int) -> Tuple[int, int]:
        found: Optional[int] = _lineBreak_second(content, position, True)
        if found is None:
            return position, position
        return position, found


class BlockIndentRemover(BlockFormatter):
    """
    De-indent the body of an unwrapped block by one level

    One level is the indentation of the first body line relative to the
    column where the block's opening tag started. Lines indented less than
    that keep whatever they have.
    """

    @staticmethod
    def indentLen_get(content: bytes, position: int) -> int:
        line_break: Optional[int] = lineBreak_findPrev(content, position, False)
        if line_break is None:
            return 0
        first_char: Optional[int] = char_findNext(content, line_break + 1)
        if first_char is None:
            return 0
        return first_char - line_break - 1

    def format(self, content: bytes, start: int, end: int) -> List[ByteRange]:
        line_break: Optional[int] = lineBreak_findPrev(content, start, True)
        indent_offset: int = start - line_break - 1 if line_break is not None else 0
        current: int = start + 1
        indent_len: int = max(self.indentLen_get(content, current) - indent_offset, 0)

        ranges: List[ByteRange] = []
        while end > current:
            next_line: Optional[int] = lineBreak_findNext(content, current, False)
            if next_line is None or next_line + 1 > end:
                break
            first_char: Optional[int] = char_findNext(content, current)
            if first_char is not None:
                indent_start: int = min(current + indent_offset, first_char)
                indent_end: int = min(indent_start + indent_len, first_char)
                if indent_start != indent_end:
                    ranges.append(ByteRange(indent_start, indent_end))
            current = next_line + 1
        return ranges


def formatters_default() -> List[Formatter]:
    return [IndentRemover(), EmptyLineRemover(), PrevLineBreakRemover(), NextLineBreakRemover()]


def blockFormatters_default() -> List[BlockFormatter]:
    return [BlockIndentRemover()]
