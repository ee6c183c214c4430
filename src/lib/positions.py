"""
Byte-level position helpers

All scanners operate on the UTF-8 encoded source. Offsets that fall inside a
multi-byte sequence are never treated as characters: they are stepped over,
or rejected with CharBoundaryError where a caller hands one in as a cut point.
"""

from enum import Enum
from typing import Optional

NEWLINE: int = ord("\n")
SPACE: int = ord(" ")
TAB: int = ord("\t")


class CharBoundaryError(ValueError):
    """Raised when a byte offset does not fall on a UTF-8 character boundary"""
    pass


class _Scan(Enum):
    SKIP = "skip"
    FOUND = "found"
    STOP = "stop"


def charBoundary_is(content: bytes, position: int) -> bool:
    """
    Check whether ``position`` starts a character (or is the end of content).

    Args:
        content: UTF-8 encoded text
        position: Byte offset

    Returns:
        True at 0, at len(content), and on any byte that is not a
        continuation byte (0b10xxxxxx); False past the end.
    """
    if position == 0 or position == len(content):
        return True
    if position < 0 or position > len(content):
        return False
    return (content[position] & 0xC0) != 0x80


def charBoundary_assert(content: bytes, position: int) -> None:
    if not charBoundary_is(content, position):
        raise CharBoundaryError(
            f"Byte offset {position} is not on a character boundary"
        )


def _lineBreak_check(content: bytes, cursor: int) -> _Scan:
    if not charBoundary_is(content, cursor):
        return _Scan.SKIP
    byte: int = content[cursor]
    if byte in (SPACE, TAB):
        return _Scan.SKIP
    if byte == NEWLINE:
        return _Scan.FOUND
    return _Scan.STOP


def lineBreak_findNext(content: bytes, position: int, pause_on_char: bool) -> Optional[int]:
    """
    Find the next line break at or after ``position``.

    Spaces and tabs are skipped. Any other character either ends the search
    (``pause_on_char``) or is skipped as well.

    Args:
        content: UTF-8 encoded text
        position: Byte offset where scanning starts (inclusive)
        pause_on_char: Stop at the first non-space character

    Returns:
        Byte offset of the ``\\n``, or None
    """
    cursor: int = position
    while 0 <= cursor < len(content):
        check: _Scan = _lineBreak_check(content, cursor)
        if check is _Scan.FOUND:
            return cursor
        if check is _Scan.STOP and pause_on_char:
            return None
        cursor += 1
    return None


def lineBreak_findPrev(content: bytes, position: int, pause_on_char: bool) -> Optional[int]:
    """
    Find the nearest line break strictly before ``position``.

    Mirror of lineBreak_findNext scanning towards the start of content.
    """
    cursor: int = min(position, len(content))
    while cursor > 0:
        cursor -= 1
        check: _Scan = _lineBreak_check(content, cursor)
        if check is _Scan.FOUND:
            return cursor
        if check is _Scan.STOP and pause_on_char:
            return None
    return None


def char_findNext(content: bytes, position: int) -> Optional[int]:
    """
    Find the first byte at or after ``position`` that is not indentation.

    Spaces and tabs are skipped, as are continuation bytes.

    Returns:
        Byte offset of the first other character, or None at end of content
    """
    cursor: int = position
    while 0 <= cursor < len(content):
        if charBoundary_is(content, cursor) and content[cursor] not in (SPACE, TAB):
            return cursor
        cursor += 1
    return None
