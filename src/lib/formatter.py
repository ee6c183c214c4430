"""
Formatter

Tidies the post-removal text around every cut point: indentation left on
emptied lines, the emptied lines themselves, blank lines that would double
up, and the indentation of unwrapped block bodies.

Each point formatter proposes a range around a cut point. The proposals are
unioned per cut point, clipped so they never reach back past the previous
cut point, combined with block formatter ranges, merged where they overlap
or touch, and deleted.
"""

from typing import List

from ..models.markers import ByteRange, RemovedPosition
from .formatters import BlockFormatter, Formatter
from .log import LOG
from .positions import charBoundary_assert


def cutPoint_format(
    content: bytes, position: int, prev_position: int, formatters: List[Formatter]
) -> ByteRange:
    """Union of all point formatter proposals for one cut point"""
    start: int = position
    end: int = position
    for formatter in formatters:
        proposed_start, proposed_end = formatter.format(content, position, prev_position)
        start = max(min(proposed_start, start), prev_position)
        end = max(proposed_end, end, position)
    return ByteRange(start, end)


def overlappedRanges_merge(ranges: List[ByteRange]) -> List[ByteRange]:
    """
    Merge ranges that overlap or touch

    Args:
        ranges: Ranges sorted by start

    Example:
        [0..1, 1..2, 3..4, 5..6, 9..12, 10..15] -> [0..2, 3..4, 5..6, 9..15]
    """
    merged: List[ByteRange] = []
    for current in ranges:
        if merged and merged[-1].end >= current.start:
            merged[-1] = merged[-1].union(current)
        else:
            merged.append(current)
    return merged


def ranges_merge(ranges: List[ByteRange], extra: List[ByteRange]) -> List[ByteRange]:
    """Combine two range lists into one list sorted by start"""
    return sorted([*ranges, *extra], key=lambda r: r.start)


def ranges_delete(content: bytes, ranges: List[ByteRange]) -> bytes:
    pieces: List[bytes] = []
    cursor: int = 0
    for current in ranges:
        pieces.append(content[cursor : current.start])
        cursor = max(cursor, current.end)
    pieces.append(content[cursor:])
    return b"".join(pieces)


def content_format(
    content: bytes,
    removed_pos: List[RemovedPosition],
    formatters: List[Formatter],
    block_formatters: List[BlockFormatter],
) -> bytes:
    """
    Apply formatters around every cut point.

    Args:
        content: Post-removal text, UTF-8 encoded
        removed_pos: Cut points in ascending order
        formatters: Point formatters
        block_formatters: Formatters for the span between paired cut points

    Returns:
        Formatted text, UTF-8 encoded

    Raises:
        CharBoundaryError: If a cut point falls inside a character
    """
    point_ranges: List[ByteRange] = []
    block_ranges: List[ByteRange] = []
    prev_position: int = 0

    for removed in removed_pos:
        position: int = removed.position
        charBoundary_assert(content, position)
        point_ranges.append(cutPoint_format(content, position, prev_position, formatters))

        if removed.pair_index is not None:
            pair_position: int = removed_pos[removed.pair_index].position
            if position < pair_position:
                for block_formatter in block_formatters:
                    block_ranges.extend(block_formatter.format(content, position, pair_position))

        prev_position = position

    ranges: List[ByteRange] = overlappedRanges_merge(ranges_merge(point_ranges, block_ranges))
    LOG(f"Formatting {len(removed_pos)} cut points, deleting {len(ranges)} ranges", level=3)
    return ranges_delete(content, ranges)
