"""
Removal marker models

Byte ranges produced by the marker builders, merged by the remover and
finally converted into cut points for the formatter.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ByteRange:
    """
    Half-open byte range ``[start, end)``

    Attributes:
        start: First byte offset in the range
        end: Byte offset one past the last byte
    """
    start: int
    end: int

    def __len__(self) -> int:
        return max(self.end - self.start, 0)

    def empty_is(self) -> bool:
        return self.end <= self.start

    def touches(self, other: "ByteRange") -> bool:
        """Overlapping or sharing an endpoint"""
        return self.start <= other.end and other.start <= self.end

    def union(self, other: "ByteRange") -> "ByteRange":
        return ByteRange(min(self.start, other.start), max(self.end, other.end))


@dataclass(frozen=True)
class RemovableRange:
    """
    Output of a marker builder

    Attributes:
        primary: Range to remove
        paired: Optional second range, removed together with the primary
                (the trailing half of an unwrap-block)
    """
    primary: ByteRange
    paired: Optional[ByteRange] = None


@dataclass(frozen=True)
class RemoveMarker:
    """
    A merged, non-overlapping byte range to delete from the source

    Attributes:
        range: Bytes to delete
        pair_index: Index of the partner marker in the same marker list,
                    present on both halves of an unwrap-block
    """
    range: ByteRange
    pair_index: Optional[int] = None


@dataclass(frozen=True)
class RemovedPosition:
    """
    Cut point in the post-removal text

    Attributes:
        position: Byte offset in the output where a marker used to be
        pair_index: Copied from the originating RemoveMarker
    """
    position: int
    pair_index: Optional[int] = None
