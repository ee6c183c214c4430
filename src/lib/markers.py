"""
Marker strategies

A strategy is an (availability, builder) pair. The first strategy whose
availability check accepts a directive node builds its RemovableRange.

Two strategies ship:
- range: delete the whole directive, tags included
- unwrap-block: delete the tags together with the line that follows the
  opening tag and the line that precedes the closing tag, keeping the body
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from ..models.directives import UNWRAP_BLOCK_ATTRIBUTE
from ..models.markers import ByteRange, RemovableRange
from ..models.parser import DirectiveNode
from .positions import lineBreak_findNext, lineBreak_findPrev


class MarkerAvailability(ABC):
    @abstractmethod
    def available_is(self, node: DirectiveNode) -> bool:
        ...


class MarkerBuilder(ABC):
    @abstractmethod
    def build(self, node: DirectiveNode) -> RemovableRange:
        ...


class RangeMarkerAvailability(MarkerAvailability):
    """Always applicable"""

    def available_is(self, node: DirectiveNode) -> bool:
        return True


class RangeMarkerBuilder(MarkerBuilder):
    """From the first byte of the opening tag to the last byte of the closing tag"""

    def build(self, node: DirectiveNode) -> RemovableRange:
        return RemovableRange(ByteRange(node.start_token.byte_start, node.end_token.byte_end))


class UnwrapBlockMarkerAvailability(MarkerAvailability):
    """Applicable when the opening tag carries the unwrap-block attribute"""

    def __init__(self, attribute: str = UNWRAP_BLOCK_ATTRIBUTE):
        self.attribute = attribute

    def available_is(self, node: DirectiveNode) -> bool:
        return node.directive.attribute_has(self.attribute)


class UnwrapBlockMarkerBuilder(MarkerBuilder):
    """
    Strip a wrapping block and keep its body

    For

        /* <time-limited to="..." unwrap-block> */
        if (flag) {
          body();
        }
        /* </time-limited> */

    the primary range runs from the opening tag to the end of the
    ``if (flag) {`` line and the paired range from the start of the ``}`` line
    to the end of the closing tag. When the header and footer lines cannot
    be located, or would overlap, the result is an empty range.
    """

    def __init__(self, content: bytes):
        self.content = content

    def headerEnd_find(self, node: DirectiveNode) -> Optional[int]:
        position: Optional[int] = lineBreak_findNext(self.content, node.start_token.byte_end, False)
        if position is None:
            return None
        return lineBreak_findNext(self.content, position + 1, False)

    def footerStart_find(self, node: DirectiveNode) -> Optional[int]:
        position: Optional[int] = lineBreak_findPrev(self.content, node.end_token.byte_start, False)
        if position is None:
            return None
        return lineBreak_findPrev(self.content, position, False)

    def build(self, node: DirectiveNode) -> RemovableRange:
        header_end: Optional[int] = self.headerEnd_find(node)
        footer_start: Optional[int] = self.footerStart_find(node)
        start: int = node.start_token.byte_start
        if header_end is None or footer_start is None or footer_start <= header_end:
            return RemovableRange(ByteRange(start, start))
        return RemovableRange(
            ByteRange(start, header_end),
            ByteRange(footer_start + 1, node.end_token.byte_end),
        )


RemoveStrategy = Tuple[MarkerAvailability, MarkerBuilder]


def strategies_default(content: bytes, unwrap_attribute: str = UNWRAP_BLOCK_ATTRIBUTE) -> List[RemoveStrategy]:
    """Unwrap-block first, then plain range"""
    return [
        (UnwrapBlockMarkerAvailability(unwrap_attribute), UnwrapBlockMarkerBuilder(content)),
        (RangeMarkerAvailability(), RangeMarkerBuilder()),
    ]


def removableRange_create(node: DirectiveNode, strategies: List[RemoveStrategy]) -> Optional[RemovableRange]:
    """
    Build the removable range for ``node`` with the first applicable strategy

    Returns:
        RemovableRange, or None when no strategy applies
    """
    for availability, builder in strategies:
        if availability.available_is(node):
            return builder.build(node)
    return None
