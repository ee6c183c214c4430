"""
Remover

Walks the directive tree, asks the evaluators which directives are due,
builds their removable ranges and merges them into a flat list of
non-overlapping RemoveMarkers sorted by start offset.

Pairing: both halves of an unwrap-block become separate markers pointing at
each other through ``pair_index``. Child markers that overlap a parent
range are absorbed into it.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, Union

from ..models.directives import SKIP_ATTRIBUTE
from ..models.markers import ByteRange, RemovableRange, RemovedPosition, RemoveMarker
from ..models.parser import ContentPart, DirectiveNode
from .evaluators import EvaluatorRegistry, RemovalEvaluator
from .log import LOG
from .markers import RemoveStrategy, removableRange_create


@dataclass
class RemovalRangeTree:
    """A removable range and the removable ranges nested inside it"""
    range: RemovableRange
    children: List["RemovalRangeTree"] = field(default_factory=list)


def markers_absorb(markers: Iterable[RemoveMarker], target: ByteRange) -> Tuple[int, ByteRange]:
    """
    Grow ``target`` over leading ``markers`` that overlap or touch it.

    Stops at the first marker that does neither.

    Returns:
        (number of markers absorbed, grown range)
    """
    consumed: int = 0
    for marker in markers:
        if not target.touches(marker.range):
            break
        target = target.union(marker.range)
        consumed += 1
    return consumed, target


def marker_append(merged: List[RemoveMarker], marker_range: ByteRange) -> None:
    """
    Append an unpaired marker, joining it to a predecessor it touches.

    Touching markers would otherwise yield two cut points at the same
    position in the post-removal text.
    """
    if merged and merged[-1].range.end == marker_range.start:
        merged[-1] = RemoveMarker(merged[-1].range.union(marker_range), merged[-1].pair_index)
        return
    merged.append(RemoveMarker(marker_range))


def markers_merge(trees: List[RemovalRangeTree]) -> List[RemoveMarker]:
    """
    Flatten removal trees into sorted, non-overlapping markers.

    For a paired node the output is: primary, surviving child markers, paired.
    The pair indices of the two halves point at each other; surviving child
    markers keep their own pairing, rebased into the output list. Markers of
    sibling directives that touch are joined into one.
    """
    merged: List[RemoveMarker] = []
    for tree in trees:
        child_markers: List[RemoveMarker] = markers_merge(tree.children)
        head_count, primary = markers_absorb(child_markers, tree.range.primary)
        paired: Optional[ByteRange] = tree.range.paired

        if paired is None:
            marker_append(merged, primary)
            continue

        tail_count, paired = markers_absorb(reversed(child_markers), paired)
        tail_start: int = len(child_markers) - tail_count

        if tail_start < head_count:
            # a single child spans both halves, so the body is gone as well
            marker_append(merged, primary.union(paired))
            continue

        if merged and merged[-1].pair_index is None and merged[-1].range.end == primary.start:
            primary = merged.pop().range.union(primary)

        current: int = len(merged)
        survivors: List[RemoveMarker] = child_markers[head_count:tail_start]
        merged.append(RemoveMarker(primary, current + len(survivors) + 1))
        for marker in survivors:
            pair_index: Optional[int] = None
            if marker.pair_index is not None and head_count <= marker.pair_index < tail_start:
                pair_index = current + 1 + marker.pair_index - head_count
            merged.append(RemoveMarker(marker.range, pair_index))
        merged.append(RemoveMarker(paired, current))
    return merged


def removedPos_get(markers: List[RemoveMarker]) -> List[RemovedPosition]:
    """
    Translate marker starts into positions in the post-removal text.

    Each position is the marker start minus the bytes removed before it.
    """
    positions: List[RemovedPosition] = []
    removed: int = 0
    for marker in markers:
        positions.append(RemovedPosition(marker.range.start - removed, marker.pair_index))
        removed += len(marker.range)
    return positions


def ranges_cut(content: bytes, markers: List[RemoveMarker]) -> bytes:
    """Delete every marker range from ``content``"""
    pieces: List[bytes] = []
    cursor: int = 0
    for marker in markers:
        pieces.append(content[cursor : marker.range.start])
        cursor = max(cursor, marker.range.end)
    pieces.append(content[cursor:])
    return b"".join(pieces)


class Remover:
    """
    Computes and applies removal markers

    Attributes:
        removal_evaluators: Directive name to evaluator
        remove_strategies: Ordered (availability, builder) pairs
        skip_attribute: Attribute that exempts a directive from evaluation
    """

    def __init__(
        self,
        removal_evaluators: Union[EvaluatorRegistry, Dict[str, RemovalEvaluator]],
        remove_strategies: List[RemoveStrategy],
        skip_attribute: str = SKIP_ATTRIBUTE,
    ):
        if not isinstance(removal_evaluators, EvaluatorRegistry):
            removal_evaluators = EvaluatorRegistry(removal_evaluators)
        self.removal_evaluators = removal_evaluators
        self.remove_strategies = remove_strategies
        self.skip_attribute = skip_attribute

    def remove(self, contents: List[ContentPart], raw: bytes) -> Tuple[bytes, List[RemoveMarker]]:
        """
        Remove every due directive from ``raw``.

        Args:
            contents: Parsed content parts of ``raw``
            raw: UTF-8 encoded source the parts were parsed from

        Returns:
            (text with markers deleted, markers that were applied)
        """
        markers: List[RemoveMarker] = self.markers_build(contents)
        LOG(f"Removing {len(markers)} ranges", level=2)
        return ranges_cut(raw, markers), markers

    def markers_build(self, contents: List[ContentPart]) -> List[RemoveMarker]:
        """Markers for directives whose evaluator says "remove now" """
        removal, _ = self.ranges_collect(contents, False)
        return markers_merge(removal)

    def markers_buildAll(self, contents: List[ContentPart]) -> Tuple[List[RemoveMarker], List[RemoveMarker]]:
        """
        Markers for due directives and, separately, for pending ones.

        Returns:
            (ready markers, pending markers), each list merged independently
        """
        removal, pending = self.ranges_collect(contents, True)
        return markers_merge(removal), markers_merge(pending)

    def range_evaluate(self, node: DirectiveNode, collect_pending: bool) -> Tuple[Optional[RemovableRange], bool]:
        """
        Evaluate one directive node.

        Returns:
            (removable range or None, True when the evaluator said "remove")
        """
        directive = node.directive
        if directive.skip_is(self.skip_attribute):
            LOG(f"Skipping '{directive.name}' at byte {node.start_token.byte_start}", level=3)
            return None, False

        evaluator: Optional[RemovalEvaluator] = self.removal_evaluators.get(directive.name)
        if evaluator is None:
            return None, False

        is_removal: bool = evaluator.removal_is(directive)
        LOG(
            f"'{directive.name}' at byte {node.start_token.byte_start}: "
            f"{'remove' if is_removal else 'keep'}",
            level=3,
        )
        if not is_removal and not collect_pending:
            return None, False

        removable: Optional[RemovableRange] = removableRange_create(node, self.remove_strategies)
        if removable is None or removable.primary.empty_is():
            return None, is_removal
        return removable, is_removal

    def ranges_collect(
        self, contents: List[ContentPart], collect_pending: bool
    ) -> Tuple[List[RemovalRangeTree], List[RemovalRangeTree]]:
        """
        Collect removal trees (and pending trees when requested) in source order.

        A due directive owns its due descendants; pending descendants bubble
        up to the pending list. A pending directive owns its pending
        descendants; due descendants bubble up to the removal list.
        """
        removal: List[RemovalRangeTree] = []
        pending: List[RemovalRangeTree] = []

        for part in contents:
            if not isinstance(part, DirectiveNode):
                continue

            removable, is_removal = self.range_evaluate(part, collect_pending)
            child_removal, child_pending = self.ranges_collect(part.children, collect_pending)

            if removable is not None and is_removal:
                removal.append(RemovalRangeTree(removable, child_removal))
                pending.extend(child_pending)
            elif removable is not None:
                removal.extend(child_removal)
                pending.append(RemovalRangeTree(removable, child_pending))
            else:
                removal.extend(child_removal)
                pending.extend(child_pending)

        return removal, pending
