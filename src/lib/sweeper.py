"""
Sweeper - end-to-end cleaning and listing

Wires tokenizer, parser, remover and formatter together:

    source -> tokens -> content parts -> markers -> removed text -> formatted text

The same parse/remover front half backs the list and list-all reports.
"""

from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..models.configuration import SweepConfiguration
from ..models.markers import RemoveMarker
from ..models.parser import ContentPart
from .evaluators import EvaluatorRegistry, MarkerEvaluator, TimeLimitedEvaluator
from .formatter import content_format
from .formatters import blockFormatters_default, formatters_default
from .log import LOG
from .markers import strategies_default
from .parser import Parser
from .remover import Remover, removedPos_get
from .report import StatusMarker, lineMap_build, list_build, list_serialize, prettyString_build


class ListFormat(Enum):
    """Output format of the list reports"""
    PRETTY = "pretty"
    JSON = "json"


def markers_combine(ready: List[RemoveMarker], pending: List[RemoveMarker]) -> List[StatusMarker]:
    """
    Interleave ready and pending markers in source order.

    Pair indices are rewritten to point into the combined list.
    """
    tagged: List[Tuple[int, bool, RemoveMarker]] = [
        *((index, True, marker) for index, marker in enumerate(ready)),
        *((index, False, marker) for index, marker in enumerate(pending)),
    ]
    tagged.sort(key=lambda item: (item[2].range.start, item[2].range.end))
    position: Dict[Tuple[bool, int], int] = {
        (is_removal, index): new_index for new_index, (index, is_removal, _) in enumerate(tagged)
    }
    combined: List[StatusMarker] = []
    for _, is_removal, marker in tagged:
        pair_index: Optional[int] = None
        if marker.pair_index is not None:
            pair_index = position.get((is_removal, marker.pair_index))
        combined.append((RemoveMarker(marker.range, pair_index), is_removal))
    return combined


class Sweeper:
    """
    Removes expired and targeted directive blocks from source text

    Attributes:
        configuration: Evaluator and attribute configuration
        delimiter_start: Opening delimiter of directive elements
        delimiter_end: Closing delimiter of directive elements
    """

    def __init__(
        self,
        configuration: SweepConfiguration,
        delimiter_start: str,
        delimiter_end: str,
        debug: bool = False,
    ):
        self.configuration = configuration
        self.delimiter_start = delimiter_start
        self.delimiter_end = delimiter_end
        self.debug = debug

    def evaluators_build(self) -> EvaluatorRegistry:
        time_limited = self.configuration.time_limited
        removal_marker = self.configuration.removal_marker
        registry: EvaluatorRegistry = EvaluatorRegistry()
        registry.register(
            time_limited.tag_name,
            TimeLimitedEvaluator(time_limited.current_get(), time_limited.time_offset),
        )
        registry.register(removal_marker.tag_name, MarkerEvaluator(removal_marker.targets))
        return registry

    def remover_build(self, data: bytes) -> Remover:
        return Remover(
            self.evaluators_build(),
            strategies_default(data, self.configuration.unwrap_block_attribute),
            self.configuration.skip_attribute,
        )

    def source_parse(self, content: str) -> List[ContentPart]:
        return Parser(content, self.delimiter_start, self.delimiter_end, debug=self.debug).parse()

    def clean(self, content: str) -> str:
        """
        Remove every due directive block from ``content`` and tidy the result.

        Args:
            content: Source text

        Returns:
            Cleaned text
        """
        data: bytes = content.encode("utf-8")
        parts: List[ContentPart] = self.source_parse(content)
        removed, markers = self.remover_build(data).remove(parts, data)
        formatted: bytes = content_format(
            removed, removedPos_get(markers), formatters_default(), blockFormatters_default()
        )
        LOG(f"Removed {len(markers)} ranges, {len(data) - len(formatted)} bytes in total", level=2)
        return formatted.decode("utf-8")

    def report_render(self, data: bytes, markers: List[StatusMarker], list_format: ListFormat) -> str:
        line_map: List[int] = lineMap_build(data)
        if list_format is ListFormat.JSON:
            return list_serialize(list_build(data, markers, line_map))
        return prettyString_build(data, markers, line_map)

    def list(self, content: str, list_format: ListFormat = ListFormat.PRETTY) -> str:
        """
        Report the blocks ``clean`` would remove.

        Raises:
            ListError: If the JSON report cannot be serialized
        """
        data: bytes = content.encode("utf-8")
        markers: List[RemoveMarker] = self.remover_build(data).markers_build(self.source_parse(content))
        LOG(f"Listing {len(markers)} ready ranges", level=2)
        return self.report_render(data, [(marker, True) for marker in markers], list_format)

    def list_all(self, content: str, list_format: ListFormat = ListFormat.PRETTY) -> str:
        """
        Report ready blocks together with blocks whose evaluator says "not yet".

        Raises:
            ListError: If the JSON report cannot be serialized
        """
        data: bytes = content.encode("utf-8")
        ready, pending = self.remover_build(data).markers_buildAll(self.source_parse(content))
        LOG(f"Listing {len(ready)} ready and {len(pending)} pending ranges", level=2)
        return self.report_render(data, markers_combine(ready, pending), list_format)


def clean(
    content: str,
    delimiters: Tuple[str, str],
    configuration: Optional[SweepConfiguration] = None,
) -> str:
    """Clean ``content`` in one call"""
    delimiter_start, delimiter_end = delimiters
    return Sweeper(configuration or SweepConfiguration(), delimiter_start, delimiter_end).clean(content)
