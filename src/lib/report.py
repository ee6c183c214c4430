"""
List report

Renders removal candidates for the ``--list`` and ``--list-all`` views:
either a human-readable annotated excerpt per item or a JSON array of
ListItem records.

An annotated excerpt looks like:

              _start
          3 |ccc cccc
          4 |dddddd d
                    ‾end

where ``_start`` points at the first removed character and ``‾end`` at the
last one. Columns are counted in characters, with tabs shown as four spaces.
"""

from bisect import bisect_right
from typing import List, Optional, Sequence, Tuple

from pygments.console import codes

from ..models.markers import ByteRange, RemoveMarker
from ..models.report import ItemStatus, ListItem, ListItems
from .positions import NEWLINE, lineBreak_findNext, lineBreak_findPrev

MARKER_START: str = "_start"
MARKER_END: str = "‾end"
MARKER_COLOR: str = codes["green"]
REMOVAL_COLOR: str = codes["red"]
PENDING_COLOR: str = codes["yellow"]
RESET_COLOR: str = codes["reset"]

HEAD_START: str = "-------- [ "
HEAD_END: str = "--------"
REMOVAL_HEAD: str = " ]  Ready  "
PENDING_REMOVAL_HEAD: str = " ] Pending "
LINE_COLUMN_WIDTH: int = 9

TABSPACE: str = "    "

StatusMarker = Tuple[RemoveMarker, bool]


class ListError(Exception):
    """Raised when a report cannot be serialized"""
    pass


def lineMap_build(content: bytes) -> List[int]:
    """Byte offsets of every line break in ``content``"""
    return [index for index, byte in enumerate(content) if byte == NEWLINE]


def line_find(line_map: Sequence[int], position: int) -> int:
    """1-based number of the line containing byte ``position``"""
    return bisect_right(line_map, position) + 1


def lineRange_get(line_map: Sequence[int], marker_range: ByteRange) -> Tuple[int, int]:
    # end is exclusive, the last line is the one holding the final byte
    return line_find(line_map, marker_range.start), line_find(line_map, marker_range.end - 1)


def _lines(text: str) -> List[str]:
    lines: List[str] = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _decode(content: bytes, start: int, end: int) -> str:
    return content[start:end].decode("utf-8")


def prettyString_buildItem(
    content: bytes,
    start: int,
    end: int,
    is_removal: bool,
    coloring: bool,
    line_range: Optional[Tuple[int, int]] = None,
) -> str:
    """
    Render one annotated excerpt.

    Args:
        content: Original source, UTF-8 encoded
        start: First removed byte
        end: Byte offset one past the last removed byte
        is_removal: Ready (True) or Pending (False), selects the highlight color
        coloring: Emit ANSI color codes
        line_range: First and last line numbers to print in a gutter

    Returns:
        Excerpt text, or "" for an empty range or empty content
    """
    if end - start == 0 or not content:
        return ""

    line_break: Optional[int] = lineBreak_findPrev(content, start, False)
    line_start: int = line_break + 1 if line_break is not None else 0
    line_break = lineBreak_findPrev(content, end - 1, False)
    line_end_start: int = line_break + 1 if line_break is not None else 0
    line_break = lineBreak_findNext(content, end - 1, False)
    line_end: int = line_break if line_break is not None else len(content)

    # a trailing line break inside the range is not highlighted
    color_end: int = min(end, line_end)

    if coloring:
        marker_color = MARKER_COLOR
        start_color = REMOVAL_COLOR if is_removal else PENDING_COLOR
        reset_color = RESET_COLOR
    else:
        marker_color = start_color = reset_color = ""

    highlighted: str = "\n".join(
        f"{start_color}{line}{reset_color}" for line in _lines(_decode(content, start, color_end))
    )
    removed: str = (
        f"{_decode(content, line_start, start)}{highlighted}{_decode(content, color_end, line_end)}\n"
    )

    line_number_ofs: int = 0
    code_block: str = removed
    if line_range is not None:
        line_number_ofs = LINE_COLUMN_WIDTH
        removed_lines: List[str] = _lines(removed)
        code_block = ""
        for offset, number in enumerate(range(line_range[0], line_range[1] + 1)):
            if offset < len(removed_lines):
                code_block += f"{number:>{LINE_COLUMN_WIDTH - 2}} |{removed_lines[offset]}\n"

    head: str = _decode(content, line_start, start)
    tail: str = _decode(content, line_end_start, end)
    start_tabs: int = head.count("\t")
    end_tabs: int = tail.count("\t")
    start_ofs: int = len(head)
    end_ofs: int = len(tail) - 1

    return (
        f"{TABSPACE * start_tabs}{' ' * (line_number_ofs + start_ofs - start_tabs)}"
        f"{marker_color}{MARKER_START}{reset_color}\n"
        f"{code_block.replace(chr(9), TABSPACE)}"
        f"{TABSPACE * end_tabs}{' ' * (end_ofs + line_number_ofs - end_tabs)}"
        f"{marker_color}{MARKER_END}{reset_color}"
    )


def prettyString_build(
    content: bytes, markers: Sequence[StatusMarker], line_map: Optional[Sequence[int]] = None
) -> str:
    """
    Render the full human-readable report.

    Each item is preceded by a newline and a header line; the report ends
    with a newline.
    """
    output: str = ""
    for index, (marker, is_removal) in enumerate(markers, start=1):
        line_range = lineRange_get(line_map, marker.range) if line_map is not None else None
        output += (
            f"\n{HEAD_START}{index}{REMOVAL_HEAD if is_removal else PENDING_REMOVAL_HEAD}{HEAD_END}\n"
            f"{prettyString_buildItem(content, marker.range.start, marker.range.end, is_removal, True, line_range)}"
        )
    return f"{output}\n"


def list_build(
    content: bytes, markers: Sequence[StatusMarker], line_map: Optional[Sequence[int]] = None
) -> List[ListItem]:
    """Build uncolored ListItem records for ``markers``"""
    items: List[ListItem] = []
    for marker, is_removal in markers:
        line_range = lineRange_get(line_map, marker.range) if line_map is not None else None
        items.append(
            ListItem(
                line_range=line_range,
                annotated_code_block=prettyString_buildItem(
                    content, marker.range.start, marker.range.end, is_removal, False, line_range
                ),
                current_status=ItemStatus.READY if is_removal else ItemStatus.PENDING,
            )
        )
    return items


def list_serialize(items: List[ListItem]) -> str:
    """
    Encode ``items`` as a JSON array.

    Raises:
        ListError: If pydantic fails to serialize the items
    """
    try:
        return ListItems.dump_json(items).decode("utf-8")
    except ValueError as e:
        raise ListError(f"Failed to serialize list: {e}") from e
