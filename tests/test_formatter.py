"""
Formatter tests

Point formatters around cut points, block de-indentation, range merging
and the combined formatting pass.
"""

import pytest

from codesweep.lib.formatter import content_format, overlappedRanges_merge, ranges_merge
from codesweep.lib.formatters import (
    BlockIndentRemover,
    EmptyLineRemover,
    IndentRemover,
    NextLineBreakRemover,
    PrevLineBreakRemover,
    blockFormatters_default,
    formatters_default,
)
from codesweep.lib.positions import CharBoundaryError
from codesweep.models.markers import ByteRange, RemovedPosition


def b(text: str) -> bytes:
    """'+' stands for a line break"""
    return text.replace("+", "\n").encode("utf-8")


class TestIndentRemover:
    """Indentation on emptied lines"""

    @pytest.mark.parametrize(
        "content, position, expected",
        [
            ("+<div>+    hoge+    +    foo</div>", 20, (16, 20)),
            ("+<div>+hoge++++baz</div>", 13, (13, 13)),
            ("hoge+  a+baz", 7, (7, 7)),
            ("  +baz", 2, (2, 2)),
            ("+<div>+  あ  +    +    foo</div>", 10, (10, 10)),
            ("", 0, (0, 0)),
            ("+", 0, (0, 0)),
        ],
    )
    def test_format(self, content, position, expected):
        """Whitespace between the previous line break and the cut point"""
        assert IndentRemover().format(b(content), position, 0) == expected


class TestEmptyLineRemover:
    """Line breaks of emptied lines"""

    @pytest.mark.parametrize(
        "content, position, expected",
        [
            ("    hoge++  foo", 9, (9, 10)),
            ("    hoge+++  foo", 10, (10, 10)),
            ("    hoge+++  foo", 9, (9, 9)),
            ("    hoge++ +  foo", 10, (10, 10)),
        ],
    )
    def test_format(self, content, position, expected):
        """Only a line between two text lines is dropped"""
        assert EmptyLineRemover().format(b(content), position, 0) == expected

    def test_inside_character(self):
        """A cut point inside a character is an error"""
        with pytest.raises(CharBoundaryError):
            EmptyLineRemover().format("あ".encode("utf-8"), 1, 0)


class TestNextLineBreakRemover:
    """Blank lines below the cut point"""

    @pytest.mark.parametrize(
        "content, position, expected",
        [
            ("    hoge+    +  +    foo</div>", 13, (13, 16)),
            ("    hoge+      +    +    foo</div>", 13, (13, 20)),
            ("    hoge+    +    foo</div>", 13, (13, 13)),
            ("    hoge+    +  ", 13, (13, 13)),
            ("    hoge+    ++++    foo</div>", 13, (13, 14)),
            ("aaaabaz</div>", 3, (3, 3)),
            ("aaa+ あ</div>", 7, (7, 7)),
            ("", 0, (0, 0)),
            ("+", 0, (0, 0)),
        ],
    )
    def test_format(self, content, position, expected):
        """Up to the second line break below"""
        assert NextLineBreakRemover().format(b(content), position, 0) == expected


class TestPrevLineBreakRemover:
    """Blank lines above the cut point"""

    @pytest.mark.parametrize(
        "content, position, expected",
        [
            ("  hoge+ +    +    foo", 12, (7, 12)),
            ("    hoge++    +    foo</div>", 14, (9, 14)),
            ("    hoge+    +    foo</div>", 13, (13, 13)),
            ("    hoge+  x +    foo</div>", 13, (13, 13)),
            ("    hoge +    +    foo</div>", 14, (14, 14)),
            ("+hoge++++baz</div>", 7, (6, 7)),
            ("+++++baz</div>", 3, (2, 3)),
            ("aaaabaz</div>", 3, (3, 3)),
            ("aaa+ あ</div>", 7, (7, 7)),
            ("+", 0, (0, 0)),
        ],
    )
    def test_format(self, content, position, expected):
        """From after the second line break above"""
        assert PrevLineBreakRemover().format(b(content), position, 0) == expected


class TestBlockIndentRemover:
    """Body de-indentation of unwrapped blocks"""

    @pytest.mark.parametrize(
        "content, start, end, expected",
        [
            ("foo++  fuga+  piyo++bar", 4, 19, [(5, 7), (12, 14)]),
            ("\tfoo+\t+\t\tfuga+\t\tpiyo+\t+\tbar", 6, 22, [(8, 9), (15, 16)]),
            ("foo++  fuga++  piyo++bar", 4, 20, [(5, 7), (13, 15)]),
            ("foo+   +  fuga++  piyo++bar", 7, 20, []),
            (
                "   foo+   +     fuga+  +   +    +     +     piyo+   +bar",
                10,
                52,
                [(14, 16), (31, 32), (36, 38), (42, 44)],
            ),
        ],
    )
    def test_format(self, content, start, end, expected):
        """One indentation level relative to the opening column"""
        ranges = BlockIndentRemover().format(b(content), start, end)
        assert [(r.start, r.end) for r in ranges] == expected

    def test_indent_len(self):
        """Width of the leading whitespace of a line"""
        assert BlockIndentRemover.indentLen_get(b("a+   b"), 3) == 3
        assert BlockIndentRemover.indentLen_get(b("  b"), 1) == 0


class TestRangeMerge:
    """Combining and merging ranges"""

    def test_ranges_merge(self):
        """Two lists combine sorted by start"""
        ranges = [ByteRange(1, 2), ByteRange(5, 6), ByteRange(10, 15)]
        extra = [ByteRange(0, 1), ByteRange(3, 4), ByteRange(9, 12)]
        assert ranges_merge(ranges, extra) == [
            ByteRange(0, 1),
            ByteRange(1, 2),
            ByteRange(3, 4),
            ByteRange(5, 6),
            ByteRange(9, 12),
            ByteRange(10, 15),
        ]

    @pytest.mark.parametrize(
        "ranges, expected",
        [
            (
                [(1, 5), (2, 6), (8, 10), (9, 12), (15, 18), (20, 24)],
                [(1, 6), (8, 12), (15, 18), (20, 24)],
            ),
            ([(1, 2), (3, 6), (3, 4), (9, 10)], [(1, 2), (3, 6), (9, 10)]),
            ([(0, 1), (1, 2)], [(0, 2)]),
            ([], []),
        ],
    )
    def test_overlapped(self, ranges, expected):
        """Overlapping and touching ranges are merged"""
        merged = overlappedRanges_merge([ByteRange(*r) for r in ranges])
        assert [(r.start, r.end) for r in merged] == expected


class TestContentFormat:
    """Formatting the whole post-removal text"""

    @pytest.mark.parametrize(
        "content, positions, expected",
        [
            (
                "<div>+    hoge+    +    foo+    bar+    baz++    +</div>",
                [19, 49],
                "<div>+    hoge+    foo+    bar+    baz++</div>",
            ),
            ("    hoge+    +    foo+", [13], "    hoge+    foo+"),
            ("    hoge++    +    foo+", [14], "    hoge++    foo+"),
            ("    hoge+    +++    foo+", [14], "    hoge++    foo+"),
            ("    hoge+ +    + +    foo+", [15], "    hoge++    foo+"),
        ],
    )
    def test_format(self, content, positions, expected):
        """All point formatters together"""
        removed = [RemovedPosition(p) for p in positions]
        formatted = content_format(b(content), removed, formatters_default(), blockFormatters_default())
        assert formatted == b(expected)

    def test_subset_of_formatters(self):
        """Only the given formatters apply"""
        removed = [RemovedPosition(13)]
        formatted = content_format(
            b("+<div>+hoge++++baz</div>"), removed, [IndentRemover(), PrevLineBreakRemover()], []
        )
        assert formatted == b("+<div>+hoge+++baz</div>")

    def test_no_cut_points(self):
        """Content without cut points is unchanged"""
        assert content_format(b("a+  b+"), [], formatters_default(), blockFormatters_default()) == b("a+  b+")

    def test_paired_block(self):
        """Body between paired cut points is de-indented"""
        content = b("foo+++  s1+  s2++")
        removed = [RemovedPosition(5, 1), RemovedPosition(16, 0)]
        formatted = content_format(content, removed, [], blockFormatters_default())
        assert formatted == b("foo+++s1+s2++")

    def test_inside_character(self):
        """A cut point inside a character is an error"""
        with pytest.raises(CharBoundaryError):
            content_format("あ".encode("utf-8"), [RemovedPosition(1)], formatters_default(), [])
