"""
Remover tests

Marker collection, nesting, unwrap-block pairing and cut positions.
"""

from datetime import datetime, timezone

import pytest

from codesweep.lib.evaluators import EvaluatorRegistry, MarkerEvaluator, TimeLimitedEvaluator
from codesweep.lib.markers import strategies_default
from codesweep.lib.parser import tree_parse
from codesweep.lib.remover import (
    RemovalRangeTree,
    Remover,
    markers_absorb,
    markers_merge,
    ranges_cut,
    removedPos_get,
)
from codesweep.models.markers import ByteRange, RemovableRange, RemovedPosition, RemoveMarker


def remover_make(content: str) -> Remover:
    evaluators = {"tl": TimeLimitedEvaluator(datetime.now(timezone.utc), "+00:00")}
    return Remover(evaluators, strategies_default(content.encode("utf-8")))


def remove(content: str, delimiter_start: str, delimiter_end: str):
    contents = tree_parse(content, delimiter_start, delimiter_end)
    removed, markers = remover_make(content).remove(contents, content.encode("utf-8"))
    return removed.decode("utf-8"), [(m.range.start, m.range.end, m.pair_index) for m in markers]


def plus(text: str) -> str:
    """'+' stands for a line break"""
    return text.replace("+", "\n")


TOUCHING_SIBLINGS = (
    "{\t<tl to='2000-01-01 00:00:00'></tl><tl to='2000-01-01 00:00:00'></tl>\t}}\n    x\n  "
)
TOUCHING_UNWRAP = plus(
    "x+<tl to='2000-01-01 00:00:00'></tl><tl to='2000-01-01 00:00:00' unwrap-block>+if {+  y+}+</tl>+"
)

MIXED_SOURCES = [
    "foo<tl to='2000-01-01 00:00:00'>bar<tl to='2999-01-01 00:00:00'>baz</tl>qux</tl>end",
    TOUCHING_SIBLINGS,
    TOUCHING_UNWRAP,
    "a<tl to='2000-01-01 00:00:00'>b<c>d</tl>e</c>f",
    plus(
        "foo+<tl to='2021-01-01 00:00:00'>+bar+</tl>+"
        "<tl to='2000-01-01 00:00:00' unwrap-block>+{+  s1+  s2+}+</tl>+"
        "<tl to='2021-01-01 00:00:00'>+bar+</tl>"
    ),
    plus(
        "foo+<tl to='2021-01-01 00:00:00'>+bar+</tl>+"
        "<tl to='2000-01-01 00:00:00' unwrap-block>+{+  s1+  "
        "<tl to='2021-01-01 00:00:00'>+  bar+  </tl>+  s2+}+</tl>"
    ),
    plus(
        "あ+<tl to='2000-01-01 00:00:00'>い</tl>+"
        "<tl to='2999-01-01 00:00:00'>う</tl><tl to='2000-01-01 00:00:00'>え</tl>+"
    ),
]


class TestMarkersBuild:
    """Markers for due directives"""

    @pytest.mark.parametrize(
        "content, expected",
        [
            ("foo<tl to='2000-01-01 00:00:00'>あ</tl>fuga", [RemoveMarker(ByteRange(3, 40))]),
            ("foo<baz>a", []),
        ],
    )
    def test_markers(self, content, expected):
        """Byte ranges of removed directives"""
        contents = tree_parse(content, "<", ">")
        assert remover_make(content).markers_build(contents) == expected

    def test_no_evaluator(self):
        """Directives without an evaluator are kept"""
        content = "<x to='2000-01-01 00:00:00'>a</x>"
        assert remover_make(content).markers_build(tree_parse(content, "<", ">")) == []

    def test_registry(self):
        """A registry works in place of a mapping"""
        content = "a<m name='f'>b</m>c"
        registry = EvaluatorRegistry()
        registry.register("m", MarkerEvaluator(["f"]))
        remover = Remover(registry, strategies_default(content.encode("utf-8")))
        assert remover.markers_build(tree_parse(content, "<", ">")) == [RemoveMarker(ByteRange(1, 18))]


class TestRemove:
    """Deleting marker ranges from the source"""

    def test_html_blocks(self):
        """Two expired blocks inside a div"""
        content = """
<div>
    hoge
    <!-- tl to='2021-12-31 23:50:00' -->
    <h1>Campaign 1</h1>
    <!-- /tl -->
    foo
    bar
    baz
    <!-- tl to='2022-12-31 23:50:00' -->
    <h1>Campaign 2</h1>
    <!-- /tl -->
</div>
"""
        removed, markers = remove(content, "<!--", "-->")
        assert removed == plus("+<div>+    hoge+    +    foo+    bar+    baz+    +</div>+")
        assert markers == [(20, 97, None), (126, 203, None)]

    def test_top_level_blocks(self):
        """Blocks at column zero"""
        content = """
hoge
<!-- tl to='2021-12-31 23:50:00' -->
<h1>Campaign 1</h1>
<!-- /tl -->
foo
<!-- tl to='2022-12-31 23:50:00' -->
<h1>Campaign 2</h1>
<!-- /tl -->
"""
        removed, markers = remove(content, "<!--", "-->")
        assert removed == "\nhoge\n\nfoo\n\n"
        assert markers == [(6, 75, None), (80, 149, None)]

    def test_skip(self):
        """Skipped directives are kept"""
        content = """
<!-- tl skip to='2021-12-31 23:50:00' -->
<h1>Campaign 1</h1>
<!-- /tl -->
"""
        removed, markers = remove(content, "<!--", "-->")
        assert removed == content
        assert markers == []

    def test_unwrap_block(self):
        """Header and footer lines go, the body stays"""
        content = """
// --- start ---
/* tl to='2021-12-31 23:50:00' unwrap-block */
if (foo) {
    console.log('abc');
    console.log('def');
}
/* /tl */
// ---  end  ---
"""
        removed, markers = remove(content, "/*", "*/")
        assert removed == """
// --- start ---

    console.log('abc');
    console.log('def');

// ---  end  ---
"""
        assert markers == [(18, 75, 1), (124, 135, 0)]

    def test_unwrap_between_blocks(self):
        """Pair indices account for preceding markers"""
        removed, markers = remove(MIXED_SOURCES[4], "<", ">")
        assert removed == plus("foo+++  s1+  s2++")
        assert markers == [(4, 43, None), (44, 88, 2), (99, 106, 1), (107, 146, None)]

    def test_unwrap_with_nested_block(self):
        """A removed child inside an unwrapped block sits between the halves"""
        removed, markers = remove(MIXED_SOURCES[5], "<", ">")
        assert removed == plus("foo+++  s1+  +  s2+")
        assert markers == [(4, 43, None), (44, 88, 3), (96, 139, None), (145, 152, 1)]

    def test_nested_removed_inside_removed(self):
        """A removed child inside a removed parent is absorbed"""
        content = "a<tl to='2000-01-01 00:00:00'>b<tl to='2000-01-01 00:00:00'>c</tl>d</tl>e"
        removed, markers = remove(content, "<", ">")
        assert removed == "ae"
        assert markers == [(1, len(content) - 1, None)]

    def test_unremoved_parent(self):
        """A removed child inside a kept parent is removed alone"""
        content = "<tl to='9999-01-01 00:00:00'>a<tl to='2000-01-01 00:00:00'>b</tl>c</tl>"
        removed, _ = remove(content, "<", ">")
        assert removed == "<tl to='9999-01-01 00:00:00'>ac</tl>"

    def test_touching_siblings(self):
        """Adjacent sibling directives become a single marker"""
        removed, markers = remove(TOUCHING_SIBLINGS, "<", ">")
        assert removed == "{\t\t}}\n    x\n  "
        assert markers == [(2, 70, None)]

    def test_touching_unwrap(self):
        """A sibling ending where an unwrap-block starts joins its header"""
        removed, markers = remove(TOUCHING_UNWRAP, "<", ">")
        assert removed == plus("x++  y++")
        assert markers == [(2, 83, 1), (88, 95, 0)]


class TestMarkersBuildAll:
    """Ready and pending markers"""

    def test_split(self):
        """Expired and pending directives are reported separately"""
        content = "a<tl to='2000-01-01 00:00:00'>b</tl>c<tl to='9999-01-01 00:00:00'>d</tl>e"
        contents = tree_parse(content, "<", ">")
        ready, pending = remover_make(content).markers_buildAll(contents)
        assert ready == [RemoveMarker(ByteRange(1, 36))]
        assert pending == [RemoveMarker(ByteRange(37, 72))]

    def test_ready_inside_pending(self):
        """A due child inside a pending parent is still ready"""
        content = "<tl to='9999-01-01 00:00:00'>a<tl to='2000-01-01 00:00:00'>b</tl>c</tl>"
        contents = tree_parse(content, "<", ">")
        ready, pending = remover_make(content).markers_buildAll(contents)
        assert ready == [RemoveMarker(ByteRange(30, 65))]
        assert pending == [RemoveMarker(ByteRange(0, len(content)))]


class TestMerge:
    """Merging nested removal ranges"""

    def test_absorb(self):
        """Overlapping markers grow the target"""
        markers = [RemoveMarker(ByteRange(2, 6)), RemoveMarker(ByteRange(5, 9)), RemoveMarker(ByteRange(20, 22))]
        assert markers_absorb(markers, ByteRange(0, 4)) == (2, ByteRange(0, 9))

    def test_absorb_none(self):
        """Disjoint markers are left alone"""
        assert markers_absorb([RemoveMarker(ByteRange(5, 6))], ByteRange(0, 4)) == (0, ByteRange(0, 4))

    def test_absorb_touching(self):
        """A marker starting where the target ends is absorbed"""
        markers = [RemoveMarker(ByteRange(4, 6)), RemoveMarker(ByteRange(7, 8))]
        assert markers_absorb(markers, ByteRange(0, 4)) == (1, ByteRange(0, 6))

    def test_child_touching_primary(self):
        """A child bordering the leading half joins it and keeps the pair"""
        child = RemovalRangeTree(RemovableRange(ByteRange(4, 6)))
        tree = RemovalRangeTree(RemovableRange(ByteRange(0, 4), ByteRange(10, 14)), [child])
        assert markers_merge([tree]) == [RemoveMarker(ByteRange(0, 6), 1), RemoveMarker(ByteRange(10, 14), 0)]

    def test_child_spanning_both_halves(self):
        """A child covering both halves collapses the pair"""
        child = RemovalRangeTree(RemovableRange(ByteRange(3, 12)))
        tree = RemovalRangeTree(RemovableRange(ByteRange(0, 4), ByteRange(10, 14)), [child])
        assert markers_merge([tree]) == [RemoveMarker(ByteRange(0, 14))]

    def test_nested_pairs(self):
        """Inner pairs keep pointing at each other"""
        inner = RemovalRangeTree(RemovableRange(ByteRange(5, 6), ByteRange(8, 9)))
        outer = RemovalRangeTree(RemovableRange(ByteRange(0, 2), ByteRange(12, 14)), [inner])
        assert markers_merge([outer]) == [
            RemoveMarker(ByteRange(0, 2), 3),
            RemoveMarker(ByteRange(5, 6), 2),
            RemoveMarker(ByteRange(8, 9), 1),
            RemoveMarker(ByteRange(12, 14), 0),
        ]

    def test_touching_siblings(self):
        """Siblings that touch are joined"""
        trees = [
            RemovalRangeTree(RemovableRange(ByteRange(2, 36))),
            RemovalRangeTree(RemovableRange(ByteRange(36, 70))),
            RemovalRangeTree(RemovableRange(ByteRange(71, 80))),
        ]
        assert markers_merge(trees) == [RemoveMarker(ByteRange(2, 70)), RemoveMarker(ByteRange(71, 80))]

    def test_touching_before_pair(self):
        """A sibling touching the primary half is joined into it"""
        trees = [
            RemovalRangeTree(RemovableRange(ByteRange(0, 3))),
            RemovalRangeTree(RemovableRange(ByteRange(3, 5), ByteRange(9, 11))),
        ]
        assert markers_merge(trees) == [RemoveMarker(ByteRange(0, 5), 1), RemoveMarker(ByteRange(9, 11), 0)]

    def test_touching_after_pair(self):
        """A sibling touching the paired half is joined into it"""
        trees = [
            RemovalRangeTree(RemovableRange(ByteRange(0, 2), ByteRange(8, 10))),
            RemovalRangeTree(RemovableRange(ByteRange(10, 12))),
        ]
        assert markers_merge(trees) == [RemoveMarker(ByteRange(0, 2), 1), RemoveMarker(ByteRange(8, 12), 0)]


class TestMarkerProperties:
    """Ordering guarantees over nested, sibling, unwrap and crossed inputs"""

    @staticmethod
    def markers_get(content: str):
        return remover_make(content).markers_build(tree_parse(content, "<", ">"))

    @pytest.mark.parametrize("content", MIXED_SOURCES)
    def test_markers_disjoint(self, content):
        """Each marker ends at or before the next one starts"""
        markers = self.markers_get(content)
        assert markers
        for current, following in zip(markers, markers[1:]):
            assert current.range.end <= following.range.start

    @pytest.mark.parametrize("content", MIXED_SOURCES)
    def test_positions_increasing(self, content):
        """Cut points are strictly increasing"""
        positions = [p.position for p in removedPos_get(self.markers_get(content))]
        assert all(a < b for a, b in zip(positions, positions[1:]))

    @pytest.mark.parametrize("content", MIXED_SOURCES)
    def test_pairs_symmetric(self, content):
        """Paired markers point at each other"""
        markers = self.markers_get(content)
        for index, marker in enumerate(markers):
            if marker.pair_index is not None:
                assert markers[marker.pair_index].pair_index == index


class TestCutPositions:
    """Positions in the post-removal text"""

    def test_removed_pos(self):
        """Marker starts shifted by preceding removals"""
        markers = [RemoveMarker(ByteRange(1, 3)), RemoveMarker(ByteRange(5, 6)), RemoveMarker(ByteRange(8, 9))]
        assert removedPos_get(markers) == [RemovedPosition(1), RemovedPosition(3), RemovedPosition(5)]

    def test_pair_index_copied(self):
        """Pair indices travel with the positions"""
        markers = [RemoveMarker(ByteRange(0, 2), 1), RemoveMarker(ByteRange(4, 5), 0)]
        assert removedPos_get(markers) == [RemovedPosition(0, 1), RemovedPosition(2, 0)]

    def test_ranges_cut(self):
        """Bytes inside markers are deleted"""
        markers = [RemoveMarker(ByteRange(1, 3)), RemoveMarker(ByteRange(5, 6))]
        assert ranges_cut(b"QWERTYU", markers) == b"QRTU"

    def test_touching_siblings_single_cut(self):
        """Adjacent removed siblings leave one cut point"""
        markers = remover_make(TOUCHING_SIBLINGS).markers_build(tree_parse(TOUCHING_SIBLINGS, "<", ">"))
        assert removedPos_get(markers) == [RemovedPosition(2)]
