import random
import sys
import unittest
from pathlib import Path


# Allow `import ourmarks.*` when running from repo root.
APP_ROOT = Path(__file__).resolve().parents[1]
if str(APP_ROOT) not in sys.path:
    sys.path.insert(0, str(APP_ROOT))


from ourmarks.row_reconstructor import group_into_rows  # noqa: E402
from ourmarks.text_fragment import TextFragment, spans_intersect  # noqa: E402


def _frag(value, x, y, height=10.0, width=10.0) -> TextFragment:
    return TextFragment(value=value, is_rtl=False, x=x, y=y, width=width, height=height)


def _values(rows):
    return [[f.value for f in row] for row in rows]


class TestRowReconstructor(unittest.TestCase):
    def test_rows_top_to_bottom_and_right_to_left(self) -> None:
        frags = [
            _frag("r2-left", 10, 100), _frag("r1-left", 10, 200),
            _frag("r2-right", 300, 101), _frag("r1-right", 300, 199),
            _frag("r1-mid", 150, 202),
        ]
        rows = group_into_rows(frags)
        self.assertEqual(_values(rows), [
            ["r1-right", "r1-mid", "r1-left"],
            ["r2-right", "r2-left"],
        ])

    def test_staircase_overlap_is_chained_into_one_row(self) -> None:
        # a and c do not overlap each other, b bridges them.
        frags = [_frag("a", 300, 100), _frag("b", 200, 109), _frag("c", 100, 118)]
        rows = group_into_rows(frags)
        self.assertEqual(_values(rows), [["a", "b", "c"]])

    def test_touching_spans_count_as_overlap(self) -> None:
        rows = group_into_rows([_frag("low", 10, 100), _frag("high", 20, 110)])
        self.assertEqual(len(rows), 1)

    def test_gap_splits_rows(self) -> None:
        rows = group_into_rows([_frag("low", 10, 100), _frag("high", 20, 110.01)])
        self.assertEqual(_values(rows), [["high"], ["low"]])

    def test_tall_fragment_joins_separate_lines(self) -> None:
        frags = [_frag("tall", 500, 100, height=40), _frag("l1", 10, 130), _frag("l2", 10, 102)]
        rows = group_into_rows(frags)
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0][0].value, "tall")

    def test_input_order_does_not_matter(self) -> None:
        frags = [_frag(f"f{i}", x, y) for i, (x, y) in enumerate(
            [(10, 100), (50, 104), (90, 300), (30, 305), (70, 500), (5, 100)])]
        expected = _values(group_into_rows(frags))
        rng = random.Random(7)
        for _ in range(10):
            shuffled = list(frags)
            rng.shuffle(shuffled)
            self.assertEqual(_values(group_into_rows(shuffled)), expected)

    def test_rows_are_overlap_components(self) -> None:
        rng = random.Random(1234)
        frags = [
            _frag(str(i), rng.uniform(1, 500), rng.uniform(1, 700), height=rng.uniform(6, 14))
            for i in range(120)
        ]
        rows = group_into_rows(frags)
        self.assertEqual(sum(len(r) for r in rows), len(frags))

        for row in rows:
            # Every member is reachable from the first via overlapping spans.
            reached = {0}
            frontier = [0]
            while frontier:
                i = frontier.pop()
                for j, other in enumerate(row):
                    if j not in reached and spans_intersect(row[i], other):
                        reached.add(j)
                        frontier.append(j)
            self.assertEqual(len(reached), len(row))
            xs = [f.x for f in row]
            self.assertEqual(xs, sorted(xs, reverse=True))

        for i, row_a in enumerate(rows):
            for row_b in rows[i + 1:]:
                for a in row_a:
                    for b in row_b:
                        self.assertFalse(spans_intersect(a, b))

        tops = [max(f.top for f in row) for row in rows]
        self.assertEqual(tops, sorted(tops, reverse=True))

    def test_empty_input(self) -> None:
        self.assertEqual(group_into_rows([]), [])


if __name__ == "__main__":
    unittest.main()
