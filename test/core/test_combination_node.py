import unittest

from bfzip.core.combination_node import (CombinationNode, TerminalNode, build_chain,
                                         chain_cursors)
from bfzip.core.cursor import CachingCursor, ReplayingCursor
from bfzip.core.flatten import flatten


class TestTerminalNode(unittest.TestCase):
    def test_emits_once_per_restart(self):
        t = TerminalNode()
        self.assertIsNone(t.advance(1))
        self.assertEqual(t.advance(0), ())
        self.assertIsNone(t.advance(0))
        t.restart()
        self.assertEqual(t.advance(0), ())


class TestCombinationNode(unittest.TestCase):
    def test_single_sequence_one_per_threshold(self):
        node = CombinationNode(ReplayingCursor("abc"), TerminalNode())
        self.assertEqual(node.advance(0), ("a", ()))
        self.assertIsNone(node.advance(0))

        node.restart()
        self.assertEqual(node.advance(2), ("c", ()))
        self.assertIsNone(node.advance(2))

        node.restart()
        self.assertIsNone(node.advance(3))

    def test_pair_walks_one_threshold_in_lexicographic_order(self):
        root = build_chain([ReplayingCursor(range(3)), CachingCursor(iter(range(3)))])
        found = []
        while True:
            res = root.advance(2)
            if res is None:
                break
            found.append(flatten(res))
        self.assertEqual(found, [(0, 2), (1, 1), (2, 0)])

    def test_threshold_below_position_fails(self):
        cursor = ReplayingCursor(range(5))
        node = CombinationNode(cursor, TerminalNode())
        cursor.advance()
        cursor.advance()
        self.assertIsNone(node.advance(1))

    def test_cursor_past_end_yields_nothing_until_restart(self):
        node = CombinationNode(ReplayingCursor([7]), TerminalNode())
        self.assertEqual(node.advance(0), (7, ()))
        node.restart()
        self.assertIsNone(node.advance(1))  # moves the cursor past its end
        for threshold in (1, 1, 0, 2):
            self.assertIsNone(node.advance(threshold))
        node.restart()
        self.assertEqual(node.advance(0), (7, ()))

    def test_chain_shape(self):
        cursors = [ReplayingCursor([1]), ReplayingCursor([2]), ReplayingCursor([3])]
        root = build_chain(cursors)
        self.assertEqual(root.depth, 3)
        self.assertEqual(chain_cursors(root), cursors)
        self.assertIsInstance(root.tail.tail.tail, TerminalNode)

    def test_empty_chain_is_terminal(self):
        root = build_chain([])
        self.assertIsInstance(root, TerminalNode)
        self.assertEqual(chain_cursors(root), [])


class TestFlatten(unittest.TestCase):
    def test_flatten(self):
        self.assertEqual(flatten(("a", ("b", ("c", ())))), ("a", "b", "c"))
        self.assertEqual(flatten((None, ())), (None,))
        self.assertEqual(flatten(()), ())


if __name__ == "__main__":
    unittest.main(verbosity=2)
