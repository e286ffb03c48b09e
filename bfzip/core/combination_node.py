from __future__ import annotations
from typing import Any, List, Optional, Sequence, Tuple, Union

from bfzip.core.cursor import Cursor

# nested result of a node chain: (a, (b, (c, ())))
Nested = Tuple[Any, ...]


class TerminalNode:
    """End of the chain: hands out `()` once per restart, and only for a zero budget."""

    depth = 0

    def __init__(self):
        self.available: bool = True

    def advance(self, threshold: int) -> Optional[Nested]:
        if threshold == 0 and self.available:
            self.available = False
            return ()
        return None

    def restart(self) -> None:
        self.available = True


class CombinationNode:
    """
    One input sequence plus the chain of all sequences after it.

    advance(threshold) returns the next (value, tail_value) pair whose index sum
    equals `threshold`, or None once this threshold has nothing left. The tail
    is exhausted before the own cursor moves, so the last component varies
    fastest and equal sums come out in lexicographic index order.
    """

    def __init__(self, cursor: Cursor, tail: Union["CombinationNode", TerminalNode]):
        self.cursor = cursor
        self.tail = tail
        self.depth: int = tail.depth + 1

    def advance(self, threshold: int) -> Optional[Nested]:
        cursor = self.cursor
        while True:
            # a cursor past its end stays there until restart()
            if threshold < cursor.position or cursor.exhausted:
                return None
            tail_value = self.tail.advance(threshold - cursor.position)
            if tail_value is not None:
                return cursor.value, tail_value
            # growing the own index past the budget can never help the tail
            if cursor.position >= threshold:
                return None
            cursor.advance()
            self.tail.restart()

    def restart(self) -> None:
        self.cursor.restart()
        self.tail.restart()


def build_chain(cursors: Sequence[Cursor]) -> Union[CombinationNode, TerminalNode]:
    node: Union[CombinationNode, TerminalNode] = TerminalNode()
    for cursor in reversed(cursors):
        node = CombinationNode(cursor, node)
    return node


def chain_cursors(root: Union[CombinationNode, TerminalNode]) -> List[Cursor]:
    cursors: List[Cursor] = []
    node = root
    while isinstance(node, CombinationNode):
        cursors.append(node.cursor)
        node = node.tail
    return cursors
