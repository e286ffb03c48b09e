from __future__ import annotations
from itertools import islice
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from bfzip.core.combination_node import build_chain, chain_cursors
from bfzip.core.cursor import CursorStrategy, make_cursor
from bfzip.core.flatten import flatten
from bfzip.core.zip_conf import BreadthFirstZipConfig


class BreadthFirstZip:
    """
    Lazy exhaustive zip over N sequences in breadth-first order.

    Every combination of one element per input is produced exactly once.
    Combinations come out with a non-decreasing sum of their indices, and
    equal sums in lexicographic order of the index tuple:

        >>> list(BreadthFirstZip([[0, 1], "ab"]))
        [(0, 'a'), (0, 'b'), (1, 'a'), (1, 'b')]

    Raises EmptySequenceError right away if any input is empty.
    """

    def __init__(self, sequences: Iterable[Any], cfg: Optional[BreadthFirstZipConfig] = None):
        self.cfg = cfg if cfg is not None else BreadthFirstZipConfig()
        self.cfg.validate()
        cursors = [make_cursor(seq, self.cfg.strategy, index=i) for i, seq in enumerate(sequences)]
        self.root = build_chain(cursors)
        self._cursors = chain_cursors(self.root)
        self._index_sum: int = 0
        self._emitted: int = 0
        self._stopped: bool = False
        self._ended: bool = False  # StopIteration already raised once
        self._indices: Tuple[int, ...] = ()

    @property
    def index_sum(self) -> int:
        return self._index_sum

    @property
    def emitted(self) -> int:
        return self._emitted

    @property
    def indices(self) -> Tuple[int, ...]:
        """Index tuple of the combination returned last, `()` before the first one."""
        return self._indices

    @property
    def arity(self) -> int:
        return len(self._cursors)

    def __iter__(self) -> Iterator[Tuple[Any, ...]]:
        return self

    def __next__(self) -> Tuple[Any, ...]:
        if self._stopped:
            raise StopIteration

        result = self.root.advance(self._index_sum)
        if result is None:
            max_sum = self.cfg.max_index_sum
            if max_sum is not None and self._index_sum >= max_sum:
                self._stop(f"reached max_index_sum={max_sum}")
                raise StopIteration
            self._index_sum += 1
            if self.cfg.verbose and not self._ended:
                print(f"[BFZip] index_sum -> {self._index_sum} (emitted={self._emitted})")
            self.root.restart()
            result = self.root.advance(self._index_sum)

        if result is None:
            if self.cfg.verbose and not self._ended:
                print(f"[BFZip] exhausted: no combination with index_sum={self._index_sum} "
                      f"(emitted={self._emitted})")
            self._ended = True
            raise StopIteration

        self._emitted += 1
        self._indices = tuple(c.position for c in self._cursors)
        return flatten(result)

    def _stop(self, reason: str) -> None:
        self._stopped = True
        if self.cfg.verbose:
            print(f"[BFZip] stop: {reason} after {self._emitted} combinations")

    def take(self, n: int) -> List[Tuple[Any, ...]]:
        if n < 0:
            raise ValueError("n must be >= 0")
        return list(islice(self, n))

    def restart(self) -> None:
        """Rewind to the very first combination."""
        self.root.restart()
        self._index_sum = 0
        self._emitted = 0
        self._stopped = False
        self._ended = False
        self._indices = ()


def breadth_first_zip(*sequences: Any, strategy: CursorStrategy = "auto",
                      max_index_sum: Optional[int] = None, verbose: bool = False) -> BreadthFirstZip:
    return BreadthFirstZip(
        sequences,
        BreadthFirstZipConfig(strategy=strategy, max_index_sum=max_index_sum, verbose=verbose),
    )
