from __future__ import annotations
from typing import Any, Callable, Iterable, Iterator, List, Literal, Optional, Union

CursorStrategy = Literal["auto", "replaying", "caching"]
STRATEGIES = ("auto", "replaying", "caching")

IteratorFactory = Callable[[], Iterator[Any]]
CursorSource = Union[Iterable[Any], IteratorFactory]


class EmptySequenceError(ValueError):
    """Raised when an input sequence has no element at position 0."""

    def __init__(self, index: Optional[int] = None):
        self.index = index
        where = f"input #{index}" if index is not None else "input"
        super().__init__(f"Tried to breadth-first zip an empty sequence ({where}).")


def _is_one_shot(source: Any) -> bool:
    # iterators return themselves from iter(), re-iterables hand out a fresh one
    return iter(source) is source


def _is_factory(source: Any) -> bool:
    return callable(source) and not hasattr(source, "__iter__")


class Cursor:
    """
    Restartable positional view over one input sequence.

    `position` counts the advance() calls since the last restart(). The element at
    that position is pulled lazily and at most once; `exhausted` tells whether
    the sequence has an element there at all.
    """

    def __init__(self, index: Optional[int] = None):
        self.index = index
        self.position: int = 0

    @property
    def exhausted(self) -> bool:
        raise NotImplementedError

    @property
    def value(self) -> Any:
        raise NotImplementedError

    def advance(self) -> None:
        self.position += 1

    def restart(self) -> None:
        self.position = 0

    def _check_not_empty(self) -> None:
        if self.exhausted:
            raise EmptySequenceError(self.index)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(index={self.index}, position={self.position})"


class ReplayingCursor(Cursor):
    """Re-derives the sequence from its source on every restart."""

    def __init__(self, source: CursorSource, index: Optional[int] = None):
        super().__init__(index)
        if _is_factory(source):
            self._factory: IteratorFactory = source
        else:
            try:
                one_shot = _is_one_shot(source)
            except TypeError:
                raise TypeError(f"input #{index} is neither iterable nor an iterator factory: {source!r}")
            if one_shot:
                raise TypeError(f"input #{index} is a one-shot iterator and cannot be replayed; "
                                f"use the 'caching' strategy or pass a re-iterable / factory.")
            self._factory = lambda: iter(source)
        self._iter: Iterator[Any] = iter(self._factory())
        self._pulled = -1  # position of self._current
        self._current: Any = None
        self._check_not_empty()

    def _pull(self) -> None:
        while self._pulled < self.position:
            try:
                self._current = next(self._iter)
            except StopIteration:
                return
            self._pulled += 1

    @property
    def exhausted(self) -> bool:
        self._pull()
        return self._pulled < self.position

    @property
    def value(self) -> Any:
        if self.exhausted:
            raise IndexError(f"input #{self.index} has no element at position {self.position}")
        return self._current

    def restart(self) -> None:
        super().restart()
        self._iter = iter(self._factory())
        self._pulled = -1
        self._current = None


class CachingCursor(Cursor):
    """
    Buffers every element pulled from a single-pass source.
    restart() only rewinds the read position; the source is never consumed twice.
    """

    def __init__(self, source: CursorSource, index: Optional[int] = None):
        super().__init__(index)
        if _is_factory(source):
            source = source()
        try:
            self._iter: Iterator[Any] = iter(source)
        except TypeError:
            raise TypeError(f"input #{index} is neither iterable nor an iterator factory: {source!r}")
        self._buffer: List[Any] = []
        self._source_done = False
        self._check_not_empty()

    @property
    def cached(self) -> int:
        return len(self._buffer)

    def _fill(self) -> None:
        while not self._source_done and len(self._buffer) <= self.position:
            try:
                self._buffer.append(next(self._iter))
            except StopIteration:
                self._source_done = True

    @property
    def exhausted(self) -> bool:
        self._fill()
        return len(self._buffer) <= self.position

    @property
    def value(self) -> Any:
        if self.exhausted:
            raise IndexError(f"input #{self.index} has no element at position {self.position}")
        return self._buffer[self.position]


def make_cursor(source: Union[Cursor, CursorSource], strategy: CursorStrategy = "auto",
                index: Optional[int] = None) -> Cursor:
    """
    Wrap one input in a cursor.

    "auto" replays re-iterables (list, range, numpy array, ...) and iterator
    factories, and caches one-shot iterators such as generators. A ready-made
    Cursor is passed through untouched, which lets callers choose per input.
    """
    if isinstance(source, Cursor):
        if source.index is None:
            source.index = index
        return source
    if strategy not in STRATEGIES:
        raise ValueError(f"unknown cursor strategy {strategy!r}, expected one of {STRATEGIES}")

    if strategy == "auto":
        if _is_factory(source):
            strategy = "replaying"
        else:
            try:
                strategy = "caching" if _is_one_shot(source) else "replaying"
            except TypeError:
                raise TypeError(f"input #{index} is neither iterable nor an iterator factory: {source!r}")

    if strategy == "replaying":
        return ReplayingCursor(source, index)
    return CachingCursor(source, index)
