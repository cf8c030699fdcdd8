"""
Iteration adapter: turns a mapping or any iterable into a pull-based cursor.

Mapping cursors know their size up front and are driven by a bounded loop.
General cursors may be lazy or infinite and report exhaustion through the
return value of `pull()`; the source's StopIteration never escapes.
"""
import collections.abc
from enum import Enum, auto
from typing import Any, Iterator, Tuple

from sift.sift_datatypes import NotIterable

# Sentinel for "source has no more elements" (None is a legal element).
_EXHAUSTED = object()


class CursorState(Enum):
    READY = auto()
    PULLING = auto()
    EXHAUSTED = auto()
    FOUND = auto()


class Cursor:
    """A single-pass pull sequence bound to one source. Never restarts."""

    def __init__(self, source: Iterator):
        self._source = source
        self.state = CursorState.READY

    @property
    def done(self) -> bool:
        return self.state in (CursorState.EXHAUSTED, CursorState.FOUND)

    def pull(self) -> Tuple[bool, Any]:
        """Returns (True, element), or (False, None) once the source is exhausted."""
        if self.done:
            return False, None
        self.state = CursorState.PULLING
        elem = next(self._source, _EXHAUSTED)
        if elem is _EXHAUSTED:
            self.state = CursorState.EXHAUSTED
            return False, None
        return True, elem

    def mark_found(self):
        """Stops the cursor after a satisfying element; the rest of the source is not drained."""
        if self.state is CursorState.PULLING:
            self.state = CursorState.FOUND

    def __repr__(self) -> str:
        return f"<{type(self).__name__} state={self.state.name}>"


class MappingCursor(Cursor):
    """Cursor over the (key, value) pairs of a mapping, in its iteration order."""

    def __init__(self, mapping: collections.abc.Mapping):
        super().__init__(iter(mapping.items()))
        self.size = len(mapping)


class IterableCursor(Cursor):
    """Cursor over a general iterable; cardinality may be unknown or infinite."""

    def __init__(self, iterable: collections.abc.Iterable):
        super().__init__(iter(iterable))


def is_iterable(value: Any) -> bool:
    return isinstance(value, (collections.abc.Mapping, collections.abc.Iterable))


def adapt(value: Any) -> Cursor:
    """Returns a cursor for value, or raises NotIterable."""
    if isinstance(value, collections.abc.Mapping):
        return MappingCursor(value)
    if isinstance(value, collections.abc.Iterable):
        return IterableCursor(value)
    raise NotIterable(value)
