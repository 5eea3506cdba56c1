"""
Restartable view over a single-pass iterable.

Directory scans are generators: they can only be walked once, and walking
them again would hit the filesystem again and could observe a different
state. MemoizedSequence records each element the first time any cursor
reaches it, so a membership test followed by a second pass over the same
scan sees exactly the same elements without touching the source twice.

Usage:
    from tcrun.core.sequence import MemoizedSequence

    sdks = MemoizedSequence(enumerate_sdks(root))
    if sdks.contains(lambda sdk: sdk.identifier == "Windows.sdk"):
        sdk = sdks.first(lambda sdk: sdk.identifier == "Windows.sdk")
"""

from typing import Callable, Generic, Iterable, Iterator, List, Optional, TypeVar

T = TypeVar("T")


class MemoizedSequence(Generic[T]):
    """
    Iterable that pulls from its source lazily and replays cached elements.

    Every call to ``iter()`` returns an independent cursor. A cursor reads
    from the cache while it can and only advances the wrapped iterator when
    it moves past the cached length. Once the source is exhausted it is
    dropped, and all cursors end at the same length from then on. If the
    source raises, the error is kept and raised again by every cursor that
    reaches the end of the cache, so a failed scan is never replayed as a
    complete one.
    """

    def __init__(self, source: Iterable[T]):
        """
        Initialize the sequence.

        Args:
            source: Iterable to wrap. It is not advanced until a cursor
                requests an element.
        """
        self._source: Optional[Iterator[T]] = iter(source)
        self._cache: List[T] = []
        self._error: Optional[BaseException] = None

    def _fetch(self, index: int) -> bool:
        """Ensure ``index`` is cached. Returns False once the source runs dry."""
        while index >= len(self._cache):
            if self._error is not None:
                raise self._error
            if self._source is None:
                return False
            try:
                element = next(self._source)
            except StopIteration:
                self._source = None
                return False
            except Exception as e:
                self._error = e
                self._source = None
                raise
            self._cache.append(element)
        return True

    def __iter__(self) -> Iterator[T]:
        index = 0
        while self._fetch(index):
            yield self._cache[index]
            index += 1

    @property
    def exhausted(self) -> bool:
        """True once the wrapped source has been fully drained."""
        return self._source is None and self._error is None

    def contains(self, predicate: Callable[[T], bool]) -> bool:
        """
        Check whether any element satisfies ``predicate``.

        Stops pulling from the source at the first match.

        Args:
            predicate: Callable applied to each element

        Returns:
            True if some element matches
        """
        return any(predicate(element) for element in self)

    def first(self, predicate: Optional[Callable[[T], bool]] = None) -> Optional[T]:
        """
        Return the first element, or the first one matching ``predicate``.

        Args:
            predicate: Optional callable applied to each element

        Returns:
            Matching element, or None if there is none
        """
        for element in self:
            if predicate is None or predicate(element):
                return element
        return None

    def materialize(self) -> List[T]:
        """Drain the source and return every element as a new list."""
        return list(self)

    def __repr__(self) -> str:
        if self._error is not None:
            state = "failed"
        elif self.exhausted:
            state = "exhausted"
        else:
            state = "pending"
        return f"MemoizedSequence(cached={len(self._cache)}, {state})"
