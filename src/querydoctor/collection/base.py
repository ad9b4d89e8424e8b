# topmark:header:start
#
#   project      : QueryDoctor
#   file         : base.py
#   file_relpath : src/querydoctor/collection/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Generic, replayable collection backed by a list or by a one-shot producer.

Every typed collection in QueryDoctor derives from `AbstractCollection`. A
collection holds exactly one *backing* at a time:

    * `Materialized`: an ordered list of items (the replayable form).
    * `Pending`: a live one-shot producer (usually a generator) that has not
      been consumed yet.

The first operation that needs the items drains a `Pending` backing into a
list and swaps it for a `Materialized` backing. This swap happens at most
once per instance and is the only internal state change; every public
operation that "transforms" a collection returns a new instance.

Consequently callers never observe "already consumed" behavior: iterating,
counting or converting a producer-backed collection any number of times
yields the same items in the same order, and the producer itself runs once.

Concrete collections only provide `_create_instance`, the factory hook used
by `filter`, `group_by`, `sorted_by` and `concat` to build results of the
caller's concrete type.

Example:
    ```python
    issues = IssueCollection.from_producer(analyzer.iter_issues)
    critical = issues.filter(lambda i: i.severity is Severity.CRITICAL)
    assert critical.count() == len(critical.to_list())  # producer ran once
    ```
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Hashable, Iterable, Iterator
from dataclasses import dataclass
from itertools import chain
from typing import TYPE_CHECKING, Any, Generic, TypeVar, Union

from querydoctor.config.logging import get_logger
from querydoctor.core.errors import InvalidArgumentError, ProducerFailedError

if TYPE_CHECKING:
    from querydoctor.config.logging import QuerydoctorLogger

logger: QuerydoctorLogger = get_logger(__name__)

T = TypeVar("T")
U = TypeVar("U")
K = TypeVar("K", bound=Hashable)
_C = TypeVar("_C", bound="AbstractCollection[Any]")


@dataclass(frozen=True, slots=True)
class Materialized(Generic[T]):
    """Backing holding the fully realized, replayable list of items."""

    items: list[T]


@dataclass(frozen=True, slots=True)
class Pending(Generic[T]):
    """Backing holding a live one-shot producer that has not been drained yet."""

    producer: Iterator[T]


@dataclass(frozen=True, slots=True)
class Failed:
    """Backing left behind when draining the producer raised."""

    error: BaseException


Backing = Union[Materialized[T], Pending[T], Failed]


class AbstractCollection(ABC, Generic[T]):
    """Base class for all strongly-typed collections.

    Instances are created through `from_list`, `from_producer` or `empty`; the
    constructor only wraps an already validated backing.
    """

    __slots__ = ("_backing",)

    def __init__(self, backing: Backing[T]) -> None:
        self._backing: Backing[T] = backing

    # --- Construction ---------------------------------------------------------

    @classmethod
    def from_list(cls: type[_C], items: list[Any] | tuple[Any, ...]) -> _C:
        """Create a collection from an ordered list of items.

        Args:
            items: A ``list`` (or ``tuple``) of items. The items are copied, so
                later changes to the caller's list are not observed.

        Returns:
            A list-backed collection of the concrete type.

        Raises:
            InvalidArgumentError: If ``items`` is not a plain list, for example a
                mapping, a set, a string or a generator.
        """
        if not isinstance(items, (list, tuple)):
            raise InvalidArgumentError(
                f"Items must be a list (indexed sequence), got {type(items).__name__}"
            )
        collection: _C = cls._create_instance(Materialized(list(items)))
        logger.trace("%s: created from %d item(s)", cls.__name__, len(items))
        return collection

    @classmethod
    def from_producer(cls: type[_C], factory: Callable[[], Iterator[Any]]) -> _C:
        """Create a collection from a zero-argument factory returning a one-shot producer.

        The factory is called immediately and the returned producer is stored
        without pulling any item from it.

        Args:
            factory: Zero-argument callable returning a generator or another
                iterator (an object whose ``iter()`` is itself).

        Returns:
            A producer-backed collection of the concrete type.

        Raises:
            InvalidArgumentError: If ``factory`` is not callable, or if it returns
                something that is not a one-shot producer (e.g. a list).
        """
        if not callable(factory):
            raise InvalidArgumentError(f"Factory must be callable, got {type(factory).__name__}")
        producer: object = factory()
        if not isinstance(producer, Iterator):
            raise InvalidArgumentError(
                f"Factory must return a generator or iterator, got {type(producer).__name__}"
            )
        collection: _C = cls._create_instance(Pending(producer))
        logger.trace("%s: created from producer %r", cls.__name__, producer)
        return collection

    @classmethod
    def empty(cls: type[_C]) -> _C:
        """Create an empty collection."""
        return cls.from_list([])

    @classmethod
    @abstractmethod
    def _create_instance(cls: type[_C], backing: Backing[Any]) -> _C:
        """Create a new instance of the concrete collection class.

        Each concrete collection names its own class here, so the generic
        operations of this base never guess the type of their result.

        Args:
            backing: The backing of the new instance.

        Returns:
            A new instance of the concrete collection class.

        Raises:
            TypeError: When called on a class that does not provide the hook.
        """
        raise TypeError(f"{cls.__name__} is abstract; use a concrete collection class")

    # --- Consumption ----------------------------------------------------------

    def _materialize(self) -> list[T]:
        """Return the cached item list, draining the producer on first use."""
        backing = self._backing
        if isinstance(backing, Materialized):
            return backing.items
        if isinstance(backing, Failed):
            raise ProducerFailedError(
                f"{type(self).__name__} producer failed while being drained"
            ) from backing.error

        try:
            items: list[T] = list(backing.producer)
        except Exception as exc:
            self._backing = Failed(exc)
            raise
        self._backing = Materialized(items)
        logger.trace("%s: drained producer into %d item(s)", type(self).__name__, len(items))
        return items

    def __iter__(self) -> Iterator[T]:
        """Return a fresh iteration over the items, replayed from the cache."""
        return iter(self._materialize())

    def iterate(self) -> Iterator[T]:
        """Return a fresh iteration over the items (same as ``iter(collection)``)."""
        return iter(self)

    def to_list(self) -> list[T]:
        """Return the items as a list.

        The same list object is returned on every call; treat it as read-only.
        """
        return self._materialize()

    def count(self) -> int:
        """Return the number of items.

        Drains a pending producer once; O(1) afterwards.
        """
        return len(self._materialize())

    def __len__(self) -> int:
        return self.count()

    def __bool__(self) -> bool:
        return self.is_not_empty()

    def is_empty(self) -> bool:
        """Return True if the collection holds no items."""
        return self.count() == 0

    def is_not_empty(self) -> bool:
        """Return True if the collection holds at least one item."""
        return not self.is_empty()

    def first(self) -> T | None:
        """Return the first item, or ``None`` when the collection is empty."""
        items = self._materialize()
        return items[0] if items else None

    def last(self) -> T | None:
        """Return the last item, or ``None`` when the collection is empty."""
        items = self._materialize()
        return items[-1] if items else None

    @property
    def is_materialized(self) -> bool:
        """Whether the items are already cached (no pending producer)."""
        return isinstance(self._backing, Materialized)

    # --- Transformation -------------------------------------------------------

    def filter(self: _C, predicate: Callable[[Any], bool]) -> _C:
        """Return a lazy collection of the items matching ``predicate``.

        The source is not drained here; draining happens when the result is
        first consumed. Relative order is preserved.
        """

        def _matching() -> Iterator[Any]:
            for item in self:
                if predicate(item):
                    yield item

        return self.from_producer(_matching)

    def map(self, mapper: Callable[[T], U]) -> list[U]:
        """Apply ``mapper`` to every item and return the results as a list (eager)."""
        return [mapper(item) for item in self]

    def any(self, predicate: Callable[[T], bool]) -> bool:
        """Return True as soon as one item matches ``predicate``."""
        return any(predicate(item) for item in self)

    def all(self, predicate: Callable[[T], bool]) -> bool:
        """Return False as soon as one item does not match ``predicate``."""
        return all(predicate(item) for item in self)

    def group_by(self: _C, key_selector: Callable[[Any], K]) -> dict[K, _C]:
        """Group items by the key returned by ``key_selector``.

        The source is drained once before any key is computed. Groups appear in
        first-seen key order and each group keeps the items' relative order.

        If ``key_selector`` raises, the exception propagates and no partial
        grouping is returned; the source collection stays fully usable.

        Returns:
            Mapping of key to a list-backed collection of the concrete type.
        """
        buckets: dict[K, list[Any]] = {}
        for item in self:
            buckets.setdefault(key_selector(item), []).append(item)
        return {key: self._create_instance(Materialized(bucket)) for key, bucket in buckets.items()}

    def sorted_by(
        self: _C,
        key: Callable[[Any], Any],
        *,
        reverse: bool = False,
    ) -> _C:
        """Return a new list-backed collection sorted by ``key`` (stable)."""
        return self._create_instance(Materialized(sorted(self, key=key, reverse=reverse)))

    def concat(self: _C, *others: Iterable[Any]) -> _C:
        """Return a lazy collection yielding this collection's items, then each of ``others``.

        Nothing is drained until the result is consumed.
        """
        return self.from_producer(lambda: chain(self, *others))

    def __repr__(self) -> str:
        backing = self._backing
        if isinstance(backing, Materialized):
            state = f"{len(backing.items)} item(s)"
        elif isinstance(backing, Pending):
            state = "pending"
        else:
            state = "failed"
        return f"{type(self).__name__}(<{state}>)"
