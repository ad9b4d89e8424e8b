# topmark:header:start
#
#   project      : QueryDoctor
#   file         : test_collection_base.py
#   file_relpath : tests/collection/test_collection_base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `AbstractCollection`: construction, replayable consumption and transformations."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from querydoctor.collection.base import AbstractCollection, Backing
from querydoctor.core.errors import EmptyArgumentError, InvalidArgumentError, ProducerFailedError
from tests.conftest import CountingProducer, parametrize


class IntCollection(AbstractCollection[int]):
    """Minimal concrete collection used to exercise the base class."""

    __slots__ = ()

    @classmethod
    def _create_instance(cls, backing: Backing[Any]) -> IntCollection:
        return IntCollection(backing)


class OtherCollection(AbstractCollection[int]):
    """Second concrete collection, to check that results keep the caller's type."""

    __slots__ = ()

    @classmethod
    def _create_instance(cls, backing: Backing[Any]) -> OtherCollection:
        return OtherCollection(backing)


# --- Construction -------------------------------------------------------------


def test_from_list_copies_items() -> None:
    """Later changes to the caller's list are not observed."""
    items: list[int] = [1, 2, 3]
    coll = IntCollection.from_list(items)
    items.append(4)
    assert coll.to_list() == [1, 2, 3]
    assert coll.is_materialized


def test_from_list_accepts_tuple() -> None:
    assert IntCollection.from_list((1, 2)).to_list() == [1, 2]


@parametrize(
    "bad",
    [
        {"a": 1},
        {1, 2},
        "abc",
        (i for i in range(3)),
        42,
        None,
    ],
)
def test_from_list_rejects_non_list(bad: Any) -> None:
    with pytest.raises(InvalidArgumentError, match=type(bad).__name__):
        IntCollection.from_list(bad)


def test_from_producer_does_not_pull_items() -> None:
    pulled: list[int] = []

    def _gen() -> Iterator[int]:
        for i in (1, 2):
            pulled.append(i)
            yield i

    coll = IntCollection.from_producer(_gen)
    assert pulled == []
    assert not coll.is_materialized
    assert repr(coll) == "IntCollection(<pending>)"


def test_from_producer_accepts_plain_iterator() -> None:
    assert IntCollection.from_producer(lambda: iter([5, 6])).to_list() == [5, 6]


def test_from_producer_rejects_non_callable() -> None:
    with pytest.raises(InvalidArgumentError, match="callable"):
        IntCollection.from_producer([1, 2, 3])  # type: ignore[arg-type]


@parametrize("returned", [[1, 2], (1, 2), {"a": 1}, 3, None])
def test_from_producer_rejects_non_iterator_result(returned: Any) -> None:
    with pytest.raises(InvalidArgumentError, match=type(returned).__name__):
        IntCollection.from_producer(lambda: returned)


def test_invalid_argument_error_is_value_error() -> None:
    assert issubclass(InvalidArgumentError, ValueError)
    assert issubclass(EmptyArgumentError, InvalidArgumentError)


# --- Replayable consumption ---------------------------------------------------


def test_producer_is_drained_exactly_once() -> None:
    """Two `to_list()` calls and one `count()` leave the drain counter at 1."""
    producer = CountingProducer([1, 2, 3])
    coll = IntCollection.from_producer(producer)

    assert coll.to_list() == [1, 2, 3]
    assert coll.to_list() == [1, 2, 3]
    assert coll.count() == 3
    assert producer.calls == 1
    assert producer.drains == 1


def test_multi_pass_iteration_is_idempotent() -> None:
    producer = CountingProducer(["a", "b"])
    coll = IntCollection.from_producer(producer)

    assert list(coll) == ["a", "b"]
    assert list(coll.iterate()) == ["a", "b"]
    assert len(coll) == 2
    assert coll.first() == "a"
    assert coll.last() == "b"
    assert producer.drains == 1


def test_nested_iteration_sees_all_items() -> None:
    coll = IntCollection.from_producer(lambda: iter([1, 2]))
    pairs = [(a, b) for a in coll for b in coll]
    assert pairs == [(1, 1), (1, 2), (2, 1), (2, 2)]


def test_to_list_returns_same_list_object() -> None:
    coll = IntCollection.from_producer(lambda: iter([1]))
    assert coll.to_list() is coll.to_list()


def test_count_drains_and_caches() -> None:
    coll = IntCollection.from_producer(lambda: iter([1, 2, 3, 4]))
    assert coll.count() == 4
    assert coll.is_materialized
    assert repr(coll) == "IntCollection(<4 item(s)>)"


@parametrize(
    "coll",
    [
        IntCollection.empty(),
        IntCollection.from_list([]),
        IntCollection.from_producer(lambda: iter(())),
    ],
)
def test_empty_boundary(coll: IntCollection) -> None:
    assert coll.count() == 0
    assert coll.is_empty()
    assert not coll.is_not_empty()
    assert not coll
    assert coll.first() is None
    assert coll.last() is None
    assert coll.to_list() == []


def test_single_item_first_equals_last() -> None:
    coll = IntCollection.from_list([7])
    assert coll.first() == coll.last() == 7
    assert coll


# --- Producer failure ---------------------------------------------------------


def test_producer_failure_propagates_then_raises_producer_failed() -> None:
    def _gen() -> Iterator[int]:
        yield 1
        raise RuntimeError("boom")

    coll = IntCollection.from_producer(_gen)

    with pytest.raises(RuntimeError, match="boom"):
        coll.to_list()

    with pytest.raises(ProducerFailedError) as excinfo:
        coll.count()
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert repr(coll) == "IntCollection(<failed>)"


# --- Transformations ----------------------------------------------------------


def test_filter_is_lazy_and_keeps_order() -> None:
    producer = CountingProducer([1, 2, 3, 4, 5, 6])
    source = IntCollection.from_producer(producer)

    evens = source.filter(lambda n: n % 2 == 0)
    assert producer.drains == 0
    assert isinstance(evens, IntCollection)

    assert evens.to_list() == [2, 4, 6]
    assert evens.to_list() == [2, 4, 6]
    assert source.to_list() == [1, 2, 3, 4, 5, 6]
    assert producer.drains == 1


def test_filter_chain_preserves_subtype() -> None:
    coll = OtherCollection.from_list([1, 2, 3])
    result = coll.filter(lambda n: n > 1).filter(lambda n: n < 3)
    assert type(result) is OtherCollection
    assert result.to_list() == [2]


def test_map_returns_list() -> None:
    coll = IntCollection.from_producer(lambda: iter([1, 2, 3]))
    assert coll.map(lambda n: n * 10) == [10, 20, 30]


def test_any_and_all() -> None:
    coll = IntCollection.from_list([1, 2, 3])
    assert coll.any(lambda n: n == 2)
    assert not coll.any(lambda n: n > 3)
    assert coll.all(lambda n: n > 0)
    assert not coll.all(lambda n: n > 1)


def test_any_all_on_empty() -> None:
    coll = IntCollection.empty()
    assert not coll.any(lambda n: True)
    assert coll.all(lambda n: False)


def test_group_by_first_seen_key_order() -> None:
    coll = IntCollection.from_list([3, 1, 4, 1, 5, 9, 2, 6])
    groups = coll.group_by(lambda n: "even" if n % 2 == 0 else "odd")

    assert list(groups) == ["odd", "even"]
    assert groups["odd"].to_list() == [3, 1, 1, 5, 9]
    assert groups["even"].to_list() == [4, 2, 6]
    assert all(type(g) is IntCollection for g in groups.values())


def test_group_by_empty_returns_empty_mapping() -> None:
    assert IntCollection.empty().group_by(lambda n: n) == {}


def test_group_by_key_failure_leaves_source_usable() -> None:
    producer = CountingProducer([1, 2, 3])
    coll = IntCollection.from_producer(producer)

    def _key(n: int) -> int:
        if n == 2:
            raise KeyError("no key for 2")
        return n

    with pytest.raises(KeyError):
        coll.group_by(_key)

    assert coll.to_list() == [1, 2, 3]
    assert producer.drains == 1


def test_sorted_by_is_stable() -> None:
    coll = IntCollection.from_list([(2, "a"), (1, "b"), (2, "c"), (1, "d")])
    result = coll.sorted_by(lambda pair: pair[0])
    assert result.to_list() == [(1, "b"), (1, "d"), (2, "a"), (2, "c")]
    assert result.sorted_by(lambda pair: pair[0], reverse=True).to_list()[0] == (2, "a")


def test_concat_is_lazy() -> None:
    left = CountingProducer([1, 2])
    right = CountingProducer([3])
    first = IntCollection.from_producer(left)
    second = IntCollection.from_producer(right)

    combined = first.concat(second, [4, 5])
    assert left.drains == 0
    assert right.drains == 0
    assert combined.to_list() == [1, 2, 3, 4, 5]
    assert type(combined) is IntCollection


@parametrize(
    "create",
    [
        lambda: AbstractCollection.from_list([1, 2]),
        lambda: AbstractCollection.empty(),
        lambda: AbstractCollection.from_producer(lambda: iter([1])),
    ],
)
def test_abstract_base_cannot_be_instantiated(create: Any) -> None:
    with pytest.raises(TypeError, match="AbstractCollection is abstract"):
        create()
