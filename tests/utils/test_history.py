# tests/utils/test_history.py

import pytest
from pyrsistent import pvector

from hatchery.utils.history import BoundedHistory


def test_append_below_capacity_keeps_order() -> None:
    history: BoundedHistory[int] = BoundedHistory(capacity=3)
    history = history.append(1).append(2)
    assert list(history) == [1, 2]
    assert not history.is_full


def test_append_evicts_oldest_first() -> None:
    history: BoundedHistory[int] = BoundedHistory(capacity=3)
    for i in range(5):
        history = history.append(i)
    assert list(history) == [2, 3, 4]
    assert len(history) == 3
    assert history.is_full


def test_append_returns_new_instance() -> None:
    history: BoundedHistory[int] = BoundedHistory(capacity=2)
    appended = history.append(1)
    assert len(history) == 0
    assert list(appended) == [1]


def test_history_bound_after_many_appends() -> None:
    history: BoundedHistory[int] = BoundedHistory(capacity=20)
    for i in range(57):
        history = history.append(i)
        assert len(history) == min(i + 1, 20)
    # Oldest survivor is the 20th most recent insertion.
    assert history[0] == 57 - 20
    assert history[-1] == 56


def test_of_truncates_to_newest() -> None:
    history = BoundedHistory.of(range(25), capacity=20)
    assert list(history) == list(range(5, 25))


def test_constructor_truncates_oversized_items() -> None:
    history = BoundedHistory(capacity=2, items=pvector([1, 2, 3]))
    assert list(history) == [2, 3]


def test_recent_is_newest_first() -> None:
    history = BoundedHistory.of([1, 2, 3, 4, 5, 6, 7])
    assert history.recent(5) == [7, 6, 5, 4, 3]
    assert history.recent(10) == [7, 6, 5, 4, 3, 2, 1]
    assert history.recent(0) == []


@pytest.mark.parametrize("capacity", [0, -1])
def test_invalid_capacity_raises(capacity: int) -> None:
    with pytest.raises(ValueError):
        BoundedHistory(capacity=capacity)


def test_equality_is_by_value() -> None:
    assert BoundedHistory.of([1, 2]) == BoundedHistory(capacity=20).append(1).append(2)


def test_with_capacity_shrinks_keeping_newest() -> None:
    history = BoundedHistory.of(range(8))
    resized = history.with_capacity(5)
    assert list(resized) == [3, 4, 5, 6, 7]
    assert resized.capacity == 5
    assert history.with_capacity(20) is history


def test_with_capacity_grows_without_dropping() -> None:
    history = BoundedHistory.of([1, 2], capacity=2).with_capacity(4)
    assert list(history.append(3).append(4)) == [1, 2, 3, 4]
