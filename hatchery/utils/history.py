"""Fixed-capacity persistent history.

``BoundedHistory`` wraps a ``PVector`` and a capacity. ``append`` returns a new
history; once the capacity would be exceeded the oldest entries are evicted so
that iteration order stays oldest -> newest.
"""

from dataclasses import dataclass, field
from typing import Generic, Iterable, Iterator, List, TypeVar, overload

from pyrsistent import pvector
from pyrsistent.typing import PVector

T = TypeVar("T")


@dataclass(frozen=True)
class BoundedHistory(Generic[T]):
    """Immutable ring-buffer style history.

    Attributes:
        capacity: Maximum number of retained entries (must be positive).
        items: Retained entries, oldest first.
    """

    capacity: int = 20
    items: PVector[T] = field(default_factory=lambda: pvector())

    def __post_init__(self) -> None:
        if self.capacity <= 0:
            raise ValueError("History capacity must be positive")
        if len(self.items) > self.capacity:
            object.__setattr__(self, "items", self.items[-self.capacity :])

    @classmethod
    def of(cls, items: Iterable[T], capacity: int = 20) -> "BoundedHistory[T]":
        """Build a history from ``items`` keeping only the newest ``capacity``."""
        return cls(capacity=capacity, items=pvector(items))

    def append(self, item: T) -> "BoundedHistory[T]":
        """Return a new history with ``item`` appended and overflow evicted."""
        items = self.items.append(item)
        if len(items) > self.capacity:
            items = items[len(items) - self.capacity :]
        return BoundedHistory(capacity=self.capacity, items=items)

    def with_capacity(self, capacity: int) -> "BoundedHistory[T]":
        """Return this history under ``capacity``, evicting the oldest overflow."""
        if capacity == self.capacity:
            return self
        return BoundedHistory(capacity=capacity, items=self.items)

    def recent(self, count: int) -> List[T]:
        """Return up to ``count`` newest entries, newest first."""
        if count <= 0:
            return []
        return list(reversed(self.items[-count:]))

    @property
    def is_full(self) -> bool:
        return len(self.items) == self.capacity

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> PVector[T]: ...

    def __getitem__(self, index):  # type: ignore[no-untyped-def]
        return self.items[index]
