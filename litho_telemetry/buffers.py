from __future__ import annotations

from collections import deque
from typing import Deque, Generic, Iterator, List, Optional, TypeVar

from .models import Alert, Reading

T = TypeVar("T")


class BoundedBuffer(Generic[T]):
    """Capacity-bounded sequence that evicts its oldest entry when full."""

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"Buffer capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._items: Deque[T] = deque(maxlen=capacity)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __bool__(self) -> bool:
        return bool(self._items)

    def clear(self) -> None:
        self._items.clear()

    def to_list(self) -> List[T]:
        return list(self._items)


class History(BoundedBuffer[Reading]):
    """Readings in arrival order; the newest is last."""

    def append(self, reading: Reading) -> None:
        self._items.append(reading)

    def latest(self) -> Optional[Reading]:
        return self._items[-1] if self._items else None


class AlertLog(BoundedBuffer[Alert]):
    """Alerts newest-first; the oldest drops off the tail."""

    def push(self, alert: Alert) -> None:
        self._items.appendleft(alert)

    def extend(self, alerts: List[Alert]) -> None:
        for alert in alerts:
            self.push(alert)
