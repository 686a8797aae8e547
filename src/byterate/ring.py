"""A thread-safe, fixed-capacity ring buffer of rate measurements."""

import threading
from collections import deque

from .units import BytesPerSecond


class Ring:
    """A thread-safe, fixed-capacity buffer that carries measurements between threads.

    A wrapper running in a worker thread pushes each report into the ring; a
    consumer thread drains it at its own pace. When the ring is full it either
    drops the oldest measurement or rejects the newest one.

    Attributes:
        q (collections.deque): The underlying deque instance.
        capacity (int): The maximum number of measurements held.
        drop_oldest (bool): If True, the oldest measurement is dropped when the
            ring is full. If False, the newest one is rejected.
        lock (threading.Lock): Lock guarding ``q`` and ``drops``.
        drops (int): Number of measurements overwritten or rejected.
    """

    def __init__(self, capacity: int = 1024, drop_oldest: bool = True) -> None:
        """Initialize the Ring.

        Args:
            capacity (int): The maximum number of measurements the ring can hold.
            drop_oldest (bool): Policy for a full ring. If True, the oldest
                measurement is overwritten. If False, the new one is rejected.

        Raises:
            ValueError: If ``capacity`` is not positive.
        """
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.q: deque[BytesPerSecond] = deque(maxlen=capacity if drop_oldest else None)
        self.capacity = capacity
        self.drop_oldest = drop_oldest
        self.lock = threading.Lock()
        self.drops = 0

    def __len__(self) -> int:
        with self.lock:
            return len(self.q)

    def push(self, item: BytesPerSecond) -> bool:
        """Add a measurement to the ring.

        Args:
            item (BytesPerSecond): The measurement to store.

        Returns:
            bool: True if the measurement was stored, False if it was rejected.
        """
        with self.lock:
            if not self.drop_oldest and len(self.q) >= self.capacity:
                self.drops += 1  # reject newest
                return False
            before_full = len(self.q) == self.q.maxlen
            self.q.append(item)
            if before_full:
                self.drops += 1  # leftmost overwritten
            return True

    def drain_upto(self, max_items: int) -> list[BytesPerSecond]:
        """Remove and return up to ``max_items`` measurements, oldest first."""
        with self.lock:
            return [self.q.popleft() for _ in range(min(max_items, len(self.q)))]

    def drain(self) -> list[BytesPerSecond]:
        """Remove and return every buffered measurement, oldest first."""
        with self.lock:
            items = list(self.q)
            self.q.clear()
            return items
