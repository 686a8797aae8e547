"""Tests for the `Ring` measurement buffer.

This module validates core ring behaviors: initialization, push semantics
with and without overwriting, draining under empty/partial/full states,
producer/consumer threads, and correct accounting of dropped measurements
under both `drop_oldest` policies.
"""

import threading
import time

import pytest

from byterate.ring import Ring
from byterate.units import BytesPerSecond


def _m(n: int) -> BytesPerSecond:
    return BytesPerSecond(n, 1.0)


def test_ring_init():
    """Test ring initialization."""
    r = Ring(capacity=10)
    assert r.capacity == 10
    assert r.drop_oldest is True
    assert r.drops == 0
    assert len(r) == 0

    r = Ring(capacity=5, drop_oldest=False)
    assert r.capacity == 5
    assert r.drop_oldest is False


def test_ring_rejects_non_positive_capacity():
    """A ring must be able to hold at least one measurement."""
    with pytest.raises(ValueError, match="capacity"):
        Ring(capacity=0)


def test_ring_drain_partially_full():
    """Test draining from a partially full ring."""
    r = Ring(capacity=5)
    for n in (1, 2, 3):
        r.push(_m(n))
    assert r.drain_upto(2) == [_m(1), _m(2)]
    assert len(r) == 1
    assert r.drain_upto(5) == [_m(3)]
    assert r.drain_upto(5) == []


def test_ring_overwrite_oldest():
    """Test the drop_oldest=True policy."""
    r = Ring(capacity=3, drop_oldest=True)
    for n in (1, 2, 3):
        assert r.push(_m(n)) is True
    assert r.drops == 0

    assert r.push(_m(4)) is True
    assert r.drops == 1
    assert r.drain() == [_m(2), _m(3), _m(4)]
    assert len(r) == 0


def test_ring_reject_newest():
    """Test the drop_oldest=False policy."""
    r = Ring(capacity=2, drop_oldest=False)
    r.push(_m(1))
    r.push(_m(2))

    assert r.push(_m(3)) is False
    assert r.drops == 1
    assert r.drain() == [_m(1), _m(2)]

    assert r.push(_m(4)) is True
    assert r.drops == 1


def test_ring_thread_handoff():
    """Measurements pushed by one thread are all drained by another."""
    num_items = 2000
    r = Ring(capacity=num_items)

    def producer():
        for i in range(num_items):
            r.push(_m(i))

    consumed: list[BytesPerSecond] = []

    def consumer_loop():
        while len(consumed) < num_items:
            drained = r.drain_upto(10)
            if drained:
                consumed.extend(drained)
            else:
                time.sleep(0.0001)

    producer_thread = threading.Thread(target=producer)
    consumer_thread = threading.Thread(target=consumer_loop)
    producer_thread.start()
    consumer_thread.start()
    producer_thread.join(timeout=5)
    consumer_thread.join(timeout=5)

    assert not producer_thread.is_alive(), "Producer thread timed out"
    assert not consumer_thread.is_alive(), "Consumer thread timed out"
    assert [m.byte_count for m in consumed] == list(range(num_items))
