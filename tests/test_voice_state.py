"""
Tests for the in-memory voice state: sessions, managed channels and names.
"""

import random

import pytest

from helpers.constants import NAME_SUFFIX_MAX
from services.channel_registry import ChannelRegistry
from services.name_allocator import NameAllocator
from services.session_tracker import SessionTracker


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestSessionTracker:
    def test_leave_returns_elapsed_milliseconds(self):
        clock = _Clock()
        tracker = SessionTracker(clock=clock)

        tracker.on_join(1, 10)
        clock.now = 12.5

        assert tracker.on_leave_or_move(1) == 12500
        assert 1 not in tracker

    def test_leave_without_session(self):
        assert SessionTracker().on_leave_or_move(1) is None

    def test_rejoin_replaces_session(self):
        clock = _Clock()
        tracker = SessionTracker(clock=clock)
        tracker.on_join(1, 10)
        clock.now = 50.0
        tracker.on_join(1, 20)
        clock.now = 60.0

        assert tracker.get(1).channel_id == 20
        assert tracker.on_leave_or_move(1) == 10_000
        assert len(tracker) == 0

    def test_clock_going_backwards_clamps_to_zero(self):
        clock = _Clock()
        tracker = SessionTracker(clock=clock)
        clock.now = 5.0
        tracker.on_join(1, 10)
        clock.now = 4.0

        assert tracker.on_leave_or_move(1) == 0


class TestChannelRegistry:
    def test_register_and_lookup(self):
        registry = ChannelRegistry(clock=lambda: 1700000000.0)

        entry = registry.register(10, "Wano")

        assert entry.created_at == 1700000000.0
        assert registry.is_managed(10)
        assert registry.lookup(10) == "Wano"
        assert registry.active_names() == {"Wano"}

    def test_unregister(self):
        registry = ChannelRegistry()
        registry.register(10, "Wano")

        assert registry.unregister(10).name == "Wano"
        assert registry.unregister(10) is None
        assert not registry.is_managed(10)
        assert registry.lookup(10) is None
        assert len(registry) == 0


class TestNameAllocator:
    def test_empty_pool_rejected(self):
        with pytest.raises(ValueError):
            NameAllocator(())

    def test_picks_unused_name(self):
        allocator = NameAllocator(("A", "B", "C"), rng=random.Random(7))

        for _ in range(20):
            assert allocator.allocate({"A", "B"}) == "C"

    def test_every_name_reachable(self):
        allocator = NameAllocator(("A", "B", "C"), rng=random.Random(1))

        seen = {allocator.allocate(set()) for _ in range(200)}

        assert seen == {"A", "B", "C"}

    def test_exhausted_pool_adds_suffix(self):
        allocator = NameAllocator(("A", "B"), rng=random.Random(3))

        for _ in range(50):
            name = allocator.allocate({"A", "B"})
            base, suffix = name.rsplit(" ", 1)
            assert base in ("A", "B")
            assert 1 <= int(suffix) <= NAME_SUFFIX_MAX
