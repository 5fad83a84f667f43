"""
Tests for the MoodResultCache implementation.

These tests verify expiration, the liked-track overlay, per-mood isolation
and the downgrade of store failures to cache misses.
"""

import threading

from moodmelody.cache import LOCK_STRIPES, MoodResultCache
from moodmelody.models import CustomMood, MoodCategory, NamedMood, Track
from moodmelody.store import InMemoryKeyValueStore, StoreError

DAY = 24 * 60 * 60

HAPPY = NamedMood(category=MoodCategory.HAPPY)
SAD = NamedMood(category=MoodCategory.SAD)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FailingStore(InMemoryKeyValueStore):
    """Store whose reads and/or writes can be switched to fail."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_reads = False
        self.fail_set_reads = False
        self.fail_writes = False

    def get(self, key):
        if self.fail_reads:
            raise StoreError("read failed")
        return super().get(key)

    def get_string_set(self, key):
        if self.fail_reads or self.fail_set_reads:
            raise StoreError("read failed")
        return super().get_string_set(key)

    def set(self, key, value):
        if self.fail_writes:
            raise StoreError("write failed")
        super().set(key, value)

    def set_string_set(self, key, values):
        if self.fail_writes:
            raise StoreError("write failed")
        super().set_string_set(key, values)

    def remove(self, key):
        if self.fail_writes:
            raise StoreError("write failed")
        super().remove(key)


def make_tracks(*ids: str) -> list[Track]:
    return [Track(id=i, title=f"Song {i}", artist="Artist") for i in ids]


class TestMoodResultCache:
    """Test suite for MoodResultCache functionality."""

    def setup_method(self):
        """Set up a fresh cache with a controllable clock for each test."""
        self.clock = FakeClock()
        self.store = FailingStore()
        self.cache = MoodResultCache(self.store, clock=self.clock)

    def test_cache_and_read_back(self):
        """Test that cached tracks come back in order."""
        tracks = make_tracks("c", "a", "b")
        assert self.cache.cache_tracks(HAPPY, tracks) is True

        cached = self.cache.get_cached_tracks(HAPPY)
        assert [t.id for t in cached] == ["c", "a", "b"]
        assert cached == tracks
        assert self.cache.is_cache_valid(HAPPY)

    def test_missing_entry(self):
        assert self.cache.get_cached_tracks(HAPPY) is None
        assert not self.cache.is_cache_valid(HAPPY)

    def test_expiration(self):
        """Test that entries expire exactly 24 hours after capture."""
        self.cache.cache_tracks(HAPPY, make_tracks("a"))

        self.clock.advance(DAY - 1)
        assert self.cache.is_cache_valid(HAPPY)
        assert self.cache.get_cached_tracks(HAPPY) is not None

        self.clock.advance(1)
        assert not self.cache.is_cache_valid(HAPPY)
        assert self.cache.get_cached_tracks(HAPPY) is None

    def test_refresh_resets_timestamp(self):
        """Test that re-caching replaces both tracks and capture time."""
        self.cache.cache_tracks(HAPPY, make_tracks("a"))
        self.clock.advance(DAY + 10)
        self.cache.cache_tracks(HAPPY, make_tracks("b"))

        assert [t.id for t in self.cache.get_cached_tracks(HAPPY)] == ["b"]

    def test_expired_entries_are_not_purged(self):
        """Test that expiry is evaluated on read without deleting data."""
        self.cache.cache_tracks(HAPPY, make_tracks("a"))
        self.clock.advance(DAY * 2)
        assert self.cache.get_cached_tracks(HAPPY) is None
        assert self.store.get("cached_tracks_happy") is not None

    def test_moods_are_independent(self):
        """Test that entries and likes are scoped to a single mood."""
        self.cache.cache_tracks(HAPPY, make_tracks("a"))
        self.cache.toggle_like("a", HAPPY)

        assert self.cache.get_cached_tracks(SAD) is None
        assert not self.cache.is_liked("a", SAD)

        self.cache.clear_cache(SAD)
        assert self.cache.get_cached_tracks(HAPPY) is not None

    def test_custom_moods_keyed_by_text(self):
        """Test that custom moods with different text do not collide."""
        jazz = CustomMood(text="jazz music")
        rock = CustomMood(text="rock music")
        self.cache.cache_tracks(jazz, make_tracks("j"))

        assert [t.id for t in self.cache.get_cached_tracks(jazz)] == ["j"]
        assert self.cache.get_cached_tracks(rock) is None
        assert self.cache.get_cached_tracks(CustomMood(text="jazz music")) is not None

    def test_named_and_custom_mood_do_not_collide(self):
        self.cache.cache_tracks(HAPPY, make_tracks("a"))
        assert self.cache.get_cached_tracks(CustomMood(text="happy")) is None


class TestLikes:
    """Test suite for the liked-track overlay."""

    def setup_method(self):
        self.clock = FakeClock()
        self.cache = MoodResultCache(InMemoryKeyValueStore(), clock=self.clock)

    def test_toggle_twice_restores_state(self):
        """Test that toggling is its own inverse."""
        assert not self.cache.is_liked("a", HAPPY)
        self.cache.toggle_like("a", HAPPY)
        assert self.cache.is_liked("a", HAPPY)
        self.cache.toggle_like("a", HAPPY)
        assert not self.cache.is_liked("a", HAPPY)

    def test_likes_overlay_cached_tracks(self):
        """Test that the liked set overrides the stored liked flag."""
        stored = [
            Track(id="a", title="A", artist="X", is_liked=True),
            Track(id="b", title="B", artist="X"),
        ]
        self.cache.cache_tracks(HAPPY, stored)
        self.cache.toggle_like("b", HAPPY)

        cached = self.cache.get_cached_tracks(HAPPY)
        assert [(t.id, t.is_liked) for t in cached] == [("a", False), ("b", True)]

    def test_likes_survive_clear_and_refill(self):
        """Test that likes recorded before a cache clear still apply after it."""
        self.cache.toggle_like("a", HAPPY)
        self.cache.clear_cache(HAPPY)
        self.cache.cache_tracks(HAPPY, make_tracks("a"))

        cached = self.cache.get_cached_tracks(HAPPY)
        assert cached[0].is_liked is True

    def test_cache_tracks_does_not_touch_likes(self):
        self.cache.toggle_like("a", HAPPY)
        self.cache.cache_tracks(HAPPY, make_tracks("b"))
        assert self.cache.is_liked("a", HAPPY)

    def test_liked_tracks(self):
        """Test that liked tracks are the intersection with the cached list."""
        self.cache.cache_tracks(HAPPY, make_tracks("a", "b", "c"))
        self.cache.toggle_like("c", HAPPY)
        self.cache.toggle_like("a", HAPPY)
        self.cache.toggle_like("zzz", HAPPY)

        liked = self.cache.get_liked_tracks(HAPPY)
        assert [t.id for t in liked] == ["a", "c"]
        assert all(t.is_liked for t in liked)

    def test_liked_tracks_need_a_cache_entry(self):
        """Test that likes alone do not resurrect absent or expired entries."""
        self.cache.toggle_like("a", HAPPY)
        assert self.cache.get_liked_tracks(HAPPY) == []

        self.cache.cache_tracks(HAPPY, make_tracks("a"))
        self.clock.advance(DAY)
        assert self.cache.get_liked_tracks(HAPPY) == []
        assert self.cache.is_liked("a", HAPPY)


class TestCacheFailures:
    """Test suite for store failure handling."""

    def setup_method(self):
        self.clock = FakeClock()
        self.store = FailingStore()
        self.cache = MoodResultCache(self.store, clock=self.clock)

    def test_corrupt_payload_is_a_miss(self):
        """Test that undecodable entries read as misses without raising."""
        self.store.set("cached_tracks_happy", b"\x00not json")
        assert self.cache.get_cached_tracks(HAPPY) is None
        assert not self.cache.is_cache_valid(HAPPY)
        assert self.cache.get_liked_tracks(HAPPY) == []

        self.store.set("cached_tracks_happy", b'{"tracks": "nope"}')
        assert self.cache.get_cached_tracks(HAPPY) is None

    def test_read_failure_is_a_miss(self):
        self.cache.cache_tracks(HAPPY, make_tracks("a"))
        self.store.fail_reads = True

        assert self.cache.get_cached_tracks(HAPPY) is None
        assert not self.cache.is_cache_valid(HAPPY)
        assert not self.cache.is_liked("a", HAPPY)

    def test_write_failure_keeps_previous_entry(self):
        """Test that a failed write reports False and leaves the old entry."""
        self.cache.cache_tracks(HAPPY, make_tracks("a"))
        self.store.fail_writes = True

        assert self.cache.cache_tracks(HAPPY, make_tracks("b")) is False
        self.cache.toggle_like("a", HAPPY)
        self.cache.clear_cache(HAPPY)

        self.store.fail_writes = False
        cached = self.cache.get_cached_tracks(HAPPY)
        assert [(t.id, t.is_liked) for t in cached] == [("a", False)]

    def test_unreadable_likes_are_not_overwritten(self):
        """Test that a toggle after a failed liked-set read writes nothing."""
        self.cache.toggle_like("a", HAPPY)
        self.cache.toggle_like("b", HAPPY)
        self.store.fail_set_reads = True

        self.cache.toggle_like("c", HAPPY)

        self.store.fail_set_reads = False
        assert self.store.get_string_set("liked_tracks_happy") == {"a", "b"}


class TestConcurrency:
    """Test suite for concurrent access to one mood."""

    def test_concurrent_toggles_are_not_lost(self):
        """Test that toggles from many threads are applied one at a time."""
        cache = MoodResultCache(InMemoryKeyValueStore())
        ids = [f"track-{n}" for n in range(50)]

        threads = [
            threading.Thread(target=cache.toggle_like, args=(track_id, HAPPY))
            for track_id in ids
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert all(cache.is_liked(track_id, HAPPY) for track_id in ids)

    def test_lock_count_is_bounded(self):
        """Test that many distinct custom moods share a fixed set of locks."""
        cache = MoodResultCache(InMemoryKeyValueStore())
        for n in range(5000):
            cache.is_cache_valid(CustomMood(text=f"text {n}"))

        assert len(cache._locks) == LOCK_STRIPES

    def test_same_mood_always_uses_same_lock(self):
        cache = MoodResultCache(InMemoryKeyValueStore())
        first = cache._lock_for(CustomMood(text="rainy day"))
        assert cache._lock_for(CustomMood(text="rainy day")) is first

    def test_readers_see_complete_entries(self):
        """Test that concurrent readers never see a partially written list."""
        cache = MoodResultCache(InMemoryKeyValueStore())
        batches = [make_tracks(*(f"{n}-{i}" for i in range(5))) for n in range(20)]
        seen: list[list[str]] = []

        def writer() -> None:
            for batch in batches:
                cache.cache_tracks(HAPPY, batch)

        def reader() -> None:
            for _ in range(50):
                tracks = cache.get_cached_tracks(HAPPY)
                if tracks is not None:
                    seen.append([t.id for t in tracks])

        threads = [threading.Thread(target=writer)] + [
            threading.Thread(target=reader) for _ in range(3)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        valid = {tuple(t.id for t in batch) for batch in batches}
        assert all(tuple(ids) in valid for ids in seen)
