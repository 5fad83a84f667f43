"""
Time-boxed cache of search results per mood.

Track lists expire 24 hours after capture. Liked track ids are kept in a
separate per-mood set so likes survive cache clears and refreshes, and are
overlaid onto every cached read.
"""

import threading
import time
from collections.abc import Callable

import structlog
from pydantic import BaseModel, Field, ValidationError

from .config import CACHE_EXPIRATION_SECONDS
from .models import Mood, Track
from .store import KeyValueStore, StoreError

logger = structlog.get_logger(__name__)

LOCK_STRIPES = 64


class CachedMoodEntry(BaseModel):
    """Track list and capture time, stored together under one key."""

    tracks: list[Track] = Field(default_factory=list)
    captured_at: float = Field(..., description="Unix timestamp of capture")


class MoodResultCache:
    """
    Per-mood result cache on top of a KeyValueStore.

    Store failures never propagate: unreadable entries are treated as misses
    and failed writes are logged (and reported by cache_tracks). Access to a
    given mood is serialized by one of a fixed set of lock stripes chosen by
    the mood key, so the lock count stays bounded however many custom moods
    are seen.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        clock: Callable[[], float] = time.time,
        expiration: float = CACHE_EXPIRATION_SECONDS,
    ) -> None:
        self._store = store
        self._clock = clock
        self.expiration = expiration
        self._locks = tuple(threading.Lock() for _ in range(LOCK_STRIPES))

    # MARK: - Cache Management

    def cache_tracks(self, mood: Mood, tracks: list[Track]) -> bool:
        """
        Replace the cached entry for a mood with a fresh timestamp.

        Args:
            mood: The mood the tracks were found for
            tracks: Search results, in display order

        Returns:
            True when the entry was written, False when the store failed
        """
        entry = CachedMoodEntry(tracks=list(tracks), captured_at=self._clock())
        payload = entry.model_dump_json().encode("utf-8")

        with self._lock_for(mood):
            try:
                self._store.set(_tracks_key(mood), payload)
            except StoreError as e:
                logger.error("cache_write_failed", mood=mood.key, error=str(e))
                return False

        logger.info("tracks_cached", mood=mood.key, count=len(entry.tracks))
        return True

    def get_cached_tracks(self, mood: Mood) -> list[Track] | None:
        """
        Return the cached tracks with current liked state, or None on a miss.

        Missing, expired and unreadable entries are all misses.
        """
        with self._lock_for(mood):
            entry = self._read_entry(mood)
            if entry is None or not self._is_fresh(entry):
                return None
            liked_ids = self._read_liked_ids(mood)

        return [track.with_liked(track.id in liked_ids) for track in entry.tracks]

    def is_cache_valid(self, mood: Mood) -> bool:
        with self._lock_for(mood):
            entry = self._read_entry(mood)
        return entry is not None and self._is_fresh(entry)

    def clear_cache(self, mood: Mood) -> None:
        """Drop the cached tracks for one mood; liked ids are kept."""
        with self._lock_for(mood):
            try:
                self._store.remove(_tracks_key(mood))
            except StoreError as e:
                logger.error("cache_clear_failed", mood=mood.key, error=str(e))
                return
        logger.info("cache_cleared", mood=mood.key)

    # MARK: - Like Management

    def toggle_like(self, track_id: str, mood: Mood) -> None:
        """Flip a track's liked state; nothing is written if the read fails."""
        with self._lock_for(mood):
            try:
                liked_ids = set(self._store.get_string_set(_likes_key(mood)))
            except StoreError as e:
                logger.error(
                    "like_toggle_aborted",
                    mood=mood.key,
                    track_id=track_id,
                    error=str(e),
                )
                return

            if track_id in liked_ids:
                liked_ids.remove(track_id)
            else:
                liked_ids.add(track_id)

            try:
                self._store.set_string_set(_likes_key(mood), liked_ids)
            except StoreError as e:
                logger.error(
                    "like_write_failed", mood=mood.key, track_id=track_id, error=str(e)
                )

    def is_liked(self, track_id: str, mood: Mood) -> bool:
        with self._lock_for(mood):
            return track_id in self._read_liked_ids(mood)

    def get_liked_tracks(self, mood: Mood) -> list[Track]:
        """Cached tracks that are liked; empty when the cache entry is gone."""
        tracks = self.get_cached_tracks(mood)
        if tracks is None:
            return []
        return [track for track in tracks if track.is_liked]

    # MARK: - Private Helpers

    def _lock_for(self, mood: Mood) -> threading.Lock:
        return self._locks[hash(mood.key) % len(self._locks)]

    def _is_fresh(self, entry: CachedMoodEntry) -> bool:
        return self._clock() - entry.captured_at < self.expiration

    def _read_entry(self, mood: Mood) -> CachedMoodEntry | None:
        try:
            payload = self._store.get(_tracks_key(mood))
        except StoreError as e:
            logger.warning("cache_read_failed", mood=mood.key, error=str(e))
            return None

        if payload is None:
            return None

        try:
            return CachedMoodEntry.model_validate_json(payload)
        except ValidationError as e:
            logger.warning(
                "cache_entry_corrupt", mood=mood.key, errors=e.error_count()
            )
            return None

    def _read_liked_ids(self, mood: Mood) -> set[str]:
        try:
            return set(self._store.get_string_set(_likes_key(mood)))
        except StoreError as e:
            logger.warning("likes_read_failed", mood=mood.key, error=str(e))
            return set()


def _tracks_key(mood: Mood) -> str:
    return f"cached_tracks_{mood.key}"


def _likes_key(mood: Mood) -> str:
    return f"liked_tracks_{mood.key}"
