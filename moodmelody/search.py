"""
Track search for the MoodMelody service.

Defines the search collaborator interface, an offline catalog implementation
used for development and tests, and the cache-first search flow that ties
inference, the result cache and a search collaborator together.
"""

from typing import Protocol

import structlog
from pydantic import BaseModel, Field

from .cache import MoodResultCache
from .config import DEFAULT_SEARCH_LIMIT
from .inference import (
    enhanced_search_term,
    fusion_search_term,
    infer_fusion,
    infer_mood,
    score_moods,
)
from .models import Intensity, Mood, MoodCategory, MoodFusion, Track

logger = structlog.get_logger(__name__)


class SearchError(Exception):
    """Raised by a search collaborator when a catalog query fails."""


class TrackSearch(Protocol):
    def search(self, term: str, limit: int) -> list[Track]: ...


class OfflineTrackSearch:
    """
    Search over a small built-in catalog.

    The catalog entry is chosen by scoring the search phrase against the mood
    keywords, falling back to happy songs.
    """

    CATALOG: dict[MoodCategory, list[tuple[str, str]]] = {
        MoodCategory.HAPPY: [
            ("Happy", "Pharrell Williams"),
            ("Good as Hell", "Lizzo"),
            ("Uptown Funk", "Mark Ronson ft. Bruno Mars"),
            ("Can't Stop the Feeling!", "Justin Timberlake"),
            ("Walking on Sunshine", "Katrina and the Waves"),
            ("I Gotta Feeling", "The Black Eyed Peas"),
            ("September", "Earth, Wind & Fire"),
            ("Good Vibrations", "The Beach Boys"),
            ("Mr. Blue Sky", "Electric Light Orchestra"),
            ("Dancing Queen", "ABBA"),
        ],
        MoodCategory.SAD: [
            ("Someone Like You", "Adele"),
            ("Hurt", "Johnny Cash"),
            ("Mad World", "Gary Jules"),
            ("Black", "Pearl Jam"),
            ("Everybody Hurts", "R.E.M."),
            ("Tears in Heaven", "Eric Clapton"),
            ("The Night We Met", "Lord Huron"),
            ("Skinny Love", "Bon Iver"),
            ("Hallelujah", "Jeff Buckley"),
            ("Fix You", "Coldplay"),
        ],
        MoodCategory.ANGRY: [
            ("Break Stuff", "Limp Bizkit"),
            ("Bodies", "Drowning Pool"),
            ("Killing in the Name", "Rage Against the Machine"),
            ("Chop Suey!", "System of a Down"),
            ("The Beautiful People", "Marilyn Manson"),
            ("Toxicity", "System of a Down"),
            ("Du Hast", "Rammstein"),
            ("Freak on a Leash", "Korn"),
            ("One Step Closer", "Linkin Park"),
            ("Sabotage", "Beastie Boys"),
        ],
        MoodCategory.FRUSTRATED: [
            ("In the End", "Linkin Park"),
            ("Numb", "Linkin Park"),
            ("Crawling", "Linkin Park"),
            ("Heavy", "Linkin Park ft. Kiiara"),
            ("Boulevard of Broken Dreams", "Green Day"),
            ("Hurt", "Nine Inch Nails"),
            ("Breaking the Habit", "Linkin Park"),
            ("Somewhere I Belong", "Linkin Park"),
            ("Papercut", "Linkin Park"),
            ("Points of Authority", "Linkin Park"),
        ],
        MoodCategory.ENERGETIC: [
            ("Eye of the Tiger", "Survivor"),
            ("Lose Yourself", "Eminem"),
            ("Stronger", "Kanye West"),
            ("Titanium", "David Guetta ft. Sia"),
            ("Can't Hold Us", "Macklemore & Ryan Lewis"),
        ],
        MoodCategory.CALM: [
            ("Weightless", "Marconi Union"),
            ("Clair de Lune", "Claude Debussy"),
            ("Holocene", "Bon Iver"),
            ("River Flows in You", "Yiruma"),
            ("Sunset Lover", "Petit Biscuit"),
        ],
        MoodCategory.NOSTALGIC: [
            ("Summer of '69", "Bryan Adams"),
            ("Take On Me", "a-ha"),
            ("Don't Stop Believin'", "Journey"),
            ("Wonderwall", "Oasis"),
            ("1979", "The Smashing Pumpkins"),
        ],
        MoodCategory.ROMANTIC: [
            ("Perfect", "Ed Sheeran"),
            ("At Last", "Etta James"),
            ("Make You Feel My Love", "Adele"),
            ("All of Me", "John Legend"),
            ("Can't Help Falling in Love", "Elvis Presley"),
        ],
        MoodCategory.MELANCHOLIC: [
            ("Motion Picture Soundtrack", "Radiohead"),
            ("Pink Moon", "Nick Drake"),
            ("Re: Stacks", "Bon Iver"),
            ("Between the Bars", "Elliott Smith"),
            ("Atlas Hands", "Benjamin Francis Leftwich"),
        ],
        MoodCategory.EXCITED: [
            ("Levels", "Avicii"),
            ("Shut Up and Dance", "Walk the Moon"),
            ("Don't Stop Me Now", "Queen"),
            ("Party Rock Anthem", "LMFAO"),
            ("Dynamite", "BTS"),
        ],
    }

    def search(self, term: str, limit: int) -> list[Track]:
        scores = score_moods(term)
        category = max(MoodCategory, key=lambda c: scores[c])
        if scores[category] == 0:
            category = MoodCategory.HAPPY

        entries = self.CATALOG[category][: max(limit, 0)]
        return [
            Track(
                id=f"{category.value}-offline-{index}",
                title=title,
                artist=artist,
                catalog_id=f"{category.value}-offline-{index}",
            )
            for index, (title, artist) in enumerate(entries)
        ]


class Recommendation(BaseModel):
    """Outcome of analyzing free text and fetching matching tracks."""

    mood: Mood | None = Field(None, description="Detected single mood")
    intensity: Intensity | None = None
    fusion: MoodFusion | None = Field(None, description="Detected mood fusion")
    search_term: str
    tracks: list[Track] = Field(default_factory=list)


class MoodSearchService:
    """Cache-first track lookup for moods and fusions."""

    def __init__(
        self,
        search: TrackSearch,
        cache: MoodResultCache,
        *,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> None:
        self.search = search
        self.cache = cache
        self.limit = limit

    def tracks_for_mood(
        self,
        mood: Mood,
        intensity: Intensity | None = None,
        limit: int | None = None,
    ) -> list[Track]:
        """
        Return cached tracks for a mood, searching and caching on a miss.

        Search failures yield an empty list and leave the cache untouched.
        Raises ValueError for a limit below one.
        """
        limit = self._resolve_limit(limit)
        cached = self.cache.get_cached_tracks(mood)
        if cached is not None:
            logger.info("cache_hit", mood=mood.key, count=len(cached))
            return cached

        term = enhanced_search_term(mood, intensity)
        tracks = self._run_search(term, limit)
        if tracks is None:
            return []

        self.cache.cache_tracks(mood, tracks)
        return [
            track.with_liked(self.cache.is_liked(track.id, mood)) for track in tracks
        ]

    def tracks_for_fusion(
        self, fusion: MoodFusion, limit: int | None = None
    ) -> list[Track]:
        # Fusion results are not cached; cache entries belong to a single mood.
        limit = self._resolve_limit(limit)
        return self._run_search(fusion_search_term(fusion), limit) or []

    def recommend(self, text: str, limit: int | None = None) -> Recommendation:
        """Analyze text, preferring a fusion, and fetch tracks for the result."""
        fusion = infer_fusion(text)
        if fusion is not None:
            return Recommendation(
                fusion=fusion,
                search_term=fusion_search_term(fusion),
                tracks=self.tracks_for_fusion(fusion, limit),
            )

        mood, intensity = infer_mood(text)
        return Recommendation(
            mood=mood,
            intensity=intensity,
            search_term=enhanced_search_term(mood, intensity),
            tracks=self.tracks_for_mood(mood, intensity, limit),
        )

    def _resolve_limit(self, limit: int | None) -> int:
        if limit is None:
            return self.limit
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        return limit

    def _run_search(self, term: str, limit: int) -> list[Track] | None:
        try:
            tracks = self.search.search(term, limit)
        except SearchError as e:
            logger.error("search_failed", term=term, error=str(e))
            return None

        logger.info("search_completed", term=term, count=len(tracks))
        return tracks
