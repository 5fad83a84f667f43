"""
FastAPI server for the MoodMelody service.

This module implements the HTTP API for mood inference, cache-first track
lookup, like management and feedback recording. All collaborators are
injected through create_app so tests can supply their own.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from . import __version__, config
from .cache import MoodResultCache
from .feedback import FeedbackInsights, FeedbackRecorder
from .inference import (
    enhanced_search_term,
    fusion_search_term,
    infer_fusion,
    infer_mood,
    parse_mood,
)
from .logging_config import configure_logging
from .models import (
    FeedbackAction,
    Intensity,
    Mood,
    MoodFusion,
    Track,
    UserFeedback,
)
from .search import MoodSearchService, OfflineTrackSearch, Recommendation
from .store import FileKeyValueStore, InMemoryKeyValueStore, KeyValueStore

logger = structlog.get_logger(__name__)


# API Request/Response Schemas
class TextRequest(BaseModel):
    """Payload carrying free text describing a mood."""

    text: str = Field(..., description="How the user feels, in their own words")
    limit: int | None = Field(None, ge=1, le=50, description="Maximum tracks")


class InferenceResponse(BaseModel):
    mood: Mood
    intensity: Intensity | None = None
    fusion: MoodFusion | None = None
    search_term: str


class TracksResponse(BaseModel):
    mood: Mood
    tracks: list[Track]


class LikeResponse(BaseModel):
    track_id: str
    liked: bool


class FeedbackRequest(BaseModel):
    original_input: str
    detected_mood: str = Field(..., description="Mood key or category name")
    corrected_mood: str | None = None
    user_action: FeedbackAction
    session_id: str


def create_app(
    cache: MoodResultCache,
    search_service: MoodSearchService,
    feedback: FeedbackRecorder,
) -> FastAPI:
    """
    Create a FastAPI application with the given collaborators.

    Args:
        cache: Result cache used for like management and cache control
        search_service: Cache-first search flow used for track lookups
        feedback: Recorder for user feedback events

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("service_starting", version=__version__)
        yield
        logger.info("service_stopped")

    app = FastAPI(
        title="MoodMelody",
        description="Mood inference and mood-based track discovery",
        version=__version__,
        lifespan=lifespan,
    )

    @app.get("/")
    async def root() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "moodmelody"}

    @app.post("/mood/infer")
    async def infer(request: TextRequest) -> InferenceResponse:
        """
        Infer the mood, intensity and fusion for free text.

        The search term is the fusion's phrase when a fusion is detected,
        otherwise the single mood's phrase.
        """
        mood, intensity = infer_mood(request.text)
        fusion = infer_fusion(request.text)
        term = (
            fusion_search_term(fusion)
            if fusion is not None
            else enhanced_search_term(mood, intensity)
        )
        return InferenceResponse(
            mood=mood, intensity=intensity, fusion=fusion, search_term=term
        )

    # Handlers below use the blocking cache and store, so they are plain
    # functions and run in the threadpool.
    @app.post("/mood/recommend")
    def recommend(request: TextRequest) -> Recommendation:
        """Infer a mood from free text and return matching tracks."""
        return search_service.recommend(request.text, request.limit)

    @app.get("/moods/{mood:path}/tracks")
    def get_tracks(
        mood: str,
        intensity: Intensity | None = None,
        limit: int | None = Query(None, ge=1, le=50),
    ) -> TracksResponse:
        """
        Get tracks for a mood, served from the cache while it is fresh.

        Args:
            mood: Category name or custom mood key ("custom:<text>"); the
                text may contain slashes
            intensity: Optional intensity used to refine a fresh search
            limit: Maximum number of tracks to search for
        """
        parsed = parse_mood(mood)
        tracks = search_service.tracks_for_mood(parsed, intensity, limit)
        return TracksResponse(mood=parsed, tracks=tracks)

    @app.delete("/moods/{mood:path}/cache")
    def clear_cache(mood: str) -> dict[str, str]:
        parsed = parse_mood(mood)
        cache.clear_cache(parsed)
        return {"status": "cleared", "mood": parsed.key}

    @app.post("/moods/{mood:path}/likes/{track_id}")
    def toggle_like(mood: str, track_id: str) -> LikeResponse:
        """Flip the liked state of a track for a mood."""
        parsed = parse_mood(mood)
        cache.toggle_like(track_id, parsed)
        return LikeResponse(track_id=track_id, liked=cache.is_liked(track_id, parsed))

    @app.get("/moods/{mood:path}/likes")
    def liked_tracks(mood: str) -> TracksResponse:
        parsed = parse_mood(mood)
        return TracksResponse(mood=parsed, tracks=cache.get_liked_tracks(parsed))

    @app.post("/feedback")
    def record_feedback(request: FeedbackRequest) -> dict[str, str]:
        """Record a user reaction to a detected mood."""
        detected = parse_mood(request.detected_mood)
        corrected = (
            parse_mood(request.corrected_mood)
            if request.corrected_mood is not None
            else None
        )
        recorded = feedback.record(
            UserFeedback(
                original_input=request.original_input,
                detected_mood=detected,
                corrected_mood=corrected,
                user_action=request.user_action,
                session_id=request.session_id,
            )
        )
        if not recorded:
            raise HTTPException(status_code=500, detail="Failed to record feedback")
        return {"status": "recorded"}

    @app.get("/feedback/insights")
    def feedback_insights() -> FeedbackInsights:
        return feedback.insights()

    return app


def build_store() -> KeyValueStore:
    """Build the configured store: a JSON file when a path is set."""
    path = config.store_path()
    if path:
        return FileKeyValueStore(path)
    return InMemoryKeyValueStore()


def build_app(store: KeyValueStore | None = None) -> FastAPI:
    """Wire the default collaborators around a store."""
    store = store if store is not None else build_store()
    cache = MoodResultCache(store)
    search_service = MoodSearchService(OfflineTrackSearch(), cache)
    return create_app(cache, search_service, FeedbackRecorder(store))


def main() -> None:
    """Main entry point for the server."""
    import uvicorn

    configure_logging(config.log_level())
    uvicorn.run(
        "moodmelody.server:build_app",
        factory=True,
        host=config.DEFAULT_HOST,
        port=config.DEFAULT_PORT,
        log_level=config.log_level().lower(),
        log_config=None,
    )


if __name__ == "__main__":
    main()
