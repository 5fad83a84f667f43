"""
Shared data models for the MoodMelody service.

This module defines the core domain models used across multiple layers
of the application (inference, caching, search, API, CLI). All models are
frozen so they compare by value and can be used as dictionary keys.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MoodCategory(str, Enum):
    """Named emotional categories, in tie-break order."""

    HAPPY = "happy"
    SAD = "sad"
    ANGRY = "angry"
    FRUSTRATED = "frustrated"
    ENERGETIC = "energetic"
    CALM = "calm"
    NOSTALGIC = "nostalgic"
    ROMANTIC = "romantic"
    MELANCHOLIC = "melancholic"
    EXCITED = "excited"


class NamedMood(BaseModel):
    """A mood from the closed set of categories."""

    model_config = ConfigDict(frozen=True)

    type: Literal["named"] = "named"
    category: MoodCategory = Field(..., description="The emotional category")

    @property
    def key(self) -> str:
        return self.category.value

    def __str__(self) -> str:
        return self.category.value


class CustomMood(BaseModel):
    """A free-text mood, used for detected genres and unmatched input."""

    model_config = ConfigDict(frozen=True)

    type: Literal["custom"] = "custom"
    text: str = Field(..., description="Genre phrase or literal user text")

    @property
    def key(self) -> str:
        return f"custom:{self.text}"

    def __str__(self) -> str:
        return self.text


Mood = Annotated[NamedMood | CustomMood, Field(discriminator="type")]


class Intensity(str, Enum):
    """Search-phrase modifiers, in detection order."""

    CHILL = "chill"
    INTENSE = "intense"
    GENTLE = "gentle"
    UPBEAT = "upbeat"
    DEEP = "deep"
    SOFT = "soft"
    POWERFUL = "powerful"
    DREAMY = "dreamy"
    DARK = "dark"
    BRIGHT = "bright"


class FusionIntensity(str, Enum):
    """Coarse intensity attached to a mood fusion."""

    SUBTLE = "subtle"
    MODERATE = "moderate"
    STRONG = "strong"

    @property
    def modifier(self) -> str:
        return _FUSION_MODIFIERS[self]


_FUSION_MODIFIERS = {
    FusionIntensity.SUBTLE: "gentle",
    FusionIntensity.MODERATE: "",
    FusionIntensity.STRONG: "intense",
}


class MoodFusion(BaseModel):
    """A blend of two named moods."""

    model_config = ConfigDict(frozen=True)

    primary: Mood
    secondary: Mood | None = None
    intensity: FusionIntensity = FusionIntensity.MODERATE

    @model_validator(mode="after")
    def _check_moods(self) -> "MoodFusion":
        if isinstance(self.primary, CustomMood) or isinstance(
            self.secondary, CustomMood
        ):
            raise ValueError("fusion is only defined between named moods")
        if self.secondary is not None and self.secondary == self.primary:
            raise ValueError("fusion moods must differ")
        return self

    @property
    def display_name(self) -> str:
        primary = self.primary.category.value.capitalize()
        if self.secondary is None:
            return primary
        return f"{primary} + {self.secondary.category.value.capitalize()}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Track(BaseModel):
    """A playable song returned by a catalog search."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str
    artist: str
    artwork_url: str | None = None
    preview_url: str | None = None
    catalog_id: str | None = None
    is_liked: bool = False
    date_added: datetime = Field(default_factory=_utcnow)

    def with_liked(self, liked: bool) -> "Track":
        if liked == self.is_liked:
            return self
        return self.model_copy(update={"is_liked": liked})

    def toggle_like(self) -> "Track":
        return self.with_liked(not self.is_liked)


class FeedbackAction(str, Enum):
    MOOD_CORRECTED = "mood_corrected"
    SEARCH_AGAIN = "search_again"
    RESULTS_NOT_GOOD = "results_not_good"
    MOOD_ACCEPTED = "mood_accepted"


class UserFeedback(BaseModel):
    """A single user reaction to a detected mood."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    original_input: str
    detected_mood: Mood
    corrected_mood: Mood | None = None
    user_action: FeedbackAction
    timestamp: datetime = Field(default_factory=_utcnow)
    session_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
