"""
Mood inference for the MoodMelody service.

Maps free text to a mood (and optional intensity), detects two-mood fusions
and derives catalog search phrases. Everything here is pure: the same input
always produces the same output.
"""

import string

from .models import (
    CustomMood,
    FusionIntensity,
    Intensity,
    Mood,
    MoodCategory,
    MoodFusion,
    NamedMood,
)
from .vocabulary import (
    BASE_PHRASES,
    ENHANCED_PHRASES,
    FUSION_CONNECTORS,
    FUSION_INTENSITY_WORDS,
    FUSION_PHRASES,
    GENRE_TERMS,
    MOOD_KEYWORDS,
)

# Shorter words ("i", "a", "so") would partially match nearly every keyword.
MIN_WORD_LENGTH = 3


# MARK: - Inference


def infer_mood(text: str) -> tuple[Mood, Intensity | None]:
    """
    Classify free text into a mood and an optional intensity.

    Genre mentions win over emotional words. When nothing matches, the
    original text is returned verbatim as a custom mood.

    Args:
        text: Arbitrary user text, possibly empty

    Returns:
        The detected mood and intensity (None when no intensity word is present)
    """
    lowered = text.lower()
    intensity = detect_intensity(lowered)

    for term in GENRE_TERMS:
        if term in lowered:
            return CustomMood(text=f"{term} music"), intensity

    scores = score_moods(lowered)
    best_category = None
    best_score = 0
    for category in MoodCategory:
        if scores[category] > best_score:
            best_category = category
            best_score = scores[category]

    if best_category is None:
        return CustomMood(text=text), intensity
    return NamedMood(category=best_category), intensity


def detect_intensity(text: str) -> Intensity | None:
    """Return the first intensity whose token occurs in the text."""
    lowered = text.lower()
    for intensity in Intensity:
        if intensity.value in lowered:
            return intensity
    return None


def score_moods(text: str) -> dict[MoodCategory, int]:
    """
    Count, per mood, the words that partially match one of its keywords.

    A word matches when it is contained in a keyword or contains one.
    """
    words = [word.strip(string.punctuation) for word in text.lower().split()]
    words = [word for word in words if len(word) >= MIN_WORD_LENGTH]

    scores = dict.fromkeys(MoodCategory, 0)
    for word in words:
        for category, keywords in MOOD_KEYWORDS.items():
            if any(word in keyword or keyword in word for keyword in keywords):
                scores[category] += 1
    return scores


def infer_fusion(text: str) -> MoodFusion | None:
    """
    Detect a blend of two different named moods joined by a connector word.

    Returns None whenever no valid fusion can be built; this is an expected
    outcome, not an error.
    """
    lowered = text.lower()

    connector = next((word for word in FUSION_CONNECTORS if word in lowered), None)
    if connector is None:
        return None

    parts = [part.strip() for part in lowered.split(connector)]
    parts = [part for part in parts if part]
    if len(parts) < 2:
        return None

    first, _ = infer_mood(parts[0])
    second, _ = infer_mood(parts[1])

    if first == second:
        return None
    if isinstance(first, CustomMood) or isinstance(second, CustomMood):
        return None

    return MoodFusion(
        primary=first, secondary=second, intensity=detect_fusion_intensity(lowered)
    )


def detect_fusion_intensity(text: str) -> FusionIntensity:
    lowered = text.lower()
    for intensity, words in FUSION_INTENSITY_WORDS:
        if any(word in lowered for word in words):
            return intensity
    return FusionIntensity.MODERATE


# MARK: - Search Terms


def base_phrase(mood: Mood) -> str:
    if isinstance(mood, CustomMood):
        return mood.text
    return BASE_PHRASES[mood.category]


def search_term(mood: Mood, intensity: Intensity | None = None) -> str:
    """Base search phrase for a mood, prefixed by the intensity if any."""
    return _join(intensity.value if intensity else "", base_phrase(mood))


def enhanced_search_term(mood: Mood, intensity: Intensity | None = None) -> str:
    """
    Hand-authored phrase for a named mood and intensity.

    Falls back to the base phrase without an intensity; custom moods get the
    intensity prefixed onto their text.
    """
    if intensity is None:
        return base_phrase(mood)
    if isinstance(mood, CustomMood):
        return _join(intensity.value, mood.text)
    return ENHANCED_PHRASES[mood.category][intensity]


def fusion_search_term(fusion: MoodFusion) -> str:
    """Search phrase for a fusion, preferring the curated pair phrases."""
    modifier = fusion.intensity.modifier
    primary = fusion.primary
    secondary = fusion.secondary

    if secondary is None:
        return _join(modifier, base_phrase(primary))

    curated = FUSION_PHRASES.get(frozenset({primary.category, secondary.category}))
    if curated:
        return _join(modifier, curated)

    return _join(modifier, f"{base_phrase(primary)} with {base_phrase(secondary)}")


def parse_mood(value: str) -> Mood:
    """
    Rebuild a mood from its cache key or a category name.

    Category names are matched case-insensitively; anything else is a
    custom mood (an optional "custom:" prefix is stripped).
    """
    try:
        return NamedMood(category=MoodCategory(value.strip().lower()))
    except ValueError:
        pass
    if value.startswith("custom:"):
        value = value[len("custom:") :]
    return CustomMood(text=value)


def _join(*parts: str) -> str:
    return " ".join(part for part in parts if part).strip()
