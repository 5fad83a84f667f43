"""
Display attributes for moods.

Kept apart from the models so inference and caching stay free of UI concerns.
"""

from .models import CustomMood, Mood, MoodCategory, MoodFusion

CUSTOM_GLYPH = "🎵"
CUSTOM_COLOR = "purple"

GLYPHS: dict[MoodCategory, str] = {
    MoodCategory.HAPPY: "😊",
    MoodCategory.SAD: "😢",
    MoodCategory.ANGRY: "😡",
    MoodCategory.FRUSTRATED: "😤",
    MoodCategory.ENERGETIC: "⚡",
    MoodCategory.CALM: "😌",
    MoodCategory.NOSTALGIC: "📻",
    MoodCategory.ROMANTIC: "💕",
    MoodCategory.MELANCHOLIC: "🌧️",
    MoodCategory.EXCITED: "🤩",
}

COLORS: dict[MoodCategory, str] = {
    MoodCategory.HAPPY: "yellow",
    MoodCategory.SAD: "blue",
    MoodCategory.ANGRY: "red",
    MoodCategory.FRUSTRATED: "orange",
    MoodCategory.ENERGETIC: "green",
    MoodCategory.CALM: "mint",
    MoodCategory.NOSTALGIC: "brown",
    MoodCategory.ROMANTIC: "pink",
    MoodCategory.MELANCHOLIC: "indigo",
    MoodCategory.EXCITED: "teal",
}


def glyph(mood: Mood | MoodFusion) -> str:
    if isinstance(mood, MoodFusion):
        if mood.secondary is None:
            return glyph(mood.primary)
        return glyph(mood.primary) + glyph(mood.secondary)
    if isinstance(mood, CustomMood):
        return CUSTOM_GLYPH
    return GLYPHS[mood.category]


def color(mood: Mood | MoodFusion) -> str:
    # Fusions take the primary mood's color.
    if isinstance(mood, MoodFusion):
        return color(mood.primary)
    if isinstance(mood, CustomMood):
        return CUSTOM_COLOR
    return COLORS[mood.category]


def display_name(mood: Mood | MoodFusion) -> str:
    if isinstance(mood, MoodFusion):
        return mood.display_name
    if isinstance(mood, CustomMood):
        return mood.text
    return mood.category.value.capitalize()
