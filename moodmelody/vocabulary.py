"""
Static word and phrase tables used by mood inference and search-term
derivation.

Table order is significant wherever a "first match wins" scan is applied.
"""

from .models import FusionIntensity, Intensity, MoodCategory

MOOD_KEYWORDS: dict[MoodCategory, tuple[str, ...]] = {
    MoodCategory.HAPPY: (
        "happy",
        "joy",
        "joyful",
        "cheerful",
        "glad",
        "delighted",
        "great",
        "wonderful",
        "sunny",
        "smiling",
        "thankful",
        "content",
        "pleased",
    ),
    MoodCategory.SAD: (
        "sad",
        "down",
        "depressed",
        "crying",
        "tears",
        "heartbroken",
        "lonely",
        "upset",
        "gloomy",
        "miserable",
        "hurt",
    ),
    MoodCategory.ANGRY: (
        "angry",
        "mad",
        "furious",
        "rage",
        "livid",
        "hate",
        "outraged",
        "fuming",
        "pissed",
    ),
    MoodCategory.FRUSTRATED: (
        "frustrated",
        "frustration",
        "annoyed",
        "irritated",
        "stuck",
        "stressed",
        "overwhelmed",
        "fed up",
        "impatient",
        "bothered",
    ),
    MoodCategory.ENERGETIC: (
        "energetic",
        "energized",
        "energy",
        "active",
        "workout",
        "gym",
        "running",
        "motivated",
        "strong",
        "hyper",
    ),
    MoodCategory.CALM: (
        "calm",
        "peaceful",
        "relaxed",
        "relaxing",
        "serene",
        "tranquil",
        "quiet",
        "mellow",
        "soothing",
        "zen",
        "chill",
    ),
    MoodCategory.NOSTALGIC: (
        "nostalgic",
        "nostalgia",
        "memories",
        "remember",
        "childhood",
        "throwback",
        "old times",
        "reminiscing",
        "retro",
    ),
    MoodCategory.ROMANTIC: (
        "romantic",
        "romance",
        "love",
        "loving",
        "crush",
        "adore",
        "darling",
        "passion",
        "intimate",
        "affection",
    ),
    MoodCategory.MELANCHOLIC: (
        "melancholic",
        "melancholy",
        "wistful",
        "bittersweet",
        "pensive",
        "somber",
        "longing",
        "reflective",
        "introspective",
    ),
    MoodCategory.EXCITED: (
        "excited",
        "exciting",
        "thrilled",
        "pumped",
        "hyped",
        "stoked",
        "eager",
        "ecstatic",
        "can't wait",
        "amazing",
    ),
}

BASE_PHRASES: dict[MoodCategory, str] = {
    MoodCategory.HAPPY: "happy upbeat mood music",
    MoodCategory.SAD: "sad melancholy mood music",
    MoodCategory.ANGRY: "angry intense mood music",
    MoodCategory.FRUSTRATED: "frustrated alternative mood music",
    MoodCategory.ENERGETIC: "energetic high energy workout music",
    MoodCategory.CALM: "calm relaxing peaceful music",
    MoodCategory.NOSTALGIC: "nostalgic throwback classic hits",
    MoodCategory.ROMANTIC: "romantic love songs",
    MoodCategory.MELANCHOLIC: "melancholic introspective reflective music",
    MoodCategory.EXCITED: "excited party dance music",
}

# Checked in order, before emotional keywords.
GENRE_TERMS: tuple[str, ...] = (
    "jazz",
    "acoustic",
    "lofi",
    "lo-fi",
    "classical",
    "blues",
    "ambient",
    "piano",
    "orchestral",
    "electronic",
    "hip hop",
    "reggae",
    "country",
    "metal",
    "folk",
    "indie",
    "rock",
)

FUSION_CONNECTORS: tuple[str, ...] = (
    "but",
    "and",
    "with",
    "while",
    "yet",
    "however",
    "though",
    "although",
)

STRONG_WORDS: tuple[str, ...] = ("very", "really", "extremely")
SUBTLE_WORDS: tuple[str, ...] = ("slightly", "kind of", "a bit")

FUSION_PHRASES: dict[frozenset[MoodCategory], str] = {
    frozenset({MoodCategory.CALM, MoodCategory.ENERGETIC}): "chill but energetic music",
    frozenset({MoodCategory.HAPPY, MoodCategory.SAD}): "bittersweet uplifting music",
    frozenset(
        {MoodCategory.ROMANTIC, MoodCategory.NOSTALGIC}
    ): "romantic nostalgic love songs",
    frozenset({MoodCategory.EXCITED, MoodCategory.CALM}): "excited but peaceful music",
    frozenset({MoodCategory.ANGRY, MoodCategory.CALM}): "intense but controlled music",
    frozenset(
        {MoodCategory.ENERGETIC, MoodCategory.MELANCHOLIC}
    ): "energetic but introspective music",
    frozenset(
        {MoodCategory.FRUSTRATED, MoodCategory.CALM}
    ): "frustrated but soothing music",
}

ENHANCED_PHRASES: dict[MoodCategory, dict[Intensity, str]] = {
    MoodCategory.HAPPY: {
        Intensity.CHILL: "chill feel good acoustic pop",
        Intensity.INTENSE: "euphoric high energy happy anthems",
        Intensity.GENTLE: "gentle sunny morning songs",
        Intensity.UPBEAT: "upbeat happy pop hits",
        Intensity.DEEP: "soulful uplifting feel good music",
        Intensity.SOFT: "soft cheerful indie pop",
        Intensity.POWERFUL: "powerful feel good anthems",
        Intensity.DREAMY: "dreamy sunshine pop",
        Intensity.DARK: "happy songs with dark lyrics",
        Intensity.BRIGHT: "bright summer happy hits",
    },
    MoodCategory.SAD: {
        Intensity.CHILL: "chill sad lofi beats",
        Intensity.INTENSE: "intense heartbreak ballads",
        Intensity.GENTLE: "gentle sad acoustic songs",
        Intensity.UPBEAT: "sad lyrics upbeat melody",
        Intensity.DEEP: "deep emotional sad songs",
        Intensity.SOFT: "soft sad piano ballads",
        Intensity.POWERFUL: "powerful emotional breakup songs",
        Intensity.DREAMY: "dreamy sad indie songs",
        Intensity.DARK: "dark sad alternative music",
        Intensity.BRIGHT: "hopeful sad songs",
    },
    MoodCategory.ANGRY: {
        Intensity.CHILL: "moody chill alternative rock",
        Intensity.INTENSE: "intense heavy metal rage",
        Intensity.GENTLE: "mellow angry indie rock",
        Intensity.UPBEAT: "angry upbeat punk rock",
        Intensity.DEEP: "deep aggressive hip hop",
        Intensity.SOFT: "soft grunge songs",
        Intensity.POWERFUL: "powerful aggressive rock anthems",
        Intensity.DREAMY: "dreamy shoegaze noise",
        Intensity.DARK: "dark industrial metal",
        Intensity.BRIGHT: "energetic angry pop punk",
    },
    MoodCategory.FRUSTRATED: {
        Intensity.CHILL: "chill songs to unwind stress",
        Intensity.INTENSE: "intense nu metal frustration",
        Intensity.GENTLE: "gentle calming songs for stress",
        Intensity.UPBEAT: "upbeat songs to shake off frustration",
        Intensity.DEEP: "deep alternative rock frustration",
        Intensity.SOFT: "soft alternative ballads",
        Intensity.POWERFUL: "powerful cathartic rock",
        Intensity.DREAMY: "dreamy alternative escape music",
        Intensity.DARK: "dark alternative metal",
        Intensity.BRIGHT: "bright emo pop punk",
    },
    MoodCategory.ENERGETIC: {
        Intensity.CHILL: "chill upbeat electronic",
        Intensity.INTENSE: "intense workout edm",
        Intensity.GENTLE: "light energetic indie pop",
        Intensity.UPBEAT: "upbeat dance workout hits",
        Intensity.DEEP: "deep house energy",
        Intensity.SOFT: "soft energetic acoustic",
        Intensity.POWERFUL: "powerful pump up anthems",
        Intensity.DREAMY: "dreamy synthwave drive",
        Intensity.DARK: "dark techno energy",
        Intensity.BRIGHT: "bright energetic pop",
    },
    MoodCategory.CALM: {
        Intensity.CHILL: "chill ambient relaxation",
        Intensity.INTENSE: "deep focus ambient soundscapes",
        Intensity.GENTLE: "gentle calming piano",
        Intensity.UPBEAT: "relaxed upbeat acoustic",
        Intensity.DEEP: "deep meditation music",
        Intensity.SOFT: "soft peaceful instrumental",
        Intensity.POWERFUL: "epic calm orchestral music",
        Intensity.DREAMY: "dreamy ambient chillout",
        Intensity.DARK: "dark ambient drone",
        Intensity.BRIGHT: "bright peaceful morning music",
    },
    MoodCategory.NOSTALGIC: {
        Intensity.CHILL: "chill retro classics",
        Intensity.INTENSE: "classic rock anthems",
        Intensity.GENTLE: "gentle oldies love songs",
        Intensity.UPBEAT: "upbeat 80s throwback hits",
        Intensity.DEEP: "deep cuts from the 70s",
        Intensity.SOFT: "soft rock classics",
        Intensity.POWERFUL: "powerful 90s anthems",
        Intensity.DREAMY: "dreamy vintage pop",
        Intensity.DARK: "dark 80s new wave",
        Intensity.BRIGHT: "bright 60s pop classics",
    },
    MoodCategory.ROMANTIC: {
        Intensity.CHILL: "chill r&b love songs",
        Intensity.INTENSE: "passionate love ballads",
        Intensity.GENTLE: "gentle romantic acoustic",
        Intensity.UPBEAT: "upbeat love songs",
        Intensity.DEEP: "deep soulful love songs",
        Intensity.SOFT: "soft romantic ballads",
        Intensity.POWERFUL: "powerful love anthems",
        Intensity.DREAMY: "dreamy romantic indie",
        Intensity.DARK: "dark romantic alternative",
        Intensity.BRIGHT: "bright happy love songs",
    },
    MoodCategory.MELANCHOLIC: {
        Intensity.CHILL: "chill melancholic lofi",
        Intensity.INTENSE: "intense melancholic post rock",
        Intensity.GENTLE: "gentle melancholic folk",
        Intensity.UPBEAT: "melancholic indie pop",
        Intensity.DEEP: "deep introspective ballads",
        Intensity.SOFT: "soft melancholic piano",
        Intensity.POWERFUL: "powerful melancholic anthems",
        Intensity.DREAMY: "dreamy melancholic dream pop",
        Intensity.DARK: "dark melancholic gothic rock",
        Intensity.BRIGHT: "bittersweet hopeful indie",
    },
    MoodCategory.EXCITED: {
        Intensity.CHILL: "chill party vibes",
        Intensity.INTENSE: "intense festival edm",
        Intensity.GENTLE: "feel good indie dance",
        Intensity.UPBEAT: "upbeat party anthems",
        Intensity.DEEP: "deep house party",
        Intensity.SOFT: "soft uplifting pop",
        Intensity.POWERFUL: "powerful stadium anthems",
        Intensity.DREAMY: "dreamy euphoric electronic",
        Intensity.DARK: "dark club bangers",
        Intensity.BRIGHT: "bright celebration hits",
    },
}

FUSION_INTENSITY_WORDS: tuple[tuple[FusionIntensity, tuple[str, ...]], ...] = (
    (FusionIntensity.STRONG, STRONG_WORDS),
    (FusionIntensity.SUBTLE, SUBTLE_WORDS),
)
