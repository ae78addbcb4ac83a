"""Enumerations shared by models, schemas and services."""

from enum import Enum


class StoryTheme(str, Enum):
    """Theme of a bedtime story."""

    COLORS_SHAPES = "colors_shapes"
    LOVE_BONDING = "love_bonding"
    NATURE_CALM = "nature_calm"
    SPIRITUAL_LIGHT = "spiritual_light"
    RHYTHM_SOUND = "rhythm_sound"
    FAMILY_LEGACY = "family_legacy"
    DISCIPLINE_VALUES = "discipline_values"
    SURPRISE = "surprise"


class StoryLength(str, Enum):
    """Target length tier of a story."""

    QUICK = "quick"
    SHORT = "short"
    STANDARD = "standard"
    LONG = "long"


class FaithPreference(str, Enum):
    """Tone of spiritual references in a story."""

    FAITH_BASED = "faith_based"
    SPIRITUAL = "spiritual"
    NON_RELIGIOUS = "non_religious"


class ChildStatus(str, Enum):
    """Whether the child has been born yet."""

    PRENATAL = "prenatal"
    BORN = "born"


class AgeGroup(str, Enum):
    """Developmental stage of a born child."""

    NEWBORN = "newborn"
    INFANT = "infant"
    TODDLER = "toddler"
    PRESCHOOL = "preschool"


class FontSize(str, Enum):
    """Reader font size preference."""

    NORMAL = "normal"
    LARGE = "large"


STORY_THEME_LABELS: dict[StoryTheme, str] = {
    StoryTheme.COLORS_SHAPES: "Colors & Shapes",
    StoryTheme.LOVE_BONDING: "Love & Bonding",
    StoryTheme.NATURE_CALM: "Nature & Calm",
    StoryTheme.SPIRITUAL_LIGHT: "Spiritual & Light",
    StoryTheme.RHYTHM_SOUND: "Rhythm & Sound",
    StoryTheme.FAMILY_LEGACY: "Family Legacy",
    StoryTheme.DISCIPLINE_VALUES: "Discipline & Values",
    StoryTheme.SURPRISE: "Surprise",
}

# (min, max) target word counts per length tier
STORY_LENGTH_WORD_COUNTS: dict[StoryLength, tuple[int, int]] = {
    StoryLength.QUICK: (150, 200),
    StoryLength.SHORT: (200, 300),
    StoryLength.STANDARD: (350, 450),
    StoryLength.LONG: (500, 600),
}
