"""Prompt construction for bedtime story generation.

``build_prompt`` is pure: the same config always renders the same prompt.
Fragments are emitted in a fixed order and joined with blank lines; a
fragment that does not apply to the config is skipped entirely.
"""

from evernest.models.enums import (
    STORY_LENGTH_WORD_COUNTS,
    STORY_THEME_LABELS,
    AgeGroup,
    ChildStatus,
    FaithPreference,
    StoryTheme,
)
from evernest.schemas.story import StoryGenerationConfig

PRENATAL_PERSONA = """You are a gentle, warm, and poetic prenatal storytelling companion.
Write a soothing bedtime story designed to be read aloud by parents to their unborn baby.
Weave imagery that bridges the warm, muffled world of the womb with the bright world waiting outside."""

BORN_PERSONA = """You are a gentle, warm, and poetic storyteller for a young baby.
Write a soothing bedtime story designed to be read aloud by parents to their little one as they drift off to sleep."""

AGE_GROUP_INSTRUCTIONS: dict[AgeGroup, str] = {
    AgeGroup.NEWBORN: (
        "The child is a newborn (0-3 months). Use high-contrast imagery such as black, white "
        "and bold red, a slow pace, and soft repetitive phrases that sound like a lullaby."
    ),
    AgeGroup.INFANT: (
        "The child is an infant (3-12 months). Name simple everyday objects, animals and "
        "body parts, and invite sensory moments like touching, hugging and listening."
    ),
    AgeGroup.TODDLER: (
        "The child is a toddler (1-3 years). Give the story a simple beginning, middle and "
        "end, use gentle repetition the child can anticipate, and speak to the child directly "
        "by name now and then."
    ),
    AgeGroup.PRESCHOOL: (
        "The child is a preschooler (3-5 years). Explore simple emotions, friendship and "
        "kindness, and let imagination lead the way with a small, cozy adventure."
    ),
}

TONE_INSTRUCTIONS: dict[FaithPreference, str] = {
    FaithPreference.FAITH_BASED: (
        "Include gentle references to God's love, blessings, or prayers suitable for a "
        "general faith perspective."
    ),
    FaithPreference.SPIRITUAL: (
        "Focus on universal connection, light, energy, and the miracle of life."
    ),
    FaithPreference.NON_RELIGIOUS: (
        "Focus solely on love, biology, nature, and emotional bonding without spiritual "
        "references."
    ),
}

SENSORY_INSTRUCTION = (
    "Fill the story with gentle sensory details: soft sounds, warm colors and simple shapes, "
    "and, where it fits, friendly animals or peaceful scenery."
)

SAFETY_AND_STYLE = """The story should be rhythmic, calming, and foster a deep sense of safety, curiosity, and love.
Avoid any scary elements, loud noises, or negative conflict.
Use simple, melodic language.
Ensure every sentence ends with proper punctuation and a space before the next sentence begins.
Do not add spaces before punctuation marks like periods, commas, or question marks.
Format the content with paragraph breaks for readability."""

OUTPUT_FORMAT = (
    'Return the result strictly as a JSON object with the keys: "title" and "content".'
)


def _is_born(config: StoryGenerationConfig) -> bool:
    return config.child_status == ChildStatus.BORN


def _persona(config: StoryGenerationConfig) -> str:
    if not _is_born(config):
        return PRENATAL_PERSONA
    if config.age_group:
        return f"{BORN_PERSONA}\n{AGE_GROUP_INSTRUCTIONS[config.age_group]}"
    return BORN_PERSONA


def _theme(config: StoryGenerationConfig) -> str:
    if config.theme == StoryTheme.SURPRISE:
        audience = "a young baby" if _is_born(config) else "a baby in the womb"
        return f"Choose a calming, random theme suitable for {audience}."
    return f"The theme of the story is: {STORY_THEME_LABELS[config.theme]}."


def _length(config: StoryGenerationConfig) -> str:
    low, high = STORY_LENGTH_WORD_COUNTS[config.length]
    return f"Keep the story between {low} and {high} words."


def _baby(config: StoryGenerationConfig) -> str:
    if config.baby_nickname:
        return f'The baby is affectionately called "{config.baby_nickname}".'
    return 'Refer to the baby as "little one" or "baby".'


def _parents(config: StoryGenerationConfig) -> str:
    if config.parent_one_name and config.parent_two_name:
        return (
            f"The parents reading this are named {config.parent_one_name} "
            f"and {config.parent_two_name}."
        )
    if config.parent_one_name:
        return f"The parent reading this is named {config.parent_one_name}."
    return ""


def _due_date(config: StoryGenerationConfig) -> str:
    if _is_born(config) or not config.due_date:
        return ""
    return f"The baby is expected around {config.due_date}."


def build_prompt(config: StoryGenerationConfig) -> str:
    """Render the generation prompt for a story config."""
    fragments = [
        _persona(config),
        _theme(config),
        SENSORY_INSTRUCTION,
        _length(config),
        TONE_INSTRUCTIONS[config.faith_preference],
        _baby(config),
        _parents(config),
        _due_date(config),
        SAFETY_AND_STYLE,
        OUTPUT_FORMAT,
    ]
    return "\n\n".join(fragment for fragment in fragments if fragment)
