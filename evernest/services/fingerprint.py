"""Config fingerprinting for duplicate story detection.

The hash must stay bit-compatible with fingerprints already stored in the
``stories.config_hash`` column: same keys, same casing rules, same compact
sorted-key JSON, SHA-256 truncated to 32 hex characters.
"""

import hashlib
import json

from evernest.schemas.story import StoryGenerationConfig

CONFIG_HASH_LENGTH = 32


def normalize_config(config: StoryGenerationConfig) -> dict[str, str]:
    """Reduce a config to the case- and whitespace-insensitive fields that identify it.

    ``due_date``, ``child_status`` and ``age_group`` are left out on purpose:
    two requests that differ only in those are treated as the same story.
    """
    return {
        "theme": config.theme.value.lower(),
        "length": config.length.value.lower(),
        "faith": config.faith_preference.value.lower(),
        "parent1": config.parent_one_name.strip().lower(),
        "parent2": (config.parent_two_name or "").strip().lower(),
        "baby": (config.baby_nickname or "").strip().lower(),
    }


def compute_config_hash(config: StoryGenerationConfig) -> str:
    """Return the 32-character lowercase hex fingerprint of a config."""
    normalized = normalize_config(config)
    payload = json.dumps(normalized, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:CONFIG_HASH_LENGTH]
