"""Character resolution and cue detection over parsed sentences."""

from .characters import CharacterResolver
from .cues import CUE_PATTERNS, CueDetector, CuePattern, cue_weight
from .names import (
    NAME_VARIANTS,
    SPIRIT,
    canonicalize,
    find_characters,
    mentions_character,
    normalize_form,
)

__all__ = [
    "CharacterResolver",
    "CUE_PATTERNS",
    "CueDetector",
    "CuePattern",
    "cue_weight",
    "NAME_VARIANTS",
    "SPIRIT",
    "canonicalize",
    "find_characters",
    "mentions_character",
    "normalize_form",
]
