"""Derived analyses: character relationships, verse intensity, exports."""

from .export import build_export, write_cues_csv, write_json
from .intensity import IntensityScorer, IntensityWeights, VerseIntensity, narrative_intensity
from .relationships import ChapterNetwork, CharacterNode, RelationshipBuilder, character_importance

__all__ = [
    "build_export",
    "write_cues_csv",
    "write_json",
    "IntensityScorer",
    "IntensityWeights",
    "VerseIntensity",
    "narrative_intensity",
    "ChapterNetwork",
    "CharacterNode",
    "RelationshipBuilder",
    "character_importance",
]
