"""Data models for the annotated corpus and the narrative layer built on it."""

from narrative_cues.models.corpus import Token, Sentence
from narrative_cues.models.cues import Cue, CueType
from narrative_cues.models.entities import Character, Occurrence
from narrative_cues.models.relationships import EdgeType, RelationshipEdge

__all__ = [
    "Token",
    "Sentence",
    "Cue",
    "CueType",
    "Character",
    "Occurrence",
    "EdgeType",
    "RelationshipEdge",
]
