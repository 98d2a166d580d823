"""Relationship models for the character network."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class EdgeType(str, Enum):
    """Evidence behind a relationship edge."""

    CO_OCCURRENCE = "co-occurrence"
    CAUSAL = "causal"


class RelationshipEdge(BaseModel):
    """A derived edge between two characters within one chapter.

    Co-occurrence edges are unordered (source sorts before target);
    causal edges point from the credited character to the chapter's
    primary agent.
    """

    model_config = ConfigDict(frozen=True)

    source: str
    target: str
    strength: int
    verses: tuple[int, ...] = ()
    type: EdgeType = EdgeType.CO_OCCURRENCE
    cue_sentence_ids: tuple[int, ...] = ()

    def pair(self) -> frozenset[str]:
        """The unordered endpoint pair."""
        return frozenset((self.source, self.target))

    def to_triple(self) -> str:
        """Return a human-readable triple."""
        arrow = "->" if self.type == EdgeType.CAUSAL else "--"
        return f"({self.source})-[{self.type.value}:{self.strength}]{arrow}({self.target})"
