"""Attentional cue models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class CueType(str, Enum):
    """The closed set of attentional cue categories."""

    PRIMACY = "primacy"
    CAUSAL = "causal"
    FOCALIZATION = "focalization"
    ABSENCE = "absence"
    PROLEPSIS = "prolepsis"


class Cue(BaseModel):
    """A keyword hit marking a candidate attentional cue in a sentence."""

    model_config = ConfigDict(frozen=True)

    type: CueType
    keyword: str
    sentence_id: int
    chapter: int | None = None
    verse: int | None = None
    text: str
    description: str
