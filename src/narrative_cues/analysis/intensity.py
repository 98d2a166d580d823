"""Per-verse narrative intensity.

The score is a display heuristic for comparing the salience of verses
within a chapter. It has no statistical or narratological validity; the
weights are fixed by hand.

    intensity = min(characters / 5, 1) * 0.3
              + sum(cue weight) * 0.4
              + min(len(text) / 100, 1) * 0.2
              + 0.3 if the verse names the Holy Spirit
    clamped to [0, 1]
"""

from dataclasses import dataclass
from typing import Iterable

from ..corpus.state import CorpusState
from ..extract.cues import cue_weight
from ..extract.names import SPIRIT, mentions_character
from ..models.cues import Cue


@dataclass(frozen=True)
class IntensityWeights:
    """Caps and weights of the intensity terms."""

    character_cap: int = 5
    character_weight: float = 0.3
    cue_weight: float = 0.4
    length_cap: int = 100
    length_weight: float = 0.2
    spirit_boost: float = 0.3


DEFAULT_WEIGHTS = IntensityWeights()


@dataclass(frozen=True)
class VerseIntensity:
    """Intensity and its inputs for one verse."""

    chapter: int
    verse: int
    text: str
    characters: tuple[str, ...]
    cues: tuple[Cue, ...]
    intensity: float
    sentence_count: int

    def to_dict(self) -> dict:
        return {
            "chapter": self.chapter,
            "verse": self.verse,
            "text": self.text,
            "characters": list(self.characters),
            "cue_types": [cue.type.value for cue in self.cues],
            "intensity": self.intensity,
            "sentence_count": self.sentence_count,
        }


def narrative_intensity(
    character_count: int,
    cues: Iterable[Cue],
    text: str,
    weights: IntensityWeights = DEFAULT_WEIGHTS,
) -> float:
    """Combine the four terms and clamp the result to [0, 1]."""
    intensity = min(character_count / weights.character_cap, 1) * weights.character_weight

    for cue in cues:
        intensity += cue_weight(cue.type) * weights.cue_weight

    intensity += min(len(text) / weights.length_cap, 1) * weights.length_weight

    if mentions_character(text, SPIRIT):
        intensity += weights.spirit_boost

    return max(0.0, min(intensity, 1.0))


class IntensityScorer:
    """Scores verses of a parsed corpus."""

    def __init__(self, state: CorpusState, weights: IntensityWeights | None = None):
        self.state = state
        self.weights = weights or DEFAULT_WEIGHTS

    def score_verse(self, chapter: int, verse: int) -> VerseIntensity | None:
        """Score one verse; None if the verse has no sentences."""
        sentences = self.state.index.sentences(chapter, verse)
        if not sentences:
            return None

        text = " ".join(s.surface_text for s in sentences)
        sentence_ids = {s.id for s in sentences}
        characters = self.state.characters_in(sentence_ids)
        cues = self.state.get_cues_in_verse(chapter, verse)

        return VerseIntensity(
            chapter=chapter,
            verse=verse,
            text=text,
            characters=tuple(characters),
            cues=tuple(cues),
            intensity=narrative_intensity(len(characters), cues, text, self.weights),
            sentence_count=len(sentences),
        )

    def score_chapter(self, chapter: int) -> list[VerseIntensity]:
        """Score every verse of a chapter, in verse order."""
        scores = []
        for verse in self.state.index.verses(chapter):
            scored = self.score_verse(chapter, verse)
            if scored is not None:
                scores.append(scored)
        return scores
