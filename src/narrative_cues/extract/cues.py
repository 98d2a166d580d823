"""Rule-based attentional cue detection.

Each category is declared once in CUE_PATTERNS together with its keywords,
description and intensity weight. Detection is deliberately high-recall:
every keyword contained in a sentence yields a cue, with no
deduplication and no confidence. Downstream consumers treat cues as
candidate evidence, not ground truth.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from ..models.corpus import Sentence
from ..models.cues import Cue, CueType
from .names import normalize_form

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CuePattern:
    """Keyword evidence and scoring weight for one cue category."""

    keywords: tuple[str, ...]
    description: str
    weight: float


CUE_PATTERNS: dict[CueType, CuePattern] = {
    CueType.PRIMACY: CuePattern(
        keywords=("αρχη", "αρχομαι", "πρωτος"),
        description="Primacy effect - establishing importance",
        weight=0.8,
    ),
    CueType.CAUSAL: CuePattern(
        keywords=("δια", "εκ", "απο", "κατα", "εν"),
        description="Causal implication - attribution",
        weight=0.9,
    ),
    CueType.FOCALIZATION: CuePattern(
        keywords=("ειδον", "ειδεν", "οραω", "βλεπω"),
        description="Focalization shift - perspective change",
        weight=0.7,
    ),
    CueType.ABSENCE: CuePattern(
        keywords=("ου", "μη", "ουκ", "μηδεις"),
        description="Conspicuous absence - negation",
        weight=0.6,
    ),
    CueType.PROLEPSIS: CuePattern(
        keywords=("μελλω", "εσομαι", "ηξει", "ερχομαι"),
        description="Prolepsis - forward reference",
        weight=0.5,
    ),
}


def cue_weight(cue_type: CueType) -> float:
    """Intensity weight of a cue category."""
    return CUE_PATTERNS[cue_type].weight


class CueDetector:
    """Scans sentences for keyword evidence of each cue category."""

    def __init__(self, patterns: dict[CueType, CuePattern] | None = None):
        self.patterns = patterns or CUE_PATTERNS
        self._normalized = {
            cue_type: [(keyword, normalize_form(keyword)) for keyword in pattern.keywords]
            for cue_type, pattern in self.patterns.items()
        }

    def detect_sentence(self, sentence: Sentence) -> list[Cue]:
        """Emit one cue per (category, keyword) contained in the sentence."""
        text = sentence.surface_text
        haystack = normalize_form(text)

        cues = []
        for cue_type, keywords in self._normalized.items():
            description = self.patterns[cue_type].description
            for keyword, key in keywords:
                if key in haystack:
                    cues.append(
                        Cue(
                            type=cue_type,
                            keyword=keyword,
                            sentence_id=sentence.id,
                            chapter=sentence.chapter,
                            verse=sentence.verse,
                            text=text,
                            description=description,
                        )
                    )
        return cues

    def detect(self, sentences: Iterable[Sentence]) -> list[Cue]:
        """Detect cues across a corpus, in sentence order."""
        cues: list[Cue] = []
        for sentence in sentences:
            cues.extend(self.detect_sentence(sentence))

        logger.info("Detected %d cues", len(cues))
        return cues
