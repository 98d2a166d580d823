"""The corpus parser and the frozen state it produces.

Usage:
    parser = CorpusParser()
    state = parser.load(Path("data/mark_complete.conllu"))
    summary = state.get_chapter_summary(1)

Each parse builds a fresh CorpusState; nothing is shared between parses,
and readers of a state never mutate it.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from ..config import Settings, get_settings
from ..extract.characters import CharacterResolver
from ..extract.cues import CueDetector
from ..ingest.conllu import parse_conllu
from ..ingest.loader import load_corpus
from ..ingest.references import ReferenceResolver
from ..models.corpus import Sentence
from ..models.cues import Cue
from ..models.entities import Character, Occurrence
from .index import ChapterIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChapterSummary:
    """Counts, cast and cues of one chapter."""

    chapter: int
    verse_count: int
    sentence_count: int
    character_names: tuple[str, ...]
    cues: tuple[Cue, ...]

    def to_dict(self) -> dict:
        return {
            "chapter": self.chapter,
            "verse_count": self.verse_count,
            "sentence_count": self.sentence_count,
            "character_names": list(self.character_names),
            "cues": [cue.model_dump(mode="json") for cue in self.cues],
        }


@dataclass(frozen=True)
class CorpusState:
    """Immutable result of parsing one corpus."""

    book: str
    sentences: tuple[Sentence, ...]
    characters: tuple[Character, ...]
    cues: tuple[Cue, ...]
    index: ChapterIndex
    skipped_lines: int = 0
    _character_lookup: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        lookup = {character.name: i for i, character in enumerate(self.characters)}
        object.__setattr__(self, "_character_lookup", lookup)

    @property
    def total_sentences(self) -> int:
        return len(self.sentences)

    def chapters(self) -> list[int]:
        """Chapter numbers present in the corpus."""
        return self.index.chapters()

    def get_character(self, name: str) -> Character | None:
        """Look up a character by canonical name."""
        position = self._character_lookup.get(name)
        return self.characters[position] if position is not None else None

    def get_character_in_chapter(self, name: str, chapter: int) -> list[Occurrence]:
        """Occurrences of a character inside one chapter."""
        character = self.get_character(name)
        if character is None:
            return []
        return character.occurrences_in(self.index.sentence_ids(chapter))

    def characters_in(self, sentence_ids: set[int]) -> list[str]:
        """Names of characters mentioned in any of the given sentences."""
        return [
            character.name
            for character in self.characters
            if any(occ.sentence_id in sentence_ids for occ in character.occurrences)
        ]

    def get_text_range(self, chapter: int, start_verse: int, end_verse: int) -> str:
        """Concatenated surface text of a verse range."""
        return self.index.text_range(chapter, start_verse, end_verse)

    def get_cues_in_chapter(self, chapter: int) -> list[Cue]:
        """All cues detected in a chapter, in sentence order."""
        sentence_ids = self.index.sentence_ids(chapter)
        return [cue for cue in self.cues if cue.sentence_id in sentence_ids]

    def get_cues_in_verse(self, chapter: int, verse: int) -> list[Cue]:
        """All cues detected in one verse."""
        sentence_ids = self.index.sentence_ids(chapter, verse)
        return [cue for cue in self.cues if cue.sentence_id in sentence_ids]

    def get_chapter_summary(self, chapter: int) -> ChapterSummary | None:
        """Summarize a chapter; None if the corpus has no such chapter."""
        if chapter not in self.index:
            return None

        sentence_ids = self.index.sentence_ids(chapter)
        return ChapterSummary(
            chapter=chapter,
            verse_count=len(self.index.verses(chapter)),
            sentence_count=len(sentence_ids),
            character_names=tuple(self.characters_in(sentence_ids)),
            cues=tuple(self.get_cues_in_chapter(chapter)),
        )

    @property
    def stats(self) -> dict:
        """Get statistics about the parsed corpus."""
        return {
            "sentences": self.total_sentences,
            "chapters": len(self.index),
            "characters": len(self.characters),
            "mentions": sum(c.total_mentions for c in self.characters),
            "cues": len(self.cues),
            "skipped_lines": self.skipped_lines,
        }


class CorpusParser:
    """Runs the parse pass: records, references, characters, cues."""

    def __init__(self, settings: Settings | None = None):
        """Initialize the parser.

        Args:
            settings: Settings to use (cached environment settings if omitted)
        """
        self.settings = settings or get_settings()
        self.references = ReferenceResolver(
            book_name=self.settings.book_name,
            book_code=self.settings.book_code,
        )
        self.character_resolver = CharacterResolver(
            match_strategy=self.settings.match_strategy,
            min_reverse_match_length=self.settings.min_reverse_match_length,
        )
        self.cue_detector = CueDetector()

    def parse(self, content: str | Iterable[str]) -> CorpusState:
        """Parse corpus text into a fresh, immutable CorpusState."""
        result = parse_conllu(content, resolver=self.references, book=self.settings.book_name)
        sentences = tuple(result.sentences)

        state = CorpusState(
            book=self.settings.book_name,
            sentences=sentences,
            characters=tuple(self.character_resolver.resolve(sentences)),
            cues=tuple(self.cue_detector.detect(sentences)),
            index=ChapterIndex(sentences),
            skipped_lines=result.skipped_lines,
        )
        logger.info("Corpus ready: %s", state.stats)
        return state

    def load(self, path: Path | None = None) -> CorpusState:
        """Load and parse a corpus file (the configured one by default).

        Raises:
            CorpusLoadError: if the file is missing, unreadable or empty
        """
        return self.parse(load_corpus(path or self.settings.corpus_path))
