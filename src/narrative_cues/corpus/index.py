"""Chapter -> verse -> sentence index."""

import logging
from typing import Iterable

from ..models.corpus import Sentence

logger = logging.getLogger(__name__)

DEFAULT_CHAPTER = 1
DEFAULT_VERSE = 1


class ChapterIndex:
    """Groups resolved sentences by chapter and verse.

    Sentences without a resolved chapter or verse are filed under chapter 1
    or verse 1 rather than dropped. The index holds references to the
    sentences; it is built once and never partially updated.
    """

    def __init__(self, sentences: Iterable[Sentence]):
        buckets: dict[int, dict[int, list[Sentence]]] = {}
        locations: dict[int, tuple[int, int]] = {}

        for sentence in sentences:
            chapter = sentence.chapter or DEFAULT_CHAPTER
            verse = sentence.verse or DEFAULT_VERSE
            buckets.setdefault(chapter, {}).setdefault(verse, []).append(sentence)
            locations[sentence.id] = (chapter, verse)

        self._chapters: dict[int, dict[int, tuple[Sentence, ...]]] = {
            chapter: {verse: tuple(verses[verse]) for verse in sorted(verses)}
            for chapter, verses in sorted(buckets.items())
        }
        self._locations = locations

        logger.debug("Organized sentences into %d chapters", len(self._chapters))
        for chapter, verses in self._chapters.items():
            logger.debug(
                "Chapter %d: %d verses, %d sentences",
                chapter,
                len(verses),
                sum(len(s) for s in verses.values()),
            )

    def __contains__(self, chapter: object) -> bool:
        return chapter in self._chapters

    def __len__(self) -> int:
        return len(self._chapters)

    def chapters(self) -> list[int]:
        """Chapter numbers in ascending order."""
        return list(self._chapters)

    def verses(self, chapter: int) -> list[int]:
        """Verse numbers of a chapter in ascending order."""
        return list(self._chapters.get(chapter, {}))

    def sentences(self, chapter: int, verse: int) -> list[Sentence]:
        """Sentences filed under one verse."""
        return list(self._chapters.get(chapter, {}).get(verse, ()))

    def chapter_sentences(self, chapter: int) -> list[Sentence]:
        """All sentences of a chapter, verse by verse."""
        return [
            sentence
            for verse_sentences in self._chapters.get(chapter, {}).values()
            for sentence in verse_sentences
        ]

    def sentence_ids(self, chapter: int, verse: int | None = None) -> set[int]:
        """Ids of the sentences in a chapter, or in one of its verses."""
        if verse is None:
            return {s.id for s in self.chapter_sentences(chapter)}
        return {s.id for s in self.sentences(chapter, verse)}

    def sentences_in_range(self, chapter: int, start_verse: int, end_verse: int) -> list[Sentence]:
        """Sentences of verses start..end (inclusive) of a chapter."""
        verses = self._chapters.get(chapter, {})
        return [
            sentence
            for verse, verse_sentences in verses.items()
            if start_verse <= verse <= end_verse
            for sentence in verse_sentences
        ]

    def text_range(self, chapter: int, start_verse: int, end_verse: int) -> str:
        """Surface text of a verse range; empty for unknown chapters."""
        return " ".join(
            s.surface_text for s in self.sentences_in_range(chapter, start_verse, end_verse)
        ).strip()

    def location(self, sentence_id: int) -> tuple[int, int] | None:
        """The (chapter, verse) a sentence is filed under."""
        return self._locations.get(sentence_id)
