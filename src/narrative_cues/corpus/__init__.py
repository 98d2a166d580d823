"""Corpus state, chapter/verse index and token search."""

from .index import ChapterIndex
from .search import SearchHit, TokenSearch, transliterate
from .state import ChapterSummary, CorpusParser, CorpusState

__all__ = [
    "ChapterIndex",
    "SearchHit",
    "TokenSearch",
    "transliterate",
    "ChapterSummary",
    "CorpusParser",
    "CorpusState",
]
