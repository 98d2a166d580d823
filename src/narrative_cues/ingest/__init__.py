"""Corpus ingestion: loading, CONLL-U parsing and reference resolution."""

from narrative_cues.ingest.conllu import ParseResult, parse_conllu
from narrative_cues.ingest.loader import CorpusLoadError, load_corpus
from narrative_cues.ingest.references import (
    ReferenceResolver,
    VerseRange,
    format_reference,
    parse_reference,
)

__all__ = [
    "ParseResult",
    "parse_conllu",
    "CorpusLoadError",
    "load_corpus",
    "ReferenceResolver",
    "VerseRange",
    "format_reference",
    "parse_reference",
]
