"""Token search over a parsed corpus.

Query syntax:
    θεος          basic search, case-insensitive substring
    θε*  / θε?ς   wildcards (any run / any single character)
    "θεος"        exact form, lemma or transliteration
    ~θεος         fuzzy match on form and lemma
    latin:theos   search the Latin transliteration
"""

import re
from dataclasses import dataclass, replace
from typing import Literal

from rapidfuzz import fuzz, process

from ..extract.names import normalize_form
from .state import CorpusState

QueryType = Literal["basic", "exact", "fuzzy", "transliteration"]

TRANSLITERATION: dict[str, str] = {
    "α": "a", "β": "b", "γ": "g", "δ": "d", "ε": "e", "ζ": "z",
    "η": "ē", "θ": "th", "ι": "i", "κ": "k", "λ": "l", "μ": "m",
    "ν": "n", "ξ": "x", "ο": "o", "π": "p", "ρ": "r", "σ": "s",
    "ς": "s", "τ": "t", "υ": "u", "φ": "ph", "χ": "ch", "ψ": "ps",
    "ω": "ō",
}


def transliterate(greek: str) -> str:
    """Transliterate Greek text to Latin script, ignoring diacritics."""
    letters = []
    for ch in normalize_form(greek):
        letters.append(TRANSLITERATION.get(ch, ch))
    return "".join(letters)


@dataclass(frozen=True)
class SearchHit:
    """One token matching a query."""

    sentence_id: int
    token_id: int
    form: str
    lemma: str
    transliteration: str
    upos: str
    chapter: int
    verse: int
    score: float = 1.0

    @property
    def key(self) -> str:
        return f"{self.sentence_id}-{self.token_id}"


@dataclass(frozen=True)
class ParsedQuery:
    type: QueryType
    term: str


def parse_query(query: str) -> ParsedQuery:
    """Classify a raw query string by its prefix or quoting."""
    trimmed = query.strip()

    if trimmed.startswith("~"):
        return ParsedQuery("fuzzy", trimmed[1:].strip())
    if trimmed.startswith("latin:"):
        return ParsedQuery("transliteration", trimmed[len("latin:"):].strip())
    if len(trimmed) >= 2 and trimmed.startswith('"') and trimmed.endswith('"'):
        return ParsedQuery("exact", trimmed[1:-1])
    return ParsedQuery("basic", trimmed)


def wildcard_pattern(term: str) -> re.Pattern[str]:
    """Compile a wildcard term; everything but * and ? is literal."""
    parts = []
    for ch in term:
        if ch == "*":
            parts.append(".*")
        elif ch == "?":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return re.compile("".join(parts))


class TokenSearch:
    """Searchable index of every token in a corpus."""

    def __init__(self, state: CorpusState, fuzzy_threshold: float = 70.0, limit: int = 50):
        self.fuzzy_threshold = fuzzy_threshold
        self.limit = limit
        self.entries: list[SearchHit] = []

        for sentence in state.sentences:
            chapter, verse = state.index.location(sentence.id) or (1, 1)
            for token in sentence.tokens:
                self.entries.append(
                    SearchHit(
                        sentence_id=sentence.id,
                        token_id=token.id,
                        form=token.form,
                        lemma=token.lemma,
                        transliteration=transliterate(token.form),
                        upos=token.upos,
                        chapter=chapter,
                        verse=verse,
                    )
                )

    def search(self, query: str) -> list[SearchHit]:
        """Run a query in the syntax described in the module docstring."""
        parsed = parse_query(query)
        if not parsed.term:
            return []

        if parsed.type == "fuzzy":
            return self.fuzzy_search(parsed.term)
        if parsed.type == "exact":
            return self.exact_search(parsed.term)
        if parsed.type == "transliteration":
            return self.transliteration_search(parsed.term)
        return self.basic_search(parsed.term)

    def exact_search(self, term: str) -> list[SearchHit]:
        return [
            hit
            for hit in self.entries
            if term in (hit.form, hit.lemma, hit.transliteration)
        ]

    def transliteration_search(self, term: str) -> list[SearchHit]:
        needle = term.lower()
        return [hit for hit in self.entries if needle in hit.transliteration.lower()]

    def basic_search(self, term: str) -> list[SearchHit]:
        pattern = wildcard_pattern(normalize_form(term))
        return [
            hit
            for hit in self.entries
            if pattern.search(normalize_form(hit.form))
            or pattern.search(normalize_form(hit.lemma))
            or pattern.search(hit.transliteration.lower())
        ]

    def fuzzy_search(self, term: str) -> list[SearchHit]:
        """Rank tokens by similarity of form or lemma to the term."""
        needle = normalize_form(term)
        choices = {
            i: f"{normalize_form(hit.form)} {normalize_form(hit.lemma)}"
            for i, hit in enumerate(self.entries)
        }
        results = process.extract(
            needle,
            choices,
            scorer=fuzz.partial_ratio,
            score_cutoff=self.fuzzy_threshold,
            limit=self.limit,
        )

        return [replace(self.entries[i], score=round(score / 100, 3)) for _, score, i in results]
