"""Character resolution over parsed sentences.

Every token is tested against the name-variant table; matches are
accumulated into a per-character ledger during one pass and frozen into
immutable Character records when the pass completes.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Literal

from ..models.corpus import Sentence, Token
from ..models.entities import Character, Occurrence
from .names import lookup_variant, match_surface_form

logger = logging.getLogger(__name__)

MatchStrategy = Literal["lemma", "surface"]


@dataclass
class _CharacterLedger:
    """Mutable accumulator for one character during a parse pass."""

    name: str
    variants: list[str] = field(default_factory=list)
    occurrences: list[Occurrence] = field(default_factory=list)

    def record(self, occurrence: Occurrence) -> None:
        if occurrence.variant not in self.variants:
            self.variants.append(occurrence.variant)
        self.occurrences.append(occurrence)

    def freeze(self) -> Character:
        return Character(
            name=self.name,
            variants=tuple(self.variants),
            occurrences=tuple(self.occurrences),
            total_mentions=len(self.occurrences),
        )


class CharacterResolver:
    """Resolves tokens to canonical characters."""

    def __init__(
        self,
        match_strategy: MatchStrategy = "lemma",
        min_reverse_match_length: int = 4,
    ):
        """Initialize the resolver.

        Args:
            match_strategy: "lemma" matches lemmas exactly and falls back to
                surface forms only for tokens without a lemma; "surface"
                always uses surface-form containment
            min_reverse_match_length: Shortest token allowed to match by
                being contained in a variant
        """
        if match_strategy not in ("lemma", "surface"):
            raise ValueError(f"Unknown match strategy: {match_strategy}")
        self.match_strategy = match_strategy
        self.min_reverse_match_length = min_reverse_match_length

    def match_token(self, token: Token) -> list[tuple[str, str]]:
        """Return (canonical name, variant) pairs for a token, one per family."""
        if self.match_strategy == "lemma" and token.has_lemma:
            match = lookup_variant(token.lemma)
            return [match] if match else []

        return match_surface_form(token.form, self.min_reverse_match_length)

    def resolve(self, sentences: Iterable[Sentence]) -> list[Character]:
        """Build the character list for a corpus, in order of first mention."""
        ledgers: dict[str, _CharacterLedger] = {}

        for sentence in sentences:
            for token in sentence.tokens:
                for canonical, variant in self.match_token(token):
                    ledger = ledgers.get(canonical)
                    if ledger is None:
                        ledger = ledgers[canonical] = _CharacterLedger(name=canonical)

                    ledger.record(
                        Occurrence(
                            sentence_id=sentence.id,
                            chapter=sentence.chapter,
                            verse=sentence.verse,
                            token_id=token.id,
                            form=token.form,
                            lemma=token.lemma,
                            role=token.deprel,
                            variant=variant,
                        )
                    )

        characters = [ledger.freeze() for ledger in ledgers.values()]
        logger.info("Resolved %d characters", len(characters))
        return characters
