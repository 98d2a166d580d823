"""Token and sentence models for CONLL-U records."""

from pydantic import BaseModel, ConfigDict

EMPTY_FIELD = "_"


class Token(BaseModel):
    """One annotated word record (a CONLL-U data line)."""

    model_config = ConfigDict(frozen=True)

    id: int
    form: str
    lemma: str
    upos: str
    xpos: str
    feats: str
    head: int | None = None
    deprel: str
    deps: str
    misc: str

    @property
    def has_lemma(self) -> bool:
        """Whether the lemma column carries a usable value."""
        return bool(self.lemma) and self.lemma != EMPTY_FIELD

    @property
    def features(self) -> dict[str, str]:
        """Morphological features as a mapping, e.g. {"Case": "Nom"}."""
        if not self.feats or self.feats == EMPTY_FIELD:
            return {}

        parsed: dict[str, str] = {}
        for feature in self.feats.split("|"):
            key, _, value = feature.partition("=")
            if key:
                parsed[key] = value
        return parsed


class Sentence(BaseModel):
    """An ordered group of tokens bounded by blank lines."""

    model_config = ConfigDict(frozen=True)

    id: int
    tokens: tuple[Token, ...]
    book: str
    chapter: int | None = None
    verse: int | None = None
    text: str | None = None  # from the "# text =" comment

    @property
    def surface_text(self) -> str:
        """Token forms joined by single spaces."""
        return " ".join(token.form for token in self.tokens)

    def short_location(self) -> str:
        """Return a short location string."""
        chapter = self.chapter if self.chapter is not None else "?"
        verse = self.verse if self.verse is not None else "?"
        return f"{self.book} {chapter}:{verse} / S{self.id}"
