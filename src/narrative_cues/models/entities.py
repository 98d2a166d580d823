"""Character models for the resolved cast of the corpus."""

from pydantic import BaseModel, ConfigDict


class Occurrence(BaseModel):
    """A single token that resolved to a character."""

    model_config = ConfigDict(frozen=True)

    sentence_id: int
    chapter: int | None = None
    verse: int | None = None
    token_id: int
    form: str
    lemma: str
    role: str  # dependency relation of the token
    variant: str  # table variant that matched


class Character(BaseModel):
    """A canonical character and every place it was mentioned."""

    model_config = ConfigDict(frozen=True)

    name: str
    variants: tuple[str, ...] = ()
    occurrences: tuple[Occurrence, ...] = ()
    total_mentions: int = 0

    def occurrences_in(self, sentence_ids: set[int]) -> list[Occurrence]:
        """Occurrences that fall inside the given sentences."""
        return [occ for occ in self.occurrences if occ.sentence_id in sentence_ids]
