"""Chapter and verse resolution.

Two signals locate a sentence in the book:

1. ``# source = ... Mark 5`` comments, which name a chapter only
2. ``Ref=MARK_5.1`` in a token's misc column, which names chapter and verse

A structured token reference is authoritative for the whole sentence.
Without one, the sentence takes the chapter from the most recent source
comment and carries the previously resolved verse forward. Comments never
establish verses; verse boundaries are only marked at the token level.
"""

import re
from dataclasses import dataclass
from typing import Iterable

from ..models.corpus import Token


@dataclass(frozen=True)
class Reference:
    """A resolved (chapter, verse) pair; either part may be unknown."""

    chapter: int | None
    verse: int | None


class ReferenceResolver:
    """Tracks reference state across one pass over a corpus."""

    def __init__(self, book_name: str = "Mark", book_code: str = "MARK"):
        """Initialize the resolver.

        Args:
            book_name: Book name as written in source comments
            book_code: Book code used in Ref= annotations
        """
        self.book_name = book_name
        self.book_code = book_code
        self._source_pattern = re.compile(rf"{re.escape(book_name)}\s+(\d+)")
        self._ref_pattern = re.compile(
            rf"Ref={re.escape(book_code)}_(\d+)\.(\d+)", re.IGNORECASE
        )
        self.comment_chapter: int | None = None
        self.last_verse: int | None = None

    def reset(self) -> None:
        """Forget everything seen so far."""
        self.comment_chapter = None
        self.last_verse = None

    def observe_comment(self, line: str) -> None:
        """Pick up a chapter from a '# source =' comment line."""
        if not line.startswith("# source ="):
            return

        match = self._source_pattern.search(line)
        if match:
            self.comment_chapter = int(match.group(1))

    def token_reference(self, token: Token) -> Reference | None:
        """Return the structured reference carried by a token, if any."""
        if not token.misc:
            return None

        match = self._ref_pattern.search(token.misc)
        if not match:
            return None
        return Reference(chapter=int(match.group(1)), verse=int(match.group(2)))

    def resolve(self, tokens: Iterable[Token]) -> Reference:
        """Resolve the reference of a sentence built from these tokens."""
        for token in tokens:
            reference = self.token_reference(token)
            if reference is not None:
                self.last_verse = reference.verse
                return reference

        return Reference(chapter=self.comment_chapter, verse=self.last_verse)


@dataclass(frozen=True)
class VerseRange:
    """A human-facing reference such as 'Mark 1:1-15'."""

    book: str
    chapter: int
    start_verse: int
    end_verse: int


_RANGE_PATTERN = re.compile(r"^(\w+)\s+(\d+):(\d+)(?:-(\d+))?$")


def parse_reference(reference: str) -> VerseRange | None:
    """Parse 'Book C:V' or 'Book C:V-W'; returns None if it doesn't match."""
    match = _RANGE_PATTERN.match(reference.strip())
    if not match:
        return None

    start = int(match.group(3))
    end = int(match.group(4)) if match.group(4) else start
    return VerseRange(
        book=match.group(1),
        chapter=int(match.group(2)),
        start_verse=start,
        end_verse=end,
    )


def format_reference(ref: VerseRange) -> str:
    """Format a VerseRange back into 'Book C:V[-W]'."""
    formatted = f"{ref.book} {ref.chapter}:{ref.start_verse}"
    if ref.end_verse != ref.start_verse:
        formatted += f"-{ref.end_verse}"
    return formatted
