"""Parse CONLL-U text into sentences of tokens.

The parser favours robustness: a malformed data line is skipped and
counted, never fatal, so one corrupted record cannot abort a corpus.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable

from ..models.corpus import Sentence, Token
from .references import ReferenceResolver

logger = logging.getLogger(__name__)

TOKEN_FIELD_COUNT = 10
TEXT_COMMENT = "# text ="


@dataclass
class ParseResult:
    """Sentences recovered from a corpus, in source order."""

    sentences: list[Sentence] = field(default_factory=list)
    total_sentences: int = 0
    skipped_lines: int = 0


def parse_token(line: str) -> Token | None:
    """
    Parse one tab-separated data line.

    Returns None for lines without exactly ten fields and for multiword
    ranges ("1-2") or empty nodes ("8.1"), whose ids are not ordinals.
    """
    fields = line.split("\t")
    if len(fields) != TOKEN_FIELD_COUNT:
        return None

    try:
        token_id = int(fields[0])
    except ValueError:
        return None

    head = int(fields[6]) if fields[6].isdigit() else None

    return Token(
        id=token_id,
        form=fields[1],
        lemma=fields[2],
        upos=fields[3],
        xpos=fields[4],
        feats=fields[5],
        head=head,
        deprel=fields[7],
        deps=fields[8],
        misc=fields[9],
    )


def parse_conllu(
    content: str | Iterable[str],
    resolver: ReferenceResolver | None = None,
    book: str | None = None,
) -> ParseResult:
    """
    Parse a corpus into sentences with resolved chapter and verse.

    Args:
        content: Whole corpus text, or an iterable of its lines
        resolver: Reference resolver (a fresh default one if omitted)
        book: Book name stamped on each sentence (defaults to the resolver's)

    Returns:
        ParseResult; an empty corpus gives an empty result
    """
    lines = content.splitlines() if isinstance(content, str) else content
    resolver = resolver or ReferenceResolver()
    resolver.reset()
    book = book or resolver.book_name

    result = ParseResult()
    buffer: list[Token] = []
    sentence_text: str | None = None

    def flush() -> None:
        if not buffer:
            return
        reference = resolver.resolve(buffer)
        result.sentences.append(
            Sentence(
                id=len(result.sentences),
                tokens=tuple(buffer),
                book=book,
                chapter=reference.chapter,
                verse=reference.verse,
                text=sentence_text,
            )
        )
        buffer.clear()

    for line_num, line in enumerate(lines, start=1):
        stripped = line.strip()

        if stripped.startswith("#"):
            resolver.observe_comment(stripped)
            if stripped.startswith(TEXT_COMMENT):
                sentence_text = stripped[len(TEXT_COMMENT):].strip()
            continue

        if not stripped:
            flush()
            sentence_text = None
            continue

        token = parse_token(stripped)
        if token is None:
            result.skipped_lines += 1
            logger.debug("Skipping malformed line %d: %r", line_num, stripped[:80])
            continue

        buffer.append(token)

    flush()

    result.total_sentences = len(result.sentences)
    logger.info(
        "Parsed %d sentences (%d malformed lines skipped)",
        result.total_sentences,
        result.skipped_lines,
    )
    return result
