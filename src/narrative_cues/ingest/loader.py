"""Load annotated corpora from disk."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class CorpusLoadError(ValueError):
    """The corpus could not be read, or there is nothing in it to analyze."""


def load_corpus(path: Path) -> str:
    """
    Load a CONLL-U corpus file and return its text.

    Raises CorpusLoadError when the file is missing, unreadable,
    undecodable or blank, since nothing downstream can run without it.
    """
    if not path.exists():
        raise CorpusLoadError(f"Corpus file not found: {path}")
    if not path.is_file():
        raise CorpusLoadError(f"Corpus path is not a file: {path}")

    text = load_txt(path)
    if not text.strip():
        raise CorpusLoadError(f"Corpus file is empty: {path}")

    logger.info("Loaded corpus %s (%d characters)", path, len(text))
    return text


def load_txt(path: Path) -> str:
    """Load a plain text file."""
    try:
        # utf-8-sig also accepts files without a BOM
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise CorpusLoadError(f"Could not decode {path} as UTF-8") from e
    except OSError as e:
        raise CorpusLoadError(f"Could not read {path}: {e}") from e
