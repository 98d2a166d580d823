"""Shared fixtures: small CONLL-U corpora built in code."""

import pytest

from narrative_cues.config import Settings
from narrative_cues.corpus import CorpusParser


def token_line(token_id, form, lemma="_", misc="_", upos="X", deprel="dep"):
    """One ten-column CONLL-U data line."""
    return "\t".join([str(token_id), form, lemma, upos, "_", "_", "0", deprel, "_", misc])


def sentence_block(words, ref=None, source=None, text=None):
    """A sentence block.

    words are forms or (form, lemma) pairs; ref ("1.1") is put on the
    first token as Ref=MARK_<ref>.
    """
    lines = []
    if source:
        lines.append(f"# source = {source}")
    if text:
        lines.append(f"# text = {text}")
    for i, word in enumerate(words, start=1):
        form, lemma = word if isinstance(word, tuple) else (word, "_")
        misc = f"Ref=MARK_{ref}" if ref and i == 1 else "_"
        lines.append(token_line(i, form, lemma, misc))
    return "\n".join(lines) + "\n"


def build_corpus(*blocks):
    """Join sentence blocks with blank lines."""
    return "\n".join(blocks)


@pytest.fixture
def make_token():
    return token_line


@pytest.fixture
def make_sentence():
    return sentence_block


@pytest.fixture
def make_corpus():
    return build_corpus


@pytest.fixture
def settings():
    return Settings(_env_file=None, analysis_api_key="test-key", analysis_max_retries=2)


@pytest.fixture
def parse_corpus(settings):
    """Parse corpus text with default settings (lemma strategy)."""

    def parse(content, **overrides):
        parser_settings = settings.model_copy(update=overrides) if overrides else settings
        return CorpusParser(parser_settings).parse(content)

    return parse


@pytest.fixture
def baptism_corpus():
    """Mark 1:8-9 in miniature: a causal cue naming the Spirit, then Jesus."""
    return build_corpus(
        sentence_block(
            [
                ("αυτος", "αυτος"),
                ("βαπτισει", "βαπτιζω"),
                ("υμας", "συ"),
                ("εν", "εν"),
                ("Πνευματι", "πνευμα"),
                ("Αγιω", "αγιος"),
            ],
            ref="1.8",
            source="SBLGNT Mark 1",
        ),
        sentence_block([("Ιησους", "Ιησους"), ("ηλθεν", "ερχομαι")], ref="1.9"),
    )


@pytest.fixture
def chapter_three_corpus():
    """Two sentences of Mark 3:5 that both name Jesus and Peter."""
    return build_corpus(
        sentence_block(["Ιησους", "και", "Πετρος"], ref="3.5", source="SBLGNT Mark 3"),
        sentence_block(["Πετρος", "και", "Ιησους"], ref="3.5"),
    )
