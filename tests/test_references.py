"""Tests for chapter and verse resolution."""

import pytest

from narrative_cues.ingest.conllu import parse_conllu, parse_token
from narrative_cues.ingest.references import (
    ReferenceResolver,
    VerseRange,
    format_reference,
    parse_reference,
)


class TestReferenceResolver:
    """Test the precedence between Ref= annotations and source comments."""

    def test_token_reference(self, make_token):
        """Test reading Ref= from the misc column."""
        resolver = ReferenceResolver()
        token = parse_token(make_token(1, "Αρχη", misc="SpaceAfter=No|Ref=MARK_1.1"))
        reference = resolver.token_reference(token)
        assert (reference.chapter, reference.verse) == (1, 1)

    def test_other_book_code_ignored(self, make_token):
        """Test that other books' references are ignored."""
        resolver = ReferenceResolver()
        token = parse_token(make_token(1, "Βιβλος", misc="Ref=MATT_1.1"))
        assert resolver.token_reference(token) is None

    def test_first_annotated_token_wins(self, make_token):
        """Test that the first annotated token decides."""
        resolver = ReferenceResolver()
        tokens = [
            parse_token(make_token(1, "και")),
            parse_token(make_token(2, "ευθυς", misc="Ref=MARK_2.3")),
            parse_token(make_token(3, "εξελθων", misc="Ref=MARK_2.4")),
        ]
        reference = resolver.resolve(tokens)
        assert (reference.chapter, reference.verse) == (2, 3)

    def test_source_comment_sets_chapter(self):
        """Test taking a chapter from a source comment."""
        resolver = ReferenceResolver()
        resolver.observe_comment("# source = SBLGNT Mark 4")
        assert resolver.comment_chapter == 4

    def test_other_comments_ignored(self):
        """Test that only source comments set chapters."""
        resolver = ReferenceResolver()
        resolver.observe_comment("# text = Mark 9 is not a source line")
        assert resolver.comment_chapter is None

    def test_custom_book(self):
        """Test a resolver for another book."""
        resolver = ReferenceResolver(book_name="Matthew", book_code="MATT")
        resolver.observe_comment("# source = Matthew 5")
        assert resolver.comment_chapter == 5


class TestReferencePrecedence:
    """Test resolution over whole corpora."""

    def test_verse_carried_forward(self, make_sentence, make_corpus):
        """Test that the last verse carries into unannotated sentences."""
        content = make_corpus(
            make_sentence(["Αρχη"], ref="1.5", source="Mark 1"),
            make_sentence(["και"]),
        )
        second = parse_conllu(content).sentences[1]
        assert (second.chapter, second.verse) == (1, 5)

    def test_unannotated_sentence_uses_comment_chapter(self, make_sentence, make_corpus):
        """Test that Ref= chapters never replace the comment chapter."""
        # A Ref= chapter never replaces the chapter taken from source comments
        content = make_corpus(
            make_sentence(["Αρχη"], source="Mark 2"),
            make_sentence(["και"], ref="3.1"),
            make_sentence(["ευθυς"]),
        )
        sentences = parse_conllu(content).sentences

        assert (sentences[0].chapter, sentences[0].verse) == (2, None)
        assert (sentences[1].chapter, sentences[1].verse) == (3, 1)
        assert (sentences[2].chapter, sentences[2].verse) == (2, 1)

    def test_no_signals(self, make_sentence):
        """Test a sentence with no reference at all."""
        sentence = parse_conllu(make_sentence(["Αρχη"])).sentences[0]
        assert sentence.chapter is None
        assert sentence.verse is None

    def test_state_reset_between_parses(self, make_sentence):
        """Test that a reused resolver starts clean."""
        resolver = ReferenceResolver()
        parse_conllu(make_sentence(["Αρχη"], ref="7.7", source="Mark 7"), resolver=resolver)
        sentence = parse_conllu(make_sentence(["και"]), resolver=resolver).sentences[0]
        assert sentence.chapter is None
        assert sentence.verse is None


class TestVerseRanges:
    """Test human-facing references."""

    def test_parse_range(self):
        """Test parsing a verse range."""
        assert parse_reference("Mark 1:1-15") == VerseRange("Mark", 1, 1, 15)

    def test_parse_single_verse(self):
        """Test parsing a single verse."""
        assert parse_reference(" Mark 3:5 ") == VerseRange("Mark", 3, 5, 5)

    @pytest.mark.parametrize("text", ["Mark", "Mark 1", "1:1", "Mark one:two"])
    def test_invalid(self, text):
        """Test strings that are not references."""
        assert parse_reference(text) is None

    def test_format(self):
        """Test formatting ranges back to text."""
        assert format_reference(VerseRange("Mark", 1, 1, 15)) == "Mark 1:1-15"
        assert format_reference(VerseRange("Mark", 3, 5, 5)) == "Mark 3:5"
