"""Tests for CONLL-U parsing."""

from narrative_cues.ingest.conllu import parse_conllu, parse_token


class TestTokenParsing:
    """Test single data lines."""

    def test_ten_fields(self, make_token):
        """Test a well-formed ten-column line."""
        token = parse_token(make_token(3, "Πνευματι", "πνευμα", misc="Ref=MARK_1.8"))
        assert token is not None
        assert token.id == 3
        assert token.form == "Πνευματι"
        assert token.lemma == "πνευμα"
        assert token.misc == "Ref=MARK_1.8"
        assert token.head == 0

    def test_too_few_fields(self):
        """Test that a short line yields no token."""
        assert parse_token("1\tεν\tεν\tADP\t_\t_") is None

    def test_too_many_fields(self, make_token):
        """Test that an over-long line yields no token."""
        assert parse_token(make_token(1, "εν") + "\textra") is None

    def test_multiword_range_and_empty_node(self, make_token):
        """Test that non-ordinal ids are skipped."""
        assert parse_token(make_token("1-2", "κακει")) is None
        assert parse_token(make_token("8.1", "_")) is None

    def test_missing_head(self):
        """Test an underscore in the head column."""
        token = parse_token("1\tεν\tεν\tADP\t_\t_\t_\tcase\t_\t_")
        assert token.head is None

    def test_features(self):
        """Test parsing the morphological feature column."""
        token = parse_token("1\tΘεος\tθεος\tNOUN\t_\tCase=Nom|Number=Sing\t0\troot\t_\t_")
        assert token.features == {"Case": "Nom", "Number": "Sing"}
        assert token.has_lemma


class TestSentenceGrouping:
    """Test blank-line sentence boundaries."""

    def test_blank_lines_separate_sentences(self, make_sentence, make_corpus):
        """Test that blank lines end sentences."""
        content = make_corpus(
            make_sentence(["Αρχη", "του"], ref="1.1"),
            make_sentence(["Καθως", "γεγραπται"], ref="1.2"),
        )
        result = parse_conllu(content)

        assert result.total_sentences == 2
        assert [s.id for s in result.sentences] == [0, 1]
        assert result.sentences[1].surface_text == "Καθως γεγραπται"

    def test_short_line_skipped(self, make_token):
        """Test that a malformed line is counted and the sentence survives."""
        content = "\n".join(
            [
                make_token(1, "εν", misc="Ref=MARK_1.2"),
                "2\tτω\tο\tDET\t_\t_",
                make_token(3, "Ησαια"),
            ]
        )
        result = parse_conllu(content)

        assert result.skipped_lines == 1
        assert len(result.sentences) == 1
        assert [t.form for t in result.sentences[0].tokens] == ["εν", "Ησαια"]
        assert result.sentences[0].verse == 2

    def test_empty_corpus(self):
        """Test that an empty corpus gives an empty result."""
        result = parse_conllu("")
        assert result.sentences == []
        assert result.total_sentences == 0
        assert result.skipped_lines == 0

    def test_final_sentence_without_trailing_blank(self, make_token):
        """Test that the last sentence is kept without a closing blank line."""
        content = make_token(1, "Αρχη", misc="Ref=MARK_1.1")
        result = parse_conllu(content)
        assert len(result.sentences) == 1

    def test_comment_only_block_makes_no_sentence(self):
        """Test that comments alone make no sentence."""
        result = parse_conllu("# source = Mark 1\n\n# text = nothing\n")
        assert result.sentences == []

    def test_text_comment_attached(self, make_sentence, make_corpus):
        """Test that '# text =' applies to one sentence only."""
        content = make_corpus(
            make_sentence(["Αρχη"], ref="1.1", text="Αρχη του ευαγγελιου"),
            make_sentence(["Καθως"], ref="1.2"),
        )
        result = parse_conllu(content)

        assert result.sentences[0].text == "Αρχη του ευαγγελιου"
        assert result.sentences[1].text is None

    def test_accepts_line_iterable(self, make_sentence):
        """Test parsing from an iterable of lines."""
        lines = make_sentence(["Αρχη"], ref="1.1").splitlines()
        result = parse_conllu(iter(lines))
        assert len(result.sentences) == 1

    def test_book_stamped(self, make_sentence):
        """Test the book name and short location."""
        result = parse_conllu(make_sentence(["Αρχη"], ref="1.1"))
        assert result.sentences[0].book == "Mark"
        assert result.sentences[0].short_location() == "Mark 1:1 / S0"
