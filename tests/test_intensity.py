"""Tests for verse intensity scoring."""

import pytest

from narrative_cues.analysis import IntensityScorer, IntensityWeights, narrative_intensity
from narrative_cues.models import Cue, CueType


def cue(cue_type):
    return Cue(type=cue_type, keyword="εν", sentence_id=0, text="εν", description="")


class TestNarrativeIntensity:
    """Test the intensity formula."""

    def test_zero(self):
        """Test that nothing scores zero."""
        assert narrative_intensity(0, [], "") == 0.0

    def test_terms(self):
        """Test the character, cue and length terms together."""
        # 1/5 * 0.3 + 0.9 * 0.4 + 50/100 * 0.2
        assert narrative_intensity(1, [cue(CueType.CAUSAL)], "x" * 50) == pytest.approx(0.52)

    def test_spirit_boost(self):
        """Test the boost for naming the Spirit."""
        assert narrative_intensity(1, [], "Πνευμα") == pytest.approx(0.06 + 0.012 + 0.3)

    def test_clamped(self):
        """Test that the score never exceeds one."""
        cues = [cue(CueType.CAUSAL)] * 5
        assert narrative_intensity(20, cues, "Πνευμα " * 40) == 1.0

    def test_custom_weights(self):
        """Test scoring with other weights."""
        weights = IntensityWeights(character_cap=1, character_weight=1.0)
        assert narrative_intensity(1, [], "", weights) == 1.0


class TestIntensityScorer:
    """Test scoring verses of a corpus."""

    def test_score_chapter(self, parse_corpus, baptism_corpus):
        """Test scoring every verse of a chapter."""
        scores = IntensityScorer(parse_corpus(baptism_corpus)).score_chapter(1)

        assert [s.verse for s in scores] == [8, 9]
        assert all(0.0 <= s.intensity <= 1.0 for s in scores)
        assert scores[0].characters == ("Holy Spirit",)
        assert scores[1].characters == ("Jesus",)

    def test_missing_verse(self, parse_corpus, baptism_corpus):
        """Test scoring a verse with no sentences."""
        assert IntensityScorer(parse_corpus(baptism_corpus)).score_verse(1, 40) is None

    def test_to_dict(self, parse_corpus, baptism_corpus):
        """Test the JSON-ready verse score."""
        data = IntensityScorer(parse_corpus(baptism_corpus)).score_verse(1, 8).to_dict()
        assert data["cue_types"] == ["causal"]
        assert data["sentence_count"] == 1
