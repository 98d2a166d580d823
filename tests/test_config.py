"""Tests for settings."""

from pathlib import Path

from narrative_cues.config import Settings


class TestSettings:
    """Test settings loading."""

    def test_defaults(self, monkeypatch):
        """Test the built-in defaults and derived paths."""
        monkeypatch.delenv("NC_MATCH_STRATEGY", raising=False)
        monkeypatch.delenv("NC_DATA_DIR", raising=False)
        settings = Settings(_env_file=None)

        assert settings.match_strategy == "lemma"
        assert settings.corpus_path == Path("data") / "mark_complete.conllu"
        assert settings.exports_dir == Path("data") / "exports"

    def test_environment_prefix(self, monkeypatch):
        """Test that NC_ variables override defaults."""
        monkeypatch.setenv("NC_MATCH_STRATEGY", "surface")
        monkeypatch.setenv("NC_ANALYSIS_TIMEOUT", "5")
        settings = Settings(_env_file=None)

        assert settings.match_strategy == "surface"
        assert settings.analysis_timeout == 5.0
