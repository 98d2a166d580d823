"""Configuration management for Narrative Cues."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="NC_",
    )

    # Corpus references
    book_name: str = Field(default="Mark", description="Book named in '# source =' comments")
    book_code: str = Field(default="MARK", description="Book code used in Ref=<CODE>_<c>.<v>")

    # Paths
    data_dir: Path = Field(default=Path("data"))
    corpus_file: str = Field(default="mark_complete.conllu")

    # Character matching
    match_strategy: Literal["lemma", "surface"] = Field(default="lemma")
    min_reverse_match_length: int = Field(
        default=4,
        description="Shortest token that may match by being contained in a name variant",
    )

    # External analysis service (OpenAI-compatible chat endpoint)
    analysis_endpoint: str = Field(default="http://localhost:8080/api")
    analysis_model: str = Field(default="glm-4.6-llmlb")
    analysis_api_key: str = Field(default="")
    analysis_timeout: float = Field(default=60.0, description="Request timeout in seconds")
    analysis_max_retries: int = Field(default=2)

    log_level: str = Field(default="WARNING")

    @property
    def corpus_path(self) -> Path:
        return self.data_dir / self.corpus_file

    @property
    def exports_dir(self) -> Path:
        return self.data_dir / "exports"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
