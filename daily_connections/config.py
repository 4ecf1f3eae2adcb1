"""Configuration management for the Daily Connections editorial service."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.validation import ValidationPolicy


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Puzzle storage
    puzzles_file: str = Field("puzzles.json", description="Path of the JSON puzzle corpus")
    corpus_limit: int = Field(100, ge=1, description="Number of recent puzzles compared against")

    # Redis Configuration
    redis_url: str = Field("redis://localhost:6379")
    enable_corpus_cache: bool = Field(False)
    cache_ttl_seconds: int = Field(3600)

    # Application Settings
    environment: str = Field("development")
    log_level: str = Field("INFO")
    api_host: str = Field("0.0.0.0")
    api_port: int = Field(8000)

    # Uniqueness policy defaults
    allow_word_reuse: bool = Field(True)
    allow_similar_explanations: bool = Field(True)
    min_group_overlap: int = Field(3, ge=1)
    verbose_validation: bool = Field(True)

    def default_policy(self) -> ValidationPolicy:
        """Build the uniqueness policy configured for this deployment."""
        return ValidationPolicy(
            allow_word_reuse=self.allow_word_reuse,
            allow_similar_explanations=self.allow_similar_explanations,
            min_group_overlap=self.min_group_overlap,
            verbose=self.verbose_validation,
        )


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
