"""Configuration management using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Firestore Configuration
    firestore_credentials_path: str | None = Field(
        default=None,
        description="Service account JSON; falls back to application default credentials"
    )
    firestore_project_id: str | None = None
    firestore_collection: str = "learningEntries"
    firestore_app_name: str = "learnmap"

    # AI Configuration (Infomaniak OpenAI-compatible endpoint)
    llm_base_url: str = "https://api.infomaniak.com/1/ai"
    llm_product_id: str = ""
    llm_api_key: str = ""
    llm_model: str = "mixtral"
    llm_timeout: float = 60.0
    llm_max_concurrent: int = 4
    llm_temperature: float = 0.7
    llm_max_tokens: int = 2048
    ai_response_language: str = Field(
        default="German",
        description="Language the completion helper is asked to answer in"
    )

    # Transcription
    transcription_model: str = "whisper"
    transcription_language: str = "de"
    transcription_timeout: float = 120.0

    # Mindmap layout
    layout_width: int = 1200
    layout_height: int = 800
    layout_padding: int = 72
    layout_seed: int = 42
    layout_iterations: int = 50

    # Seeding
    seed_on_startup: bool = Field(
        default=False,
        description="Insert demo entries when the collection is empty"
    )

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False

    @property
    def openai_base_url(self) -> str:
        """Base URL of the OpenAI-compatible routes for the configured product."""
        base = self.llm_base_url.rstrip("/")
        if self.llm_product_id:
            return f"{base}/{self.llm_product_id}/openai"
        return base


def get_dev_settings() -> Settings:
    """Get development environment settings."""
    return Settings(
        seed_on_startup=True,
        api_debug=True,
    )


def get_test_settings() -> Settings:
    """Get test environment settings."""
    return Settings(
        firestore_collection="learningEntries_test",
        llm_product_id="test-product",
        llm_api_key="test-token",
        seed_on_startup=False,
    )


# Global settings instance
settings = Settings()
