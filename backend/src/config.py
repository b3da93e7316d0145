"""Application configuration via environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env")

    debug: bool = False
    cors_origins: list[str] = ["*"]

    # Document store (MongoDB Atlas with a text search index)
    mongo_uri: str = ""
    mongo_db: str = "medical_research"
    mongo_collection: str = "pubmed_articles"
    search_index: str = "pubmed_vector_index"

    # Answer generation (Gemini)
    # Set GOOGLE_API_KEY for API key auth, otherwise uses Vertex AI ADC.
    google_api_key: str = ""
    gcp_project_id: str = "hospiagent-dev"
    gcp_location: str = "us-central1"
    ai_model: str = "gemini-2.5-flash"

    # Retrieval
    doc_cache_max_entries: int = 1000
    doc_cache_ttl_seconds: float = 60 * 60
    max_context_length: int = 15000
    max_content_chars: int = 3000


settings = Settings()
