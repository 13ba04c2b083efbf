"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # LLM
    llm_api_key: str = Field(default="", description="API key for the OpenAI-compatible chat endpoint")
    llm_model_name: str = Field(default="llama-3.3-70b-versatile", description="Chat model identifier")
    llm_base_url: str = Field(
        default="https://api.groq.com/openai/v1",
        description=(
            "Base URL of an OpenAI-compatible chat completions API. "
            "Leave empty to use the OpenAI cloud."
        ),
    )
    rephrase_temperature: float = 0.0
    answer_temperature: float | None = Field(
        default=None,
        description="Sampling temperature for answers; None keeps the provider default.",
    )

    # Vector store
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_collection: str = "pdf_rag"
    upsert_batch_size: int = 100

    # Embedding
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"

    # Ingestion
    chunk_size: int = 850
    chunk_overlap: int = 150
    max_sources: int = 5

    # Conversation
    top_k: int = 5
    history_max_turns: int = 8
    clear_history_on_reset: bool = Field(
        default=False,
        description="Also wipe conversational memory when the knowledge base is cleared.",
    )

    # Serving
    host: str = "0.0.0.0"
    port: int = 3000
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


# Singleton: import `settings` wherever needed.
settings = Settings()
