"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # IGDB metadata source
    twitch_client_id: str = Field(default="", description="Twitch application client id sent as Client-ID")
    twitch_app_access_token: str = Field(default="", description="Twitch app access token (bearer)")
    igdb_games_url: str = "https://api.igdb.com/v4/games"
    igdb_request_timeout: int = 30

    # Backfill
    page_size: int = 100
    max_offset: int = Field(
        default=300000,
        description="Safety ceiling for the offset cursor; an empty page normally ends the run first.",
    )

    # Chunking / embedding
    embedded_fields: list[str] = ["name", "summary", "storyline"]
    sentences_per_chunk: int = 3
    embedding_model: str = "BAAI/bge-large-en-v1.5"

    # Vector store
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_collection: str = "igdb_games"

    # Delivery queue (Celery)
    queue_delay_seconds: int = 1
    queue_retry_delay_seconds: int = 30
    queue_max_attempts: int = 3
    celery_broker_url: str = "redis://localhost:6379/0"
    celery_task_always_eager: bool = Field(default=False, description="Run tasks in-process (local runs, tests)")

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton — import `settings` wherever needed.
settings = Settings()
