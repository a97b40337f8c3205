"""Central configuration via Pydantic Settings. All values driven by env vars."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # API Keys
    google_api_key: str = ""
    openai_api_key: str = ""

    # Embedding
    embedding_provider: Literal["gemini", "openai", "deterministic"] = "gemini"
    embedding_model: str = "gemini-embedding-001"
    openai_embedding_model: str = "text-embedding-3-small"
    embedding_dimensions: int = 768
    embedding_batch_size: int = 10
    embedding_batch_pause_s: float = 0.1
    embedding_timeout_s: float = 30.0

    # Chunking (characters)
    chunk_target_size: int = 1000
    chunk_overlap: int = 200
    chunk_min_size: int = 100
    chunk_max_size: int = 2000
    chunk_prefer_sentence: bool = True
    chunk_prefer_paragraph: bool = True

    # Retrieval
    retrieval_top_k: int = 3
    retrieval_threshold: float = 0.0

    # LLM / Gemini
    gemini_model: str = "gemini-2.0-flash"
    gemini_temperature: float = 0.1
    gemini_max_tokens: int = 4096
    gemini_timeout_s: float = 60.0

    # Storage
    store_backend: Literal["sqlite", "memory"] = "sqlite"
    sqlite_db_path: str = "data/docvault.db"
    artifact_root: str = "data/uploads"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    log_json: bool = False

    model_config = {"env_file": ".env", "env_prefix": "DOCVAULT_"}
