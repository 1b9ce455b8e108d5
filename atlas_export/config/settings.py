"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# pydantic-settings reads configuration from two sources (in priority order):
#
#   1. **Environment variables** - e.g., JIRA_API_KEY=abc123
#   2. **.env file** - key=value lines in the project root .env file
#
# Field ``jira_api_key`` maps to env var ``JIRA_API_KEY``.  Every string
# value passes through ``normalize_env`` so stray whitespace and one pair
# of surrounding quotes (common in hand-written .env files) are removed.
#
# A Settings instance is built once at process start and handed to each
# component constructor.  Nothing below caches credentials on its own.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from atlas_export.utils.defaults import normalize_env


class Settings(BaseSettings):
    """atlasExport application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Jira ===
    jira_url: str = ""
    jira_email: str = ""
    jira_api_key: str = ""

    # === Confluence ===
    confluence_url: str = ""
    confluence_email: str = ""
    confluence_api_key: str = ""

    # === Embeddings ===
    openai_api_key: str = ""
    openai_base_url: str = ""  # OpenAI-compatible endpoint override
    openai_embedding_model: str = ""  # empty = text-embedding-3-small

    # === Vector index ===
    pinecone_api_key: str = ""
    pinecone_base_url: str = ""  # index host, e.g. https://my-index-abc.svc.pinecone.io
    pinecone_namespace: str = "default"
    vector_batch_size: int = 20

    # === Export ===
    export_dir: str = "tmp"
    http_timeout: float = 30.0

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"
    cors_origins: str = ""  # comma-separated; empty = any origin, no cookies

    @field_validator(
        "jira_url",
        "jira_email",
        "jira_api_key",
        "confluence_url",
        "confluence_email",
        "confluence_api_key",
        "openai_api_key",
        "openai_base_url",
        "openai_embedding_model",
        "pinecone_api_key",
        "pinecone_base_url",
        "pinecone_namespace",
        mode="before",
    )
    @classmethod
    def _strip_env_noise(cls, value: Any) -> Any:
        if isinstance(value, str):
            return normalize_env(value) or ""
        return value

    def allowed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def vectorization_configured(self) -> bool:
        """Return ``True`` when both the embedding and the vector index keys are set."""
        return bool(self.openai_api_key and self.pinecone_api_key and self.pinecone_base_url)
