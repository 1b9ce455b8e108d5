"""Component assembly shared by the API server and the CLI.

Everything is built from one :class:`Settings` instance and the merged
YAML config; nothing here reads the environment on its own or caches
across calls.
"""

from __future__ import annotations

from typing import Any

import httpx

from atlas_export.config.loader import load_config
from atlas_export.config.settings import Settings
from atlas_export.interfaces.source_api import ISourceApiClient
from atlas_export.providers.credentials.settings_credential_provider import (
    SettingsCredentialProvider,
)
from atlas_export.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider
from atlas_export.providers.source.confluence_provider import ConfluenceSourceClient
from atlas_export.providers.source.jira_provider import JiraSourceClient
from atlas_export.providers.vector_store.pinecone_provider import PineconeVectorStore
from atlas_export.services.document_projector import DocumentProjector
from atlas_export.services.embedding_batcher import EmbeddingBatcher
from atlas_export.services.export_coordinator import ExportCoordinator
from atlas_export.services.export_writer import ExportWriter
from atlas_export.services.jira_browser import JiraBrowser
from atlas_export.services.vectorization_service import VectorizationService
from atlas_export.utils.logging import get_logger

_DEFAULT_PREFIXES = {"jira": "jira-issues", "confluence": "confluence-spaces"}

_logger = get_logger(__name__)


def build_vectorizer(
    app_settings: Settings,
    http_client: httpx.AsyncClient,
    config: dict[str, Any],
) -> VectorizationService | None:
    """Return the embed-and-upsert stage, or ``None`` when keys are missing."""
    if not app_settings.vectorization_configured():
        _logger.info("vectorization_disabled", reason="missing embedding or index keys")
        return None

    vector_config = config.get("vectorization", {})
    embedder = OpenAIEmbeddingProvider(settings=app_settings)
    vector_store = PineconeVectorStore(
        http_client,
        api_key=app_settings.pinecone_api_key,
        base_url=app_settings.pinecone_base_url,
        timeout=app_settings.http_timeout,
    )
    batcher = EmbeddingBatcher(
        embedder,
        batch_size=int(vector_config.get("batch_size", app_settings.vector_batch_size)),
    )
    return VectorizationService(
        batcher,
        vector_store,
        default_namespace=vector_config.get("namespace", app_settings.pinecone_namespace),
    )


def build_coordinators(
    app_settings: Settings,
    http_client: httpx.AsyncClient,
    config: dict[str, Any] | None = None,
) -> dict[str, ExportCoordinator]:
    """Construct one :class:`ExportCoordinator` per supported source system."""
    config = config if config is not None else load_config(settings=app_settings)
    export_config = config.get("export", {})
    prefixes = {**_DEFAULT_PREFIXES, **export_config.get("filename_prefixes", {})}
    export_dir = export_config.get("directory", app_settings.export_dir)

    vectorizer = build_vectorizer(app_settings, http_client, config)
    sources: list[ISourceApiClient] = [
        JiraSourceClient(http_client, timeout=app_settings.http_timeout),
        ConfluenceSourceClient(http_client, timeout=app_settings.http_timeout),
    ]

    coordinators: dict[str, ExportCoordinator] = {}
    for source_client in sources:
        name = source_client.get_source_name()
        coordinators[name] = ExportCoordinator(
            source_client=source_client,
            credential_provider=SettingsCredentialProvider(app_settings, name),
            writer=ExportWriter(export_dir, prefixes[name]),
            projector=DocumentProjector(name),
            vectorizer=vectorizer,
        )
    return coordinators


def build_jira_browser(app_settings: Settings, http_client: httpx.AsyncClient) -> JiraBrowser:
    """Project listing and JQL preview over the configured Jira credential."""
    return JiraBrowser(
        JiraSourceClient(http_client, timeout=app_settings.http_timeout),
        SettingsCredentialProvider(app_settings, "jira"),
    )
