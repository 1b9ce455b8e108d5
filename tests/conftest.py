"""Shared pytest fixtures for the atlasExport test suite."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
import structlog

from atlas_export.interfaces.credential_provider import ICredentialProvider
from atlas_export.interfaces.embedding_provider import IEmbeddingProvider
from atlas_export.interfaces.source_api import ISourceApiClient
from atlas_export.interfaces.vector_store_provider import IVectorStoreProvider
from atlas_export.models.pagination import OffsetCursor, Page, PageCursor
from atlas_export.models.records import ChildRecord, Credential, ParentRecord
from atlas_export.models.vector import EmbeddingVector


@pytest.fixture(autouse=True, scope="session")
def _plain_test_logging():
    """Render logs to stderr without caching bound loggers between tests."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------


@pytest.fixture
def credential() -> Credential:
    """Resolved credential pointing at a fake Atlassian site."""
    return Credential(
        base_url="https://acme.atlassian.net",
        email="dev@acme.test",
        api_key="token-123",
    )


class StaticCredentialProvider(ICredentialProvider):
    """Returns a fixed credential, or raises a preset error; counts calls."""

    def __init__(self, credential: Credential | None = None, error: Exception | None = None):
        self._credential = credential
        self._error = error
        self.calls = 0

    async def get_credentials(self) -> Credential:
        self.calls += 1
        if self._error is not None:
            raise self._error
        assert self._credential is not None
        return self._credential


@pytest.fixture
def credential_provider(credential: Credential) -> StaticCredentialProvider:
    return StaticCredentialProvider(credential)


@pytest.fixture
def credential_provider_factory(credential: Credential) -> Callable[..., StaticCredentialProvider]:
    """Factory: ``credential_provider_factory(error=ConfigurationError(...))``."""

    def _make(error: Exception | None = None) -> StaticCredentialProvider:
        return StaticCredentialProvider(credential, error=error)

    return _make


# ---------------------------------------------------------------------------
# Scripted source client
# ---------------------------------------------------------------------------


class ScriptedSourceClient(ISourceApiClient):
    """In-memory source that pages through fixed parent/child lists.

    Both levels use offset paging and report end-of-data once
    ``start + returned`` reaches the list length.  ``failures`` maps a
    parent key to the error raised when its children are fetched.
    ``totals`` sets the child total a page reports for a parent, and
    ``overfetch`` makes child pages return that many extra records.
    """

    def __init__(
        self,
        parents: list[ParentRecord],
        children: dict[str, list[ChildRecord]] | None = None,
        failures: dict[str, Exception] | None = None,
        name: str = "jira",
        totals: dict[str, int] | None = None,
        overfetch: int = 0,
    ) -> None:
        self._parents = parents
        self._totals = totals or {}
        self._overfetch = overfetch
        self._children = children or {}
        self._failures = failures or {}
        self._name = name
        self.parent_calls: list[OffsetCursor] = []
        self.child_calls: list[tuple[str, int, int]] = []

    async def fetch_parents(self, credential: Credential, cursor: OffsetCursor) -> Page[ParentRecord]:
        self.parent_calls.append(cursor)
        items = self._parents[cursor.start : cursor.start + cursor.size]
        end = cursor.start + len(items)
        next_cursor = cursor.advance(len(items)) if items and end < len(self._parents) else None
        return Page[ParentRecord](items=items, next=next_cursor)

    async def fetch_children(
        self,
        credential: Credential,
        parent_key: str,
        cursor: PageCursor,
        max_results: int,
    ) -> Page[ChildRecord]:
        start = cursor.start if isinstance(cursor, OffsetCursor) else 0
        self.child_calls.append((parent_key, start, max_results))
        if parent_key in self._failures:
            raise self._failures[parent_key]
        records = self._children.get(parent_key, [])
        items = records[start : start + max_results + self._overfetch]
        end = start + len(items)
        next_cursor = (
            OffsetCursor(start=end, size=max_results) if items and end < len(records) else None
        )
        return Page[ChildRecord](items=items, next=next_cursor, total=self._totals.get(parent_key))

    def initial_child_cursor(self, page_size: int) -> PageCursor:
        return OffsetCursor(start=0, size=page_size)

    def get_source_name(self) -> str:
        return self._name


def make_children(parent_key: str, count: int) -> list[ChildRecord]:
    return [
        ChildRecord(
            id=f"{parent_key}-{index}",
            key=f"{parent_key}-{index}",
            fields={"summary": f"{parent_key} issue {index}", "status": {"name": "To Do"}},
        )
        for index in range(1, count + 1)
    ]


@pytest.fixture
def scripted_source() -> Callable[..., ScriptedSourceClient]:
    """Factory: ``scripted_source({"DEMO": 2, "OPS": 1})`` builds parents and children."""

    def _make(
        counts: dict[str, int],
        failures: dict[str, Exception] | None = None,
        extra_parents: list[ParentRecord] | None = None,
        name: str = "jira",
        totals: dict[str, int] | None = None,
        overfetch: int = 0,
    ) -> ScriptedSourceClient:
        parents = list(extra_parents or [])
        parents.extend(
            ParentRecord(id=str(index), key=key, name=f"{key} project")
            for index, key in enumerate(counts, start=1)
        )
        children = {key: make_children(key, count) for key, count in counts.items()}
        return ScriptedSourceClient(
            parents, children, failures=failures, name=name, totals=totals, overfetch=overfetch
        )

    return _make


# ---------------------------------------------------------------------------
# Embedding / vector store doubles
# ---------------------------------------------------------------------------


class RecordingEmbeddingProvider(IEmbeddingProvider):
    """Returns 3-dim vectors and records the size of every ``embed`` call."""

    def __init__(self, fail_on_call: int | None = None, error: Exception | None = None) -> None:
        self.call_sizes: list[int] = []
        self._fail_on_call = fail_on_call
        self._error = error

    async def embed(self, texts: list[str]) -> list[list[float]]:
        self.call_sizes.append(len(texts))
        if self._fail_on_call is not None and len(self.call_sizes) == self._fail_on_call:
            assert self._error is not None
            raise self._error
        return [[float(len(text)), 0.5, 1.0] for text in texts]

    def get_dimension(self) -> int:
        return 3

    def get_provider_name(self) -> str:
        return "recording-embedding"

    def is_available(self) -> bool:
        return True


class RecordingVectorStore(IVectorStoreProvider):
    """Keeps every upsert batch in memory."""

    def __init__(self) -> None:
        self.upserts: list[tuple[list[EmbeddingVector], str]] = []

    async def upsert(self, vectors: list[EmbeddingVector], namespace: str) -> int:
        self.upserts.append((list(vectors), namespace))
        return len(vectors)

    def get_provider_name(self) -> str:
        return "recording-store"

    def is_available(self) -> bool:
        return True


@pytest.fixture
def embedding_provider() -> RecordingEmbeddingProvider:
    return RecordingEmbeddingProvider()


@pytest.fixture
def vector_store() -> RecordingVectorStore:
    return RecordingVectorStore()


@pytest.fixture
def embedding_provider_factory() -> Callable[..., RecordingEmbeddingProvider]:
    """Factory: ``embedding_provider_factory(fail_on_call=2, error=...)``."""
    return RecordingEmbeddingProvider


@pytest.fixture
def child_records() -> Callable[[str, int], list[ChildRecord]]:
    return make_children


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


@pytest.fixture
def make_http_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Factory for an ``httpx.AsyncClient`` served by a ``MockTransport`` handler."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def export_dir(tmp_path: Path) -> Path:
    """Export target directory (not created up front)."""
    return tmp_path / "exports"


def json_files(directory: Path) -> list[Path]:
    if not directory.exists():
        return []
    return sorted(directory.glob("*.json"))


@pytest.fixture
def list_exports() -> Callable[[Path], list[Path]]:
    return json_files


def settings_kwargs(**overrides: Any) -> dict[str, Any]:
    values: dict[str, Any] = {
        "jira_url": "acme.atlassian.net/",
        "jira_email": "dev@acme.test",
        "jira_api_key": "jira-token",
        "confluence_url": "https://acme.atlassian.net",
        "confluence_email": "dev@acme.test",
        "confluence_api_key": "conf-token",
        "openai_api_key": "",
        "pinecone_api_key": "",
        "pinecone_base_url": "",
        "_env_file": None,
    }
    values.update(overrides)
    return values


@pytest.fixture
def settings_factory():
    """Build :class:`Settings` from explicit values, ignoring any local .env."""
    from atlas_export.config.settings import Settings

    def _make(**overrides: Any) -> Settings:
        return Settings(**settings_kwargs(**overrides))

    return _make
