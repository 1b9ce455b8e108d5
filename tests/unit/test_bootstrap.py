"""Unit tests for component assembly in atlas_export.bootstrap."""

from __future__ import annotations

from unittest.mock import MagicMock

import httpx
import pytest

from atlas_export.bootstrap import build_coordinators, build_jira_browser, build_vectorizer
from atlas_export.models.browse import ProjectListRequest
from atlas_export.services.vectorization_service import VectorizationService


def _http() -> MagicMock:
    return MagicMock(spec=httpx.AsyncClient)


class TestBuildVectorizer:
    def test_none_without_keys(self, settings_factory) -> None:
        assert build_vectorizer(settings_factory(), _http(), {}) is None

    def test_built_when_configured(self, settings_factory) -> None:
        settings = settings_factory(
            openai_api_key="sk-test",
            pinecone_api_key="pc",
            pinecone_base_url="https://idx.pinecone.io",
        )
        config = {"vectorization": {"batch_size": 5, "namespace": "team"}}

        vectorizer = build_vectorizer(settings, _http(), config)

        assert isinstance(vectorizer, VectorizationService)
        assert vectorizer.resolve_namespace(None) == "team"
        assert vectorizer.resolve_namespace("docs") == "docs"


class TestBuildCoordinators:
    def test_one_coordinator_per_source(self, settings_factory, tmp_path) -> None:
        config = {"export": {"directory": str(tmp_path)}}
        coordinators = build_coordinators(settings_factory(), _http(), config)

        assert sorted(coordinators) == ["confluence", "jira"]
        assert coordinators["jira"].source_name == "jira"
        assert coordinators["confluence"].source_name == "confluence"
        assert not coordinators["jira"].vectorization_enabled

    def test_vectorization_shared_when_configured(self, settings_factory, tmp_path) -> None:
        settings = settings_factory(
            openai_api_key="sk-test",
            pinecone_api_key="pc",
            pinecone_base_url="https://idx.pinecone.io",
        )
        coordinators = build_coordinators(settings, _http(), {"export": {"directory": str(tmp_path)}})

        assert all(c.vectorization_enabled for c in coordinators.values())


class TestBuildJiraBrowser:
    @pytest.mark.asyncio
    async def test_uses_configured_jira_credentials(self, settings_factory, make_http_client) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"values": [{"key": "DEMO"}], "isLast": True})

        async with make_http_client(handler) as http:
            browser = build_jira_browser(settings_factory(jira_email=""), http)
            listing = await browser.list_projects(ProjectListRequest(limit=10))

        assert listing.is_last is True
        assert seen[0].url.host == "acme.atlassian.net"
        assert seen[0].headers["Authorization"] == "Bearer jira-token"
