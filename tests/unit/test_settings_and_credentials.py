"""Unit tests for Settings, load_config and the credential providers."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from atlas_export.config.loader import load_config
from atlas_export.models.export import ExportRequest
from atlas_export.providers.credentials.request_credential_provider import (
    RequestCredentialProvider,
    credentials_for,
)
from atlas_export.providers.credentials.settings_credential_provider import (
    SettingsCredentialProvider,
    normalize_base_url,
)
from atlas_export.providers.source.base import build_auth_headers
from atlas_export.utils.errors import ConfigurationError, ErrorKind


class TestSettings:
    def test_env_noise_is_stripped(self, settings_factory) -> None:
        settings = settings_factory(jira_api_key='  "quoted-token"  ', pinecone_namespace="'docs'")
        assert settings.jira_api_key == "quoted-token"
        assert settings.pinecone_namespace == "docs"

    def test_reads_environment(self, monkeypatch) -> None:
        from atlas_export.config.settings import Settings

        monkeypatch.setenv("CONFLUENCE_URL", " https://wiki.example.com ")
        monkeypatch.setenv("VECTOR_BATCH_SIZE", "7")
        settings = Settings(_env_file=None)
        assert settings.confluence_url == "https://wiki.example.com"
        assert settings.vector_batch_size == 7

    def test_vectorization_configured(self, settings_factory) -> None:
        assert not settings_factory().vectorization_configured()
        assert settings_factory(
            openai_api_key="sk",
            pinecone_api_key="pc",
            pinecone_base_url="https://idx.pinecone.io",
        ).vectorization_configured()


class TestLoadConfig:
    def test_merges_yaml_with_settings(self, tmp_path, settings_factory) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "export:\n  limit: 500\n  filename_prefixes:\n    jira: custom-jira\n",
            encoding="utf-8",
        )
        settings = settings_factory(export_dir="out", vector_batch_size=5)

        config = load_config(str(config_file), settings=settings)

        assert config["export"]["limit"] == 500
        assert config["export"]["filename_prefixes"]["jira"] == "custom-jira"
        assert config["export"]["directory"] == "out"
        assert config["vectorization"]["batch_size"] == 5
        assert config["vectorization"]["configured"] is False

    def test_missing_file_yields_overrides_only(self, tmp_path, settings_factory) -> None:
        config = load_config(str(tmp_path / "absent.yaml"), settings=settings_factory())
        assert config["export"]["directory"] == "tmp"
        assert config["vectorization"]["namespace"] == "default"

    def test_yaml_values_survive_unset_settings(self, tmp_path, settings_factory) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "vectorization:\n  batch_size: 7\n  namespace: docs\nlogging:\n  level: DEBUG\n",
            encoding="utf-8",
        )

        config = load_config(str(config_file), settings=settings_factory())

        assert config["vectorization"]["batch_size"] == 7
        assert config["vectorization"]["namespace"] == "docs"
        assert config["logging"]["level"] == "DEBUG"

    def test_explicit_settings_beat_yaml(self, tmp_path, settings_factory) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("vectorization:\n  batch_size: 7\n", encoding="utf-8")

        config = load_config(str(config_file), settings=settings_factory(vector_batch_size=3))

        assert config["vectorization"]["batch_size"] == 3


class TestExportRequest:
    def test_defaults(self) -> None:
        request = ExportRequest()
        assert request.limit == 2000
        assert request.child_batch_size == 100
        assert request.parent_batch_size == 50
        assert request.vectorize is False
        assert request.namespace is None

    def test_camel_case_aliases_and_truthy_strings(self) -> None:
        request = ExportRequest.model_validate(
            {"limit": 10, "childBatchSize": 5, "parentBatchSize": 20, "vectorize": "yes"}
        )
        assert request.child_batch_size == 5
        assert request.parent_batch_size == 20
        assert request.vectorize is True

    def test_credential_overrides_accept_request_aliases(self) -> None:
        request = ExportRequest.model_validate(
            {"jiraUrl": "other.atlassian.net", "email": "ops@other.test", "apiKey": "secret"}
        )
        assert request.base_url == "other.atlassian.net"
        assert request.api_key == "secret"
        assert request.has_credential_overrides()
        assert "secret" not in repr(request)
        assert "api_key" not in request.model_dump()

    def test_blank_overrides_do_not_count(self) -> None:
        assert not ExportRequest(base_url="  ", api_key="").has_credential_overrides()

    @pytest.mark.parametrize(
        "values",
        [
            {"limit": 0},
            {"limit": 2001},
            {"child_batch_size": 101},
            {"parent_batch_size": 1001},
            {"namespace": ""},
            {"namespace": "x" * 65},
        ],
    )
    def test_bounds(self, values) -> None:
        with pytest.raises(ValidationError):
            ExportRequest(**values)


class TestSettingsCredentialProvider:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("acme.atlassian.net/", "https://acme.atlassian.net"),
            ("http://localhost:8080//", "http://localhost:8080"),
            ("https://acme.atlassian.net", "https://acme.atlassian.net"),
        ],
    )
    def test_normalize_base_url(self, raw: str, expected: str) -> None:
        assert normalize_base_url(raw) == expected

    @pytest.mark.asyncio
    async def test_resolves_jira_credentials(self, settings_factory) -> None:
        provider = SettingsCredentialProvider(settings_factory(), "jira")
        credential = await provider.get_credentials()
        assert credential.base_url == "https://acme.atlassian.net"
        assert credential.email == "dev@acme.test"
        assert credential.api_key == "jira-token"

    @pytest.mark.asyncio
    async def test_missing_fields_raise_configuration_error(self, settings_factory) -> None:
        provider = SettingsCredentialProvider(
            settings_factory(confluence_url="", confluence_api_key="   "), "confluence"
        )
        with pytest.raises(ConfigurationError) as exc_info:
            await provider.get_credentials()

        assert exc_info.value.kind is ErrorKind.CONFIGURATION
        assert "CONFLUENCE_URL" in exc_info.value.message
        assert "CONFLUENCE_API_KEY" in exc_info.value.message
        assert "CONFLUENCE_EMAIL" not in exc_info.value.message

    @pytest.mark.asyncio
    async def test_reads_current_settings_on_every_call(self, settings_factory) -> None:
        settings = settings_factory()
        provider = SettingsCredentialProvider(settings, "jira")
        first = await provider.get_credentials()
        settings.jira_api_key = "rotated"
        second = await provider.get_credentials()
        assert first.api_key == "jira-token"
        assert second.api_key == "rotated"

    @pytest.mark.asyncio
    async def test_blank_email_resolves_to_bearer(self, settings_factory) -> None:
        provider = SettingsCredentialProvider(settings_factory(jira_email="  "), "jira")
        credential = await provider.get_credentials()

        assert credential.email is None
        assert build_auth_headers(credential)["Authorization"] == "Bearer jira-token"


class TestRequestCredentialProvider:
    @pytest.mark.asyncio
    async def test_complete_override_skips_configured_credentials(
        self, credential_provider
    ) -> None:
        overrides = ExportRequest(base_url="other.atlassian.net/", api_key=" pat ")
        credential = await RequestCredentialProvider(overrides, credential_provider).get_credentials()

        assert credential.base_url == "https://other.atlassian.net"
        assert credential.email is None
        assert credential.api_key == "pat"
        assert credential_provider.calls == 0

    @pytest.mark.asyncio
    async def test_partial_override_is_laid_over_configured(self, credential_provider) -> None:
        overrides = ExportRequest(email="ops@acme.test")
        credential = await RequestCredentialProvider(overrides, credential_provider).get_credentials()

        assert credential.base_url == "https://acme.atlassian.net"
        assert credential.email == "ops@acme.test"
        assert credential.api_key == "token-123"
        assert credential_provider.calls == 1

    @pytest.mark.asyncio
    async def test_partial_override_propagates_configuration_error(
        self, credential_provider_factory
    ) -> None:
        fallback = credential_provider_factory(error=ConfigurationError("JIRA_URL missing"))
        overrides = ExportRequest(api_key="pat")

        with pytest.raises(ConfigurationError):
            await RequestCredentialProvider(overrides, fallback).get_credentials()

    def test_credentials_for_without_overrides_returns_configured(
        self, credential_provider
    ) -> None:
        assert credentials_for(ExportRequest(), credential_provider) is credential_provider
        assert isinstance(
            credentials_for(ExportRequest(api_key="pat"), credential_provider),
            RequestCredentialProvider,
        )
