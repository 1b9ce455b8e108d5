"""Pydantic v2 models for source-system records and credentials.

All models use frozen config (immutable).  ``from_api`` constructors accept
raw JSON objects as returned by Jira/Confluence and tolerate missing or
oddly typed keys; they never raise on shape problems.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


def _as_str(value: Any) -> str | None:
    """Coerce ids that arrive as ints (Confluence space ids) to strings."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class Credential(BaseModel):
    """Connection details for one source system, resolved once per export call."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(description="Site root, e.g. https://acme.atlassian.net")
    email: str | None = Field(
        default=None,
        description="Account email; when absent the key is sent as a bearer token.",
    )
    api_key: str = Field(description="API token.", repr=False)


class CredentialOverrides(BaseModel):
    """Optional per-request connection details.

    Accepted on export, project-listing and preview bodies.  Any field left
    out falls back to the configured credential; ``api_key`` is never echoed
    back in serialised output or reprs.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    base_url: str | None = Field(
        default=None,
        max_length=2048,
        validation_alias=AliasChoices("base_url", "baseUrl", "jiraUrl", "confluenceUrl"),
    )
    email: str | None = Field(default=None, max_length=320)
    api_key: str | None = Field(
        default=None,
        max_length=2048,
        validation_alias=AliasChoices("api_key", "apiKey"),
        repr=False,
        exclude=True,
    )

    def has_credential_overrides(self) -> bool:
        return any(
            value is not None and value.strip()
            for value in (self.base_url, self.email, self.api_key)
        )


class ParentRecord(BaseModel):
    """A collection container (Jira project, Confluence space)."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    key: str | None = None
    name: str | None = None

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> ParentRecord:
        return cls(
            id=_as_str(raw.get("id")),
            key=_as_str(raw.get("key")),
            name=_as_str(raw.get("name")),
        )

    @property
    def label(self) -> str:
        """Display label: the name when present, otherwise the key."""
        return self.name or self.key or ""


class ChildRecord(BaseModel):
    """A leaf item (Jira issue, Confluence page) belonging to a parent.

    ``fields`` is the open, heterogeneous mapping the source returned.  For
    Jira it is the issue's ``fields`` object; Confluence pages have no such
    wrapper, so the whole page object minus ``id`` is stored there.
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    key: str | None = None
    fields: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_jira_issue(cls, raw: dict[str, Any]) -> ChildRecord:
        fields = raw.get("fields")
        return cls(
            id=_as_str(raw.get("id")),
            key=_as_str(raw.get("key")),
            fields=fields if isinstance(fields, dict) else {},
        )

    @classmethod
    def from_confluence_content(cls, raw: dict[str, Any]) -> ChildRecord:
        fields = {name: value for name, value in raw.items() if name != "id"}
        return cls(id=_as_str(raw.get("id")), key=None, fields=fields)
