"""Jira browsing reads: one page of projects, and a capped JQL preview.

Neither call touches the quota, the export writer or the vector index.
Credentials resolve the same way as for an export: request fields first,
then the configured Jira credential.
"""

from __future__ import annotations

from atlas_export.interfaces.credential_provider import ICredentialProvider
from atlas_export.models.browse import (
    JiraPreviewRequest,
    PreviewItem,
    ProjectListing,
    ProjectListRequest,
)
from atlas_export.providers.credentials.request_credential_provider import credentials_for
from atlas_export.providers.source.jira_provider import JiraSourceClient
from atlas_export.utils.logging import get_logger

logger = get_logger(__name__)


class JiraBrowser:
    def __init__(self, client: JiraSourceClient, credential_provider: ICredentialProvider) -> None:
        self._client = client
        self._credentials = credential_provider

    async def list_projects(self, request: ProjectListRequest) -> ProjectListing:
        credential = await credentials_for(request, self._credentials).get_credentials()
        listing = await self._client.list_projects(credential, request.start_at, request.limit)
        logger.info(
            "jira_projects_listed",
            start_at=request.start_at,
            count=listing.count,
            total=listing.total,
        )
        return listing

    async def preview(self, request: JiraPreviewRequest) -> list[PreviewItem]:
        credential = await credentials_for(request, self._credentials).get_credentials()
        return await self._client.preview(credential, request.jql, request.limit)
