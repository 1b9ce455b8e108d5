"""Source-system clients for the Atlassian REST APIs.

    JiraSourceClient       - projects (offset) → issues (continuation token)
    ConfluenceSourceClient - spaces (offset)   → pages (offset)
"""

from atlas_export.providers.source.confluence_provider import ConfluenceSourceClient
from atlas_export.providers.source.jira_provider import JiraSourceClient

__all__ = ["ConfluenceSourceClient", "JiraSourceClient"]
