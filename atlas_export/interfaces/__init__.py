"""Public interface definitions for all external collaborators.

Every external API in the export pipeline is accessed exclusively through
the abstract base classes defined here.  Concrete adapters live in
``atlas_export/providers/`` and are wired together in
``atlas_export/bootstrap.py``; unit tests inject fakes instead.

CONCRETE PROVIDER MAP:
    Interface               →  Concrete implementations (in atlas_export/providers/)
    ─────────────────────────────────────────────────────────────────────
    ISourceApiClient        →  JiraSourceClient, ConfluenceSourceClient
    ICredentialProvider     →  SettingsCredentialProvider
    IEmbeddingProvider      →  OpenAIEmbeddingProvider
    IVectorStoreProvider    →  PineconeVectorStore
"""

from atlas_export.interfaces.credential_provider import ICredentialProvider
from atlas_export.interfaces.embedding_provider import IEmbeddingProvider
from atlas_export.interfaces.source_api import ISourceApiClient
from atlas_export.interfaces.vector_store_provider import IVectorStoreProvider

__all__ = [
    "ICredentialProvider",
    "IEmbeddingProvider",
    "ISourceApiClient",
    "IVectorStoreProvider",
]
