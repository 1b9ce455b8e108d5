"""Abstract base class for credential lookups.

Credential storage is outside the export core: the coordinator only asks
for a :class:`~atlas_export.models.records.Credential` once per export call
and treats any failure as fatal before the first network request.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from atlas_export.models.records import Credential


# Concrete implementation: SettingsCredentialProvider (atlas_export/providers/credentials/)
# A database- or vault-backed provider can replace it through this interface.
class ICredentialProvider(ABC):
    """Contract for resolving source-system credentials."""

    @abstractmethod
    async def get_credentials(self) -> Credential:
        """Return complete credentials.

        Raises
        ------
        atlas_export.utils.errors.ConfigurationError
            If any required field is missing or blank.
        """
