"""Credential provider implementations."""

from atlas_export.providers.credentials.request_credential_provider import (
    RequestCredentialProvider,
    credentials_for,
)
from atlas_export.providers.credentials.settings_credential_provider import (
    SettingsCredentialProvider,
)

__all__ = ["RequestCredentialProvider", "SettingsCredentialProvider", "credentials_for"]
