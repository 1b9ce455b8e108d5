"""Credential provider backed by the application Settings.

Reads the per-system ``*_URL``/``*_EMAIL``/``*_API_KEY`` values from the
Settings instance it was constructed with; nothing is memoised, so each
export call sees the current values.  URL and key are required; without an
email the credential authenticates with a bearer token.
"""

from __future__ import annotations

from typing import Literal

from atlas_export.config.settings import Settings
from atlas_export.interfaces.credential_provider import ICredentialProvider
from atlas_export.models.records import Credential
from atlas_export.utils.defaults import is_blank
from atlas_export.utils.errors import ConfigurationError
from atlas_export.utils.logging import get_logger

SourceSystem = Literal["jira", "confluence"]


def normalize_base_url(url: str) -> str:
    """Add ``https://`` when the scheme is missing and drop trailing slashes."""
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        url = f"https://{url}"
    return url.rstrip("/")


class SettingsCredentialProvider(ICredentialProvider):
    """Resolve Jira or Confluence credentials from :class:`Settings`."""

    def __init__(self, settings: Settings, system: SourceSystem) -> None:
        self._settings = settings
        self._system = system
        self._logger = get_logger(__name__)

    async def get_credentials(self) -> Credential:
        prefix = self._system
        url = getattr(self._settings, f"{prefix}_url")
        email = getattr(self._settings, f"{prefix}_email")
        api_key = getattr(self._settings, f"{prefix}_api_key")

        # A blank email is allowed: the key is then sent as a bearer token.
        missing = [name for name, value in (("url", url), ("api_key", api_key)) if is_blank(value)]
        if missing:
            self._logger.error(
                "credentials_missing",
                system=prefix,
                missing=missing,
                api_key_set=not is_blank(api_key),
            )
            env_names = ", ".join(f"{prefix.upper()}_{name.upper()}" for name in missing)
            raise ConfigurationError(
                f"{prefix.capitalize()} credentials missing: {env_names}",
                provider_name=prefix,
            )

        credential = Credential(
            base_url=normalize_base_url(url),
            email=None if is_blank(email) else email.strip(),
            api_key=api_key.strip(),
        )
        self._logger.info("credentials_resolved", system=prefix, base_url=credential.base_url)
        return credential
