"""Credential provider for per-request overrides.

A request that carries both ``base_url`` and ``api_key`` is self-contained
and the fallback provider is never consulted, so a deployment without
configured credentials can still serve it.  A partial override is laid over
the fallback credential field by field.
"""

from __future__ import annotations

from atlas_export.interfaces.credential_provider import ICredentialProvider
from atlas_export.models.records import Credential, CredentialOverrides
from atlas_export.providers.credentials.settings_credential_provider import normalize_base_url
from atlas_export.utils.defaults import is_blank
from atlas_export.utils.logging import get_logger


def _clean(value: str | None) -> str | None:
    return None if is_blank(value) else value.strip()


class RequestCredentialProvider(ICredentialProvider):
    """Resolve credentials from request fields, falling back to *fallback*."""

    def __init__(self, overrides: CredentialOverrides, fallback: ICredentialProvider) -> None:
        self._base_url = _clean(overrides.base_url)
        self._email = _clean(overrides.email)
        self._api_key = _clean(overrides.api_key)
        self._fallback = fallback
        self._logger = get_logger(__name__)

    async def get_credentials(self) -> Credential:
        if self._base_url and self._api_key:
            credential = Credential(
                base_url=normalize_base_url(self._base_url),
                email=self._email,
                api_key=self._api_key,
            )
            self._logger.info(
                "credentials_resolved",
                origin="request",
                base_url=credential.base_url,
            )
            return credential

        configured = await self._fallback.get_credentials()
        credential = Credential(
            base_url=normalize_base_url(self._base_url) if self._base_url else configured.base_url,
            email=self._email or configured.email,
            api_key=self._api_key or configured.api_key,
        )
        self._logger.info(
            "credentials_resolved",
            origin="request+configured",
            base_url=credential.base_url,
        )
        return credential


def credentials_for(
    overrides: CredentialOverrides,
    configured: ICredentialProvider,
) -> ICredentialProvider:
    """Return *configured* unless the request carries its own credential fields."""
    if overrides.has_credential_overrides():
        return RequestCredentialProvider(overrides, configured)
    return configured
