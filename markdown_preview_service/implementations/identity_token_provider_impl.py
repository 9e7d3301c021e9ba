"""Metadata server identity token provider."""

from __future__ import annotations

from uuid import UUID

import httpx
from preview_service_libs.error_handling import raise_credential_acquisition_error
from preview_service_libs.logging_utils import create_service_logger

from markdown_preview_service.protocols import IdentityTokenProviderProtocol

logger = create_service_logger("editor.identity_token_provider")

IDENTITY_PATH = "/computeMetadata/v1/instance/service-accounts/default/identity"


class MetadataIdentityTokenProvider(IdentityTokenProviderProtocol):
    """Fetches audience-scoped identity tokens from the platform metadata server.

    A fresh token is requested for every call; nothing is cached.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        metadata_url: str,
        timeout_seconds: float,
    ) -> None:
        """Initialize with shared HTTP client.

        Args:
            http_client: Shared httpx AsyncClient instance
            metadata_url: Base URL of the metadata server
            timeout_seconds: Timeout applied to the token request
        """
        self._client = http_client
        self._token_url = f"{metadata_url.rstrip('/')}{IDENTITY_PATH}"
        self._timeout = timeout_seconds

    async def fetch_token(self, audience: str, correlation_id: UUID) -> str:
        """Fetch an identity token for ``audience``.

        Raises:
            PreviewServiceError: CREDENTIAL_ACQUISITION_FAILED when the metadata
                server is unreachable, times out, rejects the request or
                returns an empty token
        """
        try:
            response = await self._client.get(
                self._token_url,
                params={"audience": audience},
                headers={"Metadata-Flavor": "Google"},
                timeout=self._timeout,
            )
        except httpx.HTTPError as e:
            raise_credential_acquisition_error(
                service="markdown_preview_service",
                operation="fetch_identity_token",
                audience=audience,
                message=f"Failed to query identity token from metadata server: {e}",
                correlation_id=correlation_id,
                metadata_url=self._token_url,
                error_type=type(e).__name__,
            )

        if response.status_code != httpx.codes.OK:
            raise_credential_acquisition_error(
                service="markdown_preview_service",
                operation="fetch_identity_token",
                audience=audience,
                message=(
                    "Metadata server refused identity token request: "
                    f"{response.reason_phrase} ({response.status_code})"
                ),
                correlation_id=correlation_id,
                metadata_url=self._token_url,
                status_code=response.status_code,
            )

        token = response.text.strip()
        if not token:
            raise_credential_acquisition_error(
                service="markdown_preview_service",
                operation="fetch_identity_token",
                audience=audience,
                message="Metadata server returned an empty identity token",
                correlation_id=correlation_id,
                metadata_url=self._token_url,
            )

        logger.debug("Fetched identity token", audience=audience, correlation_id=str(correlation_id))
        return token
