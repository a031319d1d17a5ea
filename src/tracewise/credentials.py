# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Credential provider producing authentication headers per attempt."""

import asyncio
import logging

from .config import ClientConfig
from .exceptions import AuthenticationError
from .protocols.auth import TokenSource

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"
AUTHORIZATION_HEADER = "Authorization"


class CredentialProvider:
    """
    Produce the authentication headers for one outgoing request.

    The API key, when configured, is sent under ``x-api-key``. The token
    source, when configured, is invoked on every call and its result sent as a
    Bearer credential. Either is sufficient for the backend.

    A failing token source surfaces as AuthenticationError, which the retry
    controller treats as terminal.
    """

    def __init__(
        self,
        api_key: str | None = None,
        token_source: TokenSource | None = None,
    ):
        self._api_key = api_key
        self._token_source = token_source

    @classmethod
    def from_config(cls, config: ClientConfig) -> "CredentialProvider":
        return cls(api_key=config.api_key, token_source=config.token_provider)

    @property
    def has_credentials(self) -> bool:
        return self._api_key is not None or self._token_source is not None

    async def get_headers(self) -> dict[str, str]:
        """
        Build the authentication headers for one attempt.

        Returns:
            Header mapping; empty when no credentials are configured

        Raises:
            AuthenticationError: If the token source fails or returns an
                empty token
        """
        headers: dict[str, str] = {}

        if self._api_key is not None:
            headers[API_KEY_HEADER] = self._api_key

        if self._token_source is not None:
            try:
                token = await self._token_source()
            except asyncio.CancelledError:
                raise
            except AuthenticationError:
                raise
            except Exception as e:
                logger.warning(f"Token source failed: {type(e).__name__}")
                raise AuthenticationError(f"Failed to get token: {e}") from e

            if not isinstance(token, str) or not token.strip():
                raise AuthenticationError("Token source returned an empty token")
            headers[AUTHORIZATION_HEADER] = f"Bearer {token}"

        return headers


__all__ = ["API_KEY_HEADER", "AUTHORIZATION_HEADER", "CredentialProvider"]
