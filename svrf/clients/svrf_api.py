"""
HTTP client for the SVRF REST API.

Covers the API-key exchange and the media endpoints. Every library failure is
translated into the SDK's own error types at this boundary.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from svrf.core.config import SvrfSettings
from svrf.core.errors import ExchangeFailedError, TransportError
from svrf.schemas.options import (
    SearchOptions,
    TrendingOptions,
    build_query_params,
)
from svrf.schemas.responses import (
    AuthenticationResponse,
    MediaListResponse,
    SingleMediaResponse,
)

logger = logging.getLogger(__name__)

NO_TOKEN_MESSAGE = "There is no access token in the server response. Check your API key."

EnvelopeT = TypeVar("EnvelopeT", bound=BaseModel)


class SvrfApiClient:
    """Exchange API keys for app tokens and query the media endpoints."""

    AUTHENTICATE_PATH = "/app/authenticate"
    SEARCH_PATH = "/vr/search"
    TRENDING_PATH = "/vr/trending"
    MEDIA_PATH = "/vr/{media_id}"

    def __init__(self, http_client: httpx.AsyncClient, *, token_header: str = "x-app-token") -> None:
        self._http = http_client
        self._token_header = token_header

    @classmethod
    def from_settings(cls, settings: SvrfSettings) -> "SvrfApiClient":
        http_client = httpx.AsyncClient(
            base_url=settings.api_base_url,
            timeout=settings.request_timeout,
        )
        return cls(http_client, token_header=settings.token_header)

    @property
    def token(self) -> str | None:
        return self._http.headers.get(self._token_header)

    def set_token(self, token: str) -> None:
        """Attach the app token to every subsequent media request."""
        self._http.headers[self._token_header] = token

    async def exchange(self, api_key: str) -> tuple[str, int]:
        """
        Exchange an API key for an app token.

        Returns a tuple of (token, expires_in_seconds).
        """
        try:
            response = await self._http.post(self.AUTHENTICATE_PATH, json={"apiKey": api_key})
        except httpx.HTTPError as exc:
            raise ExchangeFailedError(cause=exc) from exc

        if response.status_code != httpx.codes.OK:
            raise ExchangeFailedError(
                f"Authentication failed with status {response.status_code}: {response.text}"
            )

        try:
            payload = AuthenticationResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise ExchangeFailedError(cause=exc) from exc

        if not payload.token or payload.expires_in is None:
            raise ExchangeFailedError(NO_TOKEN_MESSAGE)

        return payload.token, payload.expires_in

    async def search(self, query: str, options: SearchOptions | None = None) -> MediaListResponse:
        params = {"q": query, **build_query_params(options)}
        return await self._get(self.SEARCH_PATH, MediaListResponse, params=params)

    async def get_trending(self, options: TrendingOptions | None = None) -> MediaListResponse:
        return await self._get(
            self.TRENDING_PATH, MediaListResponse, params=build_query_params(options)
        )

    async def get_media(self, media_id: str) -> SingleMediaResponse:
        path = self.MEDIA_PATH.format(media_id=quote(media_id, safe=""))
        return await self._get(path, SingleMediaResponse)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _get(
        self,
        path: str,
        envelope: Type[EnvelopeT],
        *,
        params: Mapping[str, Any] | None = None,
    ) -> EnvelopeT:
        try:
            response = await self._http.get(path, params=params)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as exc:
            logger.warning("SVRF request to %s failed: %s", path, exc)
            raise TransportError(cause=exc) from exc
        except ValueError as exc:
            logger.warning("SVRF response from %s was not valid JSON", path)
            raise TransportError(cause=exc) from exc

        try:
            return envelope.model_validate(body)
        except ValidationError as exc:
            raise TransportError(cause=exc) from exc


__all__ = ["NO_TOKEN_MESSAGE", "SvrfApiClient"]
