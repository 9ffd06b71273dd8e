"""Authenticated media lookups with payload classification."""

from __future__ import annotations

import logging
from typing import Protocol

from svrf.core.errors import MissingPayloadError
from svrf.models.media import Media, MediaPage
from svrf.schemas.options import SearchOptions, TrendingOptions
from svrf.schemas.responses import MediaListResponse, SingleMediaResponse
from svrf.services.token_lifecycle import TokenLifecycleManager

logger = logging.getLogger(__name__)

NO_MEDIA_MESSAGE = "There is no media in the server response."


class MediaApi(Protocol):
    async def search(self, query: str, options: SearchOptions | None = None) -> MediaListResponse:
        ...

    async def get_trending(self, options: TrendingOptions | None = None) -> MediaListResponse:
        ...

    async def get_media(self, media_id: str) -> SingleMediaResponse:
        ...


class MediaFetchClient:
    """Run media requests once authentication has settled.

    Transport failures surface as ``TransportError`` from the API client; a
    successful response without its ``media`` payload raises
    ``MissingPayloadError`` so callers can tell "could not ask" from
    "nothing to return".
    """

    def __init__(self, api: MediaApi, lifecycle: TokenLifecycleManager) -> None:
        self._api = api
        self._lifecycle = lifecycle

    async def search(self, query: str, options: SearchOptions | None = None) -> MediaPage:
        await self._lifecycle.ensure_authenticated()
        response = await self._api.search(query, options)
        return self._to_page(response, operation="search")

    async def get_trending(self, options: TrendingOptions | None = None) -> MediaPage:
        await self._lifecycle.ensure_authenticated()
        response = await self._api.get_trending(options)
        return self._to_page(response, operation="trending")

    async def get_media(self, media_id: str) -> Media:
        await self._lifecycle.ensure_authenticated()
        response = await self._api.get_media(media_id)
        if response.media is None:
            logger.info("SVRF returned no media for id %s", media_id)
            raise MissingPayloadError(NO_MEDIA_MESSAGE)
        return response.media

    @staticmethod
    def _to_page(response: MediaListResponse, *, operation: str) -> MediaPage:
        if response.media is None:
            logger.info("SVRF %s response carried no media array", operation)
            raise MissingPayloadError()
        return MediaPage(
            items=response.media,
            next_page_num=response.next_page_num,
            next_page_cursor=response.next_page_cursor,
        )


__all__ = ["MediaApi", "MediaFetchClient"]
