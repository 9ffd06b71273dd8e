"""
SVRF SDK entrypoint.

``SvrfClient`` is the session object applications construct once and share:
it owns the HTTP connection pool, the cached credential and the
authentication gate. Independent instances never share state.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Mapping

from svrf.clients.keychain import SQLiteKeyChain
from svrf.clients.svrf_api import SvrfApiClient
from svrf.core.config import SettingsConfigSource, SvrfSettings, get_settings
from svrf.core.errors import SceneLoadError
from svrf.core.logging import configure_logging
from svrf.models.media import Media, MediaPage
from svrf.models.scene import SceneNode
from svrf.schemas.options import SearchOptions, TrendingOptions
from svrf.services.analytics import AnalyticsSink, AnalyticsTracker, LoggingAnalyticsSink
from svrf.services.credential_store import CredentialStore
from svrf.services.media_fetch import MediaFetchClient
from svrf.services.scene import SceneLoader, SceneService, set_blend_shapes
from svrf.services.token_cipher import TokenCipherService
from svrf.services.token_lifecycle import (
    DEFAULT_FRESHNESS_WINDOW,
    AuthState,
    ConfigSource,
    TokenLifecycleManager,
)

logger = logging.getLogger(__name__)


class _MissingSceneLoader:
    async def load(self, url: str) -> SceneNode:
        raise SceneLoadError("No scene loader is configured for this client.")


class SvrfClient:
    """Authenticate with SVRF, fetch media and build scene nodes from it."""

    def __init__(
        self,
        *,
        api: SvrfApiClient,
        credential_store: CredentialStore,
        config_source: ConfigSource,
        scene_loader: SceneLoader | None = None,
        analytics_sink: AnalyticsSink | None = None,
        freshness_window: timedelta | None = None,
    ) -> None:
        self._api = api
        analytics = AnalyticsTracker(analytics_sink)
        self._lifecycle = TokenLifecycleManager(
            authenticator=api,
            credential_store=credential_store,
            config_source=config_source,
            analytics=analytics,
            freshness_window=DEFAULT_FRESHNESS_WINDOW if freshness_window is None else freshness_window,
        )
        self._media = MediaFetchClient(api, self._lifecycle)
        self._scenes = SceneService(scene_loader or _MissingSceneLoader(), analytics)

    async def __aenter__(self) -> "SvrfClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    @property
    def auth_state(self) -> AuthState:
        return self._lifecycle.state

    async def authenticate(self, api_key: str | None = None) -> None:
        """Authenticate the API key with the SVRF API.

        Uses the cached app token while it is fresh; otherwise ``api_key`` (or the
        configured ``SVRF_API_KEY``) is exchanged for a new one.
        """
        await self._lifecycle.authenticate(api_key)

    async def search(self, query: str, options: SearchOptions | None = None) -> MediaPage:
        """Search SVRF for immersive media; ``next_page_num`` pages through results."""
        return await self._media.search(query, options)

    async def get_trending(self, options: TrendingOptions | None = None) -> MediaPage:
        """Fetch the trending media curated by SVRF."""
        return await self._media.get_trending(options)

    async def get_media(self, media_id: str) -> Media:
        return await self._media.get_media(media_id)

    async def generate_node(self, media: Media) -> SceneNode:
        return await self._scenes.generate_node(media)

    async def generate_face_filter_node(self, media: Media, *, use_occluder: bool = True) -> SceneNode:
        return await self._scenes.generate_face_filter_node(media, use_occluder=use_occluder)

    @staticmethod
    def set_blend_shapes(blend_shapes: Mapping[str, float], face_filter: SceneNode) -> None:
        set_blend_shapes(blend_shapes, face_filter)

    async def aclose(self) -> None:
        await self._lifecycle.aclose()
        await self._api.aclose()


def _encryption_secret(settings: SvrfSettings) -> str:
    secret = settings.token_encryption_secret or settings.api_key
    if secret:
        return secret
    logger.warning(
        "Neither SVRF_TOKEN_ENCRYPTION_SECRET nor SVRF_API_KEY is configured; "
        "the cached app token is encrypted with a key derived from %s only",
        settings.storage_path,
    )
    return f"svrf-sdk:{settings.storage_path}"


def create_client(
    settings: SvrfSettings | None = None,
    *,
    scene_loader: SceneLoader | None = None,
    analytics_sink: AnalyticsSink | None = None,
) -> SvrfClient:
    """Factory wiring an :class:`SvrfClient` from settings."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    if analytics_sink is None and settings.analytics_enabled:
        analytics_sink = LoggingAnalyticsSink()

    credential_store = CredentialStore(
        SQLiteKeyChain(settings.storage_path),
        TokenCipherService(secret=_encryption_secret(settings)),
    )
    return SvrfClient(
        api=SvrfApiClient.from_settings(settings),
        credential_store=credential_store,
        config_source=SettingsConfigSource(settings),
        scene_loader=scene_loader,
        analytics_sink=analytics_sink,
        freshness_window=timedelta(seconds=settings.token_freshness_seconds),
    )


__all__ = ["SvrfClient", "create_client"]
