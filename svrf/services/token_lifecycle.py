"""
App token lifecycle: reuse the cached token while it is fresh, otherwise
exchange the API key for a new one and persist it.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, Optional, Protocol

from svrf.core.errors import ExchangeFailedError, MissingApiKeyError, SvrfError
from svrf.models.credential import Credential
from svrf.services.analytics import AnalyticsTracker
from svrf.services.credential_store import CredentialStore
from svrf.services.request_gate import GateState, RequestGate
from svrf.utils.jwt import decode_claims

logger = logging.getLogger(__name__)

API_KEY_CONFIG_KEY = "SVRF_API_KEY"
DEFAULT_FRESHNESS_WINDOW = timedelta(seconds=172800)


class AuthState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    AUTH_FAILED = "auth_failed"


class Authenticator(Protocol):
    async def exchange(self, api_key: str) -> tuple[str, int]:
        ...

    def set_token(self, token: str) -> None:
        ...


class ConfigSource(Protocol):
    def read(self, key: str) -> Optional[str]:
        ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenLifecycleManager:
    """Owns the app token and the gate that media requests wait behind."""

    def __init__(
        self,
        *,
        authenticator: Authenticator,
        credential_store: CredentialStore,
        config_source: ConfigSource,
        gate: RequestGate | None = None,
        analytics: AnalyticsTracker | None = None,
        freshness_window: timedelta = DEFAULT_FRESHNESS_WINDOW,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._authenticator = authenticator
        self._store = credential_store
        self._config = config_source
        self._gate = gate or RequestGate()
        self._analytics = analytics or AnalyticsTracker()
        self._freshness_window = freshness_window
        self._clock = clock
        self._credential: Credential | None = None
        self._api_key: str | None = None
        self._round: asyncio.Task[None] | None = None

    @property
    def state(self) -> AuthState:
        gate_state = self._gate.state
        if gate_state is GateState.IDLE:
            return AuthState.UNAUTHENTICATED
        if gate_state is GateState.PENDING:
            return AuthState.AUTHENTICATING
        if self._gate.outcome_error is not None:
            return AuthState.AUTH_FAILED
        return AuthState.AUTHENTICATED

    async def authenticate(self, api_key: str | None = None) -> None:
        """Make sure a usable app token is installed, exchanging ``api_key`` if needed.

        Callers arriving while a round is pending join it instead of starting
        another exchange.
        """
        if self._gate.state is GateState.PENDING:
            await self._gate.wait()
            return

        self._gate.enter()
        self._round = asyncio.create_task(self._run_round(api_key))
        await self._gate.wait()

    async def ensure_authenticated(self) -> None:
        """Gate check performed before every media request.

        A failed round is not retried here; callers must invoke
        :meth:`authenticate` again.
        """
        gate_state = self._gate.state
        if gate_state is GateState.PENDING:
            await self._gate.wait()
            return
        if gate_state is GateState.IDLE:
            await self.authenticate()
            return

        error = self._gate.outcome_error
        if error is not None:
            raise error

        credential = self._store.load_credential() or self._credential
        if credential is None or not self.is_fresh(credential):
            logger.info("Cached app token is stale; authenticating again")
            await self.authenticate()

    async def aclose(self) -> None:
        """Cancel an in-flight authentication round and fail its waiters."""
        round_task = self._round
        if round_task is not None and not round_task.done():
            round_task.cancel()
            try:
                await round_task
            except asyncio.CancelledError:
                pass
        # A round cancelled before it started never reaches its release.
        if self._gate.state is GateState.PENDING:
            self._gate.release(ExchangeFailedError("Client closed before authentication completed."))

    def is_fresh(self, credential: Credential) -> bool:
        """Return whether ``credential`` may be reused without an exchange.

        Compares the time elapsed since expiry against the freshness window, so
        a token stays usable until the window has passed beyond its expiry.
        """
        return self._clock() - credential.expires_at < self._freshness_window

    async def _run_round(self, api_key: str | None) -> None:
        error: SvrfError | None = ExchangeFailedError("Authentication did not complete.")
        try:
            await self._install_token(api_key)
            error = None
        except SvrfError as exc:
            logger.warning("SVRF authentication failed: %s", exc)
            error = exc
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Unexpected failure while authenticating with SVRF")
            error = ExchangeFailedError(cause=exc)
        finally:
            self._gate.release(error)

    async def _install_token(self, api_key: str | None) -> None:
        if api_key:
            self._api_key = api_key

        cached = self._store.load_credential()
        if cached is not None and self.is_fresh(cached):
            logger.debug("Reusing cached app token")
            self._activate(cached)
            return

        key = self._api_key or self._config.read(API_KEY_CONFIG_KEY)
        if not key:
            raise MissingApiKeyError()
        self._api_key = key

        issued_at = self._clock()
        token, expires_in = await self._authenticator.exchange(key)
        credential = Credential.issued(token, expires_in, issued_at=issued_at)
        if not self._store.save_credential(credential):
            logger.warning("Could not persist the app token; it will be requested again next session")
        logger.info("Authenticated with SVRF", extra={"expires_at": credential.expires_at.isoformat()})
        self._activate(credential)

    def _activate(self, credential: Credential) -> None:
        self._credential = credential
        self._authenticator.set_token(credential.token)
        app_id = decode_claims(credential.token).get("appId")
        if isinstance(app_id, str) and app_id:
            self._analytics.identify(app_id)


__all__ = [
    "API_KEY_CONFIG_KEY",
    "AuthState",
    "Authenticator",
    "ConfigSource",
    "DEFAULT_FRESHNESS_WINDOW",
    "TokenLifecycleManager",
]
