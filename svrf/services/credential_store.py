"""Durable, encrypted storage for the cached app token."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from svrf.clients.keychain import SQLiteKeyChain
from svrf.models.credential import Credential
from svrf.services.token_cipher import TokenCipherService

logger = logging.getLogger(__name__)

AUTH_TOKEN_KEY = "SVRF_AUTH_TOKEN"
AUTH_TOKEN_EXPIRE_DATE_KEY = "SVRF_AUTH_TOKEN_EXPIRE_DATE"


class CredentialStore:
    """Persist the app token and its expiry across process restarts.

    The token is encrypted before it reaches the keychain; the expiry is stored
    as an ISO-8601 timestamp next to it.
    """

    def __init__(self, keychain: SQLiteKeyChain, cipher: TokenCipherService) -> None:
        self._keychain = keychain
        self._cipher = cipher

    def save(self, token: str) -> bool:
        """Store the token; returns ``False`` when the keychain write failed."""
        return self._keychain.save(AUTH_TOKEN_KEY, self._cipher.encrypt(token.encode("utf-8")))

    def load(self) -> Optional[bytes]:
        """Return the stored token bytes, or ``None`` when absent or unreadable."""
        encrypted = self._keychain.load(AUTH_TOKEN_KEY)
        if encrypted is None:
            return None
        try:
            return self._cipher.decrypt(encrypted)
        except ValueError:
            logger.warning("Discarding stored app token that could not be decrypted")
            return None

    def save_credential(self, credential: Credential) -> bool:
        if not self.save(credential.token):
            return False
        expires_at = credential.expires_at.astimezone(timezone.utc).isoformat()
        return self._keychain.save(AUTH_TOKEN_EXPIRE_DATE_KEY, expires_at.encode("utf-8"))

    def load_credential(self) -> Optional[Credential]:
        """Return the cached credential when both token and expiry are readable."""
        raw_expiry = self._keychain.load(AUTH_TOKEN_EXPIRE_DATE_KEY)
        token_bytes = self.load()
        if raw_expiry is None or token_bytes is None:
            return None

        try:
            token = token_bytes.decode("utf-8")
            expires_at = datetime.fromisoformat(raw_expiry.decode("utf-8"))
        except ValueError:
            logger.warning("Discarding stored credential with unreadable fields")
            return None

        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return Credential(token=token, expires_at=expires_at)

    def clear(self) -> None:
        self._keychain.delete(AUTH_TOKEN_KEY)
        self._keychain.delete(AUTH_TOKEN_EXPIRE_DATE_KEY)


__all__ = ["AUTH_TOKEN_EXPIRE_DATE_KEY", "AUTH_TOKEN_KEY", "CredentialStore"]
