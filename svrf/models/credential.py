"""
Domain model for the persisted app token.
"""

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, Field


class Credential(BaseModel):
    """App token together with the moment it expires."""

    token: str = Field(..., description="Opaque app token returned by the authentication endpoint.")
    expires_at: datetime = Field(..., description="Absolute expiry, always timezone-aware UTC.")

    @classmethod
    def issued(cls, token: str, expires_in: int, *, issued_at: datetime | None = None) -> "Credential":
        """Build a credential whose expiry is ``issued_at + expires_in`` seconds."""
        issued_at = issued_at or datetime.now(timezone.utc)
        return cls(token=token, expires_at=issued_at + timedelta(seconds=expires_in))


__all__ = ["Credential"]
