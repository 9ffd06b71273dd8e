"""Envelopes wrapping every SVRF API response."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from svrf.models.media import Media


class _Envelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    success: bool = False
    message: Optional[str] = None


class AuthenticationResponse(_Envelope):
    """Body returned by the authentication endpoint."""

    token: Optional[str] = None
    expires_in: Optional[int] = Field(None, alias="expiresIn")


class MediaListResponse(_Envelope):
    """Body returned by the search and trending endpoints."""

    media: Optional[list[Media]] = None
    next_page_num: Optional[int] = Field(None, alias="nextPageNum")
    next_page_cursor: Optional[str] = Field(None, alias="nextPageCursor")
    page_num: Optional[int] = Field(None, alias="pageNum")


class SingleMediaResponse(_Envelope):
    """Body returned when fetching one media item by id."""

    media: Optional[Media] = None


__all__ = ["AuthenticationResponse", "MediaListResponse", "SingleMediaResponse"]
