"""Request options for the media endpoints and their query-string form."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from svrf.models.media import Category, MediaType, StereoscopicType

TYPE_SEPARATOR = ","

_MEDIA_TYPE_ORDER = {media_type: index for index, media_type in enumerate(MediaType)}


class QueryOptions(BaseModel):
    """Filters shared by the search and trending endpoints.

    Every field is optional; fields left as ``None`` never reach the request.
    ``size`` is forwarded untouched, the API decides what to do with values
    outside 1..100.
    """

    type: Optional[set[MediaType]] = Field(
        None, description="Media types to return; serialized comma separated."
    )
    stereoscopic_type: Optional[StereoscopicType] = Field(
        None, description="Only return media with this stereoscopic layout."
    )
    category: Optional[Category] = Field(None, description="Only return media in this category.")
    size: Optional[int] = Field(None, description="Results per page, 1 to 100.")


class SearchOptions(QueryOptions):
    """Search options; search paginates by page number."""

    page_num: Optional[int] = Field(None, description="Page to fetch, as returned in ``next_page_num``.")


class TrendingOptions(QueryOptions):
    """Trending options; trending paginates by an opaque cursor."""

    next_page_cursor: Optional[str] = Field(
        None, description="Cursor returned with the previous page."
    )


def serialize_media_types(types: set[MediaType] | None) -> str | None:
    """Join media types into their wire form in a stable order."""
    if not types:
        return None
    ordered = sorted({MediaType(value) for value in types}, key=_MEDIA_TYPE_ORDER.__getitem__)
    return TYPE_SEPARATOR.join(media_type.value for media_type in ordered)


def build_query_params(options: QueryOptions | None) -> dict[str, str]:
    """Map options to the query parameters the API expects, skipping absent fields."""
    if options is None:
        return {}

    params: dict[str, str] = {}
    media_types = serialize_media_types(options.type)
    if media_types is not None:
        params["type"] = media_types
    if options.stereoscopic_type is not None:
        params["stereoscopicType"] = options.stereoscopic_type.value
    if options.category is not None:
        params["category"] = options.category.value
    if options.size is not None:
        params["size"] = str(options.size)

    page_num = getattr(options, "page_num", None)
    if page_num is not None:
        params["pageNum"] = str(page_num)
    next_page_cursor = getattr(options, "next_page_cursor", None)
    if next_page_cursor is not None:
        params["nextPageCursor"] = next_page_cursor
    return params


__all__ = [
    "QueryOptions",
    "SearchOptions",
    "TrendingOptions",
    "build_query_params",
    "serialize_media_types",
]
