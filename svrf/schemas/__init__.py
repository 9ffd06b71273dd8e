"""Public schema exports."""

from .options import (
    QueryOptions,
    SearchOptions,
    TrendingOptions,
    build_query_params,
    serialize_media_types,
)
from .responses import AuthenticationResponse, MediaListResponse, SingleMediaResponse

__all__ = [
    "AuthenticationResponse",
    "MediaListResponse",
    "QueryOptions",
    "SearchOptions",
    "SingleMediaResponse",
    "TrendingOptions",
    "build_query_params",
    "serialize_media_types",
]
