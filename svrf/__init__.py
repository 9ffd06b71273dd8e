"""Async Python SDK for the SVRF immersive media API."""

from svrf.core.errors import (
    ApiError,
    AuthError,
    ExchangeFailedError,
    InvalidMediaForOperationError,
    MissingApiKeyError,
    MissingPayloadError,
    SceneLoadError,
    SvrfError,
    TransportError,
)
from svrf.models import Category, Media, MediaPage, MediaType, SceneNode, StereoscopicType
from svrf.schemas import SearchOptions, TrendingOptions
from svrf.sdk import SvrfClient, create_client

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "AuthError",
    "Category",
    "ExchangeFailedError",
    "InvalidMediaForOperationError",
    "Media",
    "MediaPage",
    "MediaType",
    "MissingApiKeyError",
    "MissingPayloadError",
    "SceneLoadError",
    "SceneNode",
    "SearchOptions",
    "StereoscopicType",
    "SvrfClient",
    "SvrfError",
    "TransportError",
    "TrendingOptions",
    "create_client",
]
