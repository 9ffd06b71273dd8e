"""Exception hierarchy raised by the SDK."""

from __future__ import annotations


class SvrfError(Exception):
    """Base class for every error surfaced to SDK callers."""

    description = "SVRF SDK error."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.description)

    @property
    def svrf_description(self) -> str:
        return str(self)


class AuthError(SvrfError):
    """Raised when the SDK cannot obtain a usable app token."""


class MissingApiKeyError(AuthError):
    """No API key was passed and none is present in the bundled configuration."""

    description = "No SVRF API key was provided or configured."


class ExchangeFailedError(AuthError):
    """The authentication endpoint failed or rejected the API key."""

    description = "Server response error."

    def __init__(self, message: str | None = None, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ApiError(SvrfError):
    """Raised when a media request does not produce a usable result."""


class TransportError(ApiError):
    """The request could not be completed or the response was not understood."""

    description = "Server response error."

    def __init__(self, message: str | None = None, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class MissingPayloadError(ApiError):
    """The server answered successfully but without the expected media payload."""

    description = "There is no mediaArray in the server response."


class InvalidMediaForOperationError(SvrfError):
    description = "Media type should equal _3d."


class SceneLoadError(SvrfError):
    """The 3D model referenced by a media item could not be loaded."""

    description = "Can't get scene from the media."

    def __init__(self, message: str | None = None, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


__all__ = [
    "ApiError",
    "AuthError",
    "ExchangeFailedError",
    "InvalidMediaForOperationError",
    "MissingApiKeyError",
    "MissingPayloadError",
    "SceneLoadError",
    "SvrfError",
    "TransportError",
]
