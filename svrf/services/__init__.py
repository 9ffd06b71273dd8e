"""Service layer exports."""

from .analytics import AnalyticsTracker, LoggingAnalyticsSink, NullAnalyticsSink
from .credential_store import CredentialStore
from .media_fetch import MediaFetchClient
from .request_gate import GateState, RequestGate
from .scene import SceneLoader, SceneService, set_blend_shapes
from .token_cipher import TokenCipherService
from .token_lifecycle import AuthState, TokenLifecycleManager

__all__ = [
    "AnalyticsTracker",
    "AuthState",
    "CredentialStore",
    "GateState",
    "LoggingAnalyticsSink",
    "MediaFetchClient",
    "NullAnalyticsSink",
    "RequestGate",
    "SceneLoader",
    "SceneService",
    "TokenCipherService",
    "TokenLifecycleManager",
    "set_blend_shapes",
]
