"""Fire-and-forget usage analytics."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol

logger = logging.getLogger(__name__)

NODE_REQUESTED_EVENT = "3D Node Requested"
FACE_FILTER_NODE_REQUESTED_EVENT = "Face Filter Node Requested"


class AnalyticsSink(Protocol):
    def track(self, event: str, properties: Mapping[str, Any]) -> None:
        ...

    def identify(self, app_id: str) -> None:
        ...


class LoggingAnalyticsSink:
    """Record analytics events in the SDK log."""

    def __init__(self) -> None:
        self._app_id: str | None = None

    def track(self, event: str, properties: Mapping[str, Any]) -> None:
        logger.info(
            "Analytics event %s",
            event,
            extra={"app_id": self._app_id, "properties": dict(properties)},
        )

    def identify(self, app_id: str) -> None:
        self._app_id = app_id


class NullAnalyticsSink:
    def track(self, event: str, properties: Mapping[str, Any]) -> None:
        return None

    def identify(self, app_id: str) -> None:
        return None


class AnalyticsTracker:
    """Forward events to a sink without ever failing the calling operation."""

    def __init__(self, sink: AnalyticsSink | None = None) -> None:
        self._sink = sink or NullAnalyticsSink()

    def track(self, event: str, **properties: Any) -> None:
        try:
            self._sink.track(event, properties)
        except Exception:  # pylint: disable=broad-except
            logger.warning("Analytics sink failed to record %s", event, exc_info=True)

    def identify(self, app_id: str) -> None:
        try:
            self._sink.identify(app_id)
        except Exception:  # pylint: disable=broad-except
            logger.warning("Analytics sink failed to identify app", exc_info=True)


__all__ = [
    "AnalyticsSink",
    "AnalyticsTracker",
    "FACE_FILTER_NODE_REQUESTED_EVENT",
    "LoggingAnalyticsSink",
    "NODE_REQUESTED_EVENT",
    "NullAnalyticsSink",
]
