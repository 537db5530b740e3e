"""Usage analytics for badge requests.

Events are queued while a request is handled and flushed once the
response is ready, so analytics never adds latency or failures to the
request itself.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

import structlog

from techbadges.config.constants import DEFAULT_THEME, ICONS_PER_LINE

logger = structlog.get_logger(__name__)

ICON_EVENT_TYPES = (
    "icon_request",
    "icon_cache_hit",
    "icon_cache_miss",
    "icon_error",
    "api_request",
)

MAX_PROPERTY_LENGTH = 200


@dataclass
class AnalyticsEvent:
    """A single tracked event."""

    name: str
    properties: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "properties": self.properties,
            "timestamp": self.timestamp.isoformat(),
        }


def create_icon_request_event(
    event_type: str,
    icon_count: int = 0,
    icons: str = "",
    theme: Optional[str] = None,
    per_line: Optional[int] = None,
    response_time: Optional[float] = None,
    cached: Optional[bool] = None,
) -> AnalyticsEvent:
    """Build an icon request event, filling defaults.

    The icon list is truncated to keep payloads small.
    """
    if event_type not in ICON_EVENT_TYPES:
        raise ValueError(f"Unknown event type: {event_type}")

    properties: dict[str, Any] = {
        "icon_count": icon_count,
        "icons": icons[:MAX_PROPERTY_LENGTH],
        "theme": theme or DEFAULT_THEME,
        "per_line": per_line if per_line is not None else ICONS_PER_LINE,
    }
    if response_time is not None:
        properties["response_time"] = response_time
    if cached is not None:
        properties["cached"] = cached

    return AnalyticsEvent(name=event_type, properties=properties)


class AnalyticsBackend(ABC):
    """Destination for analytics events."""

    @abstractmethod
    def track(self, event: AnalyticsEvent) -> None:
        """Record one event."""
        pass


class LoggingAnalytics(AnalyticsBackend):
    """Writes events to the structured log."""

    def __init__(self):
        self._logger = structlog.get_logger("techbadges.analytics")

    def track(self, event: AnalyticsEvent) -> None:
        self._logger.info(event.name, at=event.timestamp.isoformat(), **event.properties)


class AnalyticsTracker:
    """Per-request event queue.

    With no backend every call is a no-op.
    """

    def __init__(self, backend: Optional[AnalyticsBackend] = None):
        self.backend = backend
        self.queue: list[AnalyticsEvent] = []

    def track(self, event: AnalyticsEvent) -> None:
        if self.backend is None:
            return
        self.queue.append(event)

    def track_icon_request(self, **properties) -> None:
        self.track(create_icon_request_event("icon_request", **properties))

    def track_cache_hit(self, **properties) -> None:
        self.track(create_icon_request_event("icon_cache_hit", **properties))

    def track_cache_miss(self, **properties) -> None:
        self.track(create_icon_request_event("icon_cache_miss", **properties))

    def track_error(self, error: BaseException, **properties) -> None:
        self.track(
            AnalyticsEvent(
                name="icon_error",
                properties={
                    "error_name": type(error).__name__,
                    "error_message": str(error)[:MAX_PROPERTY_LENGTH],
                    **properties,
                },
            )
        )

    def flush(self) -> int:
        """Send queued events to the backend.

        Returns:
            Number of events delivered
        """
        if self.backend is None or not self.queue:
            return 0

        events, self.queue = self.queue, []
        sent = 0
        for event in events:
            try:
                self.backend.track(event)
                sent += 1
            except Exception:
                logger.exception("analytics_track_failed", event_name=event.name)
        return sent
