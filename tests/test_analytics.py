"""Tests for techbadges.analytics."""

from unittest.mock import MagicMock, patch

import pytest

from techbadges.analytics import (
    AnalyticsBackend,
    AnalyticsEvent,
    AnalyticsTracker,
    LoggingAnalytics,
    create_icon_request_event,
)


class TestCreateIconRequestEvent:
    """Tests for create_icon_request_event."""

    def test_defaults(self):
        event = create_icon_request_event("icon_request", icon_count=2, icons="js,ts")

        assert event.name == "icon_request"
        assert event.properties == {
            "icon_count": 2,
            "icons": "js,ts",
            "theme": "dark",
            "per_line": 15,
        }

    def test_optional_fields(self):
        event = create_icon_request_event(
            "icon_cache_hit", icons="js", theme="light", per_line=3, response_time=1.5, cached=True
        )

        assert event.properties["theme"] == "light"
        assert event.properties["per_line"] == 3
        assert event.properties["response_time"] == 1.5
        assert event.properties["cached"] is True

    def test_truncates_icons(self):
        event = create_icon_request_event("icon_request", icons="x" * 500)
        assert len(event.properties["icons"]) == 200

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="Unknown event type"):
            create_icon_request_event("page_view")

    def test_to_dict(self):
        data = create_icon_request_event("icon_request").to_dict()
        assert data["name"] == "icon_request"
        assert "T" in data["timestamp"]


class TestAnalyticsTracker:
    """Tests for AnalyticsTracker."""

    def test_without_backend_is_noop(self):
        tracker = AnalyticsTracker()
        tracker.track_icon_request(icon_count=1, icons="js")

        assert tracker.queue == []
        assert tracker.flush() == 0

    def test_flush_delivers_in_order(self):
        backend = MagicMock(spec=AnalyticsBackend)
        tracker = AnalyticsTracker(backend)

        tracker.track_cache_miss(icons="js")
        tracker.track_icon_request(icons="js", cached=False)

        assert tracker.flush() == 2
        names = [call.args[0].name for call in backend.track.call_args_list]
        assert names == ["icon_cache_miss", "icon_request"]
        assert tracker.queue == []

    def test_track_error(self):
        backend = MagicMock(spec=AnalyticsBackend)
        tracker = AnalyticsTracker(backend)

        tracker.track_error(ValueError("bad input"), icons="js")
        tracker.flush()

        event = backend.track.call_args.args[0]
        assert event.name == "icon_error"
        assert event.properties == {
            "error_name": "ValueError",
            "error_message": "bad input",
            "icons": "js",
        }

    def test_backend_failure_is_contained(self):
        backend = MagicMock(spec=AnalyticsBackend)
        backend.track.side_effect = [RuntimeError("offline"), None]
        tracker = AnalyticsTracker(backend)

        tracker.track_cache_hit(icons="js")
        tracker.track_icon_request(icons="js")

        assert tracker.flush() == 1

    def test_backend_failure_is_logged(self):
        backend = MagicMock(spec=AnalyticsBackend)
        backend.track.side_effect = RuntimeError("offline")
        tracker = AnalyticsTracker(backend)
        tracker.track_cache_hit(icons="js")

        with patch("techbadges.analytics.logger") as logger:
            assert tracker.flush() == 0

        logger.exception.assert_called_once_with("analytics_track_failed", event_name="icon_cache_hit")


class TestLoggingAnalytics:
    """Tests for LoggingAnalytics."""

    def test_logs_event(self):
        backend = LoggingAnalytics()
        backend._logger = MagicMock()

        backend.track(AnalyticsEvent(name="icon_request", properties={"icons": "js"}))

        backend._logger.info.assert_called_once()
        args, kwargs = backend._logger.info.call_args
        assert args == ("icon_request",)
        assert kwargs["icons"] == "js"
