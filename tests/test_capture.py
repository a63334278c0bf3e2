"""
Tests for voice / handwriting capture sessions.
"""

from launchpad.capture import CaptureSession
from launchpad.models import SearchMode


class TestCaptureSession:
    def test_partial_does_not_commit(self, coordinator):
        session = CaptureSession(coordinator, SearchMode.VOICE)
        assert session.partial("ma") == "ma"
        assert coordinator.state(SearchMode.VOICE).query == ""

    def test_finals_append_with_space(self, coordinator):
        session = CaptureSession(coordinator, SearchMode.VOICE)
        session.final("5")
        future = session.final(" times 3 ")

        assert session.transcript == "5 times 3"
        assert future.result(timeout=5) is True
        assert coordinator.state(SearchMode.VOICE).calculator_result == "15"

    def test_stop_keeps_in_flight_work(self, coordinator):
        session = CaptureSession(coordinator, SearchMode.VOICE)
        future = session.final("music")
        session.stop()

        assert future.result(timeout=5) is True
        assert [t.identifier for t in coordinator.state(SearchMode.VOICE).filtered] == ["music"]
        assert session.final("maps") is None
        assert session.transcript == "music"

    def test_clear_resets_mode(self, coordinator):
        session = CaptureSession(coordinator, SearchMode.HANDWRITING)
        session.final("ca").result(timeout=5)
        session.clear()

        assert session.transcript == ""
        assert coordinator.state(SearchMode.HANDWRITING).query == ""
        assert len(coordinator.state(SearchMode.HANDWRITING).filtered) == 8
