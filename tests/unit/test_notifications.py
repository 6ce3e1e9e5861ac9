"""Tests for user notices."""

import pytest

from portal.notifications import Notifier


class TestNotifier:
    """Notice collection."""

    def test_listener_sees_every_notice(self):
        seen = []
        notifier = Notifier(listener=seen.append)

        notifier.success("Saved")
        notifier.error("Failed")

        assert [(n.level, n.message) for n in seen] == [("success", "Saved"), ("error", "Failed")]
        assert notifier.last.message == "Failed"

    def test_drain_empties(self):
        notifier = Notifier()
        notifier.info("Hello")

        assert len(notifier.drain()) == 1
        assert notifier.drain() == []
        assert notifier.last is None

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            Notifier().notify("x", level="warning")
