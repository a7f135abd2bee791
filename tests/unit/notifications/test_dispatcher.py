"""Unit tests for SmsNotifier: bounded, failure-isolated delivery."""

from __future__ import annotations

import logging
import threading
from unittest.mock import MagicMock

import pytest

from modules.notifications.backends import LocmemSmsSender
from modules.notifications.dispatcher import SmsNotifier
from modules.notifications.exceptions import NotificationError

pytestmark = pytest.mark.unit

PHONE = "+2348030000001"


def _messages(caplog):
    return [record.getMessage() for record in caplog.records]


class TestSmsNotifier:
    def test_delivers_through_sender(self, sms_outbox):
        notifier = SmsNotifier(sender=LocmemSmsSender(), timeout=1)

        assert notifier.notify(PHONE, "Hello") is True
        assert sms_outbox == [{"to": PHONE, "message": "Hello"}]

    def test_defaults_to_configured_backend(self):
        assert isinstance(SmsNotifier().sender, LocmemSmsSender)

    def test_sender_error_is_swallowed(self, caplog):
        sender = MagicMock()
        sender.send.side_effect = NotificationError("gateway 503")
        notifier = SmsNotifier(sender=sender, timeout=1)

        with caplog.at_level(logging.WARNING):
            assert notifier.notify(PHONE, "Hello") is False

        assert any("sms.failed" in m for m in _messages(caplog))

    def test_unexpected_error_is_swallowed(self):
        sender = MagicMock()
        sender.send.side_effect = RuntimeError("boom")

        assert SmsNotifier(sender=sender, timeout=1).notify(PHONE, "Hello") is False

    def test_slow_sender_times_out(self, caplog):
        release = threading.Event()
        sender = MagicMock()
        sender.send.side_effect = lambda *_: release.wait(5)
        notifier = SmsNotifier(sender=sender, timeout=0.05)

        try:
            with caplog.at_level(logging.WARNING):
                assert notifier.notify(PHONE, "Hello") is False
        finally:
            release.set()

        assert any("sms.timeout" in m for m in _messages(caplog))

    def test_sender_reporting_failure(self):
        sender = MagicMock()
        sender.send.return_value = False

        assert SmsNotifier(sender=sender, timeout=1).notify(PHONE, "Hello") is False

    def test_missing_phone_skips_send(self):
        sender = MagicMock()

        assert SmsNotifier(sender=sender, timeout=1).notify("", "Hello") is False
        sender.send.assert_not_called()
