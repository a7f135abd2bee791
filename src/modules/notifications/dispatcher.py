"""Bounded, failure-isolated SMS dispatch.

``SmsNotifier.notify`` never raises: a gateway error or a send that
outlives ``timeout`` seconds is logged and reported as ``False`` so the
shipment operation that triggered it still succeeds.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Optional

import structlog
from django.conf import settings

from modules.notifications.backends import ISmsSender, get_sms_sender

logger = structlog.get_logger(__name__)

# Shared by every notifier in the process; sends are short-lived.
_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="sms")


class SmsNotifier:
    """Sends one SMS at a time through an ``ISmsSender`` with a deadline."""

    def __init__(
        self,
        sender: Optional[ISmsSender] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._sender = sender or get_sms_sender()
        self._timeout = timeout if timeout is not None else settings.SMS_TIMEOUT_SECONDS

    @property
    def sender(self) -> ISmsSender:
        return self._sender

    def notify(self, phone_number: str, message: str) -> bool:
        log = logger.bind(to=phone_number, backend=type(self._sender).__name__)

        if not phone_number:
            log.warning("sms.failed", error="missing phone number")
            return False

        future = _executor.submit(self._sender.send, phone_number, message)
        try:
            delivered = future.result(timeout=self._timeout)
        except FutureTimeoutError:
            future.cancel()
            log.warning("sms.timeout", timeout_seconds=self._timeout)
            return False
        except Exception as exc:
            log.warning("sms.failed", error=str(exc), error_type=type(exc).__name__)
            return False

        if delivered:
            log.info("sms.sent")
        else:
            log.warning("sms.failed", error="sender reported not delivered")
        return bool(delivered)
