"""SMS sender backends.

Every backend implements ``ISmsSender.send(phone_number, message) -> bool``.
``SMS_BACKEND`` (a dotted path) selects the one used by the request path;
``get_sms_sender()`` instantiates it.

- ``HttpSmsSender``: JSON gateway over HTTPS (httpx).
- ``ConsoleSmsSender``: logs instead of sending (local development).
- ``LocmemSmsSender``: collects messages in ``outbox`` (tests).
- ``CelerySmsSender``: hands delivery to the ``notifications.send_sms`` task.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import httpx
import structlog
from django.conf import settings
from django.utils.module_loading import import_string

from modules.notifications.exceptions import NotificationError

logger = structlog.get_logger(__name__)


class ISmsSender(ABC):
    """Delivers a single text message."""

    @abstractmethod
    def send(self, phone_number: str, message: str) -> bool:
        """Return ``True`` when the message was accepted for delivery."""


class HttpSmsSender(ISmsSender):
    """Posts ``{"to", "from", "message"}`` to ``SMS_GATEWAY_URL``.

    Authenticates with ``Authorization: Bearer <SMS_API_KEY>``.  Any 2xx
    response counts as accepted; other statuses and transport errors
    raise ``NotificationError``.
    """

    def __init__(
        self,
        gateway_url: Optional[str] = None,
        api_key: Optional[str] = None,
        sender_id: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.gateway_url = gateway_url or settings.SMS_GATEWAY_URL
        self.api_key = api_key if api_key is not None else settings.SMS_API_KEY
        self.sender_id = sender_id or settings.SMS_SENDER_ID
        self.timeout = timeout if timeout is not None else settings.SMS_TIMEOUT_SECONDS
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self.timeout,
            transport=self._transport,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
        )

    def send(self, phone_number: str, message: str) -> bool:
        if not self.gateway_url:
            raise NotificationError("SMS gateway is not configured (SMS_GATEWAY_URL).")

        payload = {"to": phone_number, "from": self.sender_id, "message": message}
        try:
            with self._client() as client:
                resp = client.post(self.gateway_url, json=payload)
        except httpx.HTTPError as exc:
            raise NotificationError(f"SMS gateway unreachable: {exc}") from exc

        if not resp.is_success:
            raise NotificationError(
                f"SMS gateway rejected message: {resp.status_code} {resp.text[:200]}"
            )
        return True


class ConsoleSmsSender(ISmsSender):
    def send(self, phone_number: str, message: str) -> bool:
        logger.info("sms.console", to=phone_number, message=message)
        return True


# Messages "sent" through LocmemSmsSender, oldest first.
outbox: List[Dict[str, str]] = []


class LocmemSmsSender(ISmsSender):
    """Appends ``{"to", "message"}`` to the module-level ``outbox``."""

    def send(self, phone_number: str, message: str) -> bool:
        outbox.append({"to": phone_number, "message": message})
        return True


class CelerySmsSender(ISmsSender):
    """Enqueue-only sender; the worker delivers via ``SMS_CELERY_BACKEND``."""

    def send(self, phone_number: str, message: str) -> bool:
        from modules.notifications.tasks import send_sms

        send_sms.delay(phone_number, message)
        return True


def get_sms_sender(backend: Optional[str] = None) -> ISmsSender:
    """Instantiate the sender class named by *backend* or ``SMS_BACKEND``."""
    return import_string(backend or settings.SMS_BACKEND)()
