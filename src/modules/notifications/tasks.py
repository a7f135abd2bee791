"""Asynchronous SMS delivery."""

import structlog
from celery import shared_task
from django.conf import settings

from modules.notifications.backends import get_sms_sender
from modules.notifications.exceptions import NotificationError

logger = structlog.get_logger(__name__)


@shared_task(
    name="notifications.send_sms",
    autoretry_for=(NotificationError,),
    retry_backoff=True,
    max_retries=3,
)
def send_sms(phone_number: str, message: str) -> bool:
    """Deliver one SMS through ``SMS_CELERY_BACKEND``; retried on gateway errors."""
    sender = get_sms_sender(settings.SMS_CELERY_BACKEND)
    delivered = sender.send(phone_number, message)
    logger.info("sms.task_delivered", to=phone_number, delivered=delivered)
    return delivered
