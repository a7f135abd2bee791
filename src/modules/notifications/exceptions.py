"""Notification exceptions."""

from __future__ import annotations

from modules.core.exceptions import DependencyError


class NotificationError(DependencyError):
    """The SMS gateway rejected the message or could not be reached."""
