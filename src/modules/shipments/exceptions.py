"""Shipment domain exceptions.

Raised by the Service Layer when input is rejected or a collaborator
fails.  The API layer (Views) catches these and translates them into
HTTP responses.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from modules.core.exceptions import DependencyError


class ShipmentValidationError(Exception):
    """Caller-supplied input violates a contract.

    ``errors`` lists every violated constraint as
    ``{"field": ..., "detail": ...}``; the message stays short and generic
    because clients display it as-is.
    """

    def __init__(
        self, message: str, errors: Optional[List[Dict[str, Any]]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.errors = list(errors or [])


class ShipmentNotFound(Exception):
    """No shipment matches the given id or waybill number."""


class ShipmentPersistenceError(DependencyError):
    """The database rejected or failed a shipment read/write."""


class WaybillGenerationError(DependencyError):
    """No unused waybill number could be allocated."""
