"""Waybill number allocation.

Format: ``{ORG}-{DST}-{BRN}-{YYMMDD}{SUFFIX}``, e.g.
``LAG-ABU-IKE-2410193F9A2C``.  Each three-letter code is taken from the
origin state, destination state and branch name so a waybill can be read
at a glance on a parcel label; the date and random suffix make it unique.
"""

from __future__ import annotations

import re
import secrets
from abc import ABC, abstractmethod
from typing import Callable, Optional

import structlog
from django.utils import timezone

from modules.shipments.constants import WAYBILL_MAX_RETRIES
from modules.shipments.exceptions import WaybillGenerationError

logger = structlog.get_logger(__name__)

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


class IWaybillGenerator(ABC):
    """Allocates unique waybill numbers."""

    @abstractmethod
    def generate(self, origin: str, destination: str, branch: str) -> str:
        """Return a waybill number not yet used by any shipment."""


def location_code(value: str) -> str:
    """First three alphanumerics of *value*, upper-cased, padded with ``X``."""
    cleaned = _NON_ALNUM.sub("", value or "").upper()
    return cleaned[:3].ljust(3, "X")


class WaybillGenerator(IWaybillGenerator):
    """Random-suffix generator that re-rolls on collision.

    ``exists`` reports whether a candidate is already taken (normally
    ``IShipmentRepository.waybill_exists``).  The unique constraint on
    ``Shipment.waybill_number`` remains the final guard against races.
    """

    def __init__(
        self,
        exists: Callable[[str], bool],
        max_retries: int = WAYBILL_MAX_RETRIES,
        suffix_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self._exists = exists
        self._max_retries = max_retries
        self._suffix_factory = suffix_factory or (
            lambda: secrets.token_hex(3).upper()
        )

    def generate(self, origin: str, destination: str, branch: str) -> str:
        prefix = "-".join(
            (location_code(origin), location_code(destination), location_code(branch))
        )
        today = timezone.localdate()

        for attempt in range(self._max_retries):
            candidate = f"{prefix}-{today:%y%m%d}{self._suffix_factory()}"
            if not self._exists(candidate):
                return candidate
            logger.warning("waybill.collision", candidate=candidate, attempt=attempt)

        raise WaybillGenerationError(
            f"Failed to generate unique waybill number after "
            f"{self._max_retries} attempts"
        )
