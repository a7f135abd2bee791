"""Shipment service layer (Use Cases).

Orchestrates the shipment lifecycle: creation with waybill allocation,
partial updates, reads with the rider/staff join, and deletion.  SMS
notifications are side effects of create and of status changes; they
go through ``SmsNotifier`` and can never fail the operation.

Rules enforced:
- New shipments always start as Pending.
- ``status`` / ``item_condition`` must be one of their choices; both
  are checked before the database is touched.
- Status changes to In Transit, Delivered or Canceled notify the sender
  and the receiver; nothing else notifies.
- Persistence failures surface as ``ShipmentPersistenceError`` and leave
  no partial write behind.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.db import DatabaseError

from modules.shipments.constants import (
    NOTIFYING_STATUSES,
    ItemCondition,
    ShipmentStatus,
)
from modules.shipments.dtos import ShipmentDetails
from modules.shipments.exceptions import (
    ShipmentNotFound,
    ShipmentPersistenceError,
    ShipmentValidationError,
)
from modules.shipments.messages import created_message, status_messages

if TYPE_CHECKING:
    from modules.notifications.dispatcher import SmsNotifier
    from modules.riders.repositories.interfaces import IRiderRepository
    from modules.shipments.dtos import CreateShipmentDTO, UpdateShipmentDTO
    from modules.shipments.models import Shipment
    from modules.shipments.repositories.interfaces import IShipmentRepository
    from modules.shipments.waybill import IWaybillGenerator
    from modules.staff.repositories.interfaces import IStaffRepository

INVALID_ID_MESSAGE = "Invalid ID format. Expected a valid UUID."


class ShipmentService:
    """Application service for Shipment use-cases.

    Receives repositories, the waybill generator and the notifier via
    constructor injection (DIP).
    """

    def __init__(
        self,
        shipment_repository: IShipmentRepository,
        rider_repository: IRiderRepository,
        staff_repository: IStaffRepository,
        waybill_generator: IWaybillGenerator,
        notifier: SmsNotifier,
        logger: Optional[Any] = None,
    ) -> None:
        self._shipment_repo = shipment_repository
        self._rider_repo = rider_repository
        self._staff_repo = staff_repository
        self._waybills = waybill_generator
        self._notifier = notifier
        self._log = logger or structlog.get_logger(__name__)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_shipment(self, dto: CreateShipmentDTO) -> Shipment:
        """Create a Pending shipment and notify its sender.

        Steps:
        1. Check the referenced rider and staff member exist.
        2. Allocate a waybill number from origin, destination and branch.
        3. Persist the shipment atomically.
        4. Send the "pending payment" SMS (best-effort).

        Raises:
            ShipmentValidationError: rider or staff member does not exist.
            WaybillGenerationError: no free waybill number.
            ShipmentPersistenceError: the insert failed.
        """
        log = self._log.bind(
            origin_state=dto.origin_state,
            destination_state=dto.destination_state,
            branch_name=dto.branch_name,
        )
        log.info("shipment.creation_started")

        self._check_references(dto.rider_id, dto.staff_id, log)

        waybill_number = self._waybills.generate(
            dto.origin_state, dto.destination_state, dto.branch_name
        )

        data = dto.model_dump(exclude={"rider_id", "staff_id"})
        data.update(
            waybill_number=waybill_number,
            status=ShipmentStatus.PENDING,
            rider_id=dto.rider_id,
            created_by_id=dto.staff_id,
        )
        try:
            shipment = self._shipment_repo.create(data)
        except DatabaseError as exc:
            log.error("shipment.persistence_failed", operation="create", error=str(exc))
            raise ShipmentPersistenceError(str(exc)) from exc

        log.info(
            "shipment.created",
            shipment_id=str(shipment.id),
            waybill_number=shipment.waybill_number,
        )
        self._notifier.notify(shipment.sender_phone_number, created_message(shipment))
        return shipment

    def update_shipment(self, id: str, dto: UpdateShipmentDTO) -> Shipment:
        """Apply a partial update; notify on notifying status changes.

        Only supplied fields change.  A status of In Transit, Delivered
        or Canceled sends one SMS to the sender and one to the receiver,
        rendered from the updated record.

        Raises:
            ShipmentValidationError: unknown status / item condition, or a
                rider / staff member that does not exist.
            ShipmentNotFound: no shipment has that id.
            ShipmentPersistenceError: the update failed.
        """
        log = self._log.bind(shipment_id=str(id))

        if dto.status is not None and dto.status not in ShipmentStatus.values:
            log.info("shipment.validation_failed", field="status", value=dto.status)
            raise ShipmentValidationError(
                "Invalid status",
                [{"field": "status", "detail": f"'{dto.status}' is not a valid status."}],
            )
        if (
            dto.item_condition is not None
            and dto.item_condition not in ItemCondition.values
        ):
            log.info(
                "shipment.validation_failed",
                field="itemCondition",
                value=dto.item_condition,
            )
            raise ShipmentValidationError(
                "Invalid item condition",
                [
                    {
                        "field": "itemCondition",
                        "detail": f"'{dto.item_condition}' is not a valid item condition.",
                    }
                ],
            )

        self._check_references(dto.rider_id, dto.staff_id, log)

        changes = dto.changes()
        try:
            shipment = self._shipment_repo.update(id, changes)
        except DatabaseError as exc:
            log.error("shipment.persistence_failed", operation="update", error=str(exc))
            raise ShipmentPersistenceError(str(exc)) from exc
        if shipment is None:
            raise ShipmentNotFound(f"Shipment with ID {id} not found")

        log.info("shipment.updated", fields=sorted(changes))

        if dto.status is not None and dto.status in NOTIFYING_STATUSES:
            self._on_status_changed(shipment, dto.status)
        return shipment

    def delete_shipment(self, id: str) -> None:
        """Hard-delete a shipment.  No notification is sent.

        Raises:
            ShipmentNotFound: no shipment has that id.
            ShipmentPersistenceError: the delete failed.
        """
        try:
            deleted = self._shipment_repo.delete(id)
        except DatabaseError as exc:
            self._log.error(
                "shipment.persistence_failed",
                operation="delete",
                shipment_id=str(id),
                error=str(exc),
            )
            raise ShipmentPersistenceError(str(exc)) from exc
        if not deleted:
            raise ShipmentNotFound(f"Shipment with ID {id} not found")
        self._log.info("shipment.deleted", shipment_id=str(id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_shipment_by_id(self, id: str) -> ShipmentDetails:
        """Return the shipment with its rider and staff member resolved.

        Raises:
            ShipmentValidationError: *id* is not a UUID (checked before any
                database access).
            ShipmentNotFound: no shipment has that id.
        """
        try:
            shipment_id = UUID(str(id))
        except ValueError as exc:
            raise ShipmentValidationError(
                INVALID_ID_MESSAGE, [{"field": "id", "detail": INVALID_ID_MESSAGE}]
            ) from exc

        shipment = self._shipment_repo.get_by_id(str(shipment_id))
        if shipment is None:
            raise ShipmentNotFound(f"Shipment with ID {id} not found")
        return self._expand(shipment)

    def get_shipment_by_waybill(self, waybill_number: str) -> ShipmentDetails:
        """Look up by waybill number, ignoring surrounding whitespace.

        Raises:
            ShipmentNotFound: no shipment carries that waybill number.
        """
        waybill_number = (waybill_number or "").strip()
        shipment = self._shipment_repo.get_by_waybill(waybill_number)
        if shipment is None:
            raise ShipmentNotFound(
                f"Shipment with Waybill Number {waybill_number} not found"
            )
        return self._expand(shipment)

    def list_shipments(self) -> List[ShipmentDetails]:
        """All shipments, newest first, with riders and staff batch-loaded."""
        shipments = self._shipment_repo.list()
        riders = self._rider_repo.get_many({s.rider_id for s in shipments})
        staff = self._staff_repo.get_many({s.created_by_id for s in shipments})
        return [
            ShipmentDetails(
                shipment=s,
                rider=riders.get(s.rider_id),
                created_by=staff.get(s.created_by_id),
            )
            for s in shipments
        ]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _expand(self, shipment: Shipment) -> ShipmentDetails:
        return ShipmentDetails(
            shipment=shipment,
            rider=self._rider_repo.get_by_id(str(shipment.rider_id)),
            created_by=self._staff_repo.get_by_id(str(shipment.created_by_id)),
        )

    def _check_references(
        self, rider_id: Optional[UUID], staff_id: Optional[UUID], log: Any
    ) -> None:
        errors: List[Dict[str, Any]] = []
        if rider_id is not None and self._rider_repo.get_by_id(str(rider_id)) is None:
            errors.append({"field": "riderId", "detail": f"Rider {rider_id} not found."})
        if staff_id is not None and self._staff_repo.get_by_id(str(staff_id)) is None:
            errors.append({"field": "staffId", "detail": f"Staff {staff_id} not found."})
        if not errors:
            return

        log.info("shipment.validation_failed", errors=errors)
        message = "Invalid rider ID" if errors[0]["field"] == "riderId" else "Invalid staff ID"
        raise ShipmentValidationError(message, errors)

    def _on_status_changed(self, shipment: Shipment, status: str) -> None:
        messages = status_messages(shipment, status)
        if messages is None:
            return
        sender_message, receiver_message = messages
        self._notifier.notify(shipment.sender_phone_number, sender_message)
        self._notifier.notify(shipment.receiver_phone, receiver_message)
