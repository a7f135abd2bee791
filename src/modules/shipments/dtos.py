"""Shipment DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  These are
the contracts between the API layer (Views) and the Service layer.
DTOs are immutable (``frozen=True``).  The wire format is camelCase;
Python attributes stay snake_case.

- ``CreateShipmentDTO``: input for shipment creation.
- ``UpdateShipmentDTO``: partial update (status, insurance, condition,
  rider, staff).
- ``ShipmentDetails``: a shipment joined with its rider and staff member.
- ``ShipmentOutputDTO`` / ``ShipmentDetailOutputDTO``: API responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Annotated, Any, Dict, List, Mapping, Optional
from uuid import UUID

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationInfo,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from modules.shipments.constants import ItemCondition
from modules.shipments.exceptions import ShipmentValidationError

if TYPE_CHECKING:
    from modules.riders.models import Rider
    from modules.shipments.models import Shipment
    from modules.staff.models import Staff


RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Money = Annotated[Decimal, Field(ge=0, max_digits=12, decimal_places=2)]

# Error types that mean "the caller did not supply the field".
_MISSING_ERROR_TYPES = {"missing", "string_too_short"}

_UPDATE_ERROR_MESSAGES = {
    "insurance": "Invalid insurance amount",
    "riderId": "Invalid rider ID",
    "staffId": "Invalid staff ID",
}

_INPUT_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


def _violations(exc: PydanticValidationError) -> List[Dict[str, Any]]:
    """Flatten a Pydantic error into ``[{"field", "detail", "type"}]``."""
    violations = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "__root__"
        violations.append(
            {"field": field, "detail": error["msg"], "type": error["type"]}
        )
    return violations


def _is_missing(violation: Dict[str, Any], payload: Mapping[str, Any]) -> bool:
    if violation["type"] in _MISSING_ERROR_TYPES:
        return True
    value = payload.get(violation["field"])
    return value is None or (isinstance(value, str) and not value.strip())


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateShipmentDTO(BaseModel):
    """Immutable DTO for shipment creation requests.

    Every field is required except ``insurance`` (defaults to 0) and
    ``item_condition`` (defaults to *Not Damaged or Good*).  Zero is a
    valid ``total_price`` / ``amount_paid`` (e.g. pay-on-delivery).
    """

    model_config = _INPUT_CONFIG

    sender_name: RequiredText
    sender_phone_number: RequiredText
    receiver_name: RequiredText
    receiver_address: RequiredText
    receiver_phone: RequiredText
    description: RequiredText
    delivery_type: RequiredText
    origin_state: RequiredText
    destination_state: RequiredText
    name: RequiredText
    branch_name: RequiredText = Field(
        validation_alias=AliasChoices("branchName", "BranchName", "branch_name")
    )
    total_price: Money
    amount_paid: Money
    payment_method: RequiredText
    insurance: Money = Decimal("0")
    item_condition: str = ItemCondition.NOT_DAMAGED_OR_GOOD.value
    rider_id: UUID
    staff_id: UUID

    @field_validator("insurance", "item_condition", mode="before")
    @classmethod
    def blank_means_default(cls, v: Any, info: ValidationInfo) -> Any:
        """Absent-ish optional values fall back to their defaults."""
        if v is None or v == "":
            return cls.model_fields[info.field_name].default
        return v

    @field_validator("item_condition")
    @classmethod
    def item_condition_must_be_known(cls, v: str) -> str:
        if v not in ItemCondition.values:
            raise ValueError("Invalid item condition")
        return v

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> CreateShipmentDTO:
        """Build the DTO from a raw request payload.

        Raises:
            ShipmentValidationError: "All fields are required" when any
                required field is absent or blank, "Invalid shipment data"
                when every field is present but some value is malformed.
        """
        try:
            return cls.model_validate(dict(payload))
        except PydanticValidationError as exc:
            violations = _violations(exc)
            if any(_is_missing(v, payload) for v in violations):
                raise ShipmentValidationError(
                    "All fields are required", violations
                ) from exc
            raise ShipmentValidationError("Invalid shipment data", violations) from exc


class UpdateShipmentDTO(BaseModel):
    """Immutable DTO for partial shipment updates.

    All fields are optional; ``None`` means "leave unchanged".
    ``insurance=0`` is a real value and is applied.  ``status`` and
    ``item_condition`` are kept as plain strings here: the Service Layer
    checks them against the enums so it can report which one is wrong.
    """

    model_config = _INPUT_CONFIG

    status: Optional[str] = None
    insurance: Optional[Money] = None
    item_condition: Optional[str] = None
    rider_id: Optional[UUID] = None
    staff_id: Optional[UUID] = None

    @field_validator("status", "item_condition", mode="before")
    @classmethod
    def coerce_choice(cls, v: Any) -> Optional[str]:
        if v is None or v == "":
            return None
        return str(v)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> UpdateShipmentDTO:
        """Build the DTO from a raw request payload.

        Raises:
            ShipmentValidationError: a supplied value has the wrong shape.
        """
        try:
            return cls.model_validate(dict(payload))
        except PydanticValidationError as exc:
            violations = _violations(exc)
            message = _UPDATE_ERROR_MESSAGES.get(
                violations[0]["field"], "Invalid update data"
            )
            raise ShipmentValidationError(message, violations) from exc

    def changes(self) -> Dict[str, Any]:
        """Model-field → value mapping of the supplied (non-null) fields."""
        columns = {
            "status": "status",
            "insurance": "insurance",
            "item_condition": "item_condition",
            "rider_id": "rider_id",
            "staff_id": "created_by_id",
        }
        return {
            column: getattr(self, attr)
            for attr, column in columns.items()
            if getattr(self, attr) is not None
        }


# ---------------------------------------------------------------------------
# Read model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ShipmentDetails:
    """A shipment with its rider and creating staff member resolved."""

    shipment: Shipment
    rider: Optional[Rider]
    created_by: Optional[Staff]


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------

_OUTPUT_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class RiderOutputDTO(BaseModel):
    model_config = _OUTPUT_CONFIG

    id: UUID
    name: str
    phone_number: str
    branch_name: str
    is_active: bool

    @classmethod
    def from_entity(cls, rider: Rider) -> RiderOutputDTO:
        return cls(
            id=rider.id,
            name=rider.name,
            phone_number=rider.phone_number,
            branch_name=rider.branch_name,
            is_active=rider.is_active,
        )


class StaffOutputDTO(BaseModel):
    model_config = _OUTPUT_CONFIG

    id: UUID
    name: str
    email: str
    phone_number: str
    branch_name: str
    role: str

    @classmethod
    def from_entity(cls, staff: Staff) -> StaffOutputDTO:
        return cls(
            id=staff.id,
            name=staff.name,
            email=staff.email,
            phone_number=staff.phone_number,
            branch_name=staff.branch_name,
            role=staff.role,
        )


class ShipmentOutputDTO(BaseModel):
    """Shipment response with ``rider`` / ``createdBy`` as plain ids."""

    model_config = _OUTPUT_CONFIG

    id: UUID
    sender_name: str
    sender_phone_number: str
    receiver_name: str
    receiver_address: str
    receiver_phone: str
    description: str
    delivery_type: str
    origin_state: str
    destination_state: str
    name: str
    branch_name: str
    waybill_number: str
    status: str
    total_price: Decimal
    amount_paid: Decimal
    payment_method: str
    insurance: Decimal
    item_condition: str
    rider: Optional[UUID]
    created_by: Optional[UUID]
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def _fields(shipment: Shipment) -> Dict[str, Any]:
        return {
            "id": shipment.id,
            "sender_name": shipment.sender_name,
            "sender_phone_number": shipment.sender_phone_number,
            "receiver_name": shipment.receiver_name,
            "receiver_address": shipment.receiver_address,
            "receiver_phone": shipment.receiver_phone,
            "description": shipment.description,
            "delivery_type": shipment.delivery_type,
            "origin_state": shipment.origin_state,
            "destination_state": shipment.destination_state,
            "name": shipment.name,
            "branch_name": shipment.branch_name,
            "waybill_number": shipment.waybill_number,
            "status": shipment.status,
            "total_price": shipment.total_price,
            "amount_paid": shipment.amount_paid,
            "payment_method": shipment.payment_method,
            "insurance": shipment.insurance,
            "item_condition": shipment.item_condition,
            "created_at": shipment.created_at,
            "updated_at": shipment.updated_at,
        }

    @classmethod
    def from_entity(cls, shipment: Shipment) -> ShipmentOutputDTO:
        return cls(
            **cls._fields(shipment),
            rider=shipment.rider_id,
            created_by=shipment.created_by_id,
        )

    def to_response(self) -> Dict[str, Any]:
        """JSON-ready camelCase dict for the HTTP layer."""
        return self.model_dump(mode="json", by_alias=True)


class ShipmentDetailOutputDTO(ShipmentOutputDTO):
    """Shipment response with ``rider`` / ``createdBy`` expanded."""

    rider: Optional[RiderOutputDTO]
    created_by: Optional[StaffOutputDTO]

    @classmethod
    def from_details(cls, details: ShipmentDetails) -> ShipmentDetailOutputDTO:
        return cls(
            **cls._fields(details.shipment),
            rider=(
                RiderOutputDTO.from_entity(details.rider) if details.rider else None
            ),
            created_by=(
                StaffOutputDTO.from_entity(details.created_by)
                if details.created_by
                else None
            ),
        )
