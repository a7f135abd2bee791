"""Shipment API views.

Exposes the ``ShipmentService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into HTTP status codes:

- ``ShipmentValidationError`` → 400 ``{"detail", "errors"}``
- ``ShipmentNotFound`` → 404 ``{"detail"}``
- ``DependencyError`` → 500 ``{"detail": "Server error", "error"}``

Anything else propagates to Django's handler.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

import structlog
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import DependencyError
from modules.notifications.dispatcher import SmsNotifier
from modules.riders.repositories import RiderDjangoRepository
from modules.shipments.dtos import (
    CreateShipmentDTO,
    ShipmentDetailOutputDTO,
    ShipmentOutputDTO,
    UpdateShipmentDTO,
)
from modules.shipments.exceptions import ShipmentNotFound, ShipmentValidationError
from modules.shipments.models import Shipment
from modules.shipments.repositories import ShipmentDjangoRepository
from modules.shipments.services import ShipmentService
from modules.shipments.waybill import WaybillGenerator
from modules.staff.repositories import StaffDjangoRepository

logger = structlog.get_logger(__name__)


def _payload(request: Request) -> Dict[str, Any]:
    """Plain dict of the request body (JSON or form-encoded).

    Raises:
        ShipmentValidationError: the body is not a JSON object.
    """
    data = request.data
    if not isinstance(data, Mapping):
        raise ShipmentValidationError(
            "Invalid request body",
            [{"field": "__root__", "detail": "Expected a JSON object."}],
        )
    if hasattr(data, "dict"):
        return data.dict()
    return dict(data)


def _bad_request(exc: ShipmentValidationError) -> Response:
    logger.info("shipment.validation_failed", detail=exc.message, errors=exc.errors)
    return Response(
        {"detail": exc.message, "errors": exc.errors},
        status=status.HTTP_400_BAD_REQUEST,
    )


def _not_found(exc: ShipmentNotFound) -> Response:
    return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)


def _server_error(exc: DependencyError) -> Response:
    return Response(
        {"detail": "Server error", "error": str(exc)},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


class ShipmentViewSet(GenericViewSet):
    """ViewSet for Shipment operations.

    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    queryset = Shipment.objects.all()

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        shipment_repository = ShipmentDjangoRepository()
        self._service = ShipmentService(
            shipment_repository=shipment_repository,
            rider_repository=RiderDjangoRepository(),
            staff_repository=StaffDjangoRepository(),
            waybill_generator=WaybillGenerator(
                exists=shipment_repository.waybill_exists
            ),
            notifier=SmsNotifier(),
        )

    def get_throttles(self) -> list[BaseThrottle]:
        throttle_scope: str | None
        if self.action == "create":
            throttle_scope = "shipment_creation"
        elif self.action == "by_waybill":
            throttle_scope = "shipment_tracking"
        else:
            throttle_scope = None
        self.throttle_scope = throttle_scope
        return super().get_throttles()

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/shipments/

        Assigns a waybill number, stores the shipment as Pending and
        texts the sender.  Returns 201 ``{"shipment": {...}}``.
        """
        try:
            dto = CreateShipmentDTO.from_payload(_payload(request))
            shipment = self._service.create_shipment(dto)
        except ShipmentValidationError as exc:
            return _bad_request(exc)
        except DependencyError as exc:
            return _server_error(exc)

        out = ShipmentOutputDTO.from_entity(shipment)
        return Response({"shipment": out.to_response()}, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/shipments/

        Every shipment, newest first, with rider and staff expanded.
        """
        details = self._service.list_shipments()
        return Response(
            [ShipmentDetailOutputDTO.from_details(d).to_response() for d in details]
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/shipments/{pk}/"""
        try:
            details = self._service.get_shipment_by_id(pk)
        except ShipmentValidationError as exc:
            return _bad_request(exc)
        except ShipmentNotFound as exc:
            return _not_found(exc)
        return Response(ShipmentDetailOutputDTO.from_details(details).to_response())

    @action(
        detail=False,
        methods=["get"],
        url_path=r"waybill/(?P<waybill_number>[^/]+)",
        url_name="by-waybill",
    )
    def by_waybill(self, request: Request, waybill_number: str = "") -> Response:
        """GET /api/v1/shipments/waybill/{waybill_number}/

        Public tracking look-up by waybill number.
        """
        try:
            details = self._service.get_shipment_by_waybill(waybill_number)
        except ShipmentNotFound as exc:
            return _not_found(exc)
        return Response(ShipmentDetailOutputDTO.from_details(details).to_response())

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/shipments/{pk}/

        Partial semantics: only the supplied fields among ``status``,
        ``insurance``, ``itemCondition``, ``riderId`` and ``staffId`` change.
        """
        try:
            dto = UpdateShipmentDTO.from_payload(_payload(request))
            shipment = self._service.update_shipment(pk, dto)
        except ShipmentValidationError as exc:
            return _bad_request(exc)
        except ShipmentNotFound as exc:
            return _not_found(exc)
        except DependencyError as exc:
            return _server_error(exc)

        return Response(ShipmentOutputDTO.from_entity(shipment).to_response())

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/shipments/{pk}/"""
        return self.update(request, pk=pk)

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/shipments/{pk}/"""
        try:
            self._service.delete_shipment(pk)
        except ShipmentNotFound as exc:
            return _not_found(exc)
        except DependencyError as exc:
            return _server_error(exc)
        return Response({"detail": "Shipment deleted successfully"})
