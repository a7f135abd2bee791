"""Rider model.

A rider is the courier assigned to carry a shipment.  Riders are managed
outside the shipment lifecycle; shipments only reference them.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Rider(BaseModel):
    name = models.CharField(max_length=255)
    phone_number = models.CharField(max_length=20)
    branch_name = models.CharField(max_length=120, blank=True, default="")
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "riders"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
