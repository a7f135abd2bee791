"""Staff model.

A staff member is the employee who registered (or last reassigned) a
shipment at a branch.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class StaffRole(models.TextChoices):
    ADMIN = "Admin", "Admin"
    MANAGER = "Manager", "Manager"
    CLERK = "Clerk", "Clerk"


class Staff(BaseModel):
    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=254, unique=True)
    phone_number = models.CharField(max_length=20, blank=True, default="")
    branch_name = models.CharField(max_length=120, blank=True, default="")
    role = models.CharField(
        max_length=20,
        choices=StaffRole.choices,
        default=StaffRole.CLERK,
    )

    class Meta:
        db_table = "staff"
        ordering = ["name"]
        verbose_name_plural = "staff"

    def __str__(self) -> str:
        return f"{self.name} ({self.role})"
