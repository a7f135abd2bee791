from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import uuid6
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("riders", "0001_initial"),
        ("staff", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Shipment",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("sender_name", models.CharField(max_length=255)),
                ("sender_phone_number", models.CharField(max_length=20)),
                ("receiver_name", models.CharField(max_length=255)),
                ("receiver_address", models.TextField()),
                ("receiver_phone", models.CharField(max_length=20)),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField()),
                ("delivery_type", models.CharField(max_length=50)),
                (
                    "item_condition",
                    models.CharField(
                        choices=[
                            ("Damaged", "Damaged"),
                            ("Partially Damaged", "Partially Damaged"),
                            ("Not Damaged or Good", "Not Damaged or Good"),
                        ],
                        default="Not Damaged or Good",
                        max_length=30,
                    ),
                ),
                ("origin_state", models.CharField(max_length=100)),
                ("destination_state", models.CharField(max_length=100)),
                ("branch_name", models.CharField(max_length=120)),
                (
                    "waybill_number",
                    models.CharField(editable=False, max_length=40, unique=True),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Pending", "Pending"),
                            ("In Transit", "In Transit"),
                            ("Delivered", "Delivered"),
                            ("Canceled", "Canceled"),
                        ],
                        default="Pending",
                        max_length=20,
                    ),
                ),
                (
                    "total_price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=12,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0.00"))
                        ],
                    ),
                ),
                (
                    "amount_paid",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=12,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0.00"))
                        ],
                    ),
                ),
                ("payment_method", models.CharField(max_length=50)),
                (
                    "insurance",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=12,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0.00"))
                        ],
                    ),
                ),
                (
                    "rider",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="shipments",
                        to="riders.rider",
                    ),
                ),
                (
                    "created_by",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="shipments_created",
                        to="staff.staff",
                    ),
                ),
            ],
            options={
                "db_table": "shipments",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status"], name="shipments_status_idx"),
                    models.Index(fields=["-created_at"], name="shipments_created_idx"),
                ],
            },
        ),
    ]
