from __future__ import annotations

import random
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.utils import timezone

from modules.notifications.backends import ConsoleSmsSender
from modules.notifications.dispatcher import SmsNotifier
from modules.riders.models import Rider
from modules.riders.repositories import RiderDjangoRepository
from modules.shipments.constants import ShipmentStatus
from modules.shipments.dtos import CreateShipmentDTO, UpdateShipmentDTO
from modules.shipments.models import Shipment
from modules.shipments.repositories import ShipmentDjangoRepository
from modules.shipments.services import ShipmentService
from modules.shipments.waybill import WaybillGenerator
from modules.staff.models import Staff, StaffRole
from modules.staff.repositories import StaffDjangoRepository

SEED_MARKER = "Seed shipment"


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        riders = self._seed_riders()
        staff = self._seed_staff()
        shipments_created = self._seed_shipments(riders, staff)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"riders={len(riders)}, "
                f"staff={len(staff)}, "
                f"shipments={shipments_created}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        created = 0
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser("admin", password="admin123")
            created += 1
        if not User.objects.filter(username="clerk").exists():
            User.objects.create_user("clerk", password="clerk123")
            created += 1
        return created

    def _seed_riders(self) -> list[Rider]:
        self.stdout.write("Creating riders...")
        riders: list[Rider] = []
        seed_riders = [
            ("Musa Abubakar", "+2348031110001", "Ikeja"),
            ("Chinedu Okafor", "+2348031110002", "Ikeja"),
            ("Tunde Bakare", "+2348031110003", "Wuse"),
            ("Emeka Nwosu", "+2348031110004", "Wuse"),
            ("Ibrahim Sani", "+2348031110005", "GRA"),
        ]
        for name, phone, branch in seed_riders:
            rider, _ = Rider.objects.get_or_create(
                phone_number=phone,
                defaults={"name": name, "branch_name": branch, "is_active": True},
            )
            riders.append(rider)
        self.stdout.write(self.style.SUCCESS("Creating riders... Done!"))
        return riders

    def _seed_staff(self) -> list[Staff]:
        self.stdout.write("Creating staff...")
        staff: list[Staff] = []
        seed_staff = [
            ("Adaeze Obi", "adaeze@firstline.example", "Ikeja", StaffRole.MANAGER),
            ("Bola Adeyemi", "bola@firstline.example", "Ikeja", StaffRole.CLERK),
            ("Fatima Yusuf", "fatima@firstline.example", "Wuse", StaffRole.CLERK),
            ("Kelechi Eze", "kelechi@firstline.example", "GRA", StaffRole.ADMIN),
        ]
        for name, email, branch, role in seed_staff:
            member, _ = Staff.objects.get_or_create(
                email=email,
                defaults={"name": name, "branch_name": branch, "role": role},
            )
            staff.append(member)
        self.stdout.write(self.style.SUCCESS("Creating staff... Done!"))
        return staff

    def _seed_shipments(self, riders: list[Rider], staff: list[Staff]) -> int:
        self.stdout.write("Creating shipments...")
        if Shipment.objects.filter(description__startswith=SEED_MARKER).exists():
            self.stdout.write(self.style.WARNING("Skipping shipments (already seeded)."))
            return 0

        shipment_repository = ShipmentDjangoRepository()
        service = ShipmentService(
            shipment_repository=shipment_repository,
            rider_repository=RiderDjangoRepository(),
            staff_repository=StaffDjangoRepository(),
            waybill_generator=WaybillGenerator(exists=shipment_repository.waybill_exists),
            # Seeded phone numbers are fake; never hit the real gateway.
            notifier=SmsNotifier(sender=ConsoleSmsSender()),
        )

        routes = [
            ("Lagos", "Abuja", "Ikeja"),
            ("Lagos", "Rivers", "Ikeja"),
            ("FCT", "Kano", "Wuse"),
            ("Rivers", "Lagos", "GRA"),
            ("Oyo", "Enugu", "Ikeja"),
        ]
        status_weights = [
            (ShipmentStatus.PENDING, 0.35),
            (ShipmentStatus.IN_TRANSIT, 0.30),
            (ShipmentStatus.DELIVERED, 0.25),
            (ShipmentStatus.CANCELED, 0.10),
        ]
        statuses = [s for s, _ in status_weights]
        weights = [w for _, w in status_weights]

        created = 0
        for i in range(20):
            origin, destination, branch = random.choice(routes)
            total = Decimal(random.randrange(1500, 25000, 500))
            dto = CreateShipmentDTO(
                sender_name=f"Sender {i + 1}",
                sender_phone_number=f"+23480900{i:05d}",
                receiver_name=f"Receiver {i + 1}",
                receiver_address=f"{i + 1} Marina Road, {destination}",
                receiver_phone=f"+23481900{i:05d}",
                description=f"{SEED_MARKER} {i + 1}",
                delivery_type=random.choice(["Express", "Standard"]),
                origin_state=origin,
                destination_state=destination,
                name=random.choice(["Documents", "Electronics", "Clothing", "Food items"]),
                branch_name=branch,
                total_price=total,
                amount_paid=random.choice([total, Decimal("0")]),
                payment_method=random.choice(["Cash", "Transfer", "POS"]),
                rider_id=random.choice(riders).id,
                staff_id=random.choice(staff).id,
            )
            shipment = service.create_shipment(dto)

            status = random.choices(statuses, weights=weights, k=1)[0]
            if status != ShipmentStatus.PENDING:
                service.update_shipment(str(shipment.id), UpdateShipmentDTO(status=status))

            created_at = timezone.now() - timedelta(days=random.randint(0, 30))
            Shipment.objects.filter(id=shipment.id).update(created_at=created_at)
            created += 1

        self.stdout.write(self.style.SUCCESS("Creating shipments... Done!"))
        return created
