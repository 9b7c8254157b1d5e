from django.core.management.base import BaseCommand
from django.db import transaction

from logistics_core.custody import CustodyStatus
from logistics_core.models import Item, Member


DEMO_MEMBERS = [
    # (id, first_name, last_name)
    (111, "Guybrush", "Threepwood"),
    (456, "Elaine", "Marley"),
    (999, "Usuario", "de Prueba"),
    (1001, "Carla", "the Sword Master"),
    (1002, "Otis", ""),
]

DEMO_ITEMS = [
    # (id, title, status, owner_id, recipient_id, trade_code)
    (123, "Catan (2015)", CustodyStatus.PENDING, 1001, 456, 1),
    (456, "Ticket to Ride (2004)", CustodyStatus.DELIVERED, 1002, 999, 2),
    (101, "Azul (2017)", CustodyStatus.AT_ORG, 456, 111, 3),
    (789, "Wingspan (2019)", CustodyStatus.AT_ORG, 1001, 111, 4),
    (21, "Carcassonne (2000)", CustodyStatus.PENDING, 111, 1002, 5),
    (1144, "Terraforming Mars (2016)", CustodyStatus.DELIVERED, 999, 1001, 6),
]


class Command(BaseCommand):
    help = "Load the demo members and games used by the scanner screens (idempotent)"

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset-status",
            action="store_true",
            help="Put existing demo games back to their initial custody status.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        reset = options["reset_status"]

        for pk, first, last in DEMO_MEMBERS:
            Member.objects.update_or_create(
                pk=pk, defaults={"first_name": first, "last_name": last}
            )

        created = 0
        for pk, title, status, owner_id, recipient_id, code in DEMO_ITEMS:
            defaults = {
                "title": title,
                "owner_id": owner_id,
                "recipient_id": recipient_id,
                "assigned_trade_code": code,
            }
            item, was_created = Item.objects.get_or_create(
                pk=pk, defaults={**defaults, "status": status}
            )
            if was_created:
                created += 1
                continue

            Item.objects.filter(pk=pk).update(**defaults)
            if reset:
                Item.objects.filter(pk=pk).update(status=status)

        self.stdout.write(
            self.style.SUCCESS(
                f"Seeded {len(DEMO_MEMBERS)} members, {len(DEMO_ITEMS)} games ({created} new)."
            )
        )
