"""Create or refresh the villa's cabins with their default prices."""

from __future__ import annotations

from django.core.management.base import BaseCommand  # type: ignore

from apps.cabins.models import Cabin

DEFAULT_CABINS = ("Cielo", "Eclipse", "Aurora")
DEFAULT_WEEKDAY_PRICE = 200_000
DEFAULT_WEEKEND_PRICE = 390_000


class Command(BaseCommand):
    help = "Create the default cabins (Cielo, Eclipse, Aurora) if they do not exist"

    def add_arguments(self, parser):
        parser.add_argument("--weekday-price", type=int, default=DEFAULT_WEEKDAY_PRICE)
        parser.add_argument("--weekend-price", type=int, default=DEFAULT_WEEKEND_PRICE)
        parser.add_argument(
            "--update-prices",
            action="store_true",
            help="Overwrite prices of cabins that already exist",
        )

    def handle(self, *args, **options):
        for name in DEFAULT_CABINS:
            defaults = {
                "weekday_price": options["weekday_price"],
                "weekend_price": options["weekend_price"],
            }
            if options["update_prices"]:
                cabin, created = Cabin.objects.update_or_create(name=name, defaults=defaults)
            else:
                cabin, created = Cabin.objects.get_or_create(name=name, defaults=defaults)
            verb = "Created" if created else "Kept"
            self.stdout.write(
                f"{verb} {cabin.name}: {cabin.weekday_price} / {cabin.weekend_price}"
            )
        self.stdout.write(self.style.SUCCESS("Cabins ready"))
