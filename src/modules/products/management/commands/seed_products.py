from __future__ import annotations

from decimal import Decimal

from django.core.management.base import BaseCommand

from modules.products.models import Product

SEED_PRODUCTS: list[tuple[str, Decimal, bool]] = [
    ("Monitor curvo de 49 pulgadas", Decimal("1000.00"), True),
    ("Teclado mecánico", Decimal("120.50"), True),
    ("Mouse inalámbrico", Decimal("35.90"), True),
    ("Auriculares con cancelación de ruido", Decimal("249.99"), False),
    ("Webcam Full HD", Decimal("79.00"), True),
]


class Command(BaseCommand):
    help = "Seed the products table with a small development catalogue."

    def handle(self, *args, **options):
        self.stdout.write("Seeding products...")
        created = 0
        for name, price, availability in SEED_PRODUCTS:
            _, was_created = Product.objects.get_or_create(
                name=name,
                defaults={"price": price, "availability": availability},
            )
            created += int(was_created)

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: created={created}, total={Product.objects.count()}"
            )
        )
