from __future__ import annotations

from django.apps import apps
from django.core.management.base import BaseCommand, CommandError

from modules.products.exceptions import StoreError


class Command(BaseCommand):
    help = "Connect to the product store and apply its schema."

    def add_arguments(self, parser):
        parser.add_argument(
            "--skip-sync",
            action="store_true",
            help="Only check the connection; do not run migrations.",
        )

    def handle(self, *args, **options):
        store = apps.get_app_config("products").store
        try:
            store.connect()
            if not options["skip_sync"]:
                store.sync()
        except StoreError as exc:
            raise CommandError(f"Error connecting to the database: {exc}") from exc
        finally:
            store.disconnect()

        self.stdout.write(self.style.SUCCESS("Connected to the database."))
