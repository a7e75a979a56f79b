"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern for look-ups: a missing
product is ``None``, never an HTTP-level exception.  Any
``DatabaseError`` raised by the ORM is re-raised as ``StoreError`` so
the API layer can answer instead of leaving the request pending.
"""

from __future__ import annotations

import functools
from contextlib import contextmanager
from typing import Iterator, List, Optional

import structlog

from django.core.management import call_command
from django.db import DEFAULT_DB_ALIAS, DatabaseError, connections, transaction

from modules.products.exceptions import StoreError
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


def _store_call(method):
    """Translate ORM failures raised by ``method`` into ``StoreError``."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except DatabaseError as exc:
            raise StoreError(f"{method.__name__} failed: {exc}") from exc

    return wrapper


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM.

    Bound to one database alias; the handle is created once by the
    products app and injected into the views.
    """

    def __init__(self, alias: str = DEFAULT_DB_ALIAS) -> None:
        self._alias = alias

    @property
    def alias(self) -> str:
        return self._alias

    @property
    def _connection(self):
        return connections[self._alias]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def connect(self) -> None:
        """Open the connection, logging success or failure."""
        try:
            self._connection.ensure_connection()
        except DatabaseError as exc:
            logger.error("store.connection_failed", alias=self._alias, error=str(exc))
            raise StoreError(f"Could not connect to database '{self._alias}'.") from exc
        logger.info(
            "store.connected",
            alias=self._alias,
            vendor=self._connection.vendor,
        )

    def sync(self) -> None:
        """Apply pending migrations to the bound database."""
        try:
            call_command(
                "migrate",
                database=self._alias,
                interactive=False,
                verbosity=0,
            )
        except DatabaseError as exc:
            logger.error("store.sync_failed", alias=self._alias, error=str(exc))
            raise StoreError(f"Could not sync database '{self._alias}'.") from exc
        logger.info("store.synced", alias=self._alias)

    def disconnect(self) -> None:
        self._connection.close()
        logger.info("store.disconnected", alias=self._alias)

    def ping(self) -> bool:
        try:
            with self._connection.cursor() as cursor:
                cursor.execute("SELECT 1")
                cursor.fetchone()
        except DatabaseError:
            logger.warning("store.ping_failed", alias=self._alias)
            return False
        return True

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Transaction on the bound alias.

        Failures opening or committing the transaction surface as
        ``StoreError``; other exceptions propagate after rollback.
        """
        try:
            with transaction.atomic(using=self._alias):
                yield
        except DatabaseError as exc:
            raise StoreError(f"transaction failed: {exc}") from exc

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    @_store_call
    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or non-integer IDs.
        """
        try:
            pk = int(id)
        except (TypeError, ValueError):
            return None
        return Product.objects.using(self._alias).filter(pk=pk).first()

    @_store_call
    def list(self) -> List[Product]:
        """All products, most expensive first, without timestamp columns."""
        queryset = (
            Product.objects.using(self._alias)
            .defer("created_at", "updated_at")
            .order_by("-price", "id")
        )
        return list(queryset)

    @_store_call
    def create(self, entity: Product) -> Product:
        entity.save(using=self._alias, force_insert=True)
        logger.info("product.saved", product_id=entity.pk, created=True)
        return entity

    @_store_call
    def save(self, entity: Product) -> Product:
        entity.save(using=self._alias, force_update=True)
        logger.info("product.saved", product_id=entity.pk, created=False)
        return entity

    @_store_call
    def delete(self, entity: Product) -> None:
        """Permanently delete a product."""
        entity.delete(using=self._alias)
