"""Unit tests for ProductDjangoRepository.

Covers:
- CRUD operations (get_by_id, list, create, save, delete).
- Ordering and deferred timestamp columns on list.
- Store lifecycle (connect, sync, ping, disconnect).
- ``DatabaseError`` translated into ``StoreError``.
"""

from __future__ import annotations

from decimal import Decimal
from unittest import mock

import pytest
from django.db import DatabaseError, OperationalError, connections

from modules.products.exceptions import StoreError
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.repositories.interfaces import IProductRepository

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_product(**overrides) -> Product:
    defaults = {
        "name": "Widget",
        "price": Decimal("19.99"),
    }
    defaults.update(overrides)
    return Product.objects.create(**defaults)


@pytest.fixture()
def repo():
    return ProductDjangoRepository()


# ===========================================================================
# Instantiation
# ===========================================================================


class TestRepositoryInstantiation:
    def test_is_instance_of_interface(self, repo):
        assert isinstance(repo, IProductRepository)

    def test_default_alias(self, repo):
        assert repo.alias == "default"


# ===========================================================================
# get_by_id
# ===========================================================================


class TestGetById:
    def test_returns_product_when_found(self, repo):
        product = _make_product()
        result = repo.get_by_id(str(product.id))
        assert result is not None
        assert result.id == product.id

    def test_returns_none_when_not_found(self, repo):
        assert repo.get_by_id("999") is None

    def test_returns_none_for_non_integer(self, repo):
        assert repo.get_by_id("not-an-int") is None


# ===========================================================================
# list
# ===========================================================================


class TestList:
    def test_returns_empty_list_when_no_products(self, repo):
        assert repo.list() == []

    def test_ordered_by_price_descending(self, repo):
        _make_product(name="Low", price=Decimal("1.00"))
        _make_product(name="High", price=Decimal("50.00"))
        _make_product(name="Mid", price=Decimal("10.00"))
        assert [p.name for p in repo.list()] == ["High", "Mid", "Low"]

    def test_ties_ordered_by_id(self, repo):
        first = _make_product(name="First", price=Decimal("5.00"))
        second = _make_product(name="Second", price=Decimal("5.00"))
        assert [p.id for p in repo.list()] == [first.id, second.id]

    def test_timestamps_deferred(self, repo):
        _make_product()
        product = repo.list()[0]
        assert product.get_deferred_fields() == {"created_at", "updated_at"}


# ===========================================================================
# create / save / delete
# ===========================================================================


class TestCreate:
    def test_assigns_id(self, repo):
        product = repo.create(Product(name="New", price=Decimal("3.00")))
        assert product.id is not None
        assert Product.objects.filter(pk=product.id).exists()


class TestSave:
    def test_persists_changes(self, repo):
        product = _make_product()
        product.name = "Renamed"
        repo.save(product)
        product.refresh_from_db()
        assert product.name == "Renamed"

    def test_saving_a_deleted_product_fails(self, repo):
        product = _make_product()
        Product.objects.filter(pk=product.pk).delete()
        with pytest.raises(StoreError):
            repo.save(product)


class TestDelete:
    def test_removes_row_permanently(self, repo):
        product = _make_product()
        product_id = product.id
        repo.delete(product)
        assert not Product.objects.filter(pk=product_id).exists()


# ===========================================================================
# Error translation
# ===========================================================================


class TestStoreErrors:
    def test_create_failure_raises_store_error(self, repo):
        with mock.patch.object(Product, "save", side_effect=DatabaseError("disk full")):
            with pytest.raises(StoreError) as exc_info:
                repo.create(Product(name="New", price=Decimal("3.00")))
        assert isinstance(exc_info.value.__cause__, DatabaseError)

    def test_lookup_failure_raises_store_error(self, repo):
        with mock.patch.object(Product, "objects") as objects:
            objects.using.return_value.filter.side_effect = OperationalError("gone")
            with pytest.raises(StoreError, match="get_by_id failed"):
                repo.get_by_id("1")


# ===========================================================================
# Transactions
# ===========================================================================


class TestAtomic:
    def test_commits_enclosed_writes(self, repo):
        with repo.atomic():
            product = repo.create(Product(name="Kept", price=Decimal("1.00")))
        assert Product.objects.filter(pk=product.pk).exists()

    def test_rolls_back_on_exception(self, repo):
        with pytest.raises(LookupError):
            with repo.atomic():
                repo.create(Product(name="Dropped", price=Decimal("1.00")))
                raise LookupError("abort")
        assert not Product.objects.filter(name="Dropped").exists()

    def test_begin_failure_raises_store_error(self, repo):
        connection = connections[repo.alias]
        with mock.patch.object(
            connection, "savepoint", side_effect=OperationalError("gone")
        ):
            with pytest.raises(StoreError, match="transaction failed"):
                with repo.atomic():
                    pass

    def test_commit_failure_raises_store_error(self, repo):
        connection = connections[repo.alias]
        failure = OperationalError("gone")
        with mock.patch.object(
            connection, "savepoint_commit", side_effect=[failure, None]
        ):
            with pytest.raises(StoreError) as exc_info:
                with repo.atomic():
                    pass
        assert exc_info.value.__cause__ is failure


# ===========================================================================
# Lifecycle
# ===========================================================================


class TestLifecycle:
    def test_connect_succeeds(self, repo):
        repo.connect()

    def test_connect_failure_raises_store_error(self, repo):
        with mock.patch.object(
            connections["default"],
            "ensure_connection",
            side_effect=OperationalError("refused"),
        ):
            with pytest.raises(StoreError, match="Could not connect"):
                repo.connect()

    def test_sync_runs_migrate(self, repo):
        target = "modules.products.repositories.django_repository.call_command"
        with mock.patch(target) as call_command:
            repo.sync()
        call_command.assert_called_once_with(
            "migrate", database="default", interactive=False, verbosity=0
        )

    def test_ping(self, repo):
        assert repo.ping() is True

    def test_ping_failure(self, repo):
        with mock.patch.object(
            connections["default"], "cursor", side_effect=OperationalError("down")
        ):
            assert repo.ping() is False
