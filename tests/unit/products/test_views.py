"""Unit tests for ProductViewSet with an injected store.

Covers:
- Store injection through ``as_view(..., store=...)``.
- Input Gate short-circuit (store never touched on violations).
- StoreError mapped to 500.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from rest_framework.test import APIRequestFactory

from modules.products.exceptions import StoreError
from modules.products.models import Product
from modules.products.urls import COLLECTION_ACTIONS, MEMBER_ACTIONS
from modules.products.views import ProductViewSet

pytestmark = pytest.mark.unit


@pytest.fixture()
def factory():
    return APIRequestFactory()


@pytest.fixture()
def store():
    return MagicMock()


@pytest.fixture()
def collection_view(store):
    return ProductViewSet.as_view(COLLECTION_ACTIONS, store=store)


@pytest.fixture()
def member_view(store):
    return ProductViewSet.as_view(MEMBER_ACTIONS, store=store)


class TestStoreInjection:
    def test_requires_store(self):
        with pytest.raises(TypeError, match="store"):
            ProductViewSet()

    def test_list_uses_injected_store(self, factory, store, collection_view):
        store.list.return_value = [
            Product(id=1, name="Widget", price=Decimal("9.50"), availability=True)
        ]

        response = collection_view(factory.get("/api/products"))

        assert response.status_code == 200
        assert response.data["data"][0]["name"] == "Widget"
        store.list.assert_called_once_with()


class TestInputGate:
    def test_rejected_request_never_reaches_store(self, factory, store, member_view):
        response = member_view(factory.delete("/api/products/abc"), id="abc")

        assert response.status_code == 400
        assert response.data["errors"][0]["msg"] == "ID no válido"
        store.get_by_id.assert_not_called()

    def test_rejected_body_never_reaches_store(self, factory, store, collection_view):
        request = factory.post("/api/products", {"name": ""}, format="json")

        response = collection_view(request)

        assert response.status_code == 400
        store.create.assert_not_called()


class TestStoreFailure:
    def test_create_failure_returns_500(self, factory, store, collection_view):
        store.create.side_effect = StoreError("insert failed")
        request = factory.post(
            "/api/products", {"name": "Widget", "price": 5}, format="json"
        )

        response = collection_view(request)

        assert response.status_code == 500
        assert response.data == {"error": "Internal server error"}

    def test_toggle_failure_returns_500(self, factory, store, member_view):
        store.get_by_id.return_value = Product(
            id=1, name="Widget", price=Decimal("1.00"), availability=True
        )
        store.save.side_effect = StoreError("update failed")

        response = member_view(factory.patch("/api/products/1"), id="1")

        assert response.status_code == 500
