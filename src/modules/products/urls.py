"""Product route table.

Binds each (method, path) pair to a ViewSet action; the action name
selects the rule set the Input Gate runs before the handler.
``{id}`` is captured as any path segment so malformed ids are rejected
by validation (400) rather than by URL resolution (404).
"""

from __future__ import annotations

from django.apps import apps
from django.urls import path

from modules.products.views import ProductViewSet

store = apps.get_app_config("products").store

COLLECTION_ACTIONS = {"get": "list", "post": "create"}
MEMBER_ACTIONS = {
    "get": "retrieve",
    "put": "update",
    "patch": "partial_update",
    "delete": "destroy",
}

urlpatterns = [
    path(
        "products",
        ProductViewSet.as_view(COLLECTION_ACTIONS, store=store),
        name="product-list",
    ),
    path(
        "products/<str:id>",
        ProductViewSet.as_view(MEMBER_ACTIONS, store=store),
        name="product-detail",
    ),
]
