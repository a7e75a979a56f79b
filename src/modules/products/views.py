"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
Every action first passes the Input Gate with its rule set from
``validators.py``; domain exceptions are then caught and translated into
HTTP status codes; the view never swallows generic exceptions.

Response envelopes:
- success: ``{"data": ...}`` (delete: ``{"message": ...}``)
- validation failure: ``{"errors": [...]}`` (400)
- missing product: ``{"error": "Product not found"}`` (404)
- store failure: ``{"error": "Internal server error"}`` (500)
"""

from __future__ import annotations

from typing import Any, Dict, Type

import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.validation import InputGateMixin, InputRejected, violations_from_pydantic
from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.exceptions import ProductNotFound, StoreError
from modules.products.repositories.interfaces import IProductRepository
from modules.products.serializers import ProductSerializer
from modules.products.services import ProductService
from modules.products.validators import DTO_FIELD_MESSAGES, PRODUCT_RULE_SETS

logger = structlog.get_logger(__name__)

NOT_FOUND_MESSAGE = "Product not found"
DELETED_MESSAGE = "Product deleted successfully"
STORE_FAILURE_MESSAGE = "Internal server error"

BODY_FIELDS = ("name", "price", "availability")


def _not_found() -> Response:
    return Response({"error": NOT_FOUND_MESSAGE}, status=status.HTTP_404_NOT_FOUND)


class ProductViewSet(InputGateMixin, GenericViewSet):
    """ViewSet for Product CRUD operations.

    The store handle is injected through ``as_view(..., store=...)``;
    all ORM access goes through ``ProductService`` and that handle.
    """

    serializer_class = ProductSerializer
    rule_sets = PRODUCT_RULE_SETS
    store: IProductRepository | None = None

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        if self.store is None:
            raise TypeError("ProductViewSet requires a 'store' instance.")
        self._service = ProductService(repository=self.store)

    def handle_exception(self, exc):
        if isinstance(exc, StoreError):
            logger.error(
                "product.store_failure",
                action=getattr(self, "action", None),
                error=str(exc),
                exc_info=exc,
            )
            return Response(
                {"error": STORE_FAILURE_MESSAGE},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return super().handle_exception(exc)

    @staticmethod
    def _build_dto(dto_class: Type[BaseModel], data: Any) -> Any:
        """Coerce the request body into ``dto_class`` or reject the request."""
        payload: Dict[str, Any] = {}
        if hasattr(data, "get"):
            for field in BODY_FIELDS:
                if field in data:
                    payload[field] = data.get(field)
        try:
            return dto_class(**payload)
        except PydanticValidationError as exc:
            raise InputRejected(
                violations_from_pydantic(exc, DTO_FIELD_MESSAGES)
            ) from exc

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/products"""
        products = self._service.list_products()
        return Response({"data": ProductSerializer(products, many=True).data})

    def retrieve(self, request: Request, id: str) -> Response:
        """GET /api/products/{id}"""
        try:
            product = self._service.get_product(id)
        except ProductNotFound:
            return _not_found()
        return Response({"data": ProductSerializer(product).data})

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/products"""
        dto = self._build_dto(CreateProductDTO, request.data)
        product = self._service.create_product(dto)
        return Response(
            {"data": ProductSerializer(product).data},
            status=status.HTTP_201_CREATED,
        )

    def update(self, request: Request, id: str) -> Response:
        """PUT /api/products/{id}"""
        dto = self._build_dto(UpdateProductDTO, request.data)
        try:
            product = self._service.replace_product(id, dto)
        except ProductNotFound:
            return _not_found()
        return Response({"data": ProductSerializer(product).data})

    def partial_update(self, request: Request, id: str) -> Response:
        """PATCH /api/products/{id}

        Ignores the body and flips ``availability``.
        """
        try:
            product = self._service.toggle_availability(id)
        except ProductNotFound:
            return _not_found()
        return Response({"data": ProductSerializer(product).data})

    def destroy(self, request: Request, id: str) -> Response:
        """DELETE /api/products/{id}"""
        try:
            self._service.delete_product(id)
        except ProductNotFound:
            return _not_found()
        return Response({"message": DELETED_MESSAGE})
