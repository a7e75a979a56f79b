"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository``.

Business rules enforced here:
- RN-PRO-002: Price must be greater than zero (validated by DTO).
- RN-PRO-003: Availability is only flipped by ``toggle_availability``.
- RN-PRO-004: Deletion is permanent.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog

from modules.products.exceptions import ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    ``StoreError`` raised by the repository propagates unchanged.
    Read-modify-write commands run inside ``repository.atomic()``.
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    def _get_or_raise(self, id: str) -> Product:
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a new product; the store assigns its id."""
        product = Product(
            name=dto.name,
            price=dto.price,
            availability=dto.availability,
        )
        product = self._repo.create(product)
        logger.info("product.created", product_id=product.pk)
        return product

    def replace_product(self, id: str, dto: UpdateProductDTO) -> Product:
        """Replace name, price and availability of an existing product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        with self._repo.atomic():
            product = self._get_or_raise(id)
            product.name = dto.name
            product.price = dto.price
            product.availability = dto.availability
            product = self._repo.save(product)
        logger.info("product.updated", product_id=product.pk)
        return product

    def toggle_availability(self, id: str) -> Product:
        """Flip ``availability`` of an existing product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        with self._repo.atomic():
            product = self._get_or_raise(id)
            product.toggle_availability()
            product = self._repo.save(product)
        logger.info(
            "product.availability_toggled",
            product_id=product.pk,
            availability=product.availability,
        )
        return product

    def delete_product(self, id: str) -> None:
        """Permanently delete a product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        with self._repo.atomic():
            product = self._get_or_raise(id)
            self._repo.delete(product)
        logger.info("product.deleted", product_id=id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self) -> List[Product]:
        """Return every product, most expensive first."""
        return self._repo.list()

    def get_product(self, id: str) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._get_or_raise(id)
        logger.info("product.retrieved", product_id=product.pk)
        return product
