"""Product repository interface.

Extends ``IRepository[Product]``; listing is always ordered by price,
highest first.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate.

    Implementations raise ``StoreError`` for any unexpected persistence
    failure and return ``None`` for missing products.
    """

    @abstractmethod
    def list(self) -> List["Product"]:
        """All products ordered by price descending (ties by id)."""
