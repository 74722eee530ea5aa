"""Application service: Update Product Price use case."""

from __future__ import annotations

import logging

from storefront.domain.exceptions import NotFoundError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class UpdateProductPriceHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, new_price: str) -> Product:
        """Reprice a catalog product.

        Placed orders keep the price they were created with. Cart lines
        keep their add-time price for display, and the next checkout
        charges the new one.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product not found: {product_id}")

        old_price = product.price
        product.update_price(Money.of(new_price, old_price.currency))
        self._product_repo.save(product)
        logger.info("Product %s repriced from %s to %s", product.id, old_price, product.price)
        return product
