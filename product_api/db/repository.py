"""Persistence operations for products.

Look-ups return ``None`` for missing rows instead of raising; the API layer
decides how an absent product is reported. Write operations roll the session
back on database errors and re-raise them unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from product_api.db.models.product import Product

logger = logging.getLogger(__name__)

# Primary keys are 32-bit signed integers
MIN_ID = -(2**31)
MAX_ID = 2**31 - 1


class ProductRepository:
    """Product store backed by a SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, **fields: Any) -> Product:
        """Insert a new product and return it with its generated id."""
        product = Product(**fields)
        self.db.add(product)
        self._commit()
        self.db.refresh(product)
        logger.info(f"Created product {product.id}")
        return product

    def list(self) -> Sequence[Product]:
        """All products, newest first."""
        return self.db.scalars(select(Product).order_by(Product.id.desc())).all()

    def find_by_id(self, product_id: int) -> Product | None:
        if not MIN_ID <= product_id <= MAX_ID:
            return None
        return self.db.get(Product, product_id)

    def save(self, product: Product) -> Product:
        """Persist in-place changes made to a loaded product."""
        self._commit()
        self.db.refresh(product)
        logger.info(f"Updated product {product.id}")
        return product

    def destroy(self, product: Product) -> None:
        product_id = product.id
        self.db.delete(product)
        self._commit()
        logger.info(f"Deleted product {product_id}")

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
