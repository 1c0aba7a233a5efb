"""Database session dependencies."""

from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from product_api.db.repository import ProductRepository
from product_api.db.session import get_db


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency that yields a managed SQLAlchemy session."""
    yield from get_db()


def get_product_repository(db: Session = Depends(get_session)) -> ProductRepository:
    """Product persistence bound to the request's session."""
    return ProductRepository(db)
