"""CRUD endpoints for the product resource.

Each id-scoped route validates its input first, then loads the product and
answers 404 before attempting any write.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from product_api.api.dependencies.db import get_product_repository
from product_api.api.schemas.product import (
    ErrorResponse,
    MessageResponse,
    ProductCreate,
    ProductListResponse,
    ProductRead,
    ProductResponse,
    ProductUpdate,
    ValidationErrorResponse,
)
from product_api.api.validation.aggregator import validate
from product_api.api.validation.product_rules import (
    CREATE_RULES,
    ID_RULES,
    UPDATE_RULES,
)
from product_api.api.validation.rules import RequestData
from product_api.db.repository import ProductRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["Products"])

PRODUCT_NOT_FOUND = "Product not found"
PRODUCT_DELETED = "Eliminate Product"

_BAD_REQUEST = {
    status.HTTP_400_BAD_REQUEST: {
        "model": ValidationErrorResponse,
        "description": "Bad Request - Invalid ID or invalid input data",
    }
}
_NOT_FOUND = {
    status.HTTP_404_NOT_FOUND: {
        "model": ErrorResponse,
        "description": "Product Not Found",
    }
}


def _json_body(model: type[ProductCreate]) -> dict:
    """OpenAPI request body for routes that read the body through rules."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }


def _product_not_found() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": PRODUCT_NOT_FOUND},
    )


def _persistence_failure(action: str, e: SQLAlchemyError) -> HTTPException:
    logger.error(f"Database error {action}: {e}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(e),
    )


@router.get(
    "",
    summary="Get a list of products",
    description="Return a list of products",
    response_model=ProductListResponse,
)
async def get_products(
    repo: ProductRepository = Depends(get_product_repository),
) -> ProductListResponse:
    try:
        products = repo.list()
    except SQLAlchemyError as e:
        raise _persistence_failure("listing products", e) from e
    return ProductListResponse(data=[ProductRead.model_validate(p) for p in products])


@router.get(
    "/{id}",
    summary="Get a product by ID",
    description="Return a product based on its unique ID",
    response_model=ProductResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    dependencies=[Depends(validate(ID_RULES))],
)
async def get_product_by_id(
    id: str,
    repo: ProductRepository = Depends(get_product_repository),
):
    product_id = int(id)
    try:
        product = repo.find_by_id(product_id)
    except SQLAlchemyError as e:
        raise _persistence_failure(f"fetching product {product_id}", e) from e
    if product is None:
        return _product_not_found()
    return ProductResponse(data=ProductRead.model_validate(product))


@router.post(
    "",
    summary="Creates a new Product",
    description="Returns a new record in the database",
    status_code=status.HTTP_201_CREATED,
    response_model=ProductResponse,
    responses=_BAD_REQUEST,
    openapi_extra=_json_body(ProductCreate),
)
async def create_product(
    data: RequestData = Depends(validate(CREATE_RULES)),
    repo: ProductRepository = Depends(get_product_repository),
) -> ProductResponse:
    payload = ProductCreate.model_validate(data.body)
    try:
        product = repo.create(name=payload.name, price=payload.price)
    except SQLAlchemyError as e:
        raise _persistence_failure("creating product", e) from e
    return ProductResponse(data=ProductRead.model_validate(product))


@router.put(
    "/{id}",
    summary="Updates a product with user input",
    description="Returns the updated product",
    response_model=ProductResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    openapi_extra=_json_body(ProductUpdate),
)
async def update_product(
    id: str,
    data: RequestData = Depends(validate(UPDATE_RULES)),
    repo: ProductRepository = Depends(get_product_repository),
):
    product_id = int(id)
    payload = ProductUpdate.model_validate(data.body)
    try:
        product = repo.find_by_id(product_id)
        if product is None:
            return _product_not_found()

        product.name = payload.name
        product.price = payload.price
        product.availability = payload.availability
        product = repo.save(product)
    except SQLAlchemyError as e:
        raise _persistence_failure(f"updating product {product_id}", e) from e
    return ProductResponse(data=ProductRead.model_validate(product))


@router.patch(
    "/{id}",
    summary="Update Product availability",
    description="Flips the availability of a product and returns it",
    response_model=ProductResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    dependencies=[Depends(validate(ID_RULES))],
)
async def update_availability(
    id: str,
    repo: ProductRepository = Depends(get_product_repository),
):
    product_id = int(id)
    try:
        product = repo.find_by_id(product_id)
        if product is None:
            return _product_not_found()

        product.availability = not product.availability
        product = repo.save(product)
    except SQLAlchemyError as e:
        raise _persistence_failure(f"toggling availability of product {product_id}", e) from e
    return ProductResponse(data=ProductRead.model_validate(product))


@router.delete(
    "/{id}",
    summary="Deletes a product by a given ID",
    description="Returns a confirmation message",
    response_model=MessageResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    dependencies=[Depends(validate(ID_RULES))],
)
async def delete_product(
    id: str,
    repo: ProductRepository = Depends(get_product_repository),
):
    product_id = int(id)
    try:
        product = repo.find_by_id(product_id)
        if product is None:
            return _product_not_found()

        repo.destroy(product)
    except SQLAlchemyError as e:
        raise _persistence_failure(f"deleting product {product_id}", e) from e
    return MessageResponse(data=PRODUCT_DELETED)
