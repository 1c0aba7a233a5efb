"""Pydantic models describing Product payloads and response envelopes."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from product_api.api.validation.rules import FieldError, to_number, to_string


class ProductCreate(BaseModel):
    """Body of POST /api/products, read after the rules accepted it."""

    name: str = Field(..., examples=["Monitor Led 50 Pulgadas 4k"])
    price: float = Field(..., examples=[399])

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, v: Any) -> str:
        return to_string(v)

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, v: Any) -> float:
        return to_number(v)


class ProductUpdate(ProductCreate):
    """Body of PUT /api/products/{id}; every field is required."""

    availability: bool = Field(..., examples=[True])

    @field_validator("availability", mode="before")
    @classmethod
    def coerce_availability(cls, v: Any) -> bool:
        return to_string(v) in {"true", "1"}


class ProductRead(BaseModel):
    id: int = Field(..., examples=[1])
    name: str = Field(..., examples=['Monitor Led 42"'])
    price: float = Field(..., examples=[300])
    availability: bool = Field(..., examples=[True])
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class ProductResponse(BaseModel):
    data: ProductRead


class ProductListResponse(BaseModel):
    data: list[ProductRead]


class MessageResponse(BaseModel):
    data: str = Field(..., examples=["Eliminate Product"])


class ErrorResponse(BaseModel):
    error: str = Field(..., examples=["Product not found"])


class ValidationErrorResponse(BaseModel):
    error: list[FieldError]
