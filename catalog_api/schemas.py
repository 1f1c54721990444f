from __future__ import annotations

import math
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Generic, Optional, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


def _not_blank(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError("must not be blank")
    return value


# Positive amount with at most 8 integer digits and 2 decimal places.
Money = Annotated[Decimal, Field(gt=0, max_digits=10, decimal_places=2)]

# Ids and counts are stored as 32-bit INTEGER columns.
MAX_INT = 2**31 - 1
EntityId = Annotated[int, Field(ge=1, le=MAX_INT)]


class CamelModel(BaseModel):
    """Base for wire models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -------------------------
# Envelopes
# -------------------------
class ApiResponse(CamelModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None


class Page(CamelModel, Generic[T]):
    content: list[T]
    page: int
    page_size: int
    total_elements: int
    total_pages: int
    first: bool
    last: bool

    @classmethod
    def build(cls, content: list[T], *, page: int, page_size: int, total_elements: int) -> "Page[T]":
        total_pages = math.ceil(total_elements / page_size) if page_size else 0
        return cls(
            content=content,
            page=page,
            page_size=page_size,
            total_elements=total_elements,
            total_pages=total_pages,
            first=page == 0,
            last=page + 1 >= total_pages,
        )


# -------------------------
# Categories
# -------------------------
class CategoryCreate(CamelModel):
    name: Annotated[str, Field(min_length=2, max_length=100), AfterValidator(_not_blank)]
    description: Optional[str] = Field(default=None, max_length=500)


class CategoryUpdate(CamelModel):
    name: Annotated[Optional[str], Field(min_length=2, max_length=100), AfterValidator(_not_blank)] = None
    description: Optional[str] = Field(default=None, max_length=500)


class CategoryRead(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    product_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# -------------------------
# Products
# -------------------------
class ProductCreate(CamelModel):
    name: Annotated[str, Field(min_length=2, max_length=200), AfterValidator(_not_blank)]
    description: Optional[str] = Field(default=None, max_length=1000)
    base_price: Money
    brand: Annotated[str, Field(min_length=1, max_length=100), AfterValidator(_not_blank)]
    category_id: EntityId


class ProductUpdate(CamelModel):
    name: Annotated[Optional[str], Field(min_length=2, max_length=200), AfterValidator(_not_blank)] = None
    description: Optional[str] = Field(default=None, max_length=1000)
    base_price: Optional[Money] = None
    brand: Annotated[Optional[str], Field(min_length=1, max_length=100), AfterValidator(_not_blank)] = None
    category_id: Optional[EntityId] = None


class ProductRead(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    base_price: Decimal
    brand: str
    category_id: int
    category_name: str
    sku_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# -------------------------
# SKUs
# -------------------------
class SkuCreate(CamelModel):
    sku_code: Annotated[str, Field(min_length=3, max_length=50), AfterValidator(_not_blank)]
    name: Annotated[str, Field(min_length=2, max_length=200), AfterValidator(_not_blank)]
    attributes: Optional[str] = Field(default=None, max_length=500)
    price: Money
    quantity: int = Field(default=0, ge=0, le=MAX_INT)


class SkuUpdate(CamelModel):
    sku_code: Annotated[Optional[str], Field(min_length=3, max_length=50), AfterValidator(_not_blank)] = None
    name: Annotated[Optional[str], Field(min_length=2, max_length=200), AfterValidator(_not_blank)] = None
    attributes: Optional[str] = Field(default=None, max_length=500)
    price: Optional[Money] = None
    quantity: Optional[int] = Field(default=None, ge=0, le=MAX_INT)


class SkuRead(CamelModel):
    id: int
    sku_code: str
    name: str
    attributes: Optional[str] = None
    price: Decimal
    quantity: int
    product_id: int
    product_name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
