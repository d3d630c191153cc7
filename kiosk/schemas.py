"""
Request and response schemas.

Request models validate the shape of inbound JSON. Response models are the
outward view of the ORM objects: they copy only the fields listed here, so
join-table columns never leak into API responses.
"""
from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, field_serializer
from kiosk.utils.formatters import format_timestamp

# Largest value the BIGINT primary keys can hold
MAX_ID = 2 ** 63 - 1
# Largest value the INTEGER stock and price columns can hold
MAX_AMOUNT = 2 ** 31 - 1


# =====================================================
# REQUESTS
# =====================================================

class SaleItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='forbid')

    product_id: StrictInt = Field(alias='id', le=MAX_ID)
    quantity: StrictInt = Field(gt=0)


class SaleCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='forbid')

    products: List[SaleItem] = Field(min_length=1)
    is_cash: StrictBool = Field(alias='isCash')


class ProductCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='forbid')

    barcode: StrictStr = Field(min_length=1)
    name: StrictStr = Field(min_length=1)
    stock: StrictInt = Field(ge=0, le=MAX_AMOUNT)
    cost_price: StrictInt = Field(alias='costPrice', ge=0, le=MAX_AMOUNT)
    sale_price: StrictInt = Field(alias='salePrice', ge=0, le=MAX_AMOUNT)


class ProductUpdate(ProductCreate):
    id: StrictInt = Field(le=MAX_ID)


# =====================================================
# RESPONSES
# =====================================================

class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    barcode: str
    name: str
    stock: int
    cost_price: int = Field(serialization_alias='costPrice')
    sale_price: int = Field(serialization_alias='salePrice')


class SaleLineOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: int = Field(serialization_alias='productId')
    quantity: int


class SaleOut(BaseModel):
    """Sale header."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    quantity: int
    total: int
    is_cash: bool = Field(serialization_alias='isCash')
    created_at: datetime = Field(serialization_alias='createdAt')

    @field_serializer('created_at')
    def _serialize_created_at(self, value: datetime) -> str:
        return format_timestamp(value)


class SaleDetailOut(SaleOut):
    """Sale header plus the products sold and the units per line."""
    products: List[ProductOut]
    lines: List[SaleLineOut]


def to_json(view) -> dict:
    """Dump a response model with the API's camelCase field names."""
    return view.model_dump(by_alias=True)
