from typing import Any

from pydantic import BaseModel

from swpshop_client_sdk.models_products import Product


class ProductListResponse(BaseModel):
    data: list[Product]
    meta: Any = None


class ProductDetailResponse(BaseModel):
    data: Product
