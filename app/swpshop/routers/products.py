from __future__ import annotations

import json
import math
from typing import Any

from fastapi import APIRouter, Depends, Query

from app.swpshop.core.config import Settings
from app.swpshop.core.deps import get_products_client, get_settings
from app.swpshop.core.error_catalog import AppError, ErrorCatalog
from app.swpshop.schemas.errors import ApiErrorResponse
from app.swpshop.schemas.products import ProductDetailResponse, ProductListResponse
from app.swpshop.services.product_mapper import map_product
from swpshop_client_sdk.clients.products_client import ProductsClient

router = APIRouter()

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ApiErrorResponse},
    404: {"model": ApiErrorResponse},
    500: {"model": ApiErrorResponse},
    502: {"model": ApiErrorResponse},
}


def parse_filter(raw: str | None) -> dict[str, Any] | None:
    if not raw:
        return None
    try:
        value = json.loads(raw)
    except ValueError as exc:
        raise AppError.from_definition(ErrorCatalog.INVALID_FILTER, {"filter": raw}) from exc
    if not isinstance(value, dict):
        raise AppError.from_definition(ErrorCatalog.INVALID_FILTER, {"filter": raw})
    return value


def parse_csv(values: list[str] | None) -> str | None:
    if not values:
        return None
    return ",".join(values)


def parse_number(raw: str | None) -> int | float | None:
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return int(value) if value.is_integer() else value


@router.get("/api/products", response_model=ProductListResponse, responses=_ERROR_RESPONSES)
async def list_products(
    filter_: str | None = Query(None, alias="filter"),
    fields: list[str] | None = Query(None),
    sort: list[str] | None = Query(None),
    limit: str | None = None,
    page: str | None = None,
    search: str | None = None,
    products: ProductsClient = Depends(get_products_client),
    settings: Settings = Depends(get_settings),
):
    result = await products.list_products(
        {
            "filter": parse_filter(filter_),
            "fields": parse_csv(fields),
            "sort": parse_csv(sort),
            "limit": parse_number(limit),
            "page": parse_number(page),
            "search": search,
        }
    )
    if not result.ok:
        raise AppError(result.error, upstream=True)

    return ProductListResponse(
        data=[map_product(item, assets_base_url=settings.DIRECTUS_URL) for item in result.data],
        meta=result.meta,
    )


@router.get("/api/products/{slug}", response_model=ProductDetailResponse, responses=_ERROR_RESPONSES)
async def get_product(
    slug: str,
    products: ProductsClient = Depends(get_products_client),
    settings: Settings = Depends(get_settings),
):
    result = await products.query_products({"filter": {"slug": {"_eq": slug}}, "limit": 1})
    if not result.ok:
        raise AppError(result.error, upstream=True)
    if not result.data:
        raise AppError.from_definition(ErrorCatalog.PRODUCT_NOT_FOUND, {"slug": slug})

    return ProductDetailResponse(data=map_product(result.data[0], assets_base_url=settings.DIRECTUS_URL))
