from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from pydantic import BaseModel

from ..http_client import DirectusClient
from ..models_products import ProductQuery
from ..results import ApiResult, ErrorType, fail

# encodeURIComponent-compatible path segment escaping
_SEGMENT_SAFE = "!~*'()"


def encode_segment(value: Any) -> str:
    return quote(str(value), safe=_SEGMENT_SAFE)


def to_comma_separated(value: Sequence[Any] | str) -> str:
    if isinstance(value, str):
        return value
    return ",".join(str(item) for item in value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _options_from(query: ProductQuery | Mapping[str, Any] | None) -> dict[str, Any]:
    if query is None:
        return {}
    if isinstance(query, BaseModel):
        return query.model_dump(exclude_none=True)
    return dict(query)


def build_products_query(query: ProductQuery | Mapping[str, Any] | None = None) -> dict[str, Any]:
    options = _options_from(query)
    params: dict[str, Any] = {}

    if options.get("filter"):
        params["filter"] = options["filter"]
    if options.get("fields"):
        params["fields"] = to_comma_separated(options["fields"])
    if options.get("sort"):
        params["sort"] = to_comma_separated(options["sort"])
    if _is_number(options.get("limit")):
        params["limit"] = options["limit"]
    if _is_number(options.get("page")):
        params["page"] = options["page"]
    if options.get("search"):
        params["search"] = options["search"]

    return params


@dataclass
class ProductsClient:
    client: DirectusClient
    collection: str = "Products"
    collection_path: str = field(init=False)

    def __post_init__(self) -> None:
        self.collection_path = f"/items/{encode_segment(self.collection)}"

    async def list_products(
        self,
        query: ProductQuery | Mapping[str, Any] | None = None,
        *,
        signal: asyncio.Event | None = None,
        **options: Any,
    ) -> ApiResult[list[Any]]:
        params = build_products_query({**_options_from(query), **options})
        result = await self.client.get(self.collection_path, query=params, signal=signal)
        if not result.ok:
            return result
        products = result.data if isinstance(result.data, list) else []
        return ApiResult.success(products, result.meta)

    async def query_products(
        self,
        query: ProductQuery | Mapping[str, Any] | None = None,
        *,
        signal: asyncio.Event | None = None,
        **options: Any,
    ) -> ApiResult[list[Any]]:
        return await self.list_products(query, signal=signal, **options)

    async def get_product_detail(
        self,
        product_id: str | int | None,
        *,
        fields: Sequence[str] | str | None = None,
        signal: asyncio.Event | None = None,
    ) -> ApiResult[Any]:
        if product_id is None or product_id == "":
            return fail(
                ErrorType.VALIDATION,
                "A valid product_id is required.",
                details={"product_id": product_id},
            )

        params = {"fields": to_comma_separated(fields)} if fields else None
        return await self.client.get(
            f"{self.collection_path}/{encode_segment(product_id)}",
            query=params,
            signal=signal,
        )
