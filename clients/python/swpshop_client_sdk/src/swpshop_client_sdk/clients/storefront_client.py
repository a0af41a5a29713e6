from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from ..http_client import is_success_status, normalize_base_url
from ..models_products import Product
from ..results import ApiError, ApiResult, ErrorType, fail
from ..transport import HttpxTransport, Transport
from .products_client import encode_segment


def _status_error_type(status_code: int) -> ErrorType:
    return ErrorType.NOT_FOUND if status_code == 404 else ErrorType.HTTP


@dataclass(frozen=True)
class StorefrontClient:
    """Reads products from the swpshop backend (``/api/products``)."""

    base_url: str | None = None
    transport: Transport | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", normalize_base_url(self.base_url))
        if self.transport is None:
            object.__setattr__(self, "transport", HttpxTransport())

    async def get_product_list(self) -> ApiResult[list[Product]]:
        result = await self._request("/api/products")
        if not result.ok:
            return result
        rows = result.data if isinstance(result.data, list) else []
        try:
            products = [Product.model_validate(row) for row in rows]
        except ValidationError as exc:
            return fail(ErrorType.PARSE, "Product list has an unexpected shape.", details=exc)
        return ApiResult.success(products, result.meta)

    async def get_product_by_slug(self, slug: str | None) -> ApiResult[Product]:
        if not slug:
            return fail(
                ErrorType.NOT_FOUND,
                "Product not found.",
                status=404,
                details={"slug": slug},
            )
        result = await self._request(f"/api/products/{encode_segment(slug)}")
        if not result.ok:
            return result
        try:
            product = Product.model_validate(result.data)
        except ValidationError as exc:
            return fail(ErrorType.PARSE, "Product has an unexpected shape.", details=exc)
        return ApiResult.success(product, result.meta)

    async def _request(self, path: str) -> ApiResult[Any]:
        if not self.base_url:
            return fail(ErrorType.CONFIG, "Backend URL is not configured.")

        try:
            response = await self.transport(
                f"{self.base_url}{path}",
                method="GET",
                headers={"Accept": "application/json"},
            )
        except Exception as exc:
            return fail(
                ErrorType.NETWORK,
                str(exc) or "Network error.",
                details=exc,
                retryable=True,
            )

        status_code = response.status_code
        try:
            payload = response.json()
        except ValueError as exc:
            if not is_success_status(status_code):
                return fail(
                    _status_error_type(status_code),
                    "Backend returned a malformed error response.",
                    status=status_code,
                )
            return fail(
                ErrorType.PARSE,
                "Backend response could not be read.",
                status=status_code,
                details=exc,
            )

        if not is_success_status(status_code):
            error = payload.get("error") if isinstance(payload, Mapping) else None
            if isinstance(error, Mapping):
                return ApiResult.failure(ApiError.from_dict(error))
            return fail(
                _status_error_type(status_code),
                "Backend request failed.",
                status=status_code,
                details=payload,
            )

        if not isinstance(payload, Mapping):
            return ApiResult.success(None)
        return ApiResult.success(payload.get("data"), payload.get("meta"))
