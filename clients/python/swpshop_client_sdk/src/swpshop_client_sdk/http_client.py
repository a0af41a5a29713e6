from __future__ import annotations

import asyncio
import inspect
import io
import json
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Union

from .config import ClientConfig
from .error_mapper import map_error
from .query import serialize_query
from .results import ApiResult, ErrorType, fail
from .transport import HttpxTransport, Transport, TransportResponse

TokenProvider = Callable[[], Union[str, None, Awaitable[Union[str, None]]]]
TokenSource = Union[str, TokenProvider, None]

GRAPHQL_PATH = "/graphql"


def normalize_base_url(base_url: str | None) -> str | None:
    if not isinstance(base_url, str):
        return None
    trimmed = base_url.strip()
    return trimmed.rstrip("/") or None


def build_url(base_url: str, path: str, query: Mapping[str, Any] | None = None) -> str:
    normalized_path = path if path.startswith("/") else f"/{path}"
    query_string = serialize_query(query)
    if not query_string:
        return f"{base_url}{normalized_path}"
    return f"{base_url}{normalized_path}?{query_string}"


def is_binary_body(body: Any) -> bool:
    return isinstance(body, (bytes, bytearray, memoryview, io.IOBase))


def encode_body(body: Any) -> Any:
    if body is None or is_binary_body(body):
        return body
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False)


def parse_payload(response: TransportResponse) -> Any:
    content_type = response.headers.get("content-type") or ""
    if "application/json" in content_type:
        return response.json()
    text = response.text
    return {"raw": text} if text else {}


def unwrap_payload(payload: Any) -> tuple[Any, Any]:
    if isinstance(payload, Mapping) and "data" in payload:
        return payload["data"], payload.get("meta")
    return payload, None


def is_success_status(status_code: int) -> bool:
    return 200 <= status_code < 300


async def resolve_token(token: TokenSource) -> str | None:
    if not token:
        return None
    if callable(token):
        resolved = token()
        if inspect.isawaitable(resolved):
            resolved = await resolved
        return resolved or None
    return token


@dataclass(frozen=True)
class DirectusClient:
    """Directus REST/GraphQL client returning ``ApiResult`` for every outcome.

    ``token`` may be a static string or a zero-argument callable (sync or async)
    resolved on each request. ``transport`` is any async callable with the
    ``HttpxTransport`` signature.
    """

    base_url: str | None = None
    token: TokenSource = None
    transport: Transport | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", normalize_base_url(self.base_url))
        if self.transport is None:
            object.__setattr__(self, "transport", HttpxTransport())

    @classmethod
    def from_config(cls, config: ClientConfig, transport: Transport | None = None) -> "DirectusClient":
        return cls(
            base_url=config.base_url,
            token=config.token,
            transport=transport
            or HttpxTransport(timeout_seconds=config.timeout_seconds, verify_ssl=config.verify_ssl),
        )

    async def request(
        self,
        path: str,
        *,
        method: str = "GET",
        query: Mapping[str, Any] | None = None,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
        signal: asyncio.Event | None = None,
        transport_options: Mapping[str, Any] | None = None,
    ) -> ApiResult[Any]:
        if not self.base_url:
            return fail(ErrorType.CONFIG, "Directus baseUrl is missing or invalid.")

        request_headers = {"Accept": "application/json"}
        if headers:
            request_headers.update(headers)
        if body is not None and not is_binary_body(body):
            request_headers["Content-Type"] = "application/json"

        try:
            resolved_token = await resolve_token(self.token)
        except Exception as exc:
            return fail(ErrorType.CONFIG, "Unable to resolve the Directus access token.", details=exc)
        if resolved_token:
            request_headers["Authorization"] = f"Bearer {resolved_token}"

        url = build_url(self.base_url, path, query)

        try:
            response = await self.transport(
                url,
                method=method.upper(),
                headers=request_headers,
                body=encode_body(body),
                signal=signal,
                **dict(transport_options or {}),
            )
        except Exception as exc:
            return fail(
                ErrorType.NETWORK,
                str(exc) or "Network request failed.",
                details=exc,
                retryable=True,
            )

        try:
            payload = parse_payload(response)
        except ValueError as exc:
            return fail(
                ErrorType.PARSE,
                "Unable to parse API response.",
                status=response.status_code,
                details=exc,
            )

        if not is_success_status(response.status_code):
            return ApiResult.failure(map_error(response.status_code, payload))

        data, meta = unwrap_payload(payload)
        return ApiResult.success(data, meta)

    async def get(self, path: str, **options: Any) -> ApiResult[Any]:
        return await self.request(path, **{**options, "method": "GET"})

    async def post(self, path: str, body: Any = None, **options: Any) -> ApiResult[Any]:
        return await self.request(path, **{**options, "method": "POST", "body": body})

    async def patch(self, path: str, body: Any = None, **options: Any) -> ApiResult[Any]:
        return await self.request(path, **{**options, "method": "PATCH", "body": body})

    async def delete(self, path: str, **options: Any) -> ApiResult[Any]:
        return await self.request(path, **{**options, "method": "DELETE"})

    async def graphql(
        self,
        query: str,
        *,
        variables: Mapping[str, Any] | None = None,
        operation_name: str | None = None,
        signal: asyncio.Event | None = None,
    ) -> ApiResult[Any]:
        # In-band GraphQL "errors" inside a 2xx body are returned as data.
        body = {"query": query, "variables": variables, "operationName": operation_name}
        return await self.post(
            GRAPHQL_PATH,
            {key: value for key, value in body.items() if value is not None},
            signal=signal,
        )
