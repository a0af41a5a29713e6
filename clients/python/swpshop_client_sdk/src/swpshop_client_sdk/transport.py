from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import httpx
import requests
from requests.adapters import HTTPAdapter

from .exceptions import TransportAbortedError


class TransportResponse(Protocol):
    """What the client reads from a transport result.

    ``httpx.Response`` and ``requests.Response`` both satisfy it.
    """

    status_code: int
    headers: Mapping[str, str]

    @property
    def text(self) -> str: ...

    def json(self) -> Any: ...


Transport = Callable[..., Awaitable[TransportResponse]]


def _readable(body: Any) -> Any:
    if hasattr(body, "read"):
        return body.read()
    return body


async def _race_signal(call: Awaitable[httpx.Response], signal: asyncio.Event) -> httpx.Response:
    request_task = asyncio.ensure_future(call)
    abort_task = asyncio.ensure_future(signal.wait())
    try:
        await asyncio.wait({request_task, abort_task}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        abort_task.cancel()
        if not request_task.done():
            request_task.cancel()
        # settle the request before a per-call client closes
        await asyncio.gather(request_task, abort_task, return_exceptions=True)
    if request_task.done() and not request_task.cancelled():
        return request_task.result()
    raise TransportAbortedError()


@dataclass
class HttpxTransport:
    """Default transport backed by ``httpx.AsyncClient``.

    Without an injected ``client`` a short-lived client is opened per call, so
    the transport can be shared across event loops.
    """

    timeout_seconds: float = 10.0
    verify_ssl: bool = True
    client: httpx.AsyncClient | None = None

    async def __call__(
        self,
        url: str,
        *,
        method: str,
        headers: Mapping[str, str],
        body: Any = None,
        signal: asyncio.Event | None = None,
        **options: Any,
    ) -> httpx.Response:
        if signal is not None and signal.is_set():
            raise TransportAbortedError()
        if self.client is not None:
            return await self._send(self.client, url, method, headers, body, signal, options)
        async with httpx.AsyncClient(
            timeout=self.timeout_seconds,
            verify=self.verify_ssl,
            follow_redirects=True,
        ) as client:
            return await self._send(client, url, method, headers, body, signal, options)

    @staticmethod
    async def _send(
        client: httpx.AsyncClient,
        url: str,
        method: str,
        headers: Mapping[str, str],
        body: Any,
        signal: asyncio.Event | None,
        options: dict[str, Any],
    ) -> httpx.Response:
        options.setdefault("follow_redirects", True)
        call = client.request(method, url, headers=dict(headers), content=_readable(body), **options)
        if signal is None:
            return await call
        return await _race_signal(call, signal)


@dataclass
class RequestsTransport:
    """Blocking ``requests.Session`` transport run in a worker thread."""

    timeout_seconds: float = 10.0
    verify_ssl: bool = True
    max_connections: int = 20
    session: requests.Session | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.max_connections,
                pool_maxsize=self.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    async def __call__(
        self,
        url: str,
        *,
        method: str,
        headers: Mapping[str, str],
        body: Any = None,
        signal: asyncio.Event | None = None,
        **options: Any,
    ) -> requests.Response:
        if signal is not None and signal.is_set():
            raise TransportAbortedError()
        options.setdefault("timeout", self.timeout_seconds)
        options.setdefault("verify", self.verify_ssl)
        response = await asyncio.to_thread(
            self.session.request,
            method,
            url,
            headers=dict(headers),
            data=body,
            **options,
        )
        if signal is not None and signal.is_set():
            raise TransportAbortedError()
        return response
