from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.swpshop.core.config import Settings

DIRECTUS_URL = "http://10.115.3.12:8055"


class RecordingTransport:
    def __init__(self) -> None:
        self.responses: list[httpx.Response | Exception] = []
        self.calls: list[dict[str, Any]] = []

    def queue(self, *responses: httpx.Response | Exception) -> None:
        self.responses.extend(responses)

    def queue_json(self, payload: Any, status_code: int = 200) -> None:
        self.queue(httpx.Response(status_code=status_code, json=payload))

    async def __call__(self, url: str, **kwargs: Any) -> httpx.Response:
        self.calls.append({"url": url, **kwargs})
        result = self.responses.pop(0) if self.responses else httpx.Response(200, json={"data": []})
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        DIRECTUS_URL=DIRECTUS_URL,
        DIRECTUS_TOKEN="server-token",
        DIRECTUS_COLLECTION="Products",
        CORS_ORIGIN="http://localhost:3000",
    )


@pytest.fixture()
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture()
def app(settings: Settings, transport: RecordingTransport):
    return create_app(settings, transport)


@pytest.fixture()
def client(app):
    with TestClient(app) as client:
        yield client
