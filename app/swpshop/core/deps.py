from fastapi import Request

from app.swpshop.core.config import Settings
from swpshop_client_sdk.clients.products_client import ProductsClient
from swpshop_client_sdk.http_client import DirectusClient
from swpshop_client_sdk.transport import HttpxTransport, Transport


def build_products_client(settings: Settings, transport: Transport | None = None) -> ProductsClient:
    client = DirectusClient(
        base_url=settings.DIRECTUS_URL,
        token=settings.DIRECTUS_TOKEN,
        transport=transport or HttpxTransport(timeout_seconds=settings.DIRECTUS_TIMEOUT_SECONDS),
    )
    return ProductsClient(client, collection=settings.DIRECTUS_COLLECTION)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_products_client(request: Request) -> ProductsClient:
    return request.app.state.products_client
