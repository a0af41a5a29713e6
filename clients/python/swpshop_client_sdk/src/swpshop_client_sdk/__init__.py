from .clients import ProductsClient, StorefrontClient, build_products_query
from .config import ClientConfig, ConfigError, load_config
from .exceptions import TransportAbortedError
from .formatting import format_price
from .http_client import DirectusClient
from .models_products import Product, ProductQuery
from .query import serialize_query
from .results import ApiError, ApiResult, ErrorType
from .transport import HttpxTransport, RequestsTransport, Transport

__all__ = [
    "ApiError",
    "ApiResult",
    "ClientConfig",
    "ConfigError",
    "DirectusClient",
    "ErrorType",
    "HttpxTransport",
    "Product",
    "ProductQuery",
    "ProductsClient",
    "RequestsTransport",
    "StorefrontClient",
    "Transport",
    "TransportAbortedError",
    "build_products_query",
    "format_price",
    "load_config",
    "serialize_query",
]
