from .products_client import ProductsClient, build_products_query
from .storefront_client import StorefrontClient

__all__ = ["ProductsClient", "StorefrontClient", "build_products_query"]
