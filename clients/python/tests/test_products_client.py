from __future__ import annotations

import pytest

from sdk_helpers import BASE_URL, StubTransport, json_response
from swpshop_client_sdk.clients.products_client import ProductsClient, build_products_query
from swpshop_client_sdk.http_client import DirectusClient
from swpshop_client_sdk.models_products import ProductQuery
from swpshop_client_sdk.results import ErrorType


def _products(transport: StubTransport, *, token: str | None = None, collection: str = "Products") -> ProductsClient:
    return ProductsClient(DirectusClient(base_url=BASE_URL, token=token, transport=transport), collection=collection)


def test_build_products_query_keeps_recognized_options_only() -> None:
    params = build_products_query(
        {
            "filter": {"status": {"_eq": "published"}},
            "fields": ["id", "name"],
            "sort": ["-date_created", "name"],
            "limit": 10,
            "page": 2,
            "search": "tea",
            "unknown": "dropped",
        }
    )

    assert params == {
        "filter": {"status": {"_eq": "published"}},
        "fields": "id,name",
        "sort": "-date_created,name",
        "limit": 10,
        "page": 2,
        "search": "tea",
    }


def test_build_products_query_skips_non_numeric_paging_and_empty_values() -> None:
    params = build_products_query(
        {"limit": "10", "page": True, "search": "", "fields": [], "filter": {}, "sort": "name"}
    )

    assert params == {"sort": "name"}


def test_build_products_query_accepts_product_query_model() -> None:
    query = ProductQuery(fields="id,slug", limit=1, filter={"slug": {"_eq": "green-tea"}})

    assert build_products_query(query) == {
        "filter": {"slug": {"_eq": "green-tea"}},
        "fields": "id,slug",
        "limit": 1,
    }


@pytest.mark.asyncio
async def test_products_list_uses_items_path_and_unwraps_data_array() -> None:
    transport = StubTransport(
        json_response({"data": [{"id": 1, "title": "Coffee"}], "meta": {"filter_count": 1}})
    )
    products = _products(transport, token="token-123")

    result = await products.list_products(limit=1, filter={"status": {"_eq": "published"}})

    assert result.ok is True
    assert result.data == [{"id": 1, "title": "Coffee"}]
    assert result.meta == {"filter_count": 1}
    assert result.error is None
    call = transport.calls[0]
    assert call["url"] == f"{BASE_URL}/items/Products?filter%5Bstatus%5D%5B_eq%5D=published&limit=1"
    assert call["method"] == "GET"
    assert call["headers"]["Authorization"] == "Bearer token-123"


@pytest.mark.asyncio
async def test_products_list_coerces_non_array_payload_to_empty_list() -> None:
    products = _products(StubTransport(json_response({"data": {"id": 1}}), json_response({"data": None})))

    single_object = await products.list_products()
    null_data = await products.list_products()

    assert single_object.ok is True
    assert single_object.data == []
    assert null_data.data == []


@pytest.mark.asyncio
async def test_products_list_preserves_order() -> None:
    rows = [{"id": 3}, {"id": 1}, {"id": 2}]
    products = _products(StubTransport(json_response({"data": rows})))

    result = await products.list_products({"sort": ["-price"]})

    assert result.data == rows


@pytest.mark.asyncio
async def test_query_products_returns_directus_error_unchanged() -> None:
    transport = StubTransport(
        json_response(
            {"errors": [{"message": "Invalid query", "extensions": {"code": "FAILED_VALIDATION"}}]},
            status_code=400,
        )
    )
    products = _products(transport)

    result = await products.query_products(filter={"id": {"_eq": None}})

    assert result.ok is False
    assert result.error.type is ErrorType.API
    assert result.error.code == "FAILED_VALIDATION"
    assert result.error.status == 400


@pytest.mark.asyncio
async def test_query_products_matches_list_products() -> None:
    transport = StubTransport(json_response({"data": [{"id": 1}]}))
    products = _products(transport)

    listed = await products.list_products(ProductQuery(limit=1, search="tea"))
    queried = await products.query_products(ProductQuery(limit=1, search="tea"))

    assert listed == queried
    assert transport.calls[0]["url"] == transport.calls[1]["url"]


@pytest.mark.asyncio
async def test_network_errors_pass_through() -> None:
    products = _products(StubTransport(ConnectionError("ECONNREFUSED")))

    result = await products.list_products()

    assert result.ok is False
    assert result.error.type is ErrorType.NETWORK
    assert result.error.message == "ECONNREFUSED"


@pytest.mark.asyncio
@pytest.mark.parametrize("product_id", [None, ""])
async def test_product_detail_requires_identifier(product_id) -> None:
    transport = StubTransport(json_response({"data": {}}))
    products = _products(transport)

    result = await products.get_product_detail(product_id)

    assert result.ok is False
    assert result.error.type is ErrorType.VALIDATION
    assert result.error.details == {"product_id": product_id}
    assert result.error.retryable is False
    assert transport.calls == []


@pytest.mark.asyncio
async def test_product_detail_encodes_identifier_and_projects_fields() -> None:
    transport = StubTransport(json_response({"data": {"id": "a b/c", "name": "Tea"}}))
    products = _products(transport)

    result = await products.get_product_detail("a b/c", fields=["id", "name"])

    assert result.ok is True
    assert result.data == {"id": "a b/c", "name": "Tea"}
    assert transport.calls[0]["url"] == f"{BASE_URL}/items/Products/a%20b%2Fc?fields=id%2Cname"


@pytest.mark.asyncio
async def test_product_detail_accepts_numeric_identifier() -> None:
    transport = StubTransport(json_response({"data": {"id": 0}}))
    products = _products(transport)

    result = await products.get_product_detail(0)

    assert result.ok is True
    assert transport.calls[0]["url"] == f"{BASE_URL}/items/Products/0"


@pytest.mark.asyncio
async def test_collection_name_is_path_encoded() -> None:
    transport = StubTransport(json_response({"data": []}))
    products = _products(transport, collection="Shop Products")

    await products.list_products()

    assert products.collection_path == "/items/Shop%20Products"
    assert transport.calls[0]["url"] == f"{BASE_URL}/items/Shop%20Products"
