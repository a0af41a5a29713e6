"""Normalizes raw Directus product items into the public ``Product`` shape.

Directus collections are edited by hand, so field names drift between
projects. Each attribute is read from a short chain of candidate fields.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any

from swpshop_client_sdk.models_products import Product

UNNAMED_PRODUCT = "Unnamed product"


def _first_present(item: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        value = item.get(key)
        if value is not None:
            return value
    return None


def _first_truthy(item: Mapping[str, Any], keys: Iterable[str], default: Any) -> Any:
    for key in keys:
        value = item.get(key)
        if value:
            return value
    return default


def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def normalize_price(value: Any) -> float | None:
    if _is_number(value):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, str) and value.strip():
        # only the first comma is read as a decimal point
        try:
            parsed = float(value.replace(",", ".", 1))
        except ValueError:
            return None
        return parsed if math.isfinite(parsed) else None
    return None


def extract_asset_id(entry: Any) -> str | None:
    if not entry or isinstance(entry, bool):
        return None
    if isinstance(entry, str) or _is_number(entry):
        return _as_text(entry)
    if isinstance(entry, Mapping):
        entry_id = entry.get("id")
        if isinstance(entry_id, str) or _is_number(entry_id):
            return _as_text(entry_id)
        if entry.get("directus_files_id"):
            return _as_text(entry["directus_files_id"])
        file_entry = entry.get("file")
        if isinstance(file_entry, Mapping) and file_entry.get("id"):
            return _as_text(file_entry["id"])
    return None


def build_asset_url(asset_id: str | None, assets_base_url: str | None) -> str | None:
    if not asset_id:
        return None
    if asset_id.startswith(("http://", "https://")):
        return asset_id
    if not assets_base_url:
        return None
    return f"{assets_base_url.rstrip('/')}/assets/{asset_id}"


def extract_image_urls(item: Mapping[str, Any], assets_base_url: str | None) -> list[str]:
    asset_ids: list[str] = []
    for candidate in (item.get("images"), item.get("image"), item.get("gallery")):
        if not candidate:
            continue
        entries = candidate if isinstance(candidate, list) else [candidate]
        for entry in entries:
            asset_id = extract_asset_id(entry)
            if asset_id:
                asset_ids.append(asset_id)

    urls = (build_asset_url(asset_id, assets_base_url) for asset_id in asset_ids)
    return [url for url in urls if url]


def map_product(item: Any, *, assets_base_url: str | None = None) -> Product:
    if not isinstance(item, Mapping):
        item = {}

    id_value = _first_present(item, ("id", "ID", "slug"))
    product_id = _as_text(id_value) if id_value is not None else "unknown"
    availability = _first_present(item, ("availability", "stock_status", "stock"))

    return Product(
        id=product_id,
        slug=_as_text(item["slug"]) if item.get("slug") else product_id,
        name=_as_text(_first_truthy(item, ("name", "title", "product_name"), UNNAMED_PRODUCT)),
        description=_as_text(_first_truthy(item, ("description", "short_description", "summary"), "")),
        price=normalize_price(_first_present(item, ("price", "amount", "cost"))),
        availability=_as_text(availability) if availability else None,
        images=extract_image_urls(item, assets_base_url),
    )
