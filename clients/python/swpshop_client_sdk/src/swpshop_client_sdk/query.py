from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote_plus, urlencode


def _form_quote(value: str, safe: str = "", encoding: str | None = None, errors: str | None = None) -> str:
    # browser form encoding keeps "*" literal and escapes "~"
    return quote_plus(value, safe="*", encoding=encoding, errors=errors).replace("~", "%7E")


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _append_param(pairs: list[tuple[str, str]], key: str, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, (list, tuple)):
        if not value:
            return
        pairs.append((key, ",".join(_to_text(item) for item in value)))
        return
    if isinstance(value, Mapping):
        for nested_key, nested_value in value.items():
            _append_param(pairs, f"{key}[{nested_key}]", nested_value)
        return
    pairs.append((key, _to_text(value)))


def serialize_query(query: Mapping[str, Any] | None = None) -> str:
    """Encode query options, flattening nested filters to ``key[sub][op]=value``."""
    pairs: list[tuple[str, str]] = []
    for key, value in (query or {}).items():
        _append_param(pairs, str(key), value)
    return urlencode(pairs, quote_via=_form_quote)
