from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .results import ApiError, ErrorType


def has_directus_error(payload: Any) -> bool:
    if not isinstance(payload, Mapping):
        return False
    return payload.get("errors") is not None or bool(payload.get("error"))


def _first_error_entry(payload: Mapping[str, Any]) -> Any:
    errors = payload.get("errors")
    if isinstance(errors, list) and errors:
        return errors[0]
    if payload.get("error"):
        return payload["error"]
    # an empty errors list is still reported as-is
    if isinstance(errors, list) or errors:
        return errors
    return payload


def _error_code(entry: Any) -> str | None:
    if not isinstance(entry, Mapping):
        return None
    extensions = entry.get("extensions")
    if isinstance(extensions, Mapping) and extensions.get("code"):
        return str(extensions["code"])
    if entry.get("code"):
        return str(entry["code"])
    return None


def map_directus_error(status: int, payload: Mapping[str, Any]) -> ApiError:
    entry = _first_error_entry(payload)
    if isinstance(entry, Mapping) and entry.get("message"):
        message = str(entry["message"])
    else:
        message = f"Directus API request failed with status {status}."
    return ApiError(
        type=ErrorType.API,
        message=message,
        status=status,
        code=_error_code(entry),
        details=entry,
        retryable=status >= 500,
    )


def map_http_error(status: int, payload: Any) -> ApiError:
    return ApiError(
        type=ErrorType.HTTP,
        message=f"HTTP request failed with status {status}.",
        status=status,
        details=payload or None,
        retryable=status >= 500,
    )


def map_error(status: int, payload: Any) -> ApiError:
    if has_directus_error(payload):
        return map_directus_error(status, payload)
    return map_http_error(status, payload)
