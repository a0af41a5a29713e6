from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class ErrorType(str, Enum):
    API = "api"
    CONFIG = "config"
    HTTP = "http"
    NETWORK = "network"
    NOT_FOUND = "not_found"
    PARSE = "parse"
    VALIDATION = "validation"


@dataclass(frozen=True)
class ApiError:
    """Failure description carried inside an ``ApiResult``.

    This is a plain value: it is returned, never raised. ``details`` holds the
    original payload or exception for diagnostics only.
    """

    type: ErrorType
    message: str
    status: int | None = None
    code: str | None = None
    details: Any = None
    retryable: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "message": self.message,
            "status": self.status,
            "code": self.code,
            "details": json_safe(self.details),
            "retryable": self.retryable,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ApiError":
        try:
            error_type = ErrorType(payload.get("type"))
        except ValueError:
            error_type = ErrorType.HTTP
        status = payload.get("status")
        code = payload.get("code")
        return cls(
            type=error_type,
            message=str(payload.get("message") or "Request failed."),
            status=status if isinstance(status, int) and not isinstance(status, bool) else None,
            code=str(code) if code else None,
            details=payload.get("details"),
            retryable=bool(payload.get("retryable")),
        )


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    ok: bool
    data: T | None = None
    meta: Any = None
    error: ApiError | None = None

    def __post_init__(self) -> None:
        if self.ok and self.error is not None:
            raise ValueError("A successful result cannot carry an error")
        if not self.ok:
            if self.error is None:
                raise ValueError("A failed result requires an error")
            if self.data is not None or self.meta is not None:
                raise ValueError("A failed result cannot carry data or meta")

    @classmethod
    def success(cls, data: T, meta: Any = None) -> "ApiResult[T]":
        return cls(ok=True, data=data, meta=meta, error=None)

    @classmethod
    def failure(cls, error: ApiError) -> "ApiResult[T]":
        return cls(ok=False, data=None, meta=None, error=error)


def fail(
    error_type: ErrorType,
    message: str,
    *,
    status: int | None = None,
    code: str | None = None,
    details: Any = None,
    retryable: bool = False,
) -> ApiResult[Any]:
    return ApiResult.failure(
        ApiError(
            type=error_type,
            message=message,
            status=status,
            code=code,
            details=details,
            retryable=retryable,
        )
    )


def json_safe(value: Any) -> Any:
    if isinstance(value, BaseException):
        return {"type": value.__class__.__name__, "message": str(value)}
    if isinstance(value, Mapping):
        return {str(key): json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_safe(item) for item in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)
