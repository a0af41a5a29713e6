from __future__ import annotations

import pytest

from swpshop_client_sdk.results import ApiError, ApiResult, ErrorType, fail, json_safe


def test_success_result_shape() -> None:
    result = ApiResult.success([{"id": 1}], {"filter_count": 1})

    assert result.ok is True
    assert result.data == [{"id": 1}]
    assert result.meta == {"filter_count": 1}
    assert result.error is None


def test_failure_result_shape() -> None:
    result = fail(ErrorType.NOT_FOUND, "Product not found.", status=404, details={"slug": "tea"})

    assert result.ok is False
    assert result.data is None
    assert result.meta is None
    assert result.error == ApiError(
        type=ErrorType.NOT_FOUND,
        message="Product not found.",
        status=404,
        details={"slug": "tea"},
    )


@pytest.mark.parametrize(
    "kwargs",
    [
        {"ok": True, "error": ApiError(type=ErrorType.HTTP, message="x")},
        {"ok": False},
        {"ok": False, "data": [], "error": ApiError(type=ErrorType.HTTP, message="x")},
        {"ok": False, "meta": {}, "error": ApiError(type=ErrorType.HTTP, message="x")},
    ],
)
def test_inconsistent_envelopes_are_rejected(kwargs) -> None:
    with pytest.raises(ValueError):
        ApiResult(**kwargs)


def test_error_to_dict_makes_details_json_safe() -> None:
    error = ApiError(
        type=ErrorType.NETWORK,
        message="ECONNREFUSED",
        details={"cause": ConnectionError("ECONNREFUSED"), "attempts": (1, 2)},
        retryable=True,
    )

    assert error.to_dict() == {
        "type": "network",
        "message": "ECONNREFUSED",
        "status": None,
        "code": None,
        "details": {"cause": {"type": "ConnectionError", "message": "ECONNREFUSED"}, "attempts": [1, 2]},
        "retryable": True,
    }


def test_error_from_dict() -> None:
    error = ApiError.from_dict(
        {"type": "not_found", "message": "Product not found.", "status": 404, "details": {"slug": "x"}}
    )

    assert error.type is ErrorType.NOT_FOUND
    assert error.status == 404
    assert error.code is None
    assert error.details == {"slug": "x"}
    assert error.retryable is False


def test_error_from_dict_tolerates_unknown_values() -> None:
    error = ApiError.from_dict({"type": "teapot", "status": "418", "code": 7})

    assert error.type is ErrorType.HTTP
    assert error.message == "Request failed."
    assert error.status is None
    assert error.code == "7"


class _Marker:
    def __str__(self) -> str:
        return "marker"


def test_json_safe_stringifies_unknown_objects() -> None:
    assert json_safe({1: _Marker()}) == {"1": "marker"}
