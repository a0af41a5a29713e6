from typing import Any

from pydantic import BaseModel


class ApiErrorBody(BaseModel):
    type: str
    message: str
    status: int
    code: str | None = None
    details: Any = None
    retryable: bool = False
    trace_id: str | None = None


class ApiErrorResponse(BaseModel):
    error: ApiErrorBody
