from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProductQuery(BaseModel):
    model_config = ConfigDict(extra="ignore")

    filter: dict[str, Any] | None = None
    fields: list[str] | str | None = None
    sort: list[str] | str | None = None
    limit: int | None = None
    page: int | None = None
    search: str | None = None


class Product(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    slug: str
    name: str
    description: str = ""
    price: float | None = None
    availability: str | None = None
    images: list[str] = Field(default_factory=list)
