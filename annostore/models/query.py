"""Query result model shared by all store implementations."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class QueryResult(BaseModel):
    """Annotations matching a query plus store-defined metadata (e.g. ``total``)."""

    results: list[dict[str, Any]] = Field(default_factory=list)
    meta: dict[str, Any] = Field(default_factory=dict)
