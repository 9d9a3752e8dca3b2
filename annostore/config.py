"""HTTP store configuration."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from annostore.models.enums import Action

ErrorCallback = Callable[[str, Any], None]


def log_api_error(message: str, failure: Any = None) -> None:
    """Default ``on_error`` callback: log the user-facing message."""
    logger.error("API request failed: {}", message)


class StoreUrls(BaseModel):
    """URL template per action, appended to ``prefix``.

    Templates are RFC 6570 level 1: a literal ``{id}`` is replaced by the
    annotation id (or the empty string when there is none).
    """

    model_config = ConfigDict(extra="forbid")

    create: str = "/annotations"
    update: str = "/annotations/{id}"
    destroy: str = "/annotations/{id}"
    search: str = "/search"

    def for_action(self, action: Action) -> str:
        return getattr(self, action.value)


class HTTPStoreConfig(BaseModel):
    """Options recognised by :class:`~annostore.store.http.HTTPStore`."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    # -- Endpoint --------------------------------------------------------------
    prefix: str = "/store"
    """API root.  May be a full URL when the client has no ``base_url``."""

    urls: StoreUrls = Field(default_factory=StoreUrls)

    # -- Legacy server emulation -----------------------------------------------
    emulate_http: bool = False
    """Send PUT and DELETE as POST with an ``X-HTTP-Method-Override`` header."""

    emulate_json: bool = False
    """Send the JSON payload as the ``json`` field of a form body."""

    # -- Requests --------------------------------------------------------------
    headers: dict[str, str] = Field(default_factory=dict)
    """Custom headers sent with every request.  See ``HTTPStore.set_header``."""

    on_error: ErrorCallback = log_api_error
    """Called with ``(message, failure)`` when a request fails."""

    @field_validator("prefix", mode="before")
    @classmethod
    def _prefix_none_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

