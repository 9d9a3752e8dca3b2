"""HTTP annotation store.

Talks to a simple remote API that can be implemented with any web framework::

    create  -> POST   {prefix}/annotations
    update  -> PUT    {prefix}/annotations/{id}
    destroy -> DELETE {prefix}/annotations/{id}
    search  -> GET    {prefix}/search?{query}

Two compatibility modes exist for legacy servers.  ``emulate_http`` sends PUT
and DELETE as POST with the real method in ``X-HTTP-Method-Override``.
``emulate_json`` sends the JSON-encoded annotation as the ``json`` field of a
form body instead of a raw ``application/json`` body.

Requests go through an ``httpx.AsyncClient``.  A failed request invokes the
configured ``on_error`` callback with a user-facing message, then raises
:class:`~annostore.errors.StoreRequestError`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import httpx
from loguru import logger

from annostore.config import HTTPStoreConfig
from annostore.errors import StoreRequestError
from annostore.models.enums import Action, HTTPMethod
from annostore.models.query import QueryResult

_METHODS: dict[Action, HTTPMethod] = {
    Action.CREATE: HTTPMethod.POST,
    Action.UPDATE: HTTPMethod.PUT,
    Action.DESTROY: HTTPMethod.DELETE,
    Action.SEARCH: HTTPMethod.GET,
}

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
METHOD_OVERRIDE_HEADER = "X-HTTP-Method-Override"


@dataclass
class ApiRequest:
    """A fully shaped request, ready to hand to the transport."""

    method: HTTPMethod
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, Any] | None = None
    content: str | None = None
    data: dict[str, str] | None = None


def error_message(action: Action | str, status_code: int | None) -> str:
    """Select the user-facing message for a failed request."""
    action = Action(action)
    if status_code == 401:
        return f"Sorry you are not allowed to {action} this annotation"
    if status_code == 404:
        return "Sorry we could not connect to the annotations store"
    if status_code == 500:
        return "Sorry something went wrong with the annotation store"
    if action is Action.SEARCH:
        return "Sorry we could not search the store for annotations"
    return f"Sorry we could not {action} this annotation"


class HTTPStore:
    """Annotation store backed by a remote HTTP API.

    Options may be given as an :class:`HTTPStoreConfig` or as keyword
    arguments (``urls`` may be partial; missing actions keep their default
    templates).  Pass ``client`` to share an existing ``httpx.AsyncClient``;
    otherwise one is created with ``base_url`` and closed by :meth:`aclose`.
    """

    def __init__(
        self,
        config: HTTPStoreConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        base_url: str = "",
        **options: Any,
    ) -> None:
        if config is not None and options:
            msg = "Pass either a config object or keyword options, not both"
            raise TypeError(msg)
        self.config = config if config is not None else HTTPStoreConfig(**options)
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(base_url=base_url)

    # -- Store operations ------------------------------------------------------

    async def create(self, annotation: dict[str, Any]) -> dict[str, Any] | None:
        return await self._api_request(Action.CREATE, annotation)

    async def update(self, annotation: dict[str, Any]) -> dict[str, Any] | None:
        return await self._api_request(Action.UPDATE, annotation)

    async def delete(self, annotation: dict[str, Any]) -> dict[str, Any] | None:
        return await self._api_request(Action.DESTROY, annotation)

    async def query(self, query: dict[str, Any] | None = None) -> QueryResult:
        """Search for annotations.

        The server replies with ``{"rows": [...], ...}``; ``rows`` becomes
        ``results`` and everything else (e.g. ``total``) becomes ``meta``.
        """
        body = await self._api_request(Action.SEARCH, query) or {}
        rows = body.pop("rows", None) or []
        return QueryResult(results=rows, meta=body)

    def set_header(self, name: str, value: str) -> None:
        """Set a custom header sent with every subsequent request."""
        self.config.headers[name] = value

    # -- Lifecycle -------------------------------------------------------------

    async def aclose(self) -> None:
        """Close the underlying client if this store created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HTTPStore:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # -- Request building ------------------------------------------------------

    def build_request(self, action: Action | str, payload: dict[str, Any] | None) -> ApiRequest:
        """Translate an action and its payload into an :class:`ApiRequest`."""
        action = Action(action)
        method = self.method_for(action)
        request = ApiRequest(
            method=method,
            url=self.url_for(action, payload.get("id") if payload else None),
            headers={"Accept": "application/json", **self.config.headers},
        )

        if self.config.emulate_http and method in (HTTPMethod.PUT, HTTPMethod.DELETE):
            request.headers[METHOD_OVERRIDE_HEADER] = method.value
            request.method = HTTPMethod.POST

        # Search payloads travel as query parameters, never as JSON.
        if action is Action.SEARCH:
            request.params = payload
            return request

        if payload is None:
            return request
        encoded = json.dumps(payload)

        if self.config.emulate_json:
            request.data = {"json": encoded}
            if self.config.emulate_http:
                request.data["_method"] = method.value
            return request

        request.content = encoded
        request.headers["Content-Type"] = JSON_CONTENT_TYPE
        return request

    def url_for(self, action: Action | str, annotation_id: Any = None) -> str:
        if annotation_id is None:
            annotation_id = ""
        url = self.config.prefix + self.config.urls.for_action(Action(action))
        return url.replace("{id}", str(annotation_id), 1)

    @staticmethod
    def method_for(action: Action | str) -> HTTPMethod:
        return _METHODS[Action(action)]

    # -- Transport -------------------------------------------------------------

    async def _api_request(self, action: Action, payload: dict[str, Any] | None) -> Any:
        annotation_id = payload.get("id") if payload else None
        request = self.build_request(action, payload)
        logger.debug("HTTPStore: {} {} ({})", request.method, request.url, action)

        try:
            response = await self._client.request(
                request.method.value,
                request.url,
                headers=request.headers,
                params=request.params,
                content=request.content,
                data=request.data,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise self._request_error(action, annotation_id, e.response.status_code, e) from e
        except httpx.RequestError as e:
            raise self._request_error(action, annotation_id, None, e) from e

        if not response.content:
            return None
        try:
            body = response.json()
        except ValueError as e:
            raise self._request_error(action, annotation_id, response.status_code, e) from e
        if not isinstance(body, dict):
            # Records and search replies are JSON objects.
            failure = ValueError(f"Expected a JSON object, got {type(body).__name__}")
            raise self._request_error(action, annotation_id, response.status_code, failure)
        return body

    def _request_error(
        self,
        action: Action,
        annotation_id: Any,
        status_code: int | None,
        failure: Exception,
    ) -> StoreRequestError:
        """Notify ``on_error`` and build the exception to raise."""
        message = error_message(action, status_code)
        logger.debug("HTTPStore: {} failed (status={}): {!r}", action, status_code, failure)
        self.config.on_error(message, failure)
        return StoreRequestError(
            message,
            action=action.value,
            annotation_id=annotation_id,
            status_code=status_code,
        )
