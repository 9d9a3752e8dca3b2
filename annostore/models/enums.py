"""Shared enumerations used across the storage layer."""

from __future__ import annotations

from enum import StrEnum

# -- Hooks -------------------------------------------------------------------


class Hook(StrEnum):
    """Lifecycle hooks fired by the storage adapter."""

    BEFORE_ANNOTATION_CREATED = "onBeforeAnnotationCreated"
    ANNOTATION_CREATED = "onAnnotationCreated"
    BEFORE_ANNOTATION_UPDATED = "onBeforeAnnotationUpdated"
    ANNOTATION_UPDATED = "onAnnotationUpdated"
    BEFORE_ANNOTATION_DELETED = "onBeforeAnnotationDeleted"
    ANNOTATION_DELETED = "onAnnotationDeleted"
    ANNOTATIONS_LOADED = "onAnnotationsLoaded"


# -- HTTP store --------------------------------------------------------------


class Action(StrEnum):
    """Remote API actions understood by the HTTP store."""

    CREATE = "create"
    UPDATE = "update"
    DESTROY = "destroy"
    SEARCH = "search"


class HTTPMethod(StrEnum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
