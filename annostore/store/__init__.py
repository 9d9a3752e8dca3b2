"""Annotation store implementations."""

from annostore.store.base import AnnotationStore
from annostore.store.http import ApiRequest, HTTPStore

__all__ = ["AnnotationStore", "ApiRequest", "HTTPStore"]
