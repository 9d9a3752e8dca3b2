"""Pluggable persistence layer for annotations."""

from annostore.adapter import StorageAdapter
from annostore.config import HTTPStoreConfig, StoreUrls
from annostore.errors import AnnostoreError, HookVetoError, MissingAnnotationIdError, StoreRequestError
from annostore.hooks import HookRegistry, HookRunner
from annostore.log import setup_logging
from annostore.models import Action, Hook, HTTPMethod, QueryResult
from annostore.store import AnnotationStore, ApiRequest, HTTPStore

__all__ = [
    "Action",
    "AnnostoreError",
    "AnnotationStore",
    "ApiRequest",
    "HTTPMethod",
    "HTTPStore",
    "HTTPStoreConfig",
    "Hook",
    "HookRegistry",
    "HookRunner",
    "HookVetoError",
    "MissingAnnotationIdError",
    "QueryResult",
    "StorageAdapter",
    "StoreRequestError",
    "StoreUrls",
    "setup_logging",
]
