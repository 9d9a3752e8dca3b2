from annostore.models.enums import Action, Hook, HTTPMethod
from annostore.models.query import QueryResult

__all__ = ["Action", "HTTPMethod", "Hook", "QueryResult"]
