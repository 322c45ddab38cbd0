"""
Services
- Path addressing, references and queries over the document store
- Nested-field read-modify-write
- Polling-backed listener registry
"""

from .path_resolver import PathResolver, DocumentAddress
from .push_id import generate_push_key
from .listener_registry import ListenerRegistry, ListenerEntry
from .nested_mutation import NestedMutationEngine
from .query import Query
from .reference import Reference
from .database import Database

__all__ = [
    "PathResolver",
    "DocumentAddress",
    "generate_push_key",
    "ListenerRegistry",
    "ListenerEntry",
    "NestedMutationEngine",
    "Query",
    "Reference",
    "Database",
]
