"""
Core Layer
- Purpose: Tree-shaped reference/query/snapshot API over a flat document store
- Key Directories:
    - entities
    - exceptions
    - interfaces
    - services
"""

from .entities import *
from .exceptions import *
from .interfaces import *
from .services import *

__all__ = [
    "DataSnapshot",
    "make_snapshot",
    "JsonKind",
    "ServerValue",
    "QueryConstraints",
    "DatabaseError",
    "DocumentNotFoundError",
    "TransportError",
    "InvalidPathError",
    "ValidationError",
    "DocumentGateway",
    "ChangeNotifier",
    "WatchHandle",
    "PathResolver",
    "ListenerRegistry",
    "NestedMutationEngine",
    "Query",
    "Reference",
    "Database",
]
