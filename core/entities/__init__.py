from .json_value import JsonKind, kind_of
from .snapshot import DataSnapshot, make_snapshot
from .server_value import ServerValue, resolve_server_values
from .query import (
    OrderKind,
    LimitKind,
    OrderBy,
    Limit,
    RangeBound,
    RangeFilter,
    QueryConstraints,
    QueryParams,
)

__all__ = [
    "JsonKind",
    "kind_of",
    "DataSnapshot",
    "make_snapshot",
    "ServerValue",
    "resolve_server_values",
    "OrderKind",
    "LimitKind",
    "OrderBy",
    "Limit",
    "RangeBound",
    "RangeFilter",
    "QueryConstraints",
    "QueryParams",
]
