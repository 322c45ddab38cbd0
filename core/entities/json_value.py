from enum import Enum
from typing import Any, Iterator, Tuple

_MISSING = object()


class JsonKind(str, Enum):
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


def kind_of(value: Any) -> JsonKind:
    """Classify a decoded JSON value."""
    if value is None:
        return JsonKind.NULL
    # bool first: bool is a subclass of int
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, dict):
        return JsonKind.OBJECT
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    raise TypeError(f"Value of type {type(value).__name__} is not JSON-compatible")


def is_container(value: Any) -> bool:
    return kind_of(value) in (JsonKind.OBJECT, JsonKind.ARRAY)


def iter_children(value: Any) -> Iterator[Tuple[str, Any]]:
    """Yield (key, child) pairs of an object or array; nothing for scalars."""
    kind = kind_of(value)
    if kind is JsonKind.OBJECT:
        for key, child in value.items():
            yield str(key), child
    elif kind is JsonKind.ARRAY:
        for index, child in enumerate(value):
            yield str(index), child


def child_value(value: Any, segment: str, default: Any = _MISSING) -> Any:
    """Look up one path segment in an object or array.

    Returns ``default`` (or None) when the segment is absent or ``value`` is
    a scalar.
    """
    missing = None if default is _MISSING else default
    kind = kind_of(value)
    if kind is JsonKind.OBJECT:
        return value.get(segment, missing)
    if kind is JsonKind.ARRAY:
        if segment.isdigit() and int(segment) < len(value):
            return value[int(segment)]
        return missing
    return missing
