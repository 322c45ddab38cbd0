from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

from core.exceptions import ValidationError

QueryParams = List[Tuple[str, str]]


class OrderKind(str, Enum):
    CHILD = "child"
    KEY = "key"
    VALUE = "value"


class LimitKind(str, Enum):
    FIRST = "first"
    LAST = "last"


@dataclass(frozen=True)
class OrderBy:
    kind: OrderKind
    field: Optional[str] = None


@dataclass(frozen=True)
class Limit:
    kind: LimitKind
    value: int


@dataclass(frozen=True)
class RangeBound:
    value: Any
    key: Optional[str] = None


@dataclass(frozen=True)
class RangeFilter:
    start_at: Optional[RangeBound] = None
    end_at: Optional[RangeBound] = None
    equal_to: Optional[RangeBound] = None

    @property
    def is_mixed(self) -> bool:
        return self.equal_to is not None and (self.start_at is not None or self.end_at is not None)


def render_value(value: Any) -> str:
    """Render a filter value the way the REST layer parses it."""
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    return str(value)


@dataclass(frozen=True)
class QueryConstraints:
    """
    Ordering, limit and range state accumulated by a query.

    Every ``with_*`` method returns a new instance; the receiver is never
    modified, so a base query can be reused for several reads.
    """
    order_by: Optional[OrderBy] = None
    limit: Optional[Limit] = None
    range: RangeFilter = field(default_factory=RangeFilter)

    def with_order_by(self, kind: OrderKind, field_name: Optional[str] = None) -> "QueryConstraints":
        return replace(self, order_by=OrderBy(kind=kind, field=field_name))

    def with_limit(self, kind: LimitKind, value: int) -> "QueryConstraints":
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValidationError(f"Limit must be a positive integer, got {value!r}")
        return replace(self, limit=Limit(kind=kind, value=value))

    def with_start_at(self, value: Any, key: Optional[str] = None) -> "QueryConstraints":
        return replace(self, range=replace(self.range, start_at=RangeBound(value, key)))

    def with_end_at(self, value: Any, key: Optional[str] = None) -> "QueryConstraints":
        return replace(self, range=replace(self.range, end_at=RangeBound(value, key)))

    def with_equal_to(self, value: Any, key: Optional[str] = None) -> "QueryConstraints":
        return replace(self, range=replace(self.range, equal_to=RangeBound(value, key)))

    @property
    def is_empty(self) -> bool:
        return self.order_by is None and self.limit is None and self.range == RangeFilter()

    def order_field(self, id_field: str) -> Optional[str]:
        if self.order_by is None:
            return None
        if self.order_by.kind is OrderKind.KEY:
            return id_field
        if self.order_by.kind is OrderKind.VALUE:
            return "value"
        return self.order_by.field

    def to_params(self, nested_fields: Sequence[str] = (), id_field: str = "_id") -> QueryParams:
        """
        Translate the constraints into REST query-string pairs.

        Args:
            nested_fields: Field path below the document, emitted as ``subPath``
                alongside other constraints. A plain read sends no parameters.
            id_field: Name of the document identifier field.
        """
        params: QueryParams = []

        order_field = self.order_field(id_field)
        if order_field:
            params.append(("orderBy[0][field]", order_field))
            params.append(("orderBy[0][direction]", "asc"))

        if self.limit is not None:
            params.append(("limit", str(self.limit.value)))
            if self.limit.kind is LimitKind.LAST:
                params.append(("reverse", "true"))

        # equal_to wins over start_at/end_at when a caller mixes them
        if self.range.equal_to is not None:
            filters = [("==", self.range.equal_to)]
        else:
            filters = []
            if self.range.start_at is not None:
                filters.append((">=", self.range.start_at))
            if self.range.end_at is not None:
                filters.append(("<=", self.range.end_at))

        for index, (op, bound) in enumerate(filters):
            params.append((f"filter[{index}][field]", bound.key or order_field or id_field))
            params.append((f"filter[{index}][op]", op))
            params.append((f"filter[{index}][value]", render_value(bound.value)))

        if nested_fields and params:
            params.append(("subPath", ".".join(nested_fields)))

        return params
