from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from core.entities import (
    DataSnapshot,
    JsonKind,
    LimitKind,
    OrderKind,
    QueryConstraints,
    QueryParams,
    kind_of,
    make_snapshot,
)
from core.entities.json_value import child_value
from core.exceptions import DatabaseError, DocumentNotFoundError
from utilities.monitoring import MonitoringFactory

from .listener_registry import ErrorCallback, SnapshotCallback
from .path_resolver import PathResolver

if TYPE_CHECKING:
    from .reference import Reference

logger = MonitoringFactory.get_logger("query")


class Query:
    """
    A reference plus ordering, limit and range constraints.

    Queries are values: every modifier returns a new Query and leaves the
    receiver as it was.
    """

    def __init__(self, ref: "Reference", constraints: Optional[QueryConstraints] = None):
        self._ref = ref
        self._constraints = constraints or QueryConstraints()

    @property
    def ref(self) -> "Reference":
        return self._ref

    @property
    def path(self) -> str:
        return self._ref.path

    @property
    def constraints(self) -> QueryConstraints:
        return self._constraints

    def params(self) -> QueryParams:
        """REST query-string pairs for this query."""
        return self._constraints.to_params(
            PathResolver.nested_fields_of(self.path),
            self._ref.database.id_field
        )

    def _with(self, constraints: QueryConstraints) -> "Query":
        return Query(self._ref, constraints)

    # Modifiers

    def order_by_child(self, path: str) -> "Query":
        return self._with(self._constraints.with_order_by(OrderKind.CHILD, PathResolver.normalize(path)))

    def order_by_key(self) -> "Query":
        return self._with(self._constraints.with_order_by(OrderKind.KEY))

    def order_by_value(self) -> "Query":
        return self._with(self._constraints.with_order_by(OrderKind.VALUE))

    def limit_to_first(self, limit: int) -> "Query":
        return self._with(self._constraints.with_limit(LimitKind.FIRST, limit))

    def limit_to_last(self, limit: int) -> "Query":
        return self._with(self._constraints.with_limit(LimitKind.LAST, limit))

    def start_at(self, value: Any, key: Optional[str] = None) -> "Query":
        return self._with(self._constraints.with_start_at(value, key))

    def end_at(self, value: Any, key: Optional[str] = None) -> "Query":
        return self._with(self._constraints.with_end_at(value, key))

    def equal_to(self, value: Any, key: Optional[str] = None) -> "Query":
        return self._with(self._constraints.with_equal_to(value, key))

    # Reads

    async def fetch(self) -> DataSnapshot:
        """
        Read the current value at this query's path.

        A missing document yields a non-existent snapshot.

        Raises:
            TransportError: The document store could not be read.
        """
        address = PathResolver.resolve(self.path)
        key = self._ref.key
        if address.depth == 0:
            return make_snapshot(key, None)

        if self._constraints.range.is_mixed:
            logger.warning(f"equal_to overrides start_at/end_at on {self.path}")

        gateway = self._ref.database.gateway
        params = self.params() or None
        try:
            data = await gateway.get(address.collection, address.document_id, params)
        except DocumentNotFoundError:
            return make_snapshot(key, None)

        if address.document_id is None:
            return make_snapshot(key, self._key_by_id(data))

        for part in address.nested_fields:
            data = child_value(data, part)
            if data is None:
                break
        return make_snapshot(key, data)

    def _key_by_id(self, items: Any) -> Any:
        """Turn a collection listing into an object keyed by document identifier."""
        if kind_of(items) is not JsonKind.ARRAY:
            return items

        id_field = self._ref.database.id_field
        keyed: Dict[str, Any] = {}
        for item in items:
            if kind_of(item) is not JsonKind.OBJECT:
                continue
            item_id = item.get(id_field) or item.get("id")
            if item_id is not None:
                keyed[str(item_id)] = item
        return keyed

    async def once(self, event_type: str = "value") -> DataSnapshot:
        """Read once. Failures are logged and yield a non-existent snapshot."""
        try:
            return await self.fetch()
        except DatabaseError as e:
            logger.error(f"Error fetching data for path {self.path or '/'}: {e}")
            return make_snapshot(self._ref.key, None)

    # Subscriptions

    async def on(
        self,
        event_type: str,
        callback: SnapshotCallback,
        on_error: Optional[ErrorCallback] = None
    ) -> Callable[[], None]:
        """Subscribe to this query; see ``ListenerRegistry.subscribe``."""
        return await self._ref.database.registry.subscribe(self, event_type, callback, on_error)

    def off(self, event_type: Optional[str] = None, callback: Optional[SnapshotCallback] = None) -> int:
        return self._ref.database.registry.unsubscribe(self.path, event_type, callback)

    def __repr__(self) -> str:
        return f"Query(path={self.path!r}, params={self.params()!r})"
