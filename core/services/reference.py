from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable, Optional

from core.entities import DataSnapshot, resolve_server_values
from core.exceptions import DocumentNotFoundError, ValidationError
from utilities.monitoring import MonitoringFactory

from .listener_registry import ErrorCallback, SnapshotCallback
from .path_resolver import PathResolver
from .push_id import generate_push_key
from .query import Query

if TYPE_CHECKING:
    from .database import Database

logger = MonitoringFactory.get_logger("reference")


class Reference:
    """
    Handle to one location in the tree.

    A Reference is derived from its path alone. Navigation never touches the
    network; reads, writes and subscriptions go through the owning Database.
    """
    __slots__ = ("_database", "_path")

    def __init__(self, database: "Database", path: Optional[str] = ""):
        self._database = database
        self._path = PathResolver.normalize(path)

    @property
    def database(self) -> "Database":
        return self._database

    @property
    def path(self) -> str:
        return self._path

    @property
    def key(self) -> Optional[str]:
        return PathResolver.last_segment(self._path)

    @property
    def parent(self) -> Optional["Reference"]:
        parent_path = PathResolver.parent_of(self._path)
        if parent_path is None:
            return None
        return Reference(self._database, parent_path)

    @property
    def root(self) -> "Reference":
        return Reference(self._database, "")

    # Navigation

    def child(self, path: str) -> "Reference":
        return Reference(self._database, PathResolver.join(self._path, path))

    def push(self) -> "Reference":
        return self.child(generate_push_key())

    # Writes

    async def set(self, value: Any) -> None:
        """
        Replace the value at this location.

        Nested locations are written by reading the whole document and
        putting it back, so concurrent nested writes to one document are
        last-write-wins.

        Raises:
            InvalidPathError: The path has no collection or document id.
            TransportError: The document store rejected the read or write.
        """
        address = PathResolver.resolve(self._path)
        address.require_document("set")
        if value is None:
            await self.remove()
            return

        value = resolve_server_values(value)
        try:
            if address.is_nested:
                await self._database.mutations.assign(address, value)
            else:
                await self._database.gateway.put(address.collection, address.document_id, value)
        except Exception as e:
            logger.error(f"Error setting data for path {self._path}: {e}")
            raise

    async def update(self, values: Mapping) -> None:
        """
        Merge ``values`` into this location without touching other fields.

        Raises:
            ValidationError: ``values`` is not a mapping.
            InvalidPathError: The path has no collection or document id.
            TransportError: The document store rejected the read or write.
        """
        if not isinstance(values, Mapping):
            raise ValidationError(f"update() expects a mapping, got {type(values).__name__}")
        address = PathResolver.resolve(self._path)
        address.require_document("update")

        values = resolve_server_values(dict(values))
        try:
            if address.is_nested:
                await self._database.mutations.patch(address, values)
            else:
                await self._database.gateway.patch(address.collection, address.document_id, values)
        except Exception as e:
            logger.error(f"Error updating data for path {self._path}: {e}")
            raise

    async def remove(self) -> None:
        """
        Delete the value at this location. Removing something that does not
        exist is a no-op.
        """
        address = PathResolver.resolve(self._path)
        address.require_document("remove")
        try:
            if address.is_nested:
                await self._database.mutations.delete(address)
            else:
                await self._database.gateway.delete(address.collection, address.document_id)
        except DocumentNotFoundError:
            logger.debug(f"Nothing to remove at {self._path}")
        except Exception as e:
            logger.error(f"Error removing data for path {self._path}: {e}")
            raise

    # Reads and subscriptions

    def _query(self) -> Query:
        return Query(self)

    async def once(self, event_type: str = "value") -> DataSnapshot:
        return await self._query().once(event_type)

    async def on(
        self,
        event_type: str,
        callback: SnapshotCallback,
        on_error: Optional[ErrorCallback] = None
    ) -> Callable[[], None]:
        return await self._query().on(event_type, callback, on_error)

    def off(self, event_type: Optional[str] = None, callback: Optional[SnapshotCallback] = None) -> int:
        return self._query().off(event_type, callback)

    # Query modifiers

    def order_by_child(self, path: str) -> Query:
        return self._query().order_by_child(path)

    def order_by_key(self) -> Query:
        return self._query().order_by_key()

    def order_by_value(self) -> Query:
        return self._query().order_by_value()

    def limit_to_first(self, limit: int) -> Query:
        return self._query().limit_to_first(limit)

    def limit_to_last(self, limit: int) -> Query:
        return self._query().limit_to_last(limit)

    def start_at(self, value: Any, key: Optional[str] = None) -> Query:
        return self._query().start_at(value, key)

    def end_at(self, value: Any, key: Optional[str] = None) -> Query:
        return self._query().end_at(value, key)

    def equal_to(self, value: Any, key: Optional[str] = None) -> Query:
        return self._query().equal_to(value, key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Reference):
            return NotImplemented
        return self._database is other._database and self._path == other._path

    def __hash__(self) -> int:
        return hash((id(self._database), self._path))

    def __repr__(self) -> str:
        return f"Reference(path={self._path!r})"
