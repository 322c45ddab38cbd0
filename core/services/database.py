from typing import Optional

from core.interfaces import ChangeNotifier, DocumentGateway
from utilities.monitoring import MonitoringFactory

from .listener_registry import ListenerRegistry
from .nested_mutation import NestedMutationEngine
from .reference import Reference

logger = MonitoringFactory.get_logger("database")


class Database:
    """
    Entry point of the adapter: hands out references and owns the
    listener registry for everything they subscribe to.

    Usage:
        async with Database(gateway, notifier) as db:
            snapshot = await db.ref("users/42").once("value")
    """

    def __init__(
        self,
        gateway: DocumentGateway,
        notifier: ChangeNotifier,
        id_field: str = "_id"
    ) -> None:
        self.gateway = gateway
        self.id_field = id_field
        self.registry = ListenerRegistry(notifier)
        self.mutations = NestedMutationEngine(gateway)
        self._closed = False

    def ref(self, path: Optional[str] = "") -> Reference:
        return Reference(self, path)

    def dispose(self) -> None:
        """Stop every listener and its polling timer."""
        self.registry.dispose()

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.dispose()
        await self.gateway.close()
        logger.info("Database adapter closed")

    async def __aenter__(self) -> "Database":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
