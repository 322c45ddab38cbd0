import inspect
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple, Union

from core.entities import DataSnapshot
from core.exceptions import DatabaseError
from core.interfaces import ChangeNotifier, WatchHandle
from utilities.monitoring import MonitoringFactory

from .path_resolver import PathResolver

if TYPE_CHECKING:
    from .query import Query

logger = MonitoringFactory.get_logger("listener-registry")

ListenerKey = Tuple[str, str]
SnapshotCallback = Callable[[DataSnapshot], Any]
ErrorCallback = Callable[[Exception], Any]


@dataclass(eq=False)
class ListenerEntry:
    event_type: str
    callback: SnapshotCallback
    query: "Query"
    on_error: Optional[ErrorCallback] = None
    active: bool = True


async def _call(func: Callable, *args) -> None:
    result = func(*args)
    if inspect.isawaitable(result):
        await result


class ListenerRegistry:
    """
    Subscriptions keyed by ``(path, event_type)``.

    A key becomes active with its first subscriber and gets exactly one
    watch from the change notifier; it goes away, together with the watch,
    when its last subscriber leaves. The maps are only changed in code
    without an ``await`` in between, so one event-loop step sees them as a
    single consistent update.
    """

    def __init__(self, notifier: ChangeNotifier):
        self._notifier = notifier
        self._entries: Dict[ListenerKey, List[ListenerEntry]] = {}
        self._handles: Dict[ListenerKey, WatchHandle] = {}

    @property
    def active_keys(self) -> List[ListenerKey]:
        return list(self._entries)

    def listener_count(self, path: str, event_type: str) -> int:
        return len(self._entries.get((PathResolver.normalize(path), event_type), []))

    def is_watching(self, path: str, event_type: str) -> bool:
        handle = self._handles.get((PathResolver.normalize(path), event_type))
        return handle is not None and handle.active

    async def subscribe(
        self,
        query: "Query",
        event_type: str,
        callback: SnapshotCallback,
        on_error: Optional[ErrorCallback] = None
    ) -> Callable[[], None]:
        """
        Register ``callback`` and deliver the current snapshot to it.

        Returns:
            Callable[[], None]: Idempotent unsubscribe function. Once it
            returns, ``callback`` is not invoked again.
        """
        key = (query.path, event_type)
        entry = ListenerEntry(event_type=event_type, callback=callback, query=query, on_error=on_error)

        self._entries.setdefault(key, []).append(entry)
        if key not in self._handles:
            self._handles[key] = self._notifier.watch(f"{key[0] or '/'}#{event_type}", partial(self._tick, key))
            logger.debug(f"Listener activated for {key[0] or '/'} ({event_type})")

        def unsubscribe() -> None:
            self._remove_entry(key, entry)

        try:
            try:
                snapshot = await query.fetch()
            except DatabaseError as e:
                await self._report_error(entry, e)
            else:
                await self._deliver(entry, snapshot)
        except BaseException:
            # The caller never receives ``unsubscribe`` when on() is cancelled
            self._remove_entry(key, entry)
            raise
        return unsubscribe

    def unsubscribe(
        self,
        path: str,
        event_type: Optional[str] = None,
        callback: Optional[SnapshotCallback] = None
    ) -> int:
        """
        Remove subscriptions and return how many were removed.

        Without ``event_type`` every key at ``path`` or beneath it is cleared.
        Without ``callback`` every subscriber of ``(path, event_type)`` goes.
        """
        path = PathResolver.normalize(path)
        if event_type is None:
            keys = [key for key in self._entries if PathResolver.is_within(key[0], path)]
            return sum(self._deactivate(key) for key in keys)

        key = (path, event_type)
        if callback is None:
            return self._deactivate(key)

        entries = self._entries.get(key, [])
        matching = [entry for entry in entries if entry.callback == callback]
        for entry in matching:
            self._remove_entry(key, entry)
        return len(matching)

    def dispose(self) -> None:
        """Drop every subscription and stop every watch."""
        for key in list(self._entries):
            self._deactivate(key)
        for handle in self._handles.values():
            handle.cancel()
        self._handles.clear()

    def _remove_entry(self, key: ListenerKey, entry: ListenerEntry) -> None:
        entry.active = False
        entries = self._entries.get(key)
        # The key may already belong to a newer set of subscribers
        if not entries or entry not in entries:
            return
        entries.remove(entry)
        if not entries:
            self._deactivate(key)

    def _deactivate(self, key: ListenerKey) -> int:
        entries = self._entries.pop(key, [])
        for entry in entries:
            entry.active = False
        handle = self._handles.pop(key, None)
        if handle is not None:
            handle.cancel()
            logger.debug(f"Listener deactivated for {key[0] or '/'} ({key[1]})")
        return len(entries)

    async def _tick(self, key: ListenerKey) -> None:
        entries = list(self._entries.get(key, []))
        if not entries:
            return
        MonitoringFactory.record_metric("listener.poll.tick", 1, path=key[0], event_type=key[1])

        # Subscribers with identical queries share one read per tick
        outcomes: Dict[Tuple, Union[DataSnapshot, DatabaseError]] = {}
        for entry in entries:
            signature = tuple(entry.query.params())
            if signature not in outcomes:
                try:
                    outcomes[signature] = await entry.query.fetch()
                except DatabaseError as e:
                    logger.warning(f"Polling read failed for {key[0] or '/'}: {e}")
                    outcomes[signature] = e
            outcome = outcomes[signature]
            if isinstance(outcome, DatabaseError):
                await self._report_error(entry, outcome)
            else:
                await self._deliver(entry, outcome)

    async def _deliver(self, entry: ListenerEntry, snapshot: DataSnapshot) -> None:
        if not entry.active:
            return
        try:
            await _call(entry.callback, snapshot)
        except Exception as e:
            logger.exception(f"Listener callback failed for {entry.query.path or '/'}: {e}")

    async def _report_error(self, entry: ListenerEntry, error: DatabaseError) -> None:
        if not entry.active:
            return
        if entry.on_error is None:
            logger.error(f"Read failed for listener on {entry.query.path or '/'}: {error}")
            return
        try:
            await _call(entry.on_error, error)
        except Exception as e:
            logger.exception(f"Listener error callback failed for {entry.query.path or '/'}: {e}")
