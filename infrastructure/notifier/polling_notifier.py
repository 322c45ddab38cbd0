import asyncio

from core.interfaces import ChangeNotifier, Tick, WatchHandle
from utilities.monitoring import MonitoringFactory

logger = MonitoringFactory.get_logger("polling-notifier")


class PollingHandle(WatchHandle):
    def __init__(self, task: asyncio.Task):
        self._task = task

    def cancel(self) -> None:
        # A closed loop has already torn the task down
        if not self._task.done() and not self._task.get_loop().is_closed():
            self._task.cancel()

    @property
    def active(self) -> bool:
        return not self._task.done()


class PollingNotifier(ChangeNotifier):
    """Stands in for push delivery by re-running the read every ``interval`` seconds."""

    def __init__(self, interval: float = 5.0):
        if interval <= 0:
            raise ValueError("Poll interval must be positive")
        self.interval = interval

    def watch(self, name: str, tick: Tick) -> PollingHandle:
        # Needs a running loop; subscriptions are only made from coroutines
        task = asyncio.get_running_loop().create_task(self._poll(name, tick), name=f"poll:{name}")
        return PollingHandle(task)

    async def _poll(self, name: str, tick: Tick) -> None:
        logger.debug(f"Polling {name} every {self.interval}s")
        while True:
            await asyncio.sleep(self.interval)
            try:
                await tick()
            except Exception as e:
                # A failed tick must not end the subscription
                logger.exception(f"Polling tick failed for {name}: {e}")
