from abc import ABC, abstractmethod
from typing import Awaitable, Callable

Tick = Callable[[], Awaitable[None]]


class WatchHandle(ABC):
    @abstractmethod
    def cancel(self) -> None:
        """Stop delivering ticks. Must be idempotent."""
        pass

    @property
    @abstractmethod
    def active(self) -> bool:
        pass


class ChangeNotifier(ABC):
    """Strategy that decides when a watched location should be re-read."""

    @abstractmethod
    def watch(self, name: str, tick: Tick) -> WatchHandle:
        """Start calling ``tick`` whenever ``name`` may have changed"""
        pass
