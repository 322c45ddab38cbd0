from .polling_notifier import PollingNotifier, PollingHandle

__all__ = [
    "PollingNotifier",
    "PollingHandle"
]
