"""
Interfaces
- Defines the contracts between the adapter core and its collaborators
- Keeps transport and change notification swappable
"""

from .database import DocumentGateway
from .notifier import ChangeNotifier, WatchHandle, Tick

__all__ = [
    'DocumentGateway',
    'ChangeNotifier',
    'WatchHandle',
    'Tick',
]
