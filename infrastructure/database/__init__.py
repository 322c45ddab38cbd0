"""
Database
- Transport to the REST document store
- Wiring of gateway, notifier and adapter from configuration
"""

from .factory import DatabaseFactory
from .rest import RestDocumentGateway

__all__ = [
    "DatabaseFactory",
    "RestDocumentGateway"
]
