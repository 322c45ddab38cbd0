"""
Infrastructure Layer
- Purpose: Provide concrete implementations of external concerns and integrations
- Key Directories:
    - database
    - notifier
"""
from typing import Optional

from core.services import Database
from utilities.validators.config_validator import AppConfig

from .database import DatabaseFactory, RestDocumentGateway
from .notifier import PollingNotifier


def get_database(config: Optional[AppConfig] = None) -> Database:
    return DatabaseFactory.create_database(config)


__all__ = [
    "get_database",
    "DatabaseFactory",
    "RestDocumentGateway",
    "PollingNotifier"
]
