from .database import (
    DatabaseError,
    DocumentNotFoundError,
    TransportError,
    InvalidPathError,
    ValidationError,
)

__all__ = [
    "DatabaseError",
    "DocumentNotFoundError",
    "TransportError",
    "InvalidPathError",
    "ValidationError",
]
