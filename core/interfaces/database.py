from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from core.entities import QueryParams


class DocumentGateway(ABC):
    """
    Transport to a flat REST document store.

    Implementations raise ``DocumentNotFoundError`` on 404 and
    ``TransportError`` for every other failure.
    """

    @abstractmethod
    async def get(
        self,
        collection: str,
        document_id: Optional[str] = None,
        params: Optional[QueryParams] = None
    ) -> Any:
        """Fetch a document, or the list of documents of a collection"""
        pass

    @abstractmethod
    async def put(self, collection: str, document_id: str, document: Dict[str, Any]) -> Any:
        """Replace a whole document"""
        pass

    @abstractmethod
    async def patch(self, collection: str, document_id: str, fields: Dict[str, Any]) -> Any:
        """Partially update a document; dotted keys address nested fields"""
        pass

    @abstractmethod
    async def delete(self, collection: str, document_id: str) -> None:
        """Delete a whole document"""
        pass

    async def close(self) -> None:
        """Release transport resources"""
        pass
