from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from core.entities import JsonKind, kind_of
from core.exceptions import DocumentNotFoundError
from core.interfaces import DocumentGateway
from utilities.monitoring import MonitoringFactory

from .path_resolver import DocumentAddress

logger = MonitoringFactory.get_logger("nested-mutation")


def _walk_create(document: Dict[str, Any], fields: Sequence[str]) -> Dict[str, Any]:
    """Descend through ``fields``, replacing missing or scalar steps with empty objects."""
    current = document
    for part in fields:
        if kind_of(current.get(part)) is not JsonKind.OBJECT:
            current[part] = {}
        current = current[part]
    return current


def _walk_existing(document: Dict[str, Any], fields: Sequence[str]) -> Optional[Dict[str, Any]]:
    current = document
    for part in fields:
        current = current.get(part)
        if kind_of(current) is not JsonKind.OBJECT:
            return None
    return current


class NestedMutationEngine:
    """
    Read-modify-write for paths deeper than collection/document.

    The backend only accepts whole-document PUT and PATCH, so every nested
    write reads the document first and writes it back. Nothing isolates the
    read from the write: two concurrent writes to different fields of the
    same document race and the later PUT wins, dropping the other change.
    """

    def __init__(self, gateway: DocumentGateway):
        self._gateway = gateway

    async def _load(self, address: DocumentAddress) -> Tuple[Dict[str, Any], bool]:
        """Return the current document and whether it exists; 404 reads as ``{}``."""
        try:
            document = await self._gateway.get(address.collection, address.document_id)
        except DocumentNotFoundError:
            return {}, False
        if kind_of(document) is not JsonKind.OBJECT:
            return {}, False
        return document, True

    async def assign(self, address: DocumentAddress, value: Any) -> Dict[str, Any]:
        document, _ = await self._load(address)
        *intermediate, leaf = address.nested_fields
        _walk_create(document, intermediate)[leaf] = value
        await self._gateway.put(address.collection, address.document_id, document)
        logger.debug(f"Assigned {address.dotted_path} in {address.collection}/{address.document_id}")
        return document

    async def patch(self, address: DocumentAddress, fields: Mapping[str, Any]) -> Dict[str, Any]:
        document, exists = await self._load(address)
        if exists:
            dotted = {f"{address.dotted_path}.{key}": value for key, value in fields.items()}
            await self._gateway.patch(address.collection, address.document_id, dotted)
            return dotted

        # Nothing to patch against: synthesize the document and write it whole
        _walk_create(document, address.nested_fields).update(fields)
        await self._gateway.put(address.collection, address.document_id, document)
        logger.debug(f"Created {address.collection}/{address.document_id} for nested update")
        return document

    async def delete(self, address: DocumentAddress) -> bool:
        """Remove the nested field. Returns False when there was nothing to remove."""
        document, exists = await self._load(address)
        if not exists:
            return False

        *intermediate, leaf = address.nested_fields
        parent = _walk_existing(document, intermediate)
        if parent is None or leaf not in parent:
            return False

        del parent[leaf]
        await self._gateway.put(address.collection, address.document_id, document)
        return True
