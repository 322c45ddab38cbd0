import copy
import json
import re
from typing import Any, Dict, List, Optional, Tuple

from core.entities import QueryParams
from core.exceptions import DocumentNotFoundError, TransportError
from core.interfaces import DocumentGateway

_FILTER_KEY = re.compile(r"^filter\[(\d+)\]\[(field|op|value)\]$")


def _parse(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _lookup(document: Dict[str, Any], dotted: str) -> Any:
    current: Any = document
    for part in dotted.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
    return current


class FakeDocumentStore(DocumentGateway):
    """In-memory stand-in for the REST document store.

    Interprets the same query parameters the REST layer accepts and records
    every call as ``(method, collection, document_id, payload)``.
    """

    def __init__(self, id_field: str = "_id"):
        self.id_field = id_field
        self.collections: Dict[str, Dict[str, Any]] = {}
        self.calls: List[Tuple[str, str, Optional[str], Any]] = []
        self.fail_reads = False
        self.fail_writes = False
        self.closed = False

    def seed(self, collection: str, document_id: str, document: Any) -> None:
        self.collections.setdefault(collection, {})[document_id] = copy.deepcopy(document)

    def document(self, collection: str, document_id: str) -> Any:
        return copy.deepcopy(self.collections.get(collection, {}).get(document_id))

    def methods(self) -> List[str]:
        return [call[0] for call in self.calls]

    async def get(self, collection: str, document_id: Optional[str] = None, params: Optional[QueryParams] = None) -> Any:
        self.calls.append(("GET", collection, document_id, params))
        if self.fail_reads:
            raise TransportError("GET failed with 500", status=500)

        documents = self.collections.get(collection, {})
        if document_id is not None:
            if document_id not in documents:
                raise DocumentNotFoundError(collection, document_id)
            return copy.deepcopy(documents[document_id])

        items = []
        for key, document in documents.items():
            item = copy.deepcopy(document)
            if isinstance(item, dict):
                item.setdefault(self.id_field, key)
            items.append(item)
        return self._apply(items, params or [])

    def _apply(self, items: List[Any], params: QueryParams) -> List[Any]:
        values = dict(params)
        filters: Dict[int, Dict[str, str]] = {}
        for name, value in params:
            match = _FILTER_KEY.match(name)
            if match:
                filters.setdefault(int(match.group(1)), {})[match.group(2)] = value

        for clause in filters.values():
            expected = _parse(clause["value"])
            op = clause["op"]
            kept = []
            for item in items:
                actual = _lookup(item, clause["field"])
                if actual is None:
                    continue
                if op == "==" and actual == expected:
                    kept.append(item)
                elif op == ">=" and actual >= expected:
                    kept.append(item)
                elif op == "<=" and actual <= expected:
                    kept.append(item)
            items = kept

        order_field = values.get("orderBy[0][field]")
        reverse = values.get("reverse") == "true"
        if order_field:
            items.sort(key=lambda item: (_lookup(item, order_field) is None, _lookup(item, order_field)), reverse=reverse)
        elif reverse:
            items.reverse()

        if "limit" in values:
            items = items[:int(values["limit"])]
        return items

    async def put(self, collection: str, document_id: str, document: Dict[str, Any]) -> Any:
        self.calls.append(("PUT", collection, document_id, copy.deepcopy(document)))
        if self.fail_writes:
            raise TransportError("PUT failed with 500", status=500)
        self.seed(collection, document_id, document)
        return copy.deepcopy(document)

    async def patch(self, collection: str, document_id: str, fields: Dict[str, Any]) -> Any:
        self.calls.append(("PATCH", collection, document_id, copy.deepcopy(fields)))
        if self.fail_writes:
            raise TransportError("PATCH failed with 500", status=500)
        documents = self.collections.setdefault(collection, {})
        if document_id not in documents:
            raise DocumentNotFoundError(collection, document_id)
        document = documents[document_id]
        for dotted, value in fields.items():
            *parents, leaf = dotted.split(".")
            current = document
            for part in parents:
                if not isinstance(current.get(part), dict):
                    current[part] = {}
                current = current[part]
            current[leaf] = copy.deepcopy(value)
        return copy.deepcopy(document)

    async def delete(self, collection: str, document_id: str) -> None:
        self.calls.append(("DELETE", collection, document_id, None))
        if self.fail_writes:
            raise TransportError("DELETE failed with 500", status=500)
        documents = self.collections.get(collection, {})
        if document_id not in documents:
            raise DocumentNotFoundError(collection, document_id)
        del documents[document_id]

    async def close(self) -> None:
        self.closed = True
