from .document_store import FakeDocumentStore

__all__ = ["FakeDocumentStore"]
