from typing import Optional


class DatabaseError(Exception):
    """Base exception for database adapter operations"""
    pass

class DocumentNotFoundError(DatabaseError):
    """The document store answered 404 for the requested address"""
    def __init__(self, collection: str, document_id: Optional[str] = None):
        self.collection = collection
        self.document_id = document_id
        target = f"{collection}/{document_id}" if document_id else collection
        super().__init__(f"Document not found: {target}")

class TransportError(DatabaseError):
    """Non-2xx response or network failure while talking to the document store"""
    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)

class InvalidPathError(DatabaseError):
    """Path does not address a document where one is required"""
    pass

class ValidationError(DatabaseError):
    """Invalid argument passed to a reference or query"""
    pass
