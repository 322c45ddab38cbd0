from .rest_gateway import RestDocumentGateway

__all__ = [
    "RestDocumentGateway"
]
