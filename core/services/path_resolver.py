from dataclasses import dataclass
from typing import List, Optional, Tuple

from core.exceptions import InvalidPathError


@dataclass(frozen=True)
class DocumentAddress:
    """Where a path points inside the document store."""
    collection: str
    document_id: Optional[str]
    nested_fields: Tuple[str, ...]

    @property
    def depth(self) -> int:
        if not self.collection:
            return 0
        if self.document_id is None:
            return 1
        return 2 + len(self.nested_fields)

    @property
    def is_nested(self) -> bool:
        return bool(self.nested_fields)

    @property
    def dotted_path(self) -> str:
        return ".".join(self.nested_fields)

    def require_document(self, operation: str) -> None:
        if not self.collection:
            raise InvalidPathError(f"Invalid path: collection name is required for {operation}")
        if not self.document_id:
            raise InvalidPathError(f"Invalid path: document ID is required for {operation}")


class PathResolver:
    """Splits slash-delimited paths into collection, document and nested field parts."""

    @staticmethod
    def normalize(path: Optional[str]) -> str:
        if not path:
            return ""
        return "/".join(PathResolver.segments_of(path))

    @staticmethod
    def segments_of(path: Optional[str]) -> List[str]:
        if not path:
            return []
        return [segment for segment in str(path).split("/") if segment]

    @staticmethod
    def depth_of(path: Optional[str]) -> int:
        return len(PathResolver.segments_of(path))

    @staticmethod
    def collection_of(path: Optional[str]) -> str:
        segments = PathResolver.segments_of(path)
        return segments[0] if segments else ""

    @staticmethod
    def document_id_of(path: Optional[str]) -> Optional[str]:
        segments = PathResolver.segments_of(path)
        return segments[1] if len(segments) >= 2 else None

    @staticmethod
    def nested_fields_of(path: Optional[str]) -> List[str]:
        return PathResolver.segments_of(path)[2:]

    @staticmethod
    def join(base: Optional[str], relative: Optional[str]) -> str:
        return PathResolver.normalize(f"{base or ''}/{relative or ''}")

    @staticmethod
    def last_segment(path: Optional[str]) -> Optional[str]:
        segments = PathResolver.segments_of(path)
        return segments[-1] if segments else None

    @staticmethod
    def parent_of(path: Optional[str]) -> Optional[str]:
        segments = PathResolver.segments_of(path)
        if not segments:
            return None
        return "/".join(segments[:-1])

    @staticmethod
    def is_within(path: str, ancestor: str) -> bool:
        """True when ``path`` equals ``ancestor`` or lies beneath it."""
        path = PathResolver.normalize(path)
        ancestor = PathResolver.normalize(ancestor)
        if not ancestor:
            return True
        return path == ancestor or path.startswith(ancestor + "/")

    @staticmethod
    def resolve(path: Optional[str]) -> DocumentAddress:
        segments = PathResolver.segments_of(path)
        return DocumentAddress(
            collection=segments[0] if segments else "",
            document_id=segments[1] if len(segments) >= 2 else None,
            nested_fields=tuple(segments[2:]),
        )
