from logging.handlers import RotatingFileHandler
import os
from typing import Optional


def _ensure_parent(filename: str) -> None:
    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)


class CustomRotatingFileHandler(RotatingFileHandler):
    def __init__(
        self,
        filename: str,
        max_bytes: int = 5 * 1024 * 1024,
        backup_count: int = 3,
        encoding: Optional[str] = "utf-8"
    ):
        _ensure_parent(filename)
        super().__init__(
            filename,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding=encoding,
            delay=True
        )
