import logging
import json
from datetime import datetime, timezone
from typing import Dict, Any, Optional

_CONTEXT_FIELDS = ("path", "event_type", "collection", "document_id", "method", "status")


class JSONFormatter(logging.Formatter):
    def __init__(self, app_name: Optional[str] = None):
        super().__init__()
        self.app_name = app_name

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }
        if self.app_name:
            log_data["app"] = self.app_name

        # Values passed through ``extra=`` land on the record itself
        for name in _CONTEXT_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)
