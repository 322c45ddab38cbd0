import time
from typing import Any, Dict


class ServerValue:
    """Placeholders resolved when a value is written."""
    TIMESTAMP: Dict[str, str] = {".sv": "timestamp"}


def resolve_server_values(value: Any, now_ms: int = None) -> Any:
    """Replace every ServerValue.TIMESTAMP placeholder with epoch milliseconds."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    if value == ServerValue.TIMESTAMP:
        return now_ms
    if isinstance(value, dict):
        return {k: resolve_server_values(v, now_ms) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [resolve_server_values(v, now_ms) for v in value]
    return value
