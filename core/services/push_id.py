import secrets
import threading
import time

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_TIME_WIDTH = 9
_SUFFIX_WIDTH = 9

_lock = threading.Lock()
_last_ms = 0


def _base36(number: int, width: int) -> str:
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_ALPHABET[remainder])
    return "".join(reversed(digits)).rjust(width, "0")


def generate_push_key() -> str:
    """
    Build a child key from a time component and a random suffix.

    The time component never repeats within this process, even when the
    clock stands still or steps backwards, so keys from one process are
    unique. Keys from different clients only sort by approximate recency.
    """
    global _last_ms
    with _lock:
        now_ms = int(time.time() * 1000)
        if now_ms <= _last_ms:
            now_ms = _last_ms + 1
        _last_ms = now_ms
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(_SUFFIX_WIDTH))
    return _base36(now_ms, _TIME_WIDTH) + suffix
