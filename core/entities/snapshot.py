import copy
from typing import Any, Callable, Iterator, Optional

from .json_value import child_value, is_container, iter_children


class DataSnapshot:
    """
    Immutable view of the value found at a path when it was read.

    The wrapped value is copied on construction and ``val()`` hands out a
    copy, so callers cannot change what other subscribers see.
    """
    __slots__ = ("_key", "_value")

    def __init__(self, key: Optional[str], value: Any, _copy: bool = True) -> None:
        self._key = key
        self._value = copy.deepcopy(value) if _copy else value

    @property
    def key(self) -> Optional[str]:
        return self._key

    def val(self) -> Any:
        return copy.deepcopy(self._value)

    def exists(self) -> bool:
        return self._value is not None

    def for_each(self, callback: Callable[["DataSnapshot"], Optional[bool]]) -> bool:
        """
        Call ``callback`` with a snapshot of every child in enumeration order.

        Iteration stops as soon as the callback returns True.

        Returns:
            bool: True if iteration was stopped by the callback.
        """
        if not is_container(self._value):
            return False
        for child in self.children():
            if callback(child) is True:
                return True
        return False

    def children(self) -> Iterator["DataSnapshot"]:
        for key, value in iter_children(self._value):
            yield DataSnapshot(key, value, _copy=False)

    def child(self, path: str) -> "DataSnapshot":
        parts = [part for part in path.split("/") if part]
        current = self._value
        for part in parts:
            current = child_value(current, part)
            if current is None:
                break
        key = parts[-1] if parts else self._key
        return DataSnapshot(key, current, _copy=False)

    def has_child(self, path: str) -> bool:
        return self.child(path).exists()

    def has_children(self) -> bool:
        return self.num_children() > 0

    def num_children(self) -> int:
        return sum(1 for _ in iter_children(self._value)) if is_container(self._value) else 0

    def __repr__(self) -> str:
        return f"DataSnapshot(key={self._key!r}, value={self._value!r})"


def make_snapshot(key: Optional[str], value: Any) -> DataSnapshot:
    return DataSnapshot(key, value)
