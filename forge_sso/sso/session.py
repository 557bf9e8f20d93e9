"""Session store adapters."""

from collections.abc import MutableMapping
from typing import Any


class DictSessionStore:
    """SessionStore over a mutable mapping such as Starlette's ``request.session``.

    Deleting a missing key is a no-op.
    """

    def __init__(self, data: MutableMapping[str, Any] | None = None):
        self.data: MutableMapping[str, Any] = data if data is not None else {}

    def get(self, key: str) -> Any:
        return self.data.get(key)

    def set(self, key: str, value: Any) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)
