"""
In-Memory Key-Value Store

Dict-backed store for tests and throwaway local runs. Data lives only as
long as the process.
"""

from typing import Dict, List, Optional

from shorturl.db.interface import KeyValueStore


class MemoryStore(KeyValueStore):
    """KeyValueStore backed by a plain dict."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def put(self, key: str, value: str) -> None:
        self._data[key] = value

    async def list(self, prefix: Optional[str] = None) -> List[str]:
        return sorted(k for k in self._data if prefix is None or k.startswith(prefix))

    async def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    async def close(self) -> None:
        self._data.clear()
