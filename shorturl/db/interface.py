"""
Key-Value Store Interface

This module defines the storage gateway: the only component that reads or
writes the slug -> URL mapping. Backends (in-memory, SQL) implement the
same async contract so the service layer never knows which one it talks to.

The contract is a plain map. There is no compare-and-swap: callers that
need "create if absent" do a get followed by a put, and two concurrent
writers to the same key both succeed with the last write winning.
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class KeyValueStore(ABC):
    """
    Abstract base class for key-value store backends.

    To add a new backend:
    1. Create a new class inheriting from KeyValueStore
    2. Implement all abstract methods
    3. Register it in create_store()
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Fetch the value stored under key.

        Returns:
            The stored value, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """

    @abstractmethod
    async def put(self, key: str, value: str) -> None:
        """
        Store value under key, replacing any existing value.

        Raises:
            StorageError: If the write fails
        """

    @abstractmethod
    async def list(self, prefix: Optional[str] = None) -> List[str]:
        """
        List stored keys in sorted order, optionally filtered by prefix.

        Intended for operational tooling and test cleanup.
        """

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if the key existed, False otherwise
        """

    async def close(self) -> None:
        """Release backend resources. No-op by default."""
