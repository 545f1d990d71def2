"""Abstract contract for the flat key-value namespace."""

from abc import ABC, abstractmethod


class KeyValueRepository(ABC):
    """Contract for a flat string-keyed, string-valued store.

    Implementations could be DynamoDB, Cloudflare KV, Redis, etc.
    The photo index depends on this interface, not the implementation.
    """

    @abstractmethod
    def put(self, key: str, value: str) -> None:
        """Unconditionally write ``value`` under ``key``.

        Raises:
            StoreError: If the write fails
        """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Fetch the value stored under ``key``.

        Returns:
            The stored value, or None if the key is absent

        Raises:
            StoreError: If the read fails
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``. Deleting an absent key is a no-op.

        Raises:
            StoreError: If the deletion fails
        """

    @abstractmethod
    def list_by_prefix(
        self,
        prefix: str,
        *,
        limit: int,
        start_after: str | None = None,
    ) -> list[str]:
        """List keys starting with ``prefix`` in ascending lexicographic order.

        Args:
            prefix: Key prefix to match
            limit: Maximum number of keys wanted; implementations also
                   enforce their own scan ceiling, so callers asking for
                   more than the ceiling silently receive fewer keys
            start_after: Optional exclusive start key for continuing a
                         previous listing

        Returns:
            Matching keys, ascending

        Raises:
            StoreError: If the listing fails
        """
