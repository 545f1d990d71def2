"""Abstract contract for image object storage."""

from abc import ABC, abstractmethod


class BlobStorageRepository(ABC):
    """Contract for storing and removing image objects.

    Implementations could be S3, R2, GCS, local disk, etc.
    Services depend on this interface, not the implementation.
    """

    @abstractmethod
    def put_blob(self, *, key: str, data: bytes, content_type: str) -> str:
        """Store image bytes and return their public URL.

        Args:
            key: Object key
            data: Binary image content
            content_type: MIME type (e.g., 'image/jpeg')

        Returns:
            URL under which the object is served

        Raises:
            BlobStorageError: If the upload fails
        """

    @abstractmethod
    def remove_blob(self, *, key: str) -> None:
        """Delete an object by key. Removing a missing object is not an error.

        Raises:
            BlobStorageError: If deletion fails
        """
