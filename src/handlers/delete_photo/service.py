"""Business logic for photo deletion.

Deletion runs in this order:

1. Resolve the primary key through ``lookup:<id>`` (absent -> NotFoundError)
2. Load the record to learn which blobs it references
3. Remove those blobs, best-effort
4. Delete the primary key, then the lookup key

A lookup whose primary key is already gone is the remains of an
interrupted delete; the lookup is removed and the call succeeds.
"""

from aws_lambda_powertools import Logger

from core.config import PortfolioSettings, get_settings
from core.index.photo_index import PhotoIndex
from core.infrastructure.aws.dynamodb_kv_store import DynamoDBKeyValueStore
from core.infrastructure.aws.s3_blob_storage import S3BlobStorage
from core.models.errors import BlobStorageError, CorruptRecordError, NotFoundError
from core.repositories.blob_repository import BlobStorageRepository
from core.utils.constants import ERROR_CODE_PHOTO_NOT_FOUND

logger = Logger(UTC=True)


class DeleteService:
    """Application service responsible for deleting photos.

    It never leaves a lookup key pointing at nothing: the lookup key is the
    last thing removed.
    """

    def __init__(
        self,
        settings: PortfolioSettings | None = None,
        *,
        index: PhotoIndex | None = None,
        blobs: BlobStorageRepository | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.index = index or PhotoIndex(DynamoDBKeyValueStore(self.settings))
        self.blobs = blobs or S3BlobStorage(self.settings)

    def delete_photo(self, photo_id: str) -> None:
        """Delete a photo, its blobs and both index keys.

        Raises:
            NotFoundError: If no lookup key exists for the id
            StoreError: If either key deletion fails
        """
        logger.debug("Starting photo deletion", extra={"id": photo_id})

        primary_key = self.index.resolve_primary_key(photo_id)
        if primary_key is None:
            logger.warning("Photo not found for deletion", extra={"id": photo_id})
            raise NotFoundError(
                message=f"Photo not found: {photo_id}",
                error_code=ERROR_CODE_PHOTO_NOT_FOUND,
                details={"id": photo_id},
            )

        try:
            record = self.index.get_record(primary_key)
        except CorruptRecordError:
            logger.warning(
                "Deleting unreadable record; its blobs are left in place",
                extra={"id": photo_id, "primary_key": primary_key},
            )
            record = None

        if record is None:
            logger.info(
                "Completing interrupted deletion",
                extra={"id": photo_id, "primary_key": primary_key},
            )
        else:
            for key in record.blob_keys():
                self._remove_blob(key)

        self.index.remove(photo_id, primary_key)
        logger.info("Photo deleted successfully", extra={"id": photo_id})

    def _remove_blob(self, key: str) -> None:
        try:
            self.blobs.remove_blob(key=key)
        except BlobStorageError:
            logger.warning("Blob removal failed; continuing with deletion", extra={"key": key})
