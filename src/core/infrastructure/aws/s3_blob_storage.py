"""S3-backed implementation of BlobStorageRepository."""

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from core.config import PortfolioSettings
from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import BlobStorageError
from core.repositories.blob_repository import BlobStorageRepository
from core.utils.constants import (
    ERROR_CODE_BLOB_DELETE_FAILED,
    ERROR_CODE_BLOB_UPLOAD_FAILED,
)

logger = Logger(UTC=True)


class S3BlobStorage(BlobStorageRepository):
    """Image object storage backed by Amazon S3, served from a public base URL."""

    def __init__(
        self,
        settings: PortfolioSettings,
        adapter: S3AdapterProtocol | None = None,
    ) -> None:
        """Create storage using the provided S3 adapter."""
        self._s3: S3AdapterProtocol = adapter or S3Adapter(settings)
        self._base_url = settings.image_base_url.rstrip("/")

    def url_for(self, key: str) -> str:
        return f"{self._base_url}/{key}"

    def put_blob(self, *, key: str, data: bytes, content_type: str) -> str:
        """Upload image bytes to S3 and return the public URL."""
        logger.debug(
            "Uploading image object",
            extra={"key": key, "size": len(data), "content_type": content_type},
        )

        try:
            self._s3.put_object(
                key=key,
                body=data,
                content_type=content_type,
                metadata={"source": "photo-portfolio"},
            )

        except (ClientError, BotoCoreError) as exc:
            logger.error("S3 upload failed", extra={"key": key})
            raise BlobStorageError(
                message="Unable to upload image at this time",
                error_code=ERROR_CODE_BLOB_UPLOAD_FAILED,
                details={"key": key, "cause": str(exc)},
            ) from exc

        logger.info("Image object uploaded", extra={"key": key})
        return self.url_for(key)

    def remove_blob(self, *, key: str) -> None:
        """Delete an image object from S3."""
        logger.debug("Deleting image object", extra={"key": key})

        try:
            self._s3.delete_object(key=key)

        except (ClientError, BotoCoreError) as exc:
            logger.error("S3 deletion failed", extra={"key": key})
            raise BlobStorageError(
                message="Unable to delete image at this time",
                error_code=ERROR_CODE_BLOB_DELETE_FAILED,
                details={"key": key, "cause": str(exc)},
            ) from exc

        logger.info("Image object deleted", extra={"key": key})
