"""Business logic for photo detail retrieval."""

from aws_lambda_powertools import Logger

from core.config import PortfolioSettings, get_settings
from core.index.photo_index import PhotoIndex
from core.infrastructure.aws.dynamodb_kv_store import DynamoDBKeyValueStore
from core.models.photo import PhotoRecord

logger = Logger(UTC=True)


class GetService:
    """Application service resolving a photo id to its full record."""

    def __init__(
        self,
        settings: PortfolioSettings | None = None,
        *,
        index: PhotoIndex | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.index = index or PhotoIndex(DynamoDBKeyValueStore(self.settings))

    def get_photo(self, photo_id: str) -> PhotoRecord:
        """Fetch a photo by id through its lookup key.

        Raises:
            NotFoundError: If the id is unknown or its record is missing
            StoreError: If the store cannot be read or the record is corrupt
        """
        _, record = self.index.get_by_id(photo_id)
        logger.debug("Photo fetched", extra={"id": photo_id})
        return record
