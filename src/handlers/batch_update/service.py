"""Business logic for batch EXIF updates.

Each id is resolved, merged and rewritten independently and concurrently.
A failing id is reported in its own result and never stops the others.
Only EXIF fields change; the primary key, blobs, title and rating are
left alone.
"""

from typing import Any

from aws_lambda_powertools import Logger

from core.config import PortfolioSettings, get_settings
from core.index.photo_index import PhotoIndex
from core.infrastructure.aws.dynamodb_kv_store import DynamoDBKeyValueStore
from core.models.errors import NotFoundError, PortfolioServiceError
from core.utils.concurrency import fan_out
from core.utils.time import Clock, iso_from_millis, now_millis

from .models import BatchItemResult

logger = Logger(UTC=True)


class BatchUpdateService:
    """Application service applying one EXIF change set to many photos."""

    def __init__(
        self,
        settings: PortfolioSettings | None = None,
        *,
        index: PhotoIndex | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.index = index or PhotoIndex(DynamoDBKeyValueStore(self.settings))
        self.clock: Clock = clock or now_millis

    def update_many(self, ids: list[str], updates: dict[str, Any]) -> list[BatchItemResult]:
        """Apply ``updates`` to every id; results follow the order of ``ids``."""
        outcomes = fan_out(
            lambda photo_id: self.update_one(photo_id, updates),
            ids,
            max_workers=self.settings.fan_out_workers,
        )

        results: list[BatchItemResult] = []
        for outcome in outcomes:
            if outcome.ok:
                results.append(BatchItemResult(id=outcome.item, success=True))
                continue

            results.append(
                BatchItemResult(id=outcome.item, success=False, error=self._describe(outcome.error))
            )

        failed = sum(1 for result in results if not result.success)
        logger.info(
            "Batch update finished",
            extra={"requested": len(ids), "failed": failed, "fields": sorted(updates)},
        )
        return results

    def update_one(self, photo_id: str, updates: dict[str, Any]) -> None:
        """Merge ``updates`` into one photo's EXIF and rewrite it in place.

        Raises:
            NotFoundError: If the id has no lookup key or no record
            StoreError: If the read or write fails
        """
        primary_key, record = self.index.get_by_id(photo_id)

        updated = record.model_copy(
            update={
                "exif": record.exif.merged(updates),
                "updated_at": iso_from_millis(self.clock()),
            }
        )
        self.index.update(primary_key, updated)

    @staticmethod
    def _describe(error: Exception | None) -> str:
        if isinstance(error, NotFoundError):
            return "Not found"

        if isinstance(error, PortfolioServiceError):
            logger.warning(
                "Batch item failed",
                extra={"error_code": error.error_code, "details": error.details},
            )
            return error.message

        logger.error("Batch item failed unexpectedly", extra={"error": repr(error)})
        return str(error) or type(error).__name__
