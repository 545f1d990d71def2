"""
Business logic for listing photos newest-first.

Without a category, only the keys of the requested page are hydrated:

1. ``scan_limit = min(page * page_size, scan_ceiling)``
2. list the first ``scan_limit`` primary keys (already newest-first)
3. ``start = (page - 1) * page_size``; past the end is an empty page
4. hydrate ``keys[start:start + page_size]`` concurrently

With a category, the whole scan window is hydrated and filtered before the
page is cut, because the category lives inside the record.

Records that vanish, fail to load or fail to parse are logged and left out
of the page; one bad record never fails a listing. Keys beyond the scan
ceiling are not reachable through this listing.
"""

from aws_lambda_powertools import Logger

from core.config import PortfolioSettings, get_settings
from core.filters.category_filter import CategoryFilter
from core.filters.in_memory_photo_filter import InMemoryPhotoFilter
from core.index.photo_index import PhotoIndex
from core.infrastructure.aws.dynamodb_kv_store import DynamoDBKeyValueStore
from core.models.photo import PhotoRecord
from core.utils.concurrency import fan_out

logger = Logger(UTC=True)


class ListService:
    """Application service responsible for paging through the photo index."""

    def __init__(
        self,
        settings: PortfolioSettings | None = None,
        *,
        index: PhotoIndex | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.index = index or PhotoIndex(DynamoDBKeyValueStore(self.settings))
        self.filters = InMemoryPhotoFilter()

    def list_photos(
        self,
        *,
        page: int,
        page_size: int,
        category: str | None = None,
    ) -> list[PhotoRecord]:
        """Return one page of records, newest first.

        Raises:
            ValueError: If the page size is out of range
            StoreError: If the key listing itself fails
        """
        page = max(page, 1)
        filtering = CategoryFilter.is_active(category)

        scan_limit = min(page * page_size, self.settings.scan_ceiling)
        if filtering:
            scan_limit = self.settings.scan_ceiling

        keys = self.index.list_primary_keys(limit=scan_limit)

        if filtering:
            records = self._hydrate(keys)
            matching = self.filters.filter_by_category(records, category=category)
            page_records, total, _ = self.filters.paginate(
                matching,
                page=page,
                page_size=page_size,
            )
        else:
            page_keys, total, _ = self.filters.paginate(
                keys,
                page=page,
                page_size=page_size,
            )
            page_records = self._hydrate(page_keys)

        logger.info(
            "Photos listed",
            extra={
                "page": page,
                "page_size": page_size,
                "category": category,
                "scanned": len(keys),
                "total": total,
                "count": len(page_records),
            },
        )
        return page_records

    def _hydrate(self, keys: list[str]) -> list[PhotoRecord]:
        """Load records for ``keys`` concurrently, keeping key order and skipping failures."""
        if not keys:
            return []

        outcomes = fan_out(
            self.index.get_record,
            keys,
            max_workers=self.settings.fan_out_workers,
        )

        records: list[PhotoRecord] = []
        for outcome in outcomes:
            if not outcome.ok:
                logger.warning(
                    "Skipping photo that failed to load",
                    extra={"key": outcome.item, "error": str(outcome.error)},
                )
                continue

            if outcome.result is None:
                logger.warning("Skipping photo removed during listing", extra={"key": outcome.item})
                continue

            records.append(outcome.result)

        return records
