"""
Photo filtering service for list operations.

Applies filtering and pagination strategies to records that have already
been fetched. This service does not perform data access.
"""

from collections.abc import Sequence
from typing import TypeVar

from aws_lambda_powertools import Logger

from core.filters.category_filter import CategoryFilter
from core.filters.offset_pagination import OffsetPagination
from core.models.photo import PhotoRecord

T = TypeVar("T")
logger = Logger(UTC=True)


class InMemoryPhotoFilter:
    """
    Orchestrates in-memory refinement of a listing window:
    - Category filtering on the first tag
    - Offset-based pagination
    """

    def __init__(self) -> None:
        self._category_filter: CategoryFilter = CategoryFilter()
        self._pagination: OffsetPagination = OffsetPagination()

    def filter_by_category(
        self,
        records: list[PhotoRecord],
        *,
        category: str | None,
    ) -> list[PhotoRecord]:
        if not self._category_filter.is_active(category):
            return records

        result = self._category_filter.apply(records, category)
        logger.debug(
            "Category filter applied",
            extra={"category": category, "before": len(records), "after": len(result)},
        )
        return result

    def paginate(
        self,
        items: Sequence[T],
        *,
        page: int,
        page_size: int,
    ) -> tuple[list[T], int, bool]:
        """
        Return one page of ``items``.

        Raises:
            ValueError: If the page size is out of range
        """
        offset = self._pagination.offset_for(page, page_size)

        is_valid, error_message = self._pagination.validate(page_size, offset)
        if not is_valid:
            logger.error(
                "Invalid pagination parameters",
                extra={"page": page, "page_size": page_size, "error": error_message},
            )
            raise ValueError(error_message)

        return self._pagination.paginate(items, offset, page_size)
