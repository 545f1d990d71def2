"""
Offset-based pagination utilities.

Pages are 1-based; page ``p`` of size ``n`` covers positions
``(p - 1) * n`` up to, but not including, ``p * n``.
"""

from collections.abc import Sequence
from typing import TypeVar

from core.utils.constants import MAX_PAGE_SIZE, MIN_PAGE_SIZE

T = TypeVar("T")


class OffsetPagination:
    """
    Offset-based pagination helper.

    Works on any in-memory sequence: the listing service slices primary
    keys with it before hydration, and slices hydrated records with it
    after category filtering.
    """

    @staticmethod
    def offset_for(page: int, page_size: int) -> int:
        """Position of the first item on ``page``; pages below 1 count as page 1."""
        return (max(page, 1) - 1) * page_size

    @staticmethod
    def paginate(
        items: Sequence[T],
        offset: int,
        limit: int,
    ) -> tuple[list[T], int, bool]:
        """
        Paginate a sequence using offset and limit.

        Returns:
            A tuple containing:
            - paginated_items: Items for the current page (empty past the end)
            - total_count: Number of items before pagination
            - has_more: True if more items exist beyond this page

        Example:
            paginate([1, 2, 3, 4, 5], offset=0, limit=2)

            → ([1, 2], 5, True)
        """
        total_count = len(items)
        paginated_items = list(items[offset : offset + limit])
        has_more = offset + limit < total_count

        return paginated_items, total_count, has_more

    @staticmethod
    def validate(limit: int, offset: int) -> tuple[bool, str]:
        """
        Validate pagination parameters.

        Validation rules:
        - limit must be within [MIN_PAGE_SIZE, MAX_PAGE_SIZE]
        - offset must be zero or positive
        """
        if limit < MIN_PAGE_SIZE:
            return False, f"Page size must be at least {MIN_PAGE_SIZE}"

        if limit > MAX_PAGE_SIZE:
            return False, f"Page size must not exceed {MAX_PAGE_SIZE}"

        if offset < 0:
            return False, "Offset must be zero or a positive integer"

        return True, ""
