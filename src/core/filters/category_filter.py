"""Category filtering for photo records."""

from core.models.photo import PhotoRecord
from core.utils.constants import ALL_CATEGORY


class CategoryFilter:
    """Keep photos whose category (their first tag) equals the requested one.

    An empty category or the gallery's "all" label means no filtering.
    Matching is exact; category names are user-defined labels.
    """

    @staticmethod
    def is_active(category: str | None) -> bool:
        return bool(category and category.strip() and category.strip() != ALL_CATEGORY)

    @staticmethod
    def apply(records: list[PhotoRecord], category: str | None) -> list[PhotoRecord]:
        if not CategoryFilter.is_active(category):
            return records

        wanted = category.strip()
        return [record for record in records if record.category == wanted]
