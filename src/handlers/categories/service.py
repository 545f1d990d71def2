"""Business logic for reading and replacing the category list."""

from core.config import PortfolioSettings, get_settings
from core.index.system_settings import SystemSettingsStore
from core.infrastructure.aws.dynamodb_kv_store import DynamoDBKeyValueStore


class CategoriesService:
    def __init__(
        self,
        settings: PortfolioSettings | None = None,
        *,
        store: SystemSettingsStore | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.store = store or SystemSettingsStore(DynamoDBKeyValueStore(self.settings))

    def get_categories(self) -> list[str] | None:
        return self.store.get_categories()

    def save_categories(self, categories: list[str]) -> list[str]:
        self.store.put_categories(categories)
        return categories
