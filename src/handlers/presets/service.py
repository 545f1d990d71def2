"""Business logic for reading and replacing camera/lens presets."""

from core.config import PortfolioSettings, get_settings
from core.index.system_settings import Presets, SystemSettingsStore
from core.infrastructure.aws.dynamodb_kv_store import DynamoDBKeyValueStore


class PresetsService:
    def __init__(
        self,
        settings: PortfolioSettings | None = None,
        *,
        store: SystemSettingsStore | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.store = store or SystemSettingsStore(DynamoDBKeyValueStore(self.settings))

    def get_presets(self) -> Presets:
        return self.store.get_presets()

    def save_presets(self, presets: Presets) -> Presets:
        self.store.put_presets(presets)
        return presets
