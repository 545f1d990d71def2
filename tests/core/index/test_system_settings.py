import json

import pytest

from core.index.system_settings import Presets, SystemSettingsStore
from core.models.errors import CorruptRecordError


class TestCategories:
    def test_absent_categories_are_none(self, memory_store) -> None:
        assert SystemSettingsStore(memory_store).get_categories() is None

    def test_put_then_get(self, memory_store) -> None:
        settings_store = SystemSettingsStore(memory_store)

        settings_store.put_categories(["风景", "Street"])

        assert memory_store.data["system:categories"] == '["风景", "Street"]'
        assert settings_store.get_categories() == ["风景", "Street"]

    def test_empty_list_is_not_none(self, memory_store) -> None:
        settings_store = SystemSettingsStore(memory_store)

        settings_store.put_categories([])

        assert settings_store.get_categories() == []

    def test_non_list_value_is_corrupt(self, memory_store) -> None:
        memory_store.data["system:categories"] = '{"a": 1}'

        with pytest.raises(CorruptRecordError):
            SystemSettingsStore(memory_store).get_categories()

    def test_unparseable_value_is_corrupt(self, memory_store) -> None:
        memory_store.data["system:categories"] = "not json"

        with pytest.raises(CorruptRecordError):
            SystemSettingsStore(memory_store).get_categories()


class TestPresets:
    def test_absent_presets_are_empty(self, memory_store) -> None:
        presets = SystemSettingsStore(memory_store).get_presets()

        assert presets == Presets(cameras=[], lenses=[])

    def test_put_then_get(self, memory_store) -> None:
        settings_store = SystemSettingsStore(memory_store)

        settings_store.put_presets(Presets(cameras=["X100V"], lenses=["23mm f/2"]))

        assert json.loads(memory_store.data["system:presets"]) == {
            "cameras": ["X100V"],
            "lenses": ["23mm f/2"],
        }
        assert settings_store.get_presets().cameras == ["X100V"]

    def test_partial_stored_presets(self, memory_store) -> None:
        memory_store.data["system:presets"] = '{"cameras": ["Q3"]}'

        presets = SystemSettingsStore(memory_store).get_presets()

        assert presets.cameras == ["Q3"]
        assert presets.lenses == []

    def test_malformed_presets(self, memory_store) -> None:
        memory_store.data["system:presets"] = '{"cameras": "Q3"}'

        with pytest.raises(CorruptRecordError):
            SystemSettingsStore(memory_store).get_presets()

    def test_presets_live_on_dynamodb(self, kv_store, kv_raw_get) -> None:
        settings_store = SystemSettingsStore(kv_store)

        settings_store.put_presets(Presets(cameras=["X-T5"]))

        assert json.loads(kv_raw_get("system:presets"))["cameras"] == ["X-T5"]
        assert settings_store.get_presets().cameras == ["X-T5"]
