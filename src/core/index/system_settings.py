"""Whole-value gallery settings kept under well-known ``system:`` keys."""

import json
from typing import Any

from aws_lambda_powertools import Logger
from pydantic import BaseModel, Field

from core.models.errors import CorruptRecordError
from core.repositories.kv_repository import KeyValueRepository
from core.utils.constants import SYSTEM_CATEGORIES_KEY, SYSTEM_PRESETS_KEY

logger = Logger(UTC=True)


class Presets(BaseModel):
    """Camera and lens names offered by the upload form."""

    cameras: list[str] = Field(default_factory=list)
    lenses: list[str] = Field(default_factory=list)


class SystemSettingsStore:
    """Reads and replaces the category list and the camera/lens presets."""

    def __init__(self, store: KeyValueRepository) -> None:
        self._store = store

    def _load_json(self, key: str) -> Any:
        raw = self._store.get(key)
        if raw is None:
            return None

        try:
            return json.loads(raw)
        except ValueError as exc:
            logger.error("System setting is unreadable", extra={"key": key})
            raise CorruptRecordError(
                message="Stored setting is unreadable",
                details={"key": key, "cause": str(exc)},
            ) from exc

    def get_categories(self) -> list[str] | None:
        """Saved categories, or None when none were ever saved."""
        value = self._load_json(SYSTEM_CATEGORIES_KEY)
        if value is None:
            return None

        if not isinstance(value, list):
            raise CorruptRecordError(
                message="Stored categories are not a list",
                details={"key": SYSTEM_CATEGORIES_KEY},
            )
        return [str(item) for item in value]

    def put_categories(self, categories: list[str]) -> None:
        self._store.put(SYSTEM_CATEGORIES_KEY, json.dumps(categories, ensure_ascii=False))
        logger.info("Categories saved", extra={"count": len(categories)})

    def get_presets(self) -> Presets:
        """Saved presets, or empty lists when none were ever saved."""
        value = self._load_json(SYSTEM_PRESETS_KEY)
        if value is None:
            return Presets()

        try:
            return Presets.model_validate(value)
        except ValueError as exc:
            raise CorruptRecordError(
                message="Stored presets are malformed",
                details={"key": SYSTEM_PRESETS_KEY, "cause": str(exc)},
            ) from exc

    def put_presets(self, presets: Presets) -> None:
        self._store.put(SYSTEM_PRESETS_KEY, presets.model_dump_json())
        logger.info(
            "Presets saved",
            extra={"cameras": len(presets.cameras), "lenses": len(presets.lenses)},
        )
