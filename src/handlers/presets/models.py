"""Pydantic models for camera and lens presets."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from core.index.system_settings import Presets
from handlers.categories.models import normalize_names


class SavePresetsRequest(BaseModel):
    """Validation model for ``POST /presets``; both lists replace the stored ones."""

    cameras: list[str] = Field(..., description="Camera names")
    lenses: list[str] = Field(..., description="Lens names")

    @field_validator("cameras", "lenses", mode="before")
    @classmethod
    def normalize(cls, value: Any) -> Any:
        return normalize_names(value)

    def to_presets(self) -> Presets:
        return Presets(cameras=self.cameras, lenses=self.lenses)
