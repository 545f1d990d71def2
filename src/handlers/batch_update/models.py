"""Pydantic models for batch EXIF updates."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.utils.constants import MAX_BATCH_IDS


class BatchExifUpdates(BaseModel):
    """EXIF fields a batch may set. Only the fields present are applied."""

    model_config = ConfigDict(str_strip_whitespace=True)

    camera: str | None = None
    lens: str | None = None
    location: str | None = None
    date: str | None = None
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class BatchUpdateRequest(BaseModel):
    """Validation model for ``POST /batch_update``."""

    ids: list[str] = Field(..., min_length=1, max_length=MAX_BATCH_IDS)
    updates: BatchExifUpdates = Field(default_factory=BatchExifUpdates)

    @field_validator("ids")
    @classmethod
    def dedupe_ids(cls, value: list[str]) -> list[str]:
        """Strip, drop blanks and de-duplicate, keeping first occurrence order."""
        ids = list(dict.fromkeys(item.strip() for item in value if item and item.strip()))
        if not ids:
            raise ValueError("No IDs provided")
        return ids


class BatchItemResult(BaseModel):
    """Outcome for one id."""

    id: str
    success: bool
    error: str | None = None


class BatchUpdateResponse(BaseModel):
    """Per-id results; the request as a whole succeeds even when items fail."""

    success: bool = True
    results: list[BatchItemResult] = Field(default_factory=list)
