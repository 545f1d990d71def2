"""Pydantic models for photo upload metadata and response."""

from typing import Any

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.models.photo import ExifData, PhotoUrls
from core.utils.constants import (
    DESCRIPTION_MAX_LENGTH,
    MAX_RATING,
    MAX_TAGS,
    MIN_RATING,
    TAG_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)

logger = Logger(UTC=True)


class UploadMetadata(BaseModel):
    """Validation model for the ``meta`` part of an upload.

    Without ``id`` the upload creates a photo; with ``id`` it edits one.
    Only the fields present in the payload are applied on edit.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    id: str | None = Field(None, max_length=128, description="Existing photo to edit")
    title: str | None = Field(None, max_length=TITLE_MAX_LENGTH, description="Photo title")
    description: str | None = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    category: str | None = Field(None, max_length=TAG_MAX_LENGTH, description="Becomes the first tag")
    tags: list[str] | None = Field(None, description="List of tags (max 10)")
    width: int | None = Field(None, ge=0)
    height: int | None = Field(None, ge=0)
    rating: int | None = Field(None, ge=MIN_RATING, le=MAX_RATING)
    exif: ExifData | None = Field(None, description="EXIF fields; merged key by key on edit")

    @field_validator("id", "category", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, value: Any) -> list[str] | None:
        """
        Normalize and validate tags.

        Accepts:
        - comma-separated string
        - list of strings
        """
        if value is None:
            return None

        if isinstance(value, str):
            raw_tags = [t.strip() for t in value.split(",") if t.strip()]
        elif isinstance(value, list):
            raw_tags = [str(t).strip() for t in value if str(t).strip()]
        else:
            raise ValueError("tags must be a string or list of strings")

        # remove empty + deduplicate while preserving order
        tags: list[str] = list(dict.fromkeys(t for t in raw_tags if t))

        if len(tags) > MAX_TAGS:
            logger.error("Tag validation error: Maximum 10 tags allowed")
            raise ValueError(f"Maximum {MAX_TAGS} tags allowed")

        if any(len(tag) > TAG_MAX_LENGTH for tag in tags):
            raise ValueError(f"Tags must be at most {TAG_MAX_LENGTH} characters")

        return tags

    @property
    def is_edit(self) -> bool:
        return self.id is not None

    def supplied(self, name: str) -> bool:
        """True when ``name`` was present in the request payload."""
        return name in self.model_fields_set

    def exif_changes(self) -> dict[str, Any]:
        """EXIF keys present in the payload, by their stored names."""
        if self.exif is None:
            return {}
        return self.exif.model_dump(by_alias=True, exclude_unset=True)


class UploadPhotoResponse(BaseModel):
    """Response model for a successful create or edit."""

    success: bool = True
    id: str = Field(..., description="Photo identifier")
    url: str | None = Field(None, description="Canonical image URL")
    urls: PhotoUrls | None = Field(None, description="Size variants, when uploaded")
