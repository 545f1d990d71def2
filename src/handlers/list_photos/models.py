"""
Pydantic models for the photo listing request and response.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from core.models.photo import PhotoSummary
from core.utils.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, MIN_PAGE_SIZE


class ListPhotosRequest(BaseModel):
    """
    Validation model for the list photos API.

    Query parameters arrive as strings; ``pageSize`` keeps the camelCase
    name the gallery sends.
    """

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    page: int = Field(
        default=DEFAULT_PAGE,
        description="1-based page number; values below 1 are treated as 1",
    )
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        alias="pageSize",
        ge=MIN_PAGE_SIZE,
        le=MAX_PAGE_SIZE,
        description=f"Results per page ({MIN_PAGE_SIZE}-{MAX_PAGE_SIZE})",
    )
    category: str | None = Field(
        None,
        max_length=100,
        description="Only photos whose first tag equals this category",
    )

    @field_validator("page", "page_size", "category", mode="before")
    @classmethod
    def blank_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        """Treat ``?page=`` the same as an omitted parameter."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("page")
    @classmethod
    def clamp_page(cls, value: int) -> int:
        return max(value, DEFAULT_PAGE)


class ListPhotosResponse(BaseModel):
    """Response model for a page of photos."""

    items: list[PhotoSummary] = Field(default_factory=list)
