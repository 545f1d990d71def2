"""Pydantic models for the gallery category list."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from core.utils.constants import TAG_MAX_LENGTH


def normalize_names(value: Any) -> Any:
    """Strip names, drop blanks and duplicates, keep order."""
    if not isinstance(value, list):
        return value

    names = [item.strip() if isinstance(item, str) else item for item in value]
    return list(dict.fromkeys(name for name in names if name != ""))


class SaveCategoriesRequest(BaseModel):
    """Validation model for ``POST /categories``."""

    categories: list[str] = Field(..., description="Complete replacement category list")

    @field_validator("categories", mode="before")
    @classmethod
    def normalize(cls, value: Any) -> Any:
        return normalize_names(value)

    @field_validator("categories")
    @classmethod
    def check_length(cls, value: list[str]) -> list[str]:
        if any(len(name) > TAG_MAX_LENGTH for name in value):
            raise ValueError(f"Category names must be at most {TAG_MAX_LENGTH} characters")
        return value


class CategoriesResponse(BaseModel):
    """Saved categories; null when none were ever saved."""

    categories: list[str] | None = None
