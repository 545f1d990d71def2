"""Pydantic models for the photo detail request."""

from pydantic import BaseModel, ConfigDict, Field


class GetPhotoRequest(BaseModel):
    """Validation model for ``GET /photos/{id}``."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(..., min_length=1, max_length=128, description="Photo identifier")
