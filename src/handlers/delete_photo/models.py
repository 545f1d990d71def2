"""Pydantic models for photo deletion request/response."""

from pydantic import BaseModel, ConfigDict, Field


class DeletePhotoRequest(BaseModel):
    """Validation model for ``DELETE /photos/{id}``."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(..., min_length=1, max_length=128, description="Photo identifier")


class DeletePhotoResponse(BaseModel):
    """Response model for a successful deletion."""

    success: bool = True
    id: str = Field(..., description="Deleted photo identifier")
