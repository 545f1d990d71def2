"""Pydantic model for admin password verification."""

from pydantic import BaseModel, Field


class VerifyRequest(BaseModel):
    password: str = Field(..., min_length=1, description="Candidate admin token")
