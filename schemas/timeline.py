"""Pydantic schemas for timeline entries and upload responses."""
from pydantic import BaseModel, Field


class TimelineEntry(BaseModel):
    """One timeline record; field order is the serialized key order"""

    username: str = Field(..., min_length=1)
    time: str = Field(..., min_length=1)
    avatar: str = Field(..., min_length=1, description="Path relative to the public asset mount")
    image: str = Field(..., min_length=1, description="Path relative to the public asset mount")


class EntryCreatedResponse(BaseModel):
    """Acknowledgment returned after a successful upload"""

    success: bool = True


class ErrorResponse(BaseModel):
    error: str
