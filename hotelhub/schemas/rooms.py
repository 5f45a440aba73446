from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from hotelhub.models.enums import RoomStatus, RoomType


class RoomCreatePayload(BaseModel):
    """
    Schema for adding a room. New rooms start as available.
    """

    room_number: str = Field(..., min_length=1, description="Unique room label, e.g. 101")
    room_type: RoomType = Field(..., description="standard, deluxe or suite")
    price_per_night: Decimal = Field(..., gt=0, description="Nightly rate")
    description: Optional[str] = Field(None, description="Free-text description")


class RoomUpdatePayload(BaseModel):
    """
    Schema for editing a room. All fields are optional.
    """

    room_number: Optional[str] = Field(None, min_length=1)
    room_type: Optional[RoomType] = None
    price_per_night: Optional[Decimal] = Field(None, gt=0)
    status: Optional[RoomStatus] = Field(None, description="Housekeeping status")
    description: Optional[str] = None


class RoomPhotoPayload(BaseModel):
    """Photo already uploaded to blob storage."""

    photo_url: str = Field(..., min_length=1, description="Public URL of the image")
    file_path: str = Field(..., min_length=1, description="Path inside the storage bucket")
