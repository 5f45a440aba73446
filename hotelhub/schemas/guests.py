from typing import Optional

from pydantic import BaseModel, Field


class GuestCreatePayload(BaseModel):
    name: str = Field(..., min_length=1, description="Guest full name")
    email: Optional[str] = Field(None, description="Email address")
    phone: Optional[str] = Field(None, description="Phone number")
