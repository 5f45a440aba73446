from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from hotelhub.services.booking import BookingRequest


class BookingPayload(BaseModel):
    """
    Booking input contract shared by the staff form and the voice agent.

    Required fields are optional here on purpose: the booking orchestrator
    reports them as MissingField in the {success, error} result instead of a
    422 validation error. Dates stay strings for the same reason.
    """

    model_config = ConfigDict(populate_by_name=True)

    guest_name: Optional[str] = Field(None, alias="guestName", description="Guest full name")
    guest_email: Optional[str] = Field(None, alias="guestEmail", description="Email, used to reuse guests")
    guest_phone: Optional[str] = Field(None, alias="guestPhone")
    room_id: Optional[str] = Field(None, alias="roomId", description="Room UUID")
    check_in_date: Optional[str] = Field(None, alias="checkInDate", description="YYYY-MM-DD")
    check_out_date: Optional[str] = Field(None, alias="checkOutDate", description="YYYY-MM-DD")
    special_requests: Optional[str] = Field(None, alias="specialRequests")
    total_amount: Optional[Decimal] = Field(
        None, alias="totalAmount", ge=0, description="Overrides nightly price x nights"
    )

    def to_request(self) -> BookingRequest:
        return BookingRequest(
            guest_name=self.guest_name,
            room_id=self.room_id,
            check_in_date=self.check_in_date,
            check_out_date=self.check_out_date,
            guest_email=self.guest_email,
            guest_phone=self.guest_phone,
            special_requests=self.special_requests,
            total_amount=self.total_amount,
        )


class BookingResult(BaseModel):
    """Booking output contract."""

    success: bool
    reservationId: Optional[str] = None
    error: Optional[str] = None
