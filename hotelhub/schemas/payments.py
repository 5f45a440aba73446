from typing import Optional

from pydantic import BaseModel, Field


class CheckoutSessionPayload(BaseModel):
    """
    Body of POST /api/create-checkout-session.

    Both fields are optional in the schema so a missing priceId is answered
    with {"error": ...} and status 400 rather than a validation error.
    """

    priceId: Optional[str] = Field(None, description="Stripe price id")
    returnUrl: Optional[str] = Field(None, description="Page Stripe redirects back to")


class VerifyPaymentPayload(BaseModel):
    sessionId: Optional[str] = Field(None, description="Stripe checkout session id")
