"""
Payment endpoints backing the "call Santa" checkout.

POST /api/create-checkout-session  {priceId, returnUrl} -> {url}
POST /api/verify-payment           {sessionId}          -> {success, error?}
GET/DELETE /api/payment-session    inspect or drop the local payment session
"""

from typing import Any

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from hotelhub.dependencies import get_payment_gateway, get_payment_session_gate
from hotelhub.errors import HotelHubError
from hotelhub.payments.stripe_gateway import StripeGateway
from hotelhub.schemas.payments import CheckoutSessionPayload, VerifyPaymentPayload
from hotelhub.services.payment_session import PaymentSessionGate

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/create-checkout-session")
def create_checkout_session(
    payload: CheckoutSessionPayload,
    gateway: StripeGateway = Depends(get_payment_gateway),
) -> JSONResponse:
    """
    Start a Stripe checkout and return the hosted payment page URL.

    Returns:
        JSONResponse: {"url": ...}; {"error": ...} with 400 for a missing
        priceId or returnUrl, 500 for configuration or Stripe errors
    """
    if not payload.priceId:
        return JSONResponse(status_code=400, content={"error": "Price ID is required"})
    if not payload.returnUrl:
        return JSONResponse(status_code=400, content={"error": "Return URL is required"})

    try:
        url = gateway.create_checkout_session(payload.priceId, payload.returnUrl)
    except HotelHubError as e:
        return JSONResponse(status_code=500, content={"error": e.message})

    return JSONResponse(content={"url": url})


@router.post("/verify-payment")
def verify_payment(
    payload: VerifyPaymentPayload,
    gateway: StripeGateway = Depends(get_payment_gateway),
    gate: PaymentSessionGate = Depends(get_payment_session_gate),
) -> JSONResponse:
    """
    Check a returned checkout session and open the payment session if it was paid.

    Returns:
        JSONResponse: {"success": true} when paid, otherwise
        {"success": false, "error": ...}
    """
    if not payload.sessionId:
        return JSONResponse(
            status_code=400, content={"success": False, "error": "Session ID is required"}
        )

    try:
        paid = gateway.verify_payment(payload.sessionId)
    except HotelHubError as e:
        return JSONResponse(status_code=e.status_code, content={"success": False, "error": e.message})

    if not paid:
        return JSONResponse(content={"success": False, "error": "Payment not completed"})

    gate.create(payload.sessionId)
    return JSONResponse(content={"success": True})


@router.get("/payment-session")
def get_payment_session(
    gate: PaymentSessionGate = Depends(get_payment_session_gate),
) -> dict[str, Any]:
    """Report whether a paid session is active and how long it has left."""
    session = gate.read()
    return {
        "valid": gate.is_valid(),
        "session": session.to_record() if session else None,
        "remaining": gate.format_remaining(),
    }


@router.delete("/payment-session")
def clear_payment_session(
    gate: PaymentSessionGate = Depends(get_payment_session_gate),
) -> dict[str, str]:
    gate.clear()
    logger.info("payment_session_cleared")
    return {"message": "Payment session cleared"}
