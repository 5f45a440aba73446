"""
Stripe Checkout client.

Creates one-off checkout sessions for a configured price and later checks
whether a session was paid. The Stripe SDK is called with a per-request API
key so the gateway can be constructed (and faked) without touching the
module-level stripe.api_key.
"""

from __future__ import annotations

import time
from typing import Optional

import stripe
import structlog

from hotelhub.config import STRIPE_SECRET_KEY
from hotelhub.errors import ConfigurationMissing, PaymentVerificationFailed
from hotelhub.metrics import payment_requests

logger = structlog.get_logger(__name__)


class StripeGateway:
    """
    Thin wrapper around stripe.checkout.Session.

    Example:
        >>> gateway = StripeGateway("sk_test_...")
        >>> url = gateway.create_checkout_session("price_123", "https://example.com/payment")
    """

    def __init__(self, secret_key: Optional[str] = None) -> None:
        self.secret_key = secret_key if secret_key is not None else STRIPE_SECRET_KEY

    def _api_key(self) -> str:
        if not self.secret_key:
            raise ConfigurationMissing("Stripe secret key not configured")
        return self.secret_key

    def create_checkout_session(self, price_id: str, return_url: str) -> str:
        """
        Create a card checkout for a single unit of price_id.

        Stripe redirects back to return_url with ?session_id=... on success and
        to return_url unchanged on cancel.

        Returns:
            str: Hosted checkout URL

        Raises:
            ConfigurationMissing: No Stripe secret key configured
            PaymentVerificationFailed: Stripe rejected the request
        """
        api_key = self._api_key()
        start_time = time.time()
        try:
            session = stripe.checkout.Session.create(
                api_key=api_key,
                payment_method_types=["card"],
                line_items=[{"price": price_id, "quantity": 1}],
                mode="payment",
                success_url=f"{return_url}?session_id={{CHECKOUT_SESSION_ID}}",
                cancel_url=return_url,
            )
        except stripe.StripeError as e:
            payment_requests.labels(operation="create_checkout_session", status="error").inc()
            logger.error("stripe_checkout_failed", price_id=price_id, error=str(e))
            raise PaymentVerificationFailed(
                e.user_message or "Failed to create checkout session"
            ) from e

        payment_requests.labels(operation="create_checkout_session", status="success").inc()
        logger.info(
            "stripe_checkout_created",
            checkout_session_id=session.id,
            duration=round(time.time() - start_time, 3),
        )
        return str(session.url)

    def verify_payment(self, session_id: str) -> bool:
        """
        Return True if the checkout session has payment_status "paid".

        Raises:
            ConfigurationMissing: No Stripe secret key configured
            PaymentVerificationFailed: The session could not be retrieved
        """
        api_key = self._api_key()
        try:
            session = stripe.checkout.Session.retrieve(session_id, api_key=api_key)
        except stripe.StripeError as e:
            payment_requests.labels(operation="verify_payment", status="error").inc()
            logger.error("stripe_verify_failed", checkout_session_id=session_id, error=str(e))
            raise PaymentVerificationFailed(e.user_message or "Failed to verify payment") from e

        paid = session.payment_status == "paid"
        payment_requests.labels(
            operation="verify_payment", status="success" if paid else "unpaid"
        ).inc()
        logger.info("stripe_payment_checked", checkout_session_id=session_id, paid=paid)
        return paid
