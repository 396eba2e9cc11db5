from __future__ import annotations

import json
import logging
from typing import Any

import stripe

from .config import DEFAULT_BILLING_CONFIG, BillingConfig
from .plans import Plan

logger = logging.getLogger(__name__)


class CheckoutError(Exception):
    """Raised when Stripe refuses to open a checkout session."""


class WebhookError(Exception):
    """Raised when a webhook payload cannot be verified or parsed."""


def create_checkout_session(
    user_id: int,
    plan: Plan,
    origin: str,
    config: BillingConfig = DEFAULT_BILLING_CONFIG,
) -> str:
    """Open a one-off Stripe Checkout session and return its id."""
    try:
        session = stripe.checkout.Session.create(
            api_key=config.secret_key,
            payment_method_types=["card"],
            line_items=[{
                "price_data": {
                    "currency": config.currency,
                    "product_data": {"name": plan.name, "description": plan.description},
                    "unit_amount": plan.amount,
                },
                "quantity": 1,
            }],
            mode="payment",
            success_url=f"{origin}/processando?session_id={{CHECKOUT_SESSION_ID}}&plan={plan.key}",
            cancel_url=f"{origin}/dashboard",
            metadata={"user_id": str(user_id), "plan": plan.key},
        )
    except stripe.StripeError as exc:
        logger.warning("Stripe checkout failed for user %s", user_id, exc_info=True)
        raise CheckoutError(str(exc)) from exc
    return session.id


def construct_event(
    payload: bytes,
    signature: str | None,
    config: BillingConfig = DEFAULT_BILLING_CONFIG,
) -> dict[str, Any]:
    """Verify the ``Stripe-Signature`` header and return the event.

    The event is the signed JSON body as a plain ``dict``, not a ``stripe.Event``.
    """
    if not signature or not config.webhook_secret:
        raise WebhookError("Missing signature or webhook secret")
    try:
        body = payload.decode("utf-8")
        stripe.WebhookSignature.verify_header(body, signature, config.webhook_secret)
        event = json.loads(body)
    except (ValueError, stripe.SignatureVerificationError) as exc:
        logger.warning("Stripe webhook verification failed: %s", exc)
        raise WebhookError(str(exc)) from exc
    if not isinstance(event, dict):
        raise WebhookError("Event payload is not a JSON object")
    return event
