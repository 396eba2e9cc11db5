from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from .analytics.aggregator import compute_personal_stats, compute_stats
from .analytics.feedback import get_feedback, record_feedback
from .analytics.store import get_search, get_searches, record_interaction, record_search
from .auth.config import DEFAULT_AUTH_CONFIG
from .auth.dependencies import optional_user, require_user
from .auth.models import (
    LoginRequest,
    RegisterRequest,
    ResendVerificationRequest,
    UpdateProfileRequest,
    VerifyEmailRequest,
)
from .auth.tokens import issue_token
from .auth.users import (
    authenticate,
    create_user,
    get_user,
    get_user_by_email,
    mark_verified,
    public_user,
    set_plan,
    touch_login,
    update_user,
)
from .auth.verification import generate_code, save_code, verify_code
from .billing.config import DEFAULT_BILLING_CONFIG, BillingConfig
from .billing.models import CheckoutRequest, CheckoutResponse
from .billing.payments import get_payments, has_session, record_payment, total_spent
from .billing.plans import get_plan
from .billing.stripe_client import (
    CheckoutError,
    WebhookError,
    construct_event,
    create_checkout_session,
)
from .gifts.aggregator import search_gifts
from .gifts.analyzer import InvalidProfile, analyze
from .gifts.config import DEFAULT_STORE_CONFIG, PLAN_ESSENTIAL
from .gifts.models import (
    FeedbackRequest,
    FeedbackResponse,
    GiftProfile,
    GiftSearchResponse,
    InteractionRequest,
    SearchAnalysis,
)
from .gifts.ranking import entitled_plan
from .gifts.stores import GiftProvider, build_providers
from .mail.sender import send_verification_email, send_welcome_email

logger = logging.getLogger(__name__)

app = FastAPI(title="GiftGenius API", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Dependencies ─────────────────────────────────────────────────────────


def get_providers() -> list[GiftProvider]:
    return build_providers(DEFAULT_STORE_CONFIG)


def get_billing_config() -> BillingConfig:
    return DEFAULT_BILLING_CONFIG


def _active_plan(user: dict[str, Any]) -> str | None:
    expires_at = user.get("plan_expires_at")
    if user.get("current_plan") and expires_at and expires_at > datetime.now(timezone.utc):
        return user["current_plan"]
    return None


def _send_code(email: str, name: str) -> tuple[str, bool]:
    code = generate_code()
    save_code(email, code)
    return code, send_verification_email(email, name, code)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/stats")
def stats() -> dict:
    return compute_stats()


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/api/auth/register", status_code=201)
def register(body: RegisterRequest, response: Response) -> dict:
    existing = get_user_by_email(body.email)
    if existing is not None:
        if existing["email_verified"]:
            raise HTTPException(status_code=400, detail="Email already registered")
        # Unverified account: let the user ask for a fresh code
        code, sent = _send_code(existing["email"], existing["name"])
        if not sent and not DEFAULT_AUTH_CONFIG.expose_debug_codes:
            raise HTTPException(status_code=500, detail="Could not send verification email")
        response.status_code = 200
        result = {
            "message": "Verification code re-sent. Check your inbox.",
            "needs_verification": True,
            "email": existing["email"],
        }
        if not sent:
            result["debug_code"] = code
        return result

    user = create_user(body.name, body.email, body.password)
    code, sent = _send_code(user["email"], user["name"])
    result = {
        "message": "Account created. Check your email to activate it.",
        "user_id": user["id"],
        "needs_verification": True,
        "email": user["email"],
    }
    if not sent:
        logger.warning("Verification email not delivered to %s", user["email"])
        if DEFAULT_AUTH_CONFIG.expose_debug_codes:
            result["debug_code"] = code
    return result


@app.post("/api/auth/verify-email")
def verify_email(body: VerifyEmailRequest) -> dict:
    if not verify_code(body.email, body.code):
        raise HTTPException(status_code=400, detail="Invalid or expired code")

    user = mark_verified(body.email)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")

    send_welcome_email(user["email"], user["name"])
    return {
        "message": "Email verified. Your account is active.",
        "verified": True,
        "token": issue_token(user),
        "user": public_user(user),
    }


@app.post("/api/auth/resend-verification")
def resend_verification(body: ResendVerificationRequest) -> dict:
    user = get_user_by_email(body.email)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    if user["email_verified"]:
        raise HTTPException(status_code=400, detail="Email already verified")

    _, sent = _send_code(user["email"], user["name"])
    if not sent:
        raise HTTPException(status_code=500, detail="Could not send verification email")
    return {"message": "A new code was sent to your email."}


@app.post("/api/auth/login")
def login(body: LoginRequest) -> dict:
    user = authenticate(body.email, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if not user["email_verified"]:
        raise HTTPException(
            status_code=401,
            detail={
                "error": "Email not verified. Check your inbox.",
                "needs_verification": True,
                "email": user["email"],
            },
        )

    touch_login(user["id"])
    return {
        "message": "Login successful",
        "token": issue_token(user),
        "user": public_user(user),
    }


@app.get("/api/auth/profile")
def profile(user: dict = Depends(require_user)) -> dict:
    return {
        "user": {
            **public_user(user),
            "created_at": user["created_at"],
            "last_login": user["last_login"],
        },
        "recent_searches": get_searches(user["id"], limit=20),
        "personal_stats": compute_personal_stats(user["id"]),
        "current_plan": _active_plan(user) or PLAN_ESSENTIAL,
    }


@app.put("/api/auth/update-profile")
def update_profile(body: UpdateProfileRequest, user: dict = Depends(require_user)) -> dict:
    other = get_user_by_email(body.email)
    if other is not None and other["id"] != user["id"]:
        raise HTTPException(status_code=400, detail="Email already in use")

    updated = update_user(user["id"], body.name, body.email, body.password)
    return {"message": "Profile updated", "user": public_user(updated)}


# ── Gift endpoints ───────────────────────────────────────────────────────


@app.post("/api/gifts/find-gifts", response_model=GiftSearchResponse)
async def find_gifts(
    body: GiftProfile,
    user: dict | None = Depends(optional_user),
    providers: list[GiftProvider] = Depends(get_providers),
) -> GiftSearchResponse:
    try:
        spec = analyze(body)
    except InvalidProfile as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    plan = entitled_plan(body.plan, _active_plan(user) if user else None)
    result = await search_gifts(spec, plan, providers)

    search_id = record_search(
        user["id"] if user else None,
        result.elapsed_ms,
        result.selected,
        result.total_found,
        body.model_dump(),
    )

    return GiftSearchResponse(
        search_id=search_id,
        gifts=result.gifts,
        plan=plan,
        max_results=result.max_results,
        analysis=SearchAnalysis(
            categories=list(spec.categories),
            keywords=result.keywords_queried,
            priority=list(spec.priority),
            price_range=spec.price_range,
            processing_time_ms=result.elapsed_ms,
            total_found=result.total_found,
            selected=result.selected,
        ),
    )


@app.post("/api/gifts/feedback", response_model=FeedbackResponse)
def feedback(body: FeedbackRequest, user: dict = Depends(require_user)) -> FeedbackResponse:
    if body.search_id is not None:
        search = get_search(body.search_id)
        if search is None or search["user_id"] not in (None, user["id"]):
            raise HTTPException(status_code=404, detail="Search not found")

    record_feedback(user["id"], body.search_id, body.rating, body.satisfied, body.comments)
    return FeedbackResponse(status="recorded", total_feedback=len(get_feedback()))


@app.post("/api/track-interaction")
def track_interaction(body: InteractionRequest, user: dict = Depends(require_user)) -> dict:
    record_interaction(user["id"], body.gift_name, body.store, body.action)
    return {"status": "recorded"}


@app.get("/api/dashboard/summary")
def dashboard_summary(user: dict = Depends(require_user)) -> dict:
    return {
        "total_searches": len(get_searches(user["id"])),
        "total_spent": total_spent(user["id"]),
        "current_plan": _active_plan(user) or PLAN_ESSENTIAL,
        "plan_expires_at": user["plan_expires_at"],
        "last_searches": get_searches(user["id"], limit=5),
        "feedbacks": list(reversed(get_feedback(user["id"])))[:5],
    }


# ── Billing endpoints ────────────────────────────────────────────────────


@app.post("/api/stripe/create-checkout-session", response_model=CheckoutResponse)
def create_checkout(
    body: CheckoutRequest,
    request: Request,
    user: dict = Depends(require_user),
    config: BillingConfig = Depends(get_billing_config),
) -> CheckoutResponse:
    plan = get_plan(body.plan)
    if plan is None:
        raise HTTPException(status_code=400, detail="Invalid plan")
    if not config.enabled:
        raise HTTPException(status_code=503, detail="Payments are not configured")

    if _active_plan(user) == plan.key:
        expires = user["plan_expires_at"].strftime("%d/%m/%Y")
        raise HTTPException(
            status_code=409,
            detail=f'Plan "{plan.key}" is already active until {expires}',
        )

    origin = request.headers.get("origin") or str(request.base_url).rstrip("/")
    try:
        session_id = create_checkout_session(user["id"], plan, origin, config)
    except CheckoutError:
        raise HTTPException(status_code=502, detail="Payment provider unavailable")
    return CheckoutResponse(session_id=session_id)


@app.post("/api/stripe/webhook")
async def stripe_webhook(
    request: Request,
    config: BillingConfig = Depends(get_billing_config),
) -> dict:
    payload = await request.body()
    try:
        event = construct_event(payload, request.headers.get("stripe-signature"), config)
    except WebhookError as exc:
        raise HTTPException(status_code=400, detail=f"Webhook error: {exc}")

    if event.get("type") == "checkout.session.completed":
        session = (event.get("data") or {}).get("object") or {}
        metadata = session.get("metadata") or {}
        try:
            session_id = str(session["id"])
            user_id = int(metadata["user_id"])
            plan_key = metadata["plan"]
        except (KeyError, TypeError, ValueError):
            logger.warning("Checkout session %s has no usable metadata", session.get("id"))
            return {"received": True}

        if get_user(user_id) is None or get_plan(plan_key) is None:
            logger.warning("Checkout session %s references unknown user or plan", session_id)
        elif has_session(session_id):
            logger.info("Checkout session %s already processed", session_id)
        else:
            record_payment(user_id, session_id, plan_key, int(session.get("amount_total") or 0))
            set_plan(
                user_id,
                plan_key,
                datetime.now(timezone.utc) + timedelta(days=config.plan_days),
            )
            logger.info("Payment processed: %s", session_id)

    return {"received": True}


@app.get("/api/stripe/billing-info")
def billing_info(user: dict = Depends(require_user)) -> dict:
    payments = get_payments(user["id"])[:10]
    return {
        "current_plan": _active_plan(user),
        "plan_expires_at": user["plan_expires_at"],
        "payments": payments,
        "total_spent": sum(p["amount"] for p in payments),
    }
