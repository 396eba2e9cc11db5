from __future__ import annotations

from pydantic import BaseModel, Field


class CheckoutRequest(BaseModel):
    plan: str = Field(..., min_length=1)


class CheckoutResponse(BaseModel):
    session_id: str
