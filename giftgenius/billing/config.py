from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class BillingConfig:
    secret_key: str = os.getenv("STRIPE_SECRET_KEY", "")
    webhook_secret: str = os.getenv("STRIPE_WEBHOOK_SECRET", "")
    currency: str = "brl"
    plan_days: int = 30

    @property
    def enabled(self) -> bool:
        return bool(self.secret_key)


DEFAULT_BILLING_CONFIG = BillingConfig()
