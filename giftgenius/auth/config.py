from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class AuthConfig:
    jwt_secret: str = os.getenv("JWT_SECRET", "giftgenius-secret-change-in-production")
    jwt_algorithm: str = "HS256"
    token_ttl_hours: int = 24
    bcrypt_rounds: int = 10
    min_password_length: int = 6
    verification_code_ttl_minutes: int = 15
    expose_debug_codes: bool = os.getenv("GIFTGENIUS_DEBUG_CODES", "").lower() in ("1", "true", "yes")


DEFAULT_AUTH_CONFIG = AuthConfig()
