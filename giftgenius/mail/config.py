from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class MailConfig:
    smtp_host: str = os.getenv("SMTP_HOST", "smtp.gmail.com")
    smtp_port: int = int(os.getenv("SMTP_PORT", "587"))
    username: str = os.getenv("EMAIL_USER", "")
    password: str = os.getenv("EMAIL_PASS", "")
    sender_name: str = "GiftGenius"
    timeout: float = 10.0
    app_url: str = os.getenv("APP_URL", "http://localhost:8000")

    @property
    def enabled(self) -> bool:
        return bool(self.username and self.password)


DEFAULT_MAIL_CONFIG = MailConfig()
