from datetime import datetime, timedelta, timezone
from typing import Any

from jose import jwt

from portfolio.core.config import get_settings


class TokenPayload:
    def __init__(self, sub: str, role: str):
        self.sub = sub
        self.role = role


def is_allowed_admin(email: str | None) -> bool:
    if not email:
        return False
    return email.strip() in get_settings().admin_emails


def rejection_message(email: str | None) -> str:
    return f"Login failed: User email '{email or ''}' is not in the allowed list of admin emails."


def create_access_token(subject: str, role: str = "admin") -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_access_token_expire_minutes)
    to_encode: dict[str, Any] = {
        "sub": subject,
        "role": role,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> TokenPayload:
    settings = get_settings()
    payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    return TokenPayload(
        sub=payload.get("sub"),
        role=payload.get("role"),
    )
