from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from app.platform.config import Settings


def decode_email_token(token: str, settings: Settings) -> dict:
    """Decode and verify an email verification token"""
    try:
        return jwt.decode(token, settings.EMAIL_SECRET, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise ValueError("Token has expired")
    except jwt.PyJWTError:
        raise ValueError("Invalid token")


def create_email_token(
    email: str, tenant: str, settings: Settings, expires_delta: Optional[timedelta] = None
) -> str:
    """Sign an email verification token (normally done by the mailer)"""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(hours=24))
    to_encode = {"email": email, "tenant": tenant, "iat": now, "exp": expire}
    return jwt.encode(to_encode, settings.EMAIL_SECRET, algorithm=settings.ALGORITHM)


def create_session_token(
    *, email: str, user_id: str, tenant_path: str, role: str, settings: Settings
) -> str:
    """Create the session JWT stored in the cross-domain cookie"""
    now = datetime.now(timezone.utc)
    to_encode = {
        "email": email,
        "userId": user_id,
        "tenantPath": tenant_path,
        "role": role,
        "authenticated": True,
        "externalDomain": settings.EXTERNAL_APP_URL,
        "iat": now,
        "exp": now + timedelta(days=settings.SESSION_TOKEN_EXPIRE_DAYS),
    }
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.ALGORITHM)

