# core/security.py

from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from core.config import settings


def create_access_token(
    subject: str,
    claims: Dict[str, Any],
    expires_minutes: Optional[int] = None,
) -> str:
    """Sign a session token. The role claim is fixed for the token's lifetime."""
    minutes = expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    payload = {
        **claims,
        "sub": subject,
        "exp": datetime.utcnow() + timedelta(minutes=minutes),
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Raises JWTError on a bad signature, malformed token or expiry."""
    if not settings.JWT_SECRET_KEY:
        raise JWTError("JWT secret not configured")
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
