# core/rate_limiter.py

from typing import Dict, List, Optional
from collections import defaultdict
from threading import Lock
from fastapi import HTTPException, Request
import time


# Failed login attempts per identifier, in-memory
# Resets on process restart; fine for a single-instance deployment
_failures: Dict[str, List[float]] = defaultdict(list)
_lock = Lock()


def _prune(identifier: str, window_seconds: int, now: float) -> List[float]:
    window_start = now - window_seconds
    recent = [ts for ts in _failures[identifier] if ts > window_start]
    if recent:
        _failures[identifier] = recent
    else:
        _failures.pop(identifier, None)
    return recent


def get_rate_limit_identifier(request: Request, email: Optional[str] = None) -> str:
    """
    Identifier for login throttling: email plus client IP.

    Args:
        request: FastAPI Request object
        email: The email being attempted, if any

    Returns:
        Unique identifier string
    """
    client_ip = request.client.host if request.client else "unknown"

    # Check for forwarded IP (common behind proxies)
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        client_ip = forwarded_for.split(",")[0].strip()

    if email:
        return f"login:{email.lower()}:{client_ip}"
    return f"ip:{client_ip}"


def require_not_blocked(identifier: str, max_attempts: int, window_seconds: int):
    """
    Raise 429 when the identifier has used up its failed attempts.

    Raises:
        HTTPException: 429 Too Many Requests
    """
    with _lock:
        recent = _prune(identifier, window_seconds, time.time())
        if len(recent) < max_attempts:
            return
        retry_after = max(1, int(recent[0] + window_seconds - time.time()))

    raise HTTPException(
        status_code=429,
        detail="Too many failed attempts. Please wait before trying again.",
        headers={
            "X-RateLimit-Limit": str(max_attempts),
            "X-RateLimit-Window": str(window_seconds),
            "Retry-After": str(retry_after),
        },
    )


def record_failure(identifier: str):
    with _lock:
        _failures[identifier].append(time.time())


def reset_failures(identifier: str):
    with _lock:
        _failures.pop(identifier, None)


def clear_rate_limits():
    with _lock:
        _failures.clear()
