"""API rate limiting, request tracing and input validation helpers.

Provides:
- Per-client in-memory sliding-window rate limiting
- ``X-Request-ID`` response header for tracing
- Request logging with hashed client IP
- Hash path/body validation
"""

import hashlib
import logging
import threading
import time
import uuid
from collections import defaultdict

from fastapi import HTTPException, Request, Response

from docchain.config import get_config
from docchain.hashing import is_well_formed_hash

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Input validation helpers
# ---------------------------------------------------------------------------

def validate_hash(value: str) -> str:
    """Validate a 64-hex-character hash and return it lowercased.

    Surrounding whitespace is rejected, not stripped.
    """
    if not is_well_formed_hash(value):
        raise HTTPException(status_code=400, detail="Invalid hash format")
    return value.lower()


# ---------------------------------------------------------------------------
# Rate limiting (in-memory sliding window)
# ---------------------------------------------------------------------------

_rate_buckets: dict[str, list[float]] = defaultdict(list)
_rate_lock = threading.Lock()


def _check_rate_limit(key: str, max_requests: int, window_seconds: int = 60):
    """Enforce a sliding-window rate limit per key.

    Raises 429 if the caller has exceeded ``max_requests`` within the
    rolling ``window_seconds`` window. Keys whose timestamps have all
    expired are dropped, so the table only holds recently active clients.
    """
    with _rate_lock:
        now = time.monotonic()
        _prune_expired(now, window_seconds)
        bucket = _rate_buckets[key]

        if len(bucket) >= max_requests:
            raise HTTPException(
                status_code=429,
                detail=f"Rate limit exceeded. Max {max_requests} requests per {window_seconds}s.",
            )
        bucket.append(now)


def _prune_expired(now: float, window_seconds: int):
    """Drop expired timestamps, and keys left empty. Caller holds ``_rate_lock``."""
    for key in list(_rate_buckets):
        live = [ts for ts in _rate_buckets[key] if now - ts < window_seconds]
        if live:
            _rate_buckets[key] = live
        else:
            del _rate_buckets[key]


def rate_limit_default(request: Request):
    """Per-client limit from ``DOCCHAIN_RATE_LIMIT_PER_MINUTE`` (0 disables)."""
    limit = get_config().rate_limit_per_minute
    if limit <= 0:
        return
    client = _hash_ip(request.client.host if request.client else None)
    _check_rate_limit(f"default:{client}", max_requests=limit)


# ---------------------------------------------------------------------------
# Request-ID and logging middleware
# ---------------------------------------------------------------------------

def _hash_ip(ip: str | None) -> str:
    """Return a one-way hash of the client IP for privacy-safe logging."""
    if not ip:
        return "unknown"
    return hashlib.sha256(ip.encode()).hexdigest()[:12]


async def request_logging_middleware(request: Request, call_next):
    """Add X-Request-ID header and log every request with timing."""
    request_id = str(uuid.uuid4())
    start = time.monotonic()

    response: Response = await call_next(request)

    elapsed_ms = int((time.monotonic() - start) * 1000)
    response.headers["X-Request-ID"] = request_id

    logger.info(
        "request_id=%s ip=%s method=%s path=%s status=%d duration_ms=%d",
        request_id,
        _hash_ip(request.client.host if request.client else None),
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response
