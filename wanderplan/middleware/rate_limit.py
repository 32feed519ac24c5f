"""
Per-client request rate limiting.

Outbound lookups (city search, weather, places) are metered by third-party
quotas, so each client gets a sliding one-minute request budget. A client is
the subject of a valid access token, otherwise the peer IP; arbitrary
Authorization headers therefore share their IP's budget.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import time
import logging
from typing import Dict, Optional
from collections import defaultdict, deque
from dataclasses import dataclass, field

from wanderplan.core.exceptions import RateLimitExceededError
from wanderplan.core.identity import bearer_token
from wanderplan.core.jwt import ACCESS, decode_token
from wanderplan.schemas.base import StandardErrorResponse

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 60
# Clients idle for a whole window hold no state worth keeping
SWEEP_INTERVAL_SECONDS = 60
EXEMPT_PATHS = {"/", "/health", "/docs", "/redoc", "/openapi.json"}


@dataclass
class RateLimitInfo:
    """Request timestamps for one client within the current window."""
    requests: deque = field(default_factory=deque)
    last_request_time: float = 0.0


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding-window requests-per-minute limit keyed by token subject or client IP."""

    def __init__(self, app, max_requests_per_minute: int = 120):
        super().__init__(app)
        self.max_requests_per_minute = max_requests_per_minute
        self.client_limits: Dict[str, RateLimitInfo] = defaultdict(RateLimitInfo)
        self._last_sweep = time.time()

    def _get_client_id(self, request: Request) -> str:
        token = bearer_token(request)
        if token:
            payload = decode_token(token, ACCESS)
            if payload and payload.get("sub"):
                return f"user:{payload['sub']}"
        client_ip = request.client.host if request.client else 'unknown'
        return f"ip:{client_ip}"

    def _cleanup_expired_requests(self, client_info: RateLimitInfo, now: float) -> None:
        window_start = now - WINDOW_SECONDS
        while client_info.requests and client_info.requests[0] < window_start:
            client_info.requests.popleft()

    def evict_idle_clients(self, now: float) -> int:
        """Drop clients without a request in the last window; returns how many."""
        expired = [
            client_id for client_id, info in self.client_limits.items()
            if now - info.last_request_time > WINDOW_SECONDS
        ]
        for client_id in expired:
            del self.client_limits[client_id]
        self._last_sweep = now
        if expired:
            logger.debug(f"Cleaned up rate limit data for {len(expired)} idle clients")
        return len(expired)

    def _check_rate_limit(self, request: Request, client_id: str, now: float) -> Optional[JSONResponse]:
        """
        Returns:
            JSONResponse with 429 status if rate limited, None otherwise
        """
        client_info = self.client_limits[client_id]
        self._cleanup_expired_requests(client_info, now)

        if len(client_info.requests) < self.max_requests_per_minute:
            return None

        retry_after = int(WINDOW_SECONDS - (now - client_info.requests[0])) + 1
        logger.warning(
            f"Rate limit exceeded for client {client_id}: {len(client_info.requests)} requests in last minute"
        )
        exc = RateLimitExceededError(self.max_requests_per_minute, retry_after)
        body = StandardErrorResponse(
            error_code=exc.error_code.value,
            message=exc.message,
            details=exc.details,
            request_id=getattr(request.state, "request_id", "unknown"),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=body.model_dump(mode="json"),
            headers={"Retry-After": str(retry_after)},
        )

    async def dispatch(self, request: Request, call_next):
        if request.url.path in EXEMPT_PATHS:
            return await call_next(request)

        now = time.time()
        if now - self._last_sweep >= SWEEP_INTERVAL_SECONDS:
            self.evict_idle_clients(now)

        client_id = self._get_client_id(request)
        limited = self._check_rate_limit(request, client_id, now)
        if limited:
            return limited

        client_info = self.client_limits[client_id]
        client_info.requests.append(now)
        client_info.last_request_time = now

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.max_requests_per_minute)
        response.headers["X-RateLimit-Remaining"] = str(
            max(0, self.max_requests_per_minute - len(client_info.requests))
        )
        response.headers["X-RateLimit-Reset"] = str(int(now + WINDOW_SECONDS))
        return response
