"""
EasyBuild Content API - Write Rate Limiting Middleware
========================================================

What:  Per-IP sliding window limit on content writes (POST, PUT, DELETE).
How:   Tracks the timestamps of each IP's recent writes in memory. Reads are
       never limited; the public site reads on every page view.
When:  First in the middleware chain, before any database work.

Algorithm: Sliding Window Counter
    1. Each IP gets a list of write timestamps
    2. On each write, drop timestamps older than the window
    3. If the remaining count >= limit, reject with 429
    4. Otherwise record the current timestamp and let the request through

The state lives in one process. Several workers each keep their own window.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, List, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from easybuild.config import settings
from easybuild.exceptions import RateLimitExceededError
from easybuild.schemas.common import Envelope

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    In-memory sliding window rate limiter for mutating requests.

    Configuration (from settings unless passed explicitly):
        rate_limit_requests: max writes per window
        rate_limit_window:   window duration in seconds

    Response on rate limit:
        HTTP 429 with the error envelope and a Retry-After header.
    """

    LIMITED_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})

    def __init__(
        self,
        app,
        max_requests: Optional[int] = None,
        window_seconds: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(app, **kwargs)
        self.max_requests = max_requests or settings.rate_limit_requests
        self.window_seconds = window_seconds or settings.rate_limit_window
        self._requests: Dict[str, List[float]] = defaultdict(list)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method not in self.LIMITED_METHODS:
            return await call_next(request)

        # Behind a proxy this is the proxy's address
        client_ip = (
            getattr(request.client, "host", "unknown")
            if request.client
            else "unknown"
        )

        now = time.time()
        window_start = now - self.window_seconds

        # ── Sliding Window: drop old entries ──────────────────────────────
        self._requests[client_ip] = [
            ts for ts in self._requests[client_ip] if ts > window_start
        ]

        # ── Check rate limit ──────────────────────────────────────────────
        if len(self._requests[client_ip]) >= self.max_requests:
            oldest = self._requests[client_ip][0]
            retry_after = int(oldest + self.window_seconds - now) + 1
            exc = RateLimitExceededError(retry_after=retry_after)

            logger.warning(
                "Write rate limit exceeded for IP %s: %d requests in %ds window",
                client_ip,
                len(self._requests[client_ip]),
                self.window_seconds,
            )

            return JSONResponse(
                status_code=429,
                content=Envelope(
                    success=False, message=exc.message, error=exc.error_code
                ).to_content(),
                headers={"Retry-After": str(retry_after)},
            )

        # ── Record this request ───────────────────────────────────────────
        self._requests[client_ip].append(now)

        # Every 1000th tracked write, forget IPs with no writes in the window
        if sum(len(v) for v in self._requests.values()) % 1000 == 0:
            self._cleanup_inactive_ips(window_start)

        return await call_next(request)

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        inactive_ips = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or max(timestamps) < window_start
        ]
        for ip in inactive_ips:
            del self._requests[ip]

        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
