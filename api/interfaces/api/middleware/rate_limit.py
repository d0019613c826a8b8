# api/interfaces/api/middleware/rate_limit.py
from __future__ import annotations

import time
from collections import defaultdict

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.infrastructure.config import get_settings

_WINDOW_SECONDS = 60.0


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding one-minute window per client IP. In-process only: each worker counts alone."""

    def __init__(self, app: object) -> None:
        super().__init__(app)  # type: ignore[arg-type]
        self._hits: dict[str, list[float]] = defaultdict(list)

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        limit = get_settings().rate_limit_per_minute

        # 0 = unlimited (tests)
        if limit == 0:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        now = time.time()
        hits = [t for t in self._hits[client_ip] if now - t < _WINDOW_SECONDS]

        if len(hits) >= limit:
            self._hits[client_ip] = hits
            retry_after = int(_WINDOW_SECONDS - (now - hits[0])) + 1
            return Response(
                content='{"detail": "Too many requests. Try again shortly."}',
                status_code=429,
                media_type="application/json",
                headers={"Retry-After": str(retry_after)},
            )

        hits.append(now)
        self._hits[client_ip] = hits
        return await call_next(request)
