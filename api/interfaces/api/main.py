# api/interfaces/api/main.py
from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from api.infrastructure.config import get_settings
from api.interfaces.api.middleware.rate_limit import RateLimitMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    from api.infrastructure.duckdb_connection import ensure_schema, get_connection

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ensure_schema(get_connection())
    logger.info("registration admission API started (db=%s)", settings.duckdb_path)
    yield


app = FastAPI(
    title="Registration Admission API",
    debug=get_settings().debug,  # never True in production
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url=None,
)


@app.middleware("http")
async def add_security_headers(request: Request, call_next: object) -> Response:
    response = await call_next(request)  # type: ignore[misc]
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    response.headers["Cache-Control"] = "no-store"
    return response  # type: ignore[return-value]


app.add_middleware(RateLimitMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173"],
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["*"],
)

from api.interfaces.api.routes.admission_routes import router as admission_router  # noqa: E402
from api.interfaces.api.routes.company_routes import router as company_router  # noqa: E402
from api.interfaces.api.routes.eligibility_routes import router as eligibility_router  # noqa: E402
from api.interfaces.api.routes.guard_routes import router as guard_router  # noqa: E402
from api.interfaces.api.routes.overlap_routes import router as overlap_router  # noqa: E402

app.include_router(company_router, prefix="/api")
app.include_router(eligibility_router, prefix="/api")
app.include_router(guard_router, prefix="/api")
app.include_router(overlap_router, prefix="/api")
app.include_router(admission_router, prefix="/api")
