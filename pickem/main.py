from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from pickem.core.config import get_settings
from pickem.core.logging import setup_logging
from pickem.db.session import init_db
from pickem.services.scheduler import shutdown_scheduler, start_scheduler
from pickem.services.standings import StandingsUnavailableError

# Routers
from pickem.routers import debug as debug_router
from pickem.routers import games as games_router
from pickem.routers import picks as picks_router
from pickem.routers import results as results_router
from pickem.routers import standings as standings_router


settings = get_settings()
setup_logging()
logger = logging.getLogger("pickem")

app = FastAPI(title=settings.APP_NAME)


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        t0 = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            logger.info(
                "%s %s q=%s -> %s in %.1fms",
                request.method,
                request.url.path,
                request.url.query,
                status,
                (time.perf_counter() - t0) * 1000,
            )


# Middleware
app.add_middleware(AccessLogMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    detail = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()) if p != 'body')}: {err.get('msg')}" for err in exc.errors()
    )
    return JSONResponse({"error": "Invalid request", "detail": detail}, status_code=400)


@app.exception_handler(StandingsUnavailableError)
async def standings_unavailable(request: Request, exc: StandingsUnavailableError):
    return JSONResponse({"error": "Standings unavailable", "detail": str(exc)}, status_code=500)


@app.exception_handler(Exception)
async def server_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"error": "Server error", "detail": str(exc)}, status_code=500)


@app.on_event("startup")
def on_startup() -> None:
    init_db()
    logger.info("Database tables ensured.")

    if not settings.SCHEDULER_ENABLED:
        logger.info("Background scheduler disabled")
        return
    try:
        start_scheduler()
    except Exception:
        logger.exception("Failed to start background scheduler")


@app.on_event("shutdown")
def on_shutdown() -> None:
    try:
        shutdown_scheduler()
    except Exception:
        logger.exception("Failed to shutdown background scheduler")


@app.get("/healthz", response_class=PlainTextResponse)
def healthz():
    return "ok"


# Include routers
app.include_router(games_router.router)
app.include_router(picks_router.router)
app.include_router(results_router.router)
app.include_router(standings_router.router)
app.include_router(debug_router.router)
