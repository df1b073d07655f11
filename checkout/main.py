import logging
import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from checkout.core.config import settings

# 1. Infrastructure & Application Imports
from checkout.infrastructure.database import ensure_schema, dispose_engine
from checkout.infrastructure.repositories.order_repository import PostgresOrderRepository
from checkout.application.order_service import OrderIntakeService
from checkout.interfaces import orders_api

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
}


class StartupError(RuntimeError):
    """The schema could not be verified; the server must not take traffic."""


# ---------------------------------------------------------
# DATABASE SCHEMA (fail fast, no retry)
# ---------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        ensure_schema()
    except Exception as e:
        logger.critical(f"❌ Schema init failed: {e}", exc_info=True)
        raise StartupError("schema bootstrap failed") from e
    logger.info(f"🚀 {settings.PROJECT_NAME} ready on port {settings.PORT}")
    yield
    # uvicorn drains in-flight requests before lifespan shutdown runs
    dispose_engine()


def create_app(order_repo=None, run_schema_bootstrap: bool = True) -> FastAPI:
    app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan if run_schema_bootstrap else None)

    # ---------------------------------------------------------
    # COMPOSITION ROOT
    # ---------------------------------------------------------
    app.state.order_service = OrderIntakeService(
        order_repo=order_repo or PostgresOrderRepository(),
        unit_price_cents=settings.PRICE_CENTS,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"{request.method} {request.url.path} {response.status_code} - {elapsed_ms:.1f} ms")
        return response

    @app.exception_handler(RequestValidationError)
    async def malformed_body_handler(request: Request, exc: RequestValidationError):
        # Body was not a JSON object; answer in the same shape as field errors
        return JSONResponse(
            status_code=422,
            content={"ok": False, "errors": {"body": "Request body must be a JSON object"}},
        )

    # Include Routers
    app.include_router(orders_api.router)

    # Landing page assets, mounted last so /api wins
    if settings.STATIC_DIR and os.path.isdir(settings.STATIC_DIR):
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")

    return app


app = create_app()
