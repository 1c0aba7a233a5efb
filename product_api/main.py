"""FastAPI application bootstrap and router wiring."""

from contextlib import asynccontextmanager
import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from product_api.api.routers import health, products
from product_api.api.validation.aggregator import (
    InputValidationError,
    input_validation_exception_handler,
    request_validation_exception_handler,
)
from product_api.core.config import get_settings
from product_api.db.session import init_db

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and latency of every request."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.3f} ms"
        )
        return response


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTP errors as ``{"error": detail}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Instantiate the FastAPI app and include top-level routers."""
    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        description="API for Products",
        openapi_tags=[
            {"name": "Products", "description": "Operations about products"},
        ],
        lifespan=lifespan,
    )

    logger.info(f"[CORS] Allowed origins: {settings.cors_origins}")

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(InputValidationError, input_validation_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    app.include_router(health.router)
    app.include_router(products.router)

    return app


app = create_app()
