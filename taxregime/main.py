"""
main.py — FastAPI application entry point.

Start with: uvicorn taxregime.main:app --reload --port 8000
"""
import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taxregime.api.routes import router as calculator_router
from taxregime.config import settings
from taxregime.engine.regime_config import SUPPORTED_TAX_YEARS

# ---------------------------------------------------------------------------
# Logging: configured before anything else
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# FastAPI application instance
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Tax Regime Calculator API",
    version=settings.app_version,
    description=(
        "Computes Indian income tax under the Old and New regimes — slab tax, "
        "surcharge with marginal relief, Section 87A rebate and cess — "
        "and recommends the cheaper regime."
    ),
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

# ---------------------------------------------------------------------------
# CORS middleware: restricted to frontend origins from settings
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Error response helper
# ---------------------------------------------------------------------------
def _make_error_response(
    code: str,
    message: str,
    details: list[dict[str, Any]] | None = None,
    status_code: int = 500,
) -> JSONResponse:
    """Build a standard {error: {code, message, details}} response."""
    body = {
        "error": {
            "code": code,
            "message": message,
            "details": details or [],
        }
    }
    return JSONResponse(status_code=status_code, content=body)


# ---------------------------------------------------------------------------
# Global exception handlers: registered BEFORE routers
# ---------------------------------------------------------------------------
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Converts pydantic / FastAPI 422 validation errors to standard format.
    Returns ALL field violations in one response.
    """
    details = []
    for error in exc.errors():
        # Dot-notation field path, excluding the top-level 'body' loc
        field = ".".join(str(loc) for loc in error["loc"] if loc != "body")
        details.append({"field": field or None, "issue": error["msg"]})
    return _make_error_response(
        code="VALIDATION_ERROR",
        message="Request validation failed",
        details=details,
        status_code=422,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Converts HTTPException to standard error format with semantic code."""
    code_map = {
        400: "BAD_REQUEST",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        422: "VALIDATION_ERROR",
    }
    code = code_map.get(exc.status_code, f"HTTP_{exc.status_code}")
    return _make_error_response(
        code=code,
        message=str(exc.detail),
        status_code=exc.status_code,
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """
    Catch-all for unexpected errors.
    DEBUG=true  → includes exception type & message in details (dev only).
    DEBUG=false → generic message; full traceback logged server-side only.
    """
    logger.error(
        "Unhandled exception on %s %s",
        request.method,
        request.url.path,
        exc_info=True,
    )
    if settings.debug:
        details = [{"issue": f"{type(exc).__name__}: {exc}"}]
        message = "An unexpected error occurred (debug details included)"
    else:
        details = []
        message = "An unexpected error occurred"
    return _make_error_response(
        code="INTERNAL_ERROR",
        message=message,
        details=details,
        status_code=500,
    )


# ---------------------------------------------------------------------------
# Health endpoint
# ---------------------------------------------------------------------------
@app.get("/api/health", tags=["System"])
async def health_check() -> dict:
    return {
        "status": "ok",
        "version": settings.app_version,
        "default_tax_year": settings.default_tax_year,
        "supported_tax_years": list(SUPPORTED_TAX_YEARS),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


app.include_router(calculator_router)
