"""FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from admissions.core.config import settings
from admissions.core.rate_limit import limiter
from admissions.core.structured_logging import build_log_context
from admissions.db.session import engine

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="Admissions CRM API",
    description="Prospect pipeline, campaigns and reporting for school admissions",
    version=settings.VERSION,
    docs_url="/docs" if settings.ENV == "dev" else None,
    redoc_url="/redoc" if settings.ENV == "dev" else None,
)

# Add rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS middleware - must be added before routers
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,  # Required for cookies
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    expose_headers=["X-Request-ID", "Content-Disposition"],
)

# ============================================================================
# Error Responses
# ============================================================================


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Flatten pydantic errors into field/message pairs."""
    details = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        details.append(
            {
                "field": ".".join(loc) if loc else "body",
                "message": error.get("msg", "Invalid value"),
            }
        )
    return JSONResponse(
        status_code=400,
        content={"error": "Validation failed", "details": details},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    context = build_log_context(
        user_id=getattr(request.state, "user_id", None),
        role=getattr(request.state, "role", None),
        request_id=request.headers.get("X-Request-ID"),
        route=request.url.path,
        method=request.method,
    )
    logger.exception("Unhandled error: %s", context)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ============================================================================
# Routers
# ============================================================================

from admissions.routers import (  # noqa: E402
    admissions_router,
    auth_router,
    campaigns_router,
    communications_router,
    forms_public_router,
    forms_router,
    internal_router,
    metrics_router,
    prospects_router,
    reports_router,
    students_router,
)

# Auth router (always mounted)
app.include_router(auth_router, prefix="/api", tags=["auth"])

app.include_router(prospects_router, prefix="/api/prospectos", tags=["prospects"])
app.include_router(communications_router, prefix="/api/comunicaciones", tags=["communications"])
app.include_router(campaigns_router, prefix="/api/campanas", tags=["campaigns"])
app.include_router(students_router, prefix="/api/estudiantes", tags=["students"])

# Dashboards (role-specific)
app.include_router(metrics_router, prefix="/api/metrics", tags=["metrics"])

app.include_router(reports_router, prefix="/api/reportes", tags=["reports"])
app.include_router(forms_router, prefix="/api/formularios-publicos", tags=["forms"])

# Public lead capture (unauthenticated, already has /api/public/form prefix)
app.include_router(forms_public_router)

# Admission steps: mixed paths under /api/prospectos/{id}/... and /api/pagos
app.include_router(admissions_router)

# Internal endpoints (scheduled/cron jobs - protected by INTERNAL_SECRET)
app.include_router(internal_router)

# ============================================================================
# Health Check
# ============================================================================


@app.get("/health")
def health():
    """
    Health check endpoint.

    Verifies database connectivity and returns environment info.
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return {"status": "ok", "env": settings.ENV, "version": settings.VERSION}
