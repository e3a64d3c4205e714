"""
TestDesk - FastAPI application entry point.

Wires together:
1. Structured JSON logging and the X-Request-ID middleware
2. CORS for the browser frontend
3. Exception handlers mapping application errors to `{"error": ...}`
4. Auth, student, test and creator routers
5. Health and root endpoints

Run locally with `python -m testdesk.main` or `uvicorn testdesk.main:app`.
"""

import time

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from testdesk import config
from testdesk.database import DATABASE_URL, create_tables
from testdesk.errors import TestDeskError
from testdesk.logging_config import (
    setup_logging, get_logger, log_with_context,
    request_id_var, generate_request_id
)
from testdesk.routes import auth, catalog, creator, student

# Register every model on Base.metadata before create_tables()
import testdesk.models  # noqa: F401

# ──────────────────────────────────────────────────────────────
# Logging first, then the schema for local SQLite databases
# ──────────────────────────────────────────────────────────────
setup_logging()
logger = get_logger("http")

if DATABASE_URL.startswith("sqlite"):
    logger.info("Using SQLite, creating tables directly")
    create_tables()

if config.JWT_SECRET == config.DEFAULT_JWT_SECRET:
    log_with_context(logger, "WARNING",
        "JWT_SECRET is not set; tokens are signed with the development default")

# ──────────────────────────────────────────────────────────────
# FastAPI application
# ──────────────────────────────────────────────────────────────
app = FastAPI(
    title="TestDesk",
    description=(
        "Online test-taking backend: authentication, test delivery, "
        "submission scoring with negative marking and creator statistics."
    ),
    version=config.VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

# ──────────────────────────────────────────────────────────────
# CORS Middleware
# ──────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"]
)


# ──────────────────────────────────────────────────────────────
# Request ID Middleware
#
# Unexpected errors become the generic 500 here, so that response still
# carries X-Request-ID and gets a completion log entry.
# ──────────────────────────────────────────────────────────────
@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    """
    Tag each request with a UUID, echo it in X-Request-ID and log the
    request's start and completion with its latency.
    """
    req_id = generate_request_id()
    request_id_var.set(req_id)
    start_time = time.time()

    log_with_context(logger, "INFO",
        f"Request started: {request.method} {request.url.path}",
        extra_data={
            "ip": request.client.host if request.client else "unknown",
            "user_agent": request.headers.get("user-agent", ""),
        })

    try:
        response = await call_next(request)
    except Exception:
        log_with_context(logger, "ERROR",
            f"Unhandled error on {request.method} {request.url.path}",
            exc_info=True)
        response = internal_error_response()

    duration_ms = (time.time() - start_time) * 1000
    response.headers["X-Request-ID"] = req_id

    log_with_context(logger, "INFO",
        f"Request completed: {request.method} {request.url.path} -> {response.status_code}",
        extra_data={
            "duration_ms": round(duration_ms, 2),
            "status_code": response.status_code
        })
    return response


# ──────────────────────────────────────────────────────────────
# Exception handlers: every error body is {"error": message}
# ──────────────────────────────────────────────────────────────
def internal_error_response() -> JSONResponse:
    """Generic 500 body that never echoes exception details."""
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.exception_handler(TestDeskError)
async def testdesk_error_handler(request: Request, exc: TestDeskError):
    """Map application errors to their status code."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report body validation problems as 400 instead of 422."""
    errors = [
        {"field": ".".join(str(part) for part in err.get("loc", ())), "message": err.get("msg")}
        for err in exc.errors()
    ]
    log_with_context(logger, "INFO", f"Invalid request body for {request.url.path}",
                     extra_data={"errors": errors})
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": errors})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Keep routing errors such as 404 and 405 in the common error shape."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail},
                        headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Errors raised outside the request ID middleware."""
    log_with_context(logger, "ERROR",
        f"Unhandled error on {request.method} {request.url.path}: {exc.__class__.__name__}",
        exc_info=True)
    return internal_error_response()


# ──────────────────────────────────────────────────────────────
# Register API routes
# ──────────────────────────────────────────────────────────────
app.include_router(auth.router, tags=["Auth"])
app.include_router(student.router, tags=["Student"])
app.include_router(catalog.router, tags=["Tests"])
app.include_router(creator.router, tags=["Creator"])


# ──────────────────────────────────────────────────────────────
# Health check endpoint
# ──────────────────────────────────────────────────────────────
@app.get("/health", tags=["Health"])
def health_check():
    """Liveness probe for container health checks and monitoring."""
    return {"status": "healthy", "service": config.SERVICE_NAME, "version": config.VERSION}


@app.get("/", tags=["Root"])
def root():
    """Service information and endpoint index."""
    return {
        "service": "TestDesk",
        "version": config.VERSION,
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "login": "POST /api/auth/login",
            "register": "POST /api/auth/register",
            "tests": "GET /api/student/tests",
            "test_detail": "GET /api/test/{id}",
            "submit": "POST /api/student/submit",
            "result": "GET /api/student/result/{submissionId}",
            "creator_stats": "GET /api/creator/stats"
        }
    }


if __name__ == "__main__":
    uvicorn.run("testdesk.main:app", host="0.0.0.0", port=config.PORT)
