"""FastAPI application entrypoint. No business logic; only wiring, middleware and error envelopes."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from schoolhub.api.v1 import router as v1_router
from schoolhub.api.v1.health import API_VERSION
from schoolhub.core.config import settings
from schoolhub.core.exceptions import SchoolHubError
from schoolhub.schemas.common import ErrorResponse

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="SchoolHub API",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)


def _envelope(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
        headers=headers,
    )


@app.exception_handler(SchoolHubError)
async def handle_app_error(request: Request, exc: SchoolHubError) -> JSONResponse:
    return _envelope(exc.status_code, exc.message, exc.headers)


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = f"Route {request.url.path} not found"
    else:
        message = str(exc.detail)
    return _envelope(exc.status_code, message, getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg', 'invalid')}" if loc else str(err.get("msg", "invalid")))
    return _envelope(422, "; ".join(parts) or "Invalid request")


@app.exception_handler(SQLAlchemyError)
async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return _envelope(500, "Internal server error")


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _envelope(500, "Internal server error")


app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, object]:
    """Root route; minimal payload for discovery."""
    prefix = settings.API_V1_PREFIX
    return {
        "success": True,
        "message": "School Management System API",
        "endpoints": {
            "auth": f"{prefix}/auth",
            "adminUsers": f"{prefix}/admin/users",
            "superAdminUsers": f"{prefix}/super-admin/users",
            "health": f"{prefix}/health/",
        },
    }
