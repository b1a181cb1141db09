# This project was developed with assistance from AI tools.
"""FastAPI application entry point."""

import logging
import uuid
from contextlib import asynccontextmanager

from db.database import db_service
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .admin import setup_admin
from .core.config import settings
from .core.errors import AccessError, ConflictError, NotFoundError, ValidationError
from .routes import health, parcels, polygon_entries, polygons, roles, tasks, users
from .schemas.error import ErrorResponse

logger = logging.getLogger(__name__)

# Domain errors a route did not translate itself
_ACCESS_ERROR_STATUS: dict[type[AccessError], int] = {
    NotFoundError: 404,
    ValidationError: 400,
    ConflictError: 409,
}


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application startup/shutdown lifecycle."""
    if settings.AUTH_DISABLED:
        logger.warning("AUTH_DISABLED is set: requester identity is read from X-User-Id")
    yield
    await db_service.dispose()


app = FastAPI(
    title="Farmland API",
    description="Farm management data API with tenant-scoped record visibility",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-User-Id", "X-Request-ID"],
)


def _problem(request: Request, status_code: int, detail: str, headers=None) -> JSONResponse:
    request_id = request.headers.get("x-request-id", str(uuid.uuid4()))
    body = ErrorResponse.for_status(
        status_code, detail, request_id=request_id, instance=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Convert HTTPException to RFC 7807 Problem Details."""
    return _problem(request, exc.status_code, str(exc.detail), getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Convert Pydantic validation errors to RFC 7807 Problem Details."""
    return _problem(request, 422, str(exc.errors()))


@app.exception_handler(AccessError)
async def access_error_handler(request: Request, exc: AccessError):
    status_code = next(
        (code for cls, code in _ACCESS_ERROR_STATUS.items() if isinstance(exc, cls)), 400,
    )
    return _problem(request, status_code, str(exc))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all for unhandled exceptions -- log and return 500."""
    response = _problem(request, 500, "An unexpected error occurred.")
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return response


app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(users.router, prefix="/api/users", tags=["users"])
app.include_router(roles.router, prefix="/api/roles", tags=["roles"])
app.include_router(polygons.router, prefix="/api/polygons", tags=["polygons"])
app.include_router(polygon_entries.router, prefix="/api/polygon-entries", tags=["polygon-entries"])
app.include_router(parcels.grain_router, prefix="/api/parcel-data", tags=["parcel-data"])
app.include_router(
    parcels.animal_router, prefix="/api/animal-parcel-data", tags=["animal-parcel-data"],
)
app.include_router(tasks.router, prefix="/api/tasks", tags=["tasks"])

# SQLAdmin dashboard at /admin
setup_admin(app)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint"""
    return {"message": "Welcome to the Farmland API"}
