import logging
from datetime import datetime, timezone

from fastapi import APIRouter, FastAPI, Request
from fastapi.concurrency import asynccontextmanager
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.params import Depends
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from review_moderation.api import reviews
from review_moderation.core.config import Settings, get_settings
from review_moderation.core.exceptions import InternalError, ReviewModerationError
from review_moderation.database.db import close_db_client, get_db
from review_moderation.repo.review_repo import ensure_review_indexes
from review_moderation.schemas.common import HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/api/health", summary="Health Check", response_model=HealthResponse)
async def health_check():
    """Health check endpoint to verify if the application is running."""
    return HealthResponse(
        message="Review Moderation API is running",
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/config", summary="Configuration")
async def get_config(s: Settings = Depends(get_settings)):
    """Get application configuration (connection string excluded)."""
    return s.model_dump(exclude={"MONGODB_URI"})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan event handler."""
    logger.info("Starting application...")

    await ensure_review_indexes(get_db())

    logger.info("Application started")
    yield

    await close_db_client()
    logger.info("Application stopped")


def _envelope(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


async def moderation_error_handler(request: Request, exc: ReviewModerationError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return _envelope(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for err in exc.errors():
        field = err.get("loc", ["body"])[-1]
        messages.append(f"{field}: {err.get('msg')}")
    return _envelope(400, ", ".join(messages) or "Invalid request")


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404 and exc.detail == "Not Found":
        return _envelope(404, f"Route {request.url.path} not found")
    return _envelope(exc.status_code, str(exc.detail))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"{request.method} {request.url.path} failed with unexpected error")
    return _envelope(InternalError.status_code, InternalError.default_message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ReviewModerationError, moderation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(PyMongoError, unexpected_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)


def create_app(settings: Settings | None = None) -> FastAPI:
    s = settings or get_settings()
    app = FastAPI(title=s.PROJECT_NAME, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=s.all_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Setup routers
    routers = [router, reviews.router]
    for r in routers:
        app.include_router(r)

    register_exception_handlers(app)
    return app
