import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.responses import error_response
from app.api.router import api_router
from app.core.config import settings
from app.core.exceptions import AppError, AuthenticationError, ValidationError
from app.db.async_session import shutdown_async_database, startup_async_database

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description=settings.PROJECT_DESCRIPTION,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    docs_url=f"{settings.API_V1_PREFIX}/docs",
    redoc_url=f"{settings.API_V1_PREFIX}/redoc",
    redirect_slashes=False,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_V1_PREFIX)


def format_validation_errors(exc: RequestValidationError):
    """Collapse pydantic error entries into ``{field: [messages]}``."""
    errors = {}
    for error in exc.errors():
        # Drop the "body"/"query"/"path" prefix
        loc = [str(part) for part in error["loc"][1:]] or [str(error["loc"][0])]
        field = ".".join(loc)
        message = error["msg"]
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.setdefault(field, []).append(message)
    return errors


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return error_response(exc.status_code, exc.message, exc.errors, headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        ValidationError.default_message,
        format_validation_errors(exc),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


@app.on_event("startup")
async def startup_event():
    """Initialize services on application startup."""
    try:
        logger.info(f"Starting up {settings.PROJECT_NAME}...")
        await startup_async_database()
        logger.info("Async database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to start up application: {e}")
        raise


@app.on_event("shutdown")
async def shutdown_event():
    """Clean up services on application shutdown."""
    try:
        logger.info(f"Shutting down {settings.PROJECT_NAME}...")
        await shutdown_async_database()
        logger.info("Async database connections closed")
    except Exception as e:
        logger.error(f"Error during application shutdown: {e}")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "message": f"Welcome to {settings.PROJECT_NAME}"}
