import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from portfolio.api.routes import (
    auth_router,
    contact_router,
    content_router,
    health_router,
    skills_router,
    uploads_router,
)
from portfolio.core.config import get_settings
from portfolio.db.session import engine
from portfolio.schemas.common import ErrorResponse

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.environment == "development" else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(filename)s:%(lineno)d | %(funcName)s() | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    logger.info("Application starting up...")
    if not settings.admin_emails:
        logger.warning("ADMIN_EMAIL is empty: no one can sign in to the admin panel")
    yield
    logger.info("Application shutting down...")
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    openapi_url="/openapi.json",
    docs_url="/docs",
    lifespan=lifespan,
)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    logger.warning(
        f"HTTPException: {exc.status_code} - {exc.detail} | "
        f"Path: {request.url.path} | Method: {request.method}"
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(status=exc.status_code, message=str(exc.detail), details={}).model_dump(),
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    validation_errors = exc.errors()
    logger.warning(
        f"ValidationError: {len(validation_errors)} validation error(s) | "
        f"Path: {request.url.path} | Method: {request.method} | "
        f"Errors: {validation_errors}"
    )
    return JSONResponse(
        status_code=422,
        content={"status": 422, "message": "Validation error", "details": jsonable_encoder(validation_errors)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    exc_type = type(exc)
    exc_traceback_str = "".join(traceback.format_exception(exc_type, exc, exc.__traceback__))
    logger.error(
        f"Unhandled Exception: {exc_type.__name__} - {exc} | "
        f"Path: {request.url.path} | Method: {request.method} | "
        f"Query Params: {dict(request.query_params)}",
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={
            "status": 500,
            "message": "Internal server error",
            "details": {
                "exception_type": exc_type.__name__,
                "exception_message": str(exc),
                "traceback": exc_traceback_str if settings.environment == "development" else None,
            },
        },
    )


app.include_router(content_router, prefix=settings.api_prefix)
app.include_router(skills_router, prefix=settings.api_prefix)
app.include_router(uploads_router, prefix=settings.api_prefix)
app.include_router(contact_router, prefix=settings.api_prefix)
app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(health_router, prefix=settings.api_prefix)
