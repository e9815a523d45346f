"""
Pastebin Lite - Main FastAPI application.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, get_settings
from app.middleware import BodySizeLimitMiddleware
from app.routes import health, pastes
from app.store import MAX_VIEWS_ERROR, TTL_SECONDS_ERROR, PasteStore

# Configure logging
logging.basicConfig(
    level=get_settings().LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Checked in field order; the first failing field wins
_FIELD_ERRORS = {
    "content": "content is required and must be a non-empty string",
    "ttl_seconds": TTL_SECONDS_ERROR,
    "max_views": MAX_VIEWS_ERROR,
}


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        return "request body must be valid JSON"
    failed_fields = {
        error["loc"][1]
        for error in errors
        if len(error.get("loc", ())) > 1 and error["loc"][0] == "body"
    }
    for field, message in _FIELD_ERRORS.items():
        if field in failed_fields:
            return message
    # Missing or non-object body: content is the one required field
    return _FIELD_ERRORS["content"]


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render every HTTP error as {"error": <message>}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request validation failures as 400 rather than 422."""
    message = _validation_message(exc)
    logger.info(f"Rejected {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"error": message})


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[PasteStore] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration, defaults to the environment
        store: Paste store to serve, defaults to a fresh in-memory store

    Returns:
        Configured FastAPI app owning its paste store
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Pastebin Lite application starting...")
        logger.warning("⚠️  STORAGE: Using IN-MEMORY paste store")
        logger.warning("   Pastes will NOT persist across server restarts!")
        yield
        logger.info(f"Pastebin Lite application shutting down ({len(app.state.store)} pastes dropped)")

    app = FastAPI(
        title="Pastebin Lite",
        description="A lightweight Pastebin-like application for sharing text",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store if store is not None else PasteStore()

    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.MAX_BODY_BYTES)

    # Added last so CORS headers also cover early rejections
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include route modules
    app.include_router(health.router)
    app.include_router(pastes.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=get_settings().HOST,
        port=get_settings().PORT,
    )
