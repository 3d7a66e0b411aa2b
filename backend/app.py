"""
FastAPI application entry point for the fortune backend.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from http import HTTPStatus

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.config import get_settings
from backend.dependencies import get_fortune_service
from backend.routes import router

logger = logging.getLogger(__name__)

# Bodies for errors raised by routing itself rather than by a handler.
ROUTING_ERRORS = {
    404: "not found",
    405: "method not allowed",
}
INVALID_BODY = "invalid request body"
INTERNAL_ERROR = "internal server error"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Connect the cache and load the store before serving requests.
    service = get_fortune_service()
    logger.info(
        "Fortune store ready with %d fortunes (cache %s)",
        len(service.store),
        service.cache.status.value,
    )
    yield


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    if detail == HTTPStatus(exc.status_code).phrase:
        detail = ROUTING_ERRORS.get(exc.status_code, detail.lower())
    return JSONResponse(
        status_code=exc.status_code,
        content=detail,
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content=INVALID_BODY)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=INTERNAL_ERROR)


def create_app() -> FastAPI:
    app = FastAPI(title="Fortune Backend", version="0.1.0", lifespan=lifespan)
    app.include_router(router)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    logger.info("Starting server on port %d...", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
