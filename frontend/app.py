"""
FastAPI application entry point for the fortune frontend.
"""

from __future__ import annotations

import logging
import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from frontend.config import get_settings
from frontend.routes import router

logger = logging.getLogger(__name__)

ERROR_BODIES = {
    404: "Not Found",
    405: "Method Not Allowed",
}


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    body = ERROR_BODIES.get(exc.status_code, str(exc.detail))
    return PlainTextResponse(body, status_code=exc.status_code)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return PlainTextResponse("Invalid JSON", status_code=400)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return PlainTextResponse("Internal Server Error", status_code=500)


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Fortune Frontend", version="0.1.0")
    app.include_router(router)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    if os.path.isdir(settings.static_dir):
        # Assets live under /static so they never shadow the API routes.
        app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")
        index_path = os.path.join(settings.static_dir, "index.html")
        if os.path.isfile(index_path):

            @app.get("/", include_in_schema=False)
            def index():
                return FileResponse(index_path)

    else:
        logger.warning("Static directory %s not found, serving API only", settings.static_dir)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    logger.info("Starting frontend server on port %d...", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
