import sys
import time
import uuid
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api import v1_router
from src.api.health import health_router
from src.config.config import config
from src.services.completion_service import completion_service
from src.utils.logging_config import setup_logging

# Configure logging
setup_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Reports missing provider keys at startup and closes the completion
    client on shutdown.
    """
    logger.info("Starting Weather Assistant application")

    if not config.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set, queries will be answered with a configuration error")
    if not config.openweather_api_key:
        logger.warning("OPENWEATHER_API_KEY is not set, weather lookups will fail")

    try:
        yield
    finally:
        logger.info("Shutting down Weather Assistant")
        await completion_service.aclose()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Weather Assistant API",
        description=(
            "Ask weather questions in natural language. An OpenAI model decides whether "
            "to look up live OpenWeatherMap data, then answers from the retrieved values. "
            "If API_TOKEN is configured, send it as a Bearer token."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def bind_request_context(request: Request, call_next):
        """Tag every log line of a request with its id and report its duration."""
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - started

        logger.info("Request handled", status_code=response.status_code, duration_seconds=round(duration, 4))
        response.headers["X-Request-ID"] = request_id
        return response

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Render HTTP errors as {"error", "status_code"} bodies."""
        logger.warning("Request rejected", status_code=exc.status_code, detail=exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail, "status_code": exc.status_code},
            headers=exc.headers,
        )

    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()


def main():
    logger.info("Starting Weather Assistant server", environment=config.environment, host=config.api_host, port=config.api_port)
    try:
        uvicorn.run(app, host=config.api_host, port=config.api_port, log_level=config.log_level.lower())
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    except Exception as e:
        logger.error("Server failed to start", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
