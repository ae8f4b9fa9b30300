import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.errors import WeatherServiceError
from app.core.logging_config import configure_logging
from app.routers.geocoding import router as geocoding_router
from app.routers.health import router as health_router
from app.routers.weather import router as weather_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    On startup:
    - Configures logging from `LOG_LEVEL`.
    - Warns when no provider API key is configured.

    On shutdown:
    - Nothing to release; provider clients are opened per request.
    """
    configure_logging()
    if not settings.owm_api_key:
        logger.warning("OWM_API_KEY is not set; /weather and /geocoding will return 500")
    yield


async def weather_error_handler(request: Request, exc: WeatherServiceError) -> JSONResponse:
    """
    Render classified errors as `{"error": message}` with their status code.
    """
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    This factory function:
    - Initializes the FastAPI app with metadata and documentation endpoints.
    - Registers all API routers.
    - Registers the error handler for classified service errors.
    - Applies the application lifespan handler.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        description="Weather API: current conditions, hourly and daily forecast",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_exception_handler(WeatherServiceError, weather_error_handler)

    # Register API routers
    app.include_router(health_router)
    app.include_router(weather_router)
    app.include_router(geocoding_router)

    return app


# Application entry point
app = create_app()
