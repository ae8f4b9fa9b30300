from fastapi import APIRouter

from app.core.config import settings

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    summary="Service health check",
    description=(
        "Checks whether the API service is running and returns basic service information. "
        "This endpoint **does not** call the weather provider."
    ),
    response_description="Service status",
)
def health():
    """
    Basic health check for the API.

    **Returns:**
    - `status`: Always `ok` if the service is running
    - `service`: Service name (configured via `APP_NAME`)
    - `environment`: Current environment (configured via `ENVIRONMENT`, e.g. local/dev/prod)
    - `providerConfigured`: Whether `OWM_API_KEY` is set. The key itself is never returned.
    """
    return {
        "status": "ok",
        "service": settings.app_name,
        "environment": settings.environment,
        "providerConfigured": bool(settings.owm_api_key),
    }
