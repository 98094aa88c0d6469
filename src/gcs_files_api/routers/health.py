from fastapi import APIRouter, Request

from gcs_files_api.errors import ConfigurationError
from gcs_files_api.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health_check(request: Request):
    """
    Health check endpoint for monitoring API status.

    Reports whether the storage configuration is usable. The bucket itself is
    never contacted, so a healthy response does not prove the credentials work.
    """
    config = request.app.state.storage_gateway.config

    try:
        config.validate()
    except ConfigurationError as err:
        return HealthResponse(status="degraded", storage=str(err), bucket=config.bucket_name or None)

    return HealthResponse(status="ok", storage="configured", bucket=config.bucket_name)
