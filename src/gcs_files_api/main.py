import logging
from pathlib import Path
from textwrap import dedent
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.routing import APIRoute
from google.cloud import storage
from starlette.exceptions import HTTPException as StarletteHTTPException

from gcs_files_api.errors import (
    BadRequestError,
    ConfigurationError,
    handle_bad_request_errors,
    handle_broad_exceptions,
    handle_http_exceptions,
    handle_request_validation_errors,
)
from gcs_files_api.gateway import StorageGateway
from gcs_files_api.routers.files import router as files_router
from gcs_files_api.routers.health import router as health_router
from gcs_files_api.settings import Settings

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(
    settings: Optional[Settings] = None,
    storage_client: Optional[storage.Client] = None,
) -> FastAPI:
    """
    Create a FastAPI application.

    :param settings: Application settings; read from the environment if not provided.
    :param storage_client: An optional storage client handed to the gateway,
        used by tests. If not provided, one is built on the first storage call.
    """
    settings = settings or Settings()

    app = FastAPI(
        title="GCS Files API",
        summary="Upload, list and delete files in a Google Cloud Storage bucket",
        version="v1",
        description=dedent(
            """\
        | Endpoint | Notes |
        | --- | --- |
        | `GET /files` | every object in the bucket with its public URL |
        | `POST /upload` | multipart field `file`, stored as `<epoch-ms>-<filename>` |
        | `DELETE /files?file=NAME` | exact name only |
        """
        ),
        docs_url="/docs",
        generate_unique_id_function=custom_generate_unique_id,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    storage_config = settings.storage_config()
    try:
        storage_config.validate()
    except ConfigurationError as err:
        # the app still starts; every storage call fails with a 500 until this is fixed
        logger.error("Storage is not configured: %s", err)
    else:
        logger.info("Using bucket %s in project %s", storage_config.bucket_name, storage_config.project_id)

    app.state.settings = settings
    app.state.storage_gateway = StorageGateway(storage_config, client=storage_client)

    app.include_router(files_router, tags=["files"])
    app.include_router(health_router, tags=["health"])

    @app.get("/", include_in_schema=False, tags=["ui"])
    def index():
        return FileResponse(STATIC_DIR / "index.html")

    app.add_exception_handler(StarletteHTTPException, handle_http_exceptions)
    app.add_exception_handler(BadRequestError, handle_bad_request_errors)
    app.add_exception_handler(RequestValidationError, handle_request_validation_errors)
    app.middleware("http")(handle_broad_exceptions)

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    from gcs_files_api.settings import get_settings

    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=8000)
