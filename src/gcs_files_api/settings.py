# src/gcs_files_api/settings.py
import base64
import binascii
import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, Any, Dict, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from gcs_files_api.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_PUBLIC_BASE_URL = "https://storage.googleapis.com"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def decode_credentials(encoded: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Decode a base64-encoded service account JSON document.

    :param encoded: The raw value of ``GOOGLE_CLOUD_CREDENTIALS``.
    :return: The parsed credential mapping, or None if nothing was supplied.
    :raises ConfigurationError: If the value is not base64-encoded JSON.
    """
    if not encoded:
        return None
    try:
        decoded = base64.b64decode(encoded, validate=True)
        credentials = json.loads(decoded)
    except (binascii.Error, ValueError) as err:
        raise ConfigurationError(
            "GOOGLE_CLOUD_CREDENTIALS must be base64-encoded JSON"
        ) from err
    if not isinstance(credentials, dict):
        raise ConfigurationError("GOOGLE_CLOUD_CREDENTIALS must decode to a JSON object")
    return credentials


@dataclass(frozen=True)
class StorageConfig:
    """
    Storage provider identity resolved from the environment.

    Built once per process and passed by reference into the storage gateway.
    ``credentials`` is decoded on access so that a malformed value surfaces
    as a ``ConfigurationError`` at validation time instead of at import time.
    """

    project_id: str = ""
    bucket_name: str = ""
    key_filename: Optional[str] = None
    encoded_credentials: Optional[str] = None
    public_base_url: str = DEFAULT_PUBLIC_BASE_URL

    @property
    def credentials(self) -> Optional[Dict[str, Any]]:
        return decode_credentials(self.encoded_credentials)

    def validate(self) -> None:
        """Raise ``ConfigurationError`` unless the config can reach a bucket."""
        missing = [
            env_var
            for env_var, value in (
                ("GOOGLE_CLOUD_PROJECT_ID", self.project_id),
                ("GOOGLE_CLOUD_STORAGE_BUCKET", self.bucket_name),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

        if not self.key_filename and not self.credentials:
            raise ConfigurationError(
                "Either GOOGLE_CLOUD_KEY_FILE or GOOGLE_CLOUD_CREDENTIALS must be provided"
            )

    def public_url(self, object_name: str) -> str:
        """URL of an object, reachable only if the object is publicly readable."""
        return f"{self.public_base_url.rstrip('/')}/{self.bucket_name}/{object_name}"

    def describe(self) -> Dict[str, Any]:
        """Configuration summary safe to print or log."""
        return {
            "project_id": self.project_id or None,
            "bucket_name": self.bucket_name or None,
            "key_filename": self.key_filename,
            "credentials": "<set>" if self.encoded_credentials else None,
            "public_base_url": self.public_base_url,
        }


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from gcs_files_api.settings import get_settings
        settings = get_settings()
        bucket_name = settings.google_cloud_storage_bucket
    """

    # Google Cloud Storage
    google_cloud_project_id: str = Field(
        default="",
        alias="GOOGLE_CLOUD_PROJECT_ID",
        description="Google Cloud project that owns the bucket"
    )

    google_cloud_storage_bucket: str = Field(
        default="",
        alias="GOOGLE_CLOUD_STORAGE_BUCKET",
        description="Bucket holding every uploaded file"
    )

    google_cloud_key_file: Optional[str] = Field(
        default=None,
        alias="GOOGLE_CLOUD_KEY_FILE",
        description="Path to a service account JSON key file"
    )

    google_cloud_credentials: Optional[str] = Field(
        default=None,
        alias="GOOGLE_CLOUD_CREDENTIALS",
        description="Base64-encoded service account JSON"
    )

    public_base_url: str = Field(
        default=DEFAULT_PUBLIC_BASE_URL,
        alias="PUBLIC_BASE_URL",
        description="Base of the public object URLs returned to clients"
    )

    # HTTP
    cors_allow_origins: Annotated[List[str], NoDecode] = Field(
        default=["http://localhost:3000"],
        alias="CORS_ALLOW_ORIGINS",
        description="Origins allowed to call the API from a browser"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level"
    )

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def split_cors_allow_origins(cls, v: Any) -> Any:
        """Accept a comma-separated list or a JSON list."""
        if isinstance(v, str):
            if v.lstrip().startswith("["):
                return json.loads(v)
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Validate the log level is one the logging module knows."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {v}")
        return level

    def storage_config(self) -> StorageConfig:
        """Build the storage identity used by the gateway."""
        if self.google_cloud_key_file and self.google_cloud_credentials:
            logger.warning(
                "Both GOOGLE_CLOUD_KEY_FILE and GOOGLE_CLOUD_CREDENTIALS are set; "
                "using GOOGLE_CLOUD_CREDENTIALS"
            )
        return StorageConfig(
            project_id=self.google_cloud_project_id,
            bucket_name=self.google_cloud_storage_bucket,
            key_filename=self.google_cloud_key_file or None,
            encoded_credentials=self.google_cloud_credentials or None,
            public_base_url=self.public_base_url,
        )

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
