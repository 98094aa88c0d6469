"""
Storage gateway: list, upload and delete objects in the configured bucket.

Every operation validates the configuration before touching the provider and
translates SDK failures into ``ProviderError`` so callers see one taxonomy.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, List, Optional

from google.api_core.exceptions import GoogleAPIError, NotFound
from google.auth.exceptions import GoogleAuthError
from google.cloud import storage

from gcs_files_api.errors import NotFoundError, ProviderError
from gcs_files_api.gcs.client import build_storage_client
from gcs_files_api.gcs.delete_objects import delete_gcs_object
from gcs_files_api.gcs.read_objects import list_gcs_objects
from gcs_files_api.gcs.write_objects import try_make_public, upload_gcs_object
from gcs_files_api.settings import StorageConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredFile:
    """An object in the bucket as reported by the provider."""

    name: str
    size: Optional[int]
    content_type: Optional[str]
    time_created: Optional[datetime]
    updated: Optional[datetime]
    url: str


@dataclass(frozen=True)
class UploadResult:
    name: str
    size: int
    content_type: Optional[str]
    url: str
    made_public: bool


@contextmanager
def _provider_errors(action: str) -> Iterator[None]:
    try:
        yield
    except NotFound as err:
        raise NotFoundError(f"{action}: {err.message}") from err
    except (GoogleAPIError, GoogleAuthError) as err:
        raise ProviderError(f"{action}: {err}") from err


class StorageGateway:
    """
    Facade over a single GCS bucket.

    :param config: The storage identity; validated before every operation.
    :param client: An optional storage client. If not provided, one is built
        from ``config`` on first use.
    """

    def __init__(self, config: StorageConfig, client: Optional[storage.Client] = None):
        self.config = config
        self._client = client

    def _bucket(self) -> storage.Bucket:
        self.config.validate()
        if self._client is None:
            self._client = build_storage_client(self.config)
        return self._client.bucket(self.config.bucket_name)

    def list_objects(self) -> List[StoredFile]:
        bucket = self._bucket()
        with _provider_errors(f"Failed to list objects in {bucket.name}"):
            blobs = list_gcs_objects(bucket)

        return [
            StoredFile(
                name=blob.name,
                size=blob.size,
                content_type=blob.content_type,
                time_created=blob.time_created,
                updated=blob.updated,
                url=self.config.public_url(blob.name),
            )
            for blob in blobs
        ]

    def put_object(self, name: str, data: bytes, content_type: Optional[str]) -> UploadResult:
        """
        Store ``data`` under ``name`` and try to make it publicly readable.

        A failure to set the public ACL is logged and reflected in
        ``UploadResult.made_public``; it never fails the upload.
        """
        bucket = self._bucket()
        with _provider_errors(f"Failed to upload {name}"):
            blob = upload_gcs_object(bucket, name, data, content_type=content_type)
        logger.info("Uploaded %s (%d bytes) to %s", name, len(data), bucket.name)

        made_public = try_make_public(blob)

        return UploadResult(
            name=name,
            size=len(data),
            content_type=blob.content_type or content_type,
            url=self.config.public_url(name),
            made_public=made_public,
        )

    def delete_object(self, name: str) -> None:
        bucket = self._bucket()
        with _provider_errors(f"Failed to delete {name}"):
            delete_gcs_object(bucket, name)
        logger.info("Deleted %s from %s", name, bucket.name)

    def public_url(self, name: str) -> str:
        return self.config.public_url(name)
