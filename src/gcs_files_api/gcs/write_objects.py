"""Functions for writing objects to a GCS bucket--the "C" and "U" in CRUD."""

import logging
from typing import Optional

from google.cloud.storage import Blob, Bucket

logger = logging.getLogger(__name__)


def upload_gcs_object(
    bucket: Bucket,
    object_name: str,
    file_content: bytes,
    content_type: Optional[str] = None,
) -> Blob:
    """
    Upload bytes to a GCS bucket, overwriting any object with the same name.

    :param bucket: The destination bucket.
    :param object_name: The key of the object in the bucket.
    :param file_content: The content of the file to upload.
    :param content_type: The MIME type of the file, e.g. "text/plain" for a text file.
    :return: The uploaded blob, with metadata refreshed from the upload response.
    """
    content_type = content_type or "application/octet-stream"
    blob = bucket.blob(object_name)
    blob.upload_from_string(file_content, content_type=content_type)
    return blob


def try_make_public(blob: Blob) -> bool:
    """
    Grant public read on a single object.

    Best effort: buckets with uniform bucket-level access reject per-object
    ACLs, so any failure is logged and reported as ``False``, never raised.
    """
    try:
        blob.make_public()
    except Exception as err:  # pylint: disable=broad-except
        logger.warning(
            "Could not make %s public (likely due to uniform bucket-level access): %s",
            blob.name,
            err,
        )
        return False
    logger.info("Made %s public", blob.name)
    return True
