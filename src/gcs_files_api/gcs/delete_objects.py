"""Functions for deleting objects from a GCS bucket--the "D" in CRUD."""

from google.cloud.storage import Bucket


def delete_gcs_object(bucket: Bucket, object_name: str) -> None:
    """
    Delete an object by its exact name.

    :raises google.api_core.exceptions.NotFound: If no object has that name.
    """
    bucket.blob(object_name).delete()
