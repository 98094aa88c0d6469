"""Functions for reading objects from a GCS bucket--the "R" in CRUD."""

from typing import List

from google.cloud.storage import Blob, Bucket


def list_gcs_objects(bucket: Bucket) -> List[Blob]:
    """
    List every object in a bucket.

    The SDK iterator is consumed fully; there is no page size or token.

    :param bucket: The bucket to list.
    :return: The blobs in the order the provider returns them.
    """
    return list(bucket.list_blobs())
