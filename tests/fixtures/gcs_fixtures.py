"""In-memory stand-in for the parts of ``google.cloud.storage.Client`` the gateway uses."""
from datetime import datetime, timezone

import pytest
from google.api_core.exceptions import BadRequest, NotFound

from tests.consts import TEST_BUCKET_NAME


class FakeBlob:
    def __init__(self, bucket: "FakeBucket", name: str):
        self.bucket = bucket
        self.name = name
        self.data = None
        self.size = None
        self.content_type = None
        self.time_created = None
        self.updated = None
        self.public = False

    def upload_from_string(self, data, content_type=None):
        now = datetime.now(timezone.utc)
        self.data = data
        self.size = len(data)
        self.content_type = content_type
        self.time_created = now
        self.updated = now
        self.bucket.objects[self.name] = self

    def make_public(self):
        if self.bucket.uniform_bucket_level_access:
            raise BadRequest(
                "Cannot use ACL API to update object policy when uniform bucket-level access is enabled."
            )
        self.public = True

    def delete(self):
        if self.name not in self.bucket.objects:
            raise NotFound(f"No such object: {self.bucket.name}/{self.name}")
        del self.bucket.objects[self.name]


class FakeBucket:
    def __init__(self, name: str):
        self.name = name
        self.objects = {}
        self.uniform_bucket_level_access = False
        self.list_error = None

    def blob(self, name: str) -> FakeBlob:
        return FakeBlob(self, name)

    def list_blobs(self):
        if self.list_error is not None:
            raise self.list_error
        return iter(sorted(self.objects.values(), key=lambda blob: blob.name))


class FakeStorageClient:
    """Records every ``bucket()`` lookup so tests can assert no provider call was made."""

    def __init__(self):
        self.buckets = {}
        self.bucket_lookups = []

    def bucket(self, name: str) -> FakeBucket:
        self.bucket_lookups.append(name)
        return self.buckets.setdefault(name, FakeBucket(name))


@pytest.fixture
def fake_gcs() -> FakeStorageClient:
    return FakeStorageClient()


@pytest.fixture
def fake_bucket(fake_gcs: FakeStorageClient) -> FakeBucket:
    bucket = fake_gcs.buckets.setdefault(TEST_BUCKET_NAME, FakeBucket(TEST_BUCKET_NAME))
    return bucket
