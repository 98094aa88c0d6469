"""Settings fixtures for tests."""
import base64
import json

import pytest

from gcs_files_api.settings import Settings
from tests.consts import TEST_BUCKET_NAME, TEST_PROJECT_ID

TEST_SERVICE_ACCOUNT = {
    "type": "service_account",
    "project_id": TEST_PROJECT_ID,
    "client_email": "uploader@test-project.iam.gserviceaccount.com",
}
TEST_ENCODED_CREDENTIALS = base64.b64encode(json.dumps(TEST_SERVICE_ACCOUNT).encode()).decode()

GOOGLE_CLOUD_ENV_VARS = [
    "GOOGLE_CLOUD_PROJECT_ID",
    "GOOGLE_CLOUD_STORAGE_BUCKET",
    "GOOGLE_CLOUD_KEY_FILE",
    "GOOGLE_CLOUD_CREDENTIALS",
    "PUBLIC_BASE_URL",
    "CORS_ALLOW_ORIGINS",
    "LOG_LEVEL",
]


def make_settings(**overrides) -> Settings:
    values = {
        "GOOGLE_CLOUD_PROJECT_ID": TEST_PROJECT_ID,
        "GOOGLE_CLOUD_STORAGE_BUCKET": TEST_BUCKET_NAME,
        "GOOGLE_CLOUD_CREDENTIALS": TEST_ENCODED_CREDENTIALS,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the developer's real Google Cloud settings out of the tests."""
    for env_var in GOOGLE_CLOUD_ENV_VARS:
        monkeypatch.delenv(env_var, raising=False)


@pytest.fixture
def settings() -> Settings:
    return make_settings()
