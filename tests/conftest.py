import pytest
from fastapi.testclient import TestClient

from gcs_files_api.main import create_app

pytest_plugins = [
    "tests.fixtures.gcs_fixtures",
    "tests.fixtures.settings_fixtures",
]


@pytest.fixture
def client(settings, fake_gcs) -> TestClient:
    app = create_app(settings=settings, storage_client=fake_gcs)
    with TestClient(app) as client:
        yield client
