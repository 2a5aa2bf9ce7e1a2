import pytest
from fastapi.testclient import TestClient

from govbid.api.main import create_app


@pytest.fixture
def client():
    app = create_app()
    yield TestClient(app)
    app.dependency_overrides.clear()
