import pytest
from fastapi.testclient import TestClient

from main import create_app
from settings.config import Settings


@pytest.fixture
def settings():
    """Settings isolated from any local .env file"""
    return Settings(_env_file=None, ENABLE_RATE_LIMITER=False, LOG_LEVEL="WARNING")


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client
