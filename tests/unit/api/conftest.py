"""Fixtures for API tests."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from hydrant_ledger.api.app import create_app
from hydrant_ledger.config.settings import Settings
from hydrant_ledger.hydrants.service import HydrantService


@pytest.fixture
def settings() -> Settings:
    """Settings for an in-process app with the in-memory store."""
    return Settings(database={"backend": "inmemory", "create_schema": False})


@pytest.fixture
def app(settings: Settings, service: HydrantService) -> FastAPI:
    """Application wired to the shared in-memory service."""
    return create_app(settings=settings, service=service)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client."""
    return TestClient(app)
