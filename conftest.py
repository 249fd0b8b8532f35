import pytest
from fastapi.testclient import TestClient

from library import Library, default_books


@pytest.fixture
def lib():
    # Each test gets its own seeded inventory
    return Library(default_books())


@pytest.fixture
def client(monkeypatch):
    import api as api_module
    monkeypatch.setattr(api_module.settings, "seed_books", True)
    # Entering the client runs the lifespan, which builds a fresh inventory
    with TestClient(api_module.app) as test_client:
        yield test_client
