import pytest

import app as server


@pytest.fixture
def client():
    server.app.config["TESTING"] = True
    with server.app.test_client() as client:
        yield client


@pytest.fixture
def production(development, monkeypatch):
    monkeypatch.setattr(server, "ENVIRONMENT", "production")


@pytest.fixture(autouse=True)
def development(monkeypatch):
    monkeypatch.setattr(server, "ENVIRONMENT", "development")
