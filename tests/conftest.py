import pytest
from fastapi.testclient import TestClient

from app.models.account import Account



@pytest.fixture
def accounts() -> list[Account]:
    return [
        Account(id="A1", balance=500, currency="USD"),
        Account(id="A2", balance=100, currency="USD"),
    ]


@pytest.fixture
def accounts_payload() -> list[dict]:
    return [
        {"id": "A1", "balance": 500, "currency": "USD"},
        {"id": "A2", "balance": 100, "currency": "USD"},
    ]


@pytest.fixture
def client():
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client
