import mongomock
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.db import StorageGateway
from app.main import create_app


@pytest.fixture
def gateway():
    return StorageGateway(mongomock.MongoClient(), "alunos_test")


@pytest.fixture
def collection(gateway):
    return gateway.alunos


@pytest.fixture
def app(gateway):
    return create_app(Settings(), gateway=gateway)


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def payload():
    return {
        "name": "Maria Souza",
        "birth_date": "15/06/2000",
        "grade": "3A",
        "email": "maria@example.com",
        "national_id": "12345678900",
    }
