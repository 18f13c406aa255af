import os
import random

# must be set before healthstore.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["REDIS_URL"] = ""
os.environ.setdefault("LLM_API_KEY", "test-key")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from healthstore.api.v1.deps import get_llm, get_rng
from healthstore.db import models  # noqa: F401
from healthstore.db.core import engine
from healthstore.main import app
from healthstore.services.products import ProductService
from tests.factories import FakeLLM


@pytest.fixture(autouse=True)
def fresh_db():
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield


@pytest.fixture
def session():
    with Session(engine) as s:
        yield s


@pytest.fixture
def seeded(session):
    ProductService(session).seed_products()
    return session


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def client(fake_llm):
    app.dependency_overrides[get_llm] = lambda: fake_llm
    app.dependency_overrides[get_rng] = lambda: random.Random(0)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    creds = {"email": "owner@healthstore.io", "password": "s3cret-pass"}
    assert client.post("/api/v1/auth/register", json=creds).status_code == 200
    token = client.post("/api/v1/auth/login", json=creds).json()["access_token"]
    return {"Authorization": f"Bearer {token}"}
