import uuid
from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient

from authserver.core.config import Settings
from authserver.core.security import PasswordHasher, TokenIssuer
from authserver.database import create_db_engine, create_session_factory, drop_db, init_db
from authserver.main import create_app

TEST_SECRET = "test-secret-key"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        jwt_secret_key=TEST_SECRET,
        database_url=f"sqlite:///{tmp_path / 'auth.db'}",
        bcrypt_rounds=4,
    )


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def issuer() -> TokenIssuer:
    return TokenIssuer(TEST_SECRET)


@pytest.fixture
def db_engine(settings):
    engine = create_db_engine(settings.database_url)
    init_db(engine)
    try:
        yield engine
    finally:
        drop_db(engine)
        engine.dispose()


@pytest.fixture
def db_session(db_engine):
    session = create_session_factory(db_engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(settings) -> Iterator[TestClient]:
    app = create_app(settings)
    with TestClient(app) as test_client:
        try:
            yield test_client
        finally:
            drop_db(app.state.engine)


def make_user_details(**overrides) -> dict:
    suffix = uuid.uuid4().hex[:8]
    details = {
        "name": "Ada Lovelace",
        "username": f"ada_{suffix}",
        "email": f"ada.{suffix}@example.com",
        "password": f"Secret-{suffix}",
    }
    details.update(overrides)
    return details


@pytest.fixture
def signed_up(client) -> Callable[..., dict]:
    """Creates an account over HTTP and returns its details plus the issued token."""

    def _signed_up(**overrides) -> dict:
        details = make_user_details(**overrides)
        resp = client.post("/auth/signup", json=details)
        assert resp.status_code == 201
        return {**details, "token": resp.json()["token"]}

    return _signed_up
