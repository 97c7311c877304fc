import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from database import init_db, make_engine, make_session_factory
from main import create_app
from users.repository import UserRepository

TEST_SECRET = "tests-secret-key-not-for-production"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        jwt_secret=TEST_SECRET,
        database_url=f"sqlite:///{tmp_path / 'users.db'}",
        schema_file=str(tmp_path / "schema.graphql"),
        graphiql=False,
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(settings):
    engine = make_engine(settings.database_url)
    init_db(engine)
    session = make_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def repository(db):
    return UserRepository(db)


@pytest.fixture
def graphql(client):
    """Callable that POSTs a GraphQL document and returns the decoded body."""

    def _execute(query, variables=None):
        response = client.post("/graphql", json={"query": query, "variables": variables or {}})
        assert response.status_code == 200
        return response.json()

    return _execute
