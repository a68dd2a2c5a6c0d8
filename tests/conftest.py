# INTERIORFLOW/backend/tests/conftest.py : configuration pour les tests

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from interiorflow.main import create_app
from interiorflow.database import Base, get_db
from interiorflow.models import models  # noqa: F401
from interiorflow.services.accounts import ensure_admin, create_user

ADMIN_EMAIL = "admin@x.com"
ADMIN_PASSWORD = "admin123"
USER_EMAIL = "jane.doe@x.com"
USER_PASSWORD = "user123"


@pytest.fixture(scope="function")
def db_engine():
    """Base SQLite en mémoire, partagée par toutes les connexions du test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Session de base de données pour chaque test"""
    session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)()
    yield session
    session.close()


@pytest.fixture
def app(db_engine):
    application = create_app("sqlite://")
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    application.dependency_overrides[get_db] = override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Client de test (sans lifespan : les tables sont créées par db_engine)"""
    return TestClient(app)


@pytest.fixture
def admin_user(db_session):
    return ensure_admin(db_session, ADMIN_EMAIL, ADMIN_PASSWORD, name="Admin")


@pytest.fixture
def regular_user(db_session):
    return create_user(db_session, USER_EMAIL, USER_PASSWORD, name="")


def _login(client, email, password):
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    # Les tests s'authentifient par en-tête ; le cookie posé par le login est retiré
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def admin_headers(client, admin_user):
    return _login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def user_headers(client, regular_user):
    return _login(client, USER_EMAIL, USER_PASSWORD)
