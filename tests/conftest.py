import pytest
from fastapi.testclient import TestClient

from courseload.domain.models.course import Course
from courseload.domain.models.user import User
from courseload.infrastructure.database import build_engine, build_session_factory, init_db
from courseload.infrastructure.repositories.course_repository import SQLAlchemyCourseRepository
from courseload.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from courseload.main import create_app
from tests.helpers import QA_EMAIL, QA_PASSWORD, RecordingMailer, login, make_settings


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def app(settings, mailer):
    return create_app(settings, mailer=mailer)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def qa_token(client):
    return login(client, QA_EMAIL, QA_PASSWORD)


@pytest.fixture
def db_session():
    engine = build_engine("sqlite://")
    init_db(engine)
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def users(db_session):
    return SQLAlchemyUserRepository(db_session, User)


@pytest.fixture
def courses(db_session):
    return SQLAlchemyCourseRepository(db_session, Course)
