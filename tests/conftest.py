"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from app.core import email as mailer
from app.core.auth import Principal
from app.core.database import get_session
from app.main import app
from app.models import (
    Role,
    RoleTemplate,
    TemplateItem,
    TemplateSection,
    User,
)
from app.onboarding.checklist import clone_template_for_user
from tests.helpers import make_user


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Create a new database session for each test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Create a test client with the test database session."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="admin_user")
def admin_user_fixture(session: Session) -> User:
    return make_user(session, "admin@example.com", role=Role.ADMIN, name="Admin User")


@pytest.fixture(name="admin")
def admin_fixture(admin_user: User) -> Principal:
    return Principal.from_user(admin_user)


@pytest.fixture(name="rn_template")
def rn_template_fixture(session: Session) -> RoleTemplate:
    """RN template with two sections and three items."""
    template = RoleTemplate(
        role=Role.RN,
        title="Registered Nurse Onboarding",
        sections=[
            TemplateSection(
                title="Company Basics",
                order=0,
                items=[
                    TemplateItem(
                        title="Review Employee Handbook",
                        description="Read the handbook.",
                        link_url="#handbook",
                        due_in_days=3,
                        order=0,
                    ),
                    TemplateItem(title="Meet Your Team", order=1),
                ],
            ),
            TemplateSection(
                title="Clinical Systems",
                order=1,
                items=[
                    TemplateItem(
                        title="EHR System Training",
                        description="Complete EHR training.",
                        due_in_days=7,
                        order=0,
                    ),
                ],
            ),
        ],
    )
    session.add(template)
    session.commit()
    session.refresh(template)
    return template


@pytest.fixture(name="nurse")
def nurse_fixture(session: Session, rn_template: RoleTemplate) -> User:
    """Approved RN with a checklist cloned from the RN template."""
    user = make_user(session, "nurse@example.com", name="Nina Nurse")
    clone_template_for_user(session, user.id, Role.RN)
    session.refresh(user)
    return user


@pytest.fixture(name="nurse_principal")
def nurse_principal_fixture(nurse: User) -> Principal:
    return Principal.from_user(nurse)


@pytest.fixture(name="sent_emails")
def sent_emails_fixture(monkeypatch) -> list:
    """Capture outgoing emails instead of logging them."""
    sent = []

    def fake_send(to, subject, html):
        sent.append({"to": to, "subject": subject, "html": html})
        return True

    monkeypatch.setattr(mailer, "send_email", fake_send)
    return sent
