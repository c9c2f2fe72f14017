"""
Pytest configuration and shared fixtures.

Environment variables are set before the application is imported so that
Settings() and the module-level engine resolve to an in-memory SQLite
database. Every test gets a fresh schema.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SUPABASE_URL"] = "https://test-project.supabase.co"
os.environ["SUPABASE_KEY"] = "test-anon-key"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret"
for name in ("SUPABASE_SERVICE_ROLE_KEY", "SMTP_HOST", "SMTP_USERNAME", "SMTP_PASSWORD"):
    os.environ.pop(name, None)

import uuid  # noqa: E402
from datetime import date, datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from jose import jwt  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from olimpiadas.database import build_engine, get_session  # noqa: E402
from olimpiadas.main import app  # noqa: E402
from olimpiadas.models.event import Event  # noqa: E402
from olimpiadas.models.profile import (  # noqa: E402
    Profile,
    ProfileType,
    RegistrationFee,
    RoleAssignment,
)
from olimpiadas.models.user import Branch, User  # noqa: E402

VALID_CPF = "11144477735"
OTHER_VALID_CPF = "52998224725"

# code, profile name, fee amount, exempt
PROFILE_SPECS = [
    ("ATL", "Atleta", 180.0, False),
    ("PGR", "Público Geral", 50.0, False),
    ("ORE", "Organizador(a)", 0.0, True),
    ("RDD", "Representante de Delegação", 0.0, True),
    ("ADM", "Administração", 0.0, True),
    ("JUZ", "Juiz", 0.0, True),
    ("DEP", "Dependente", 0.0, True),
    ("C-6", "Criança até 6 anos", 0.0, True),
    ("C+7", "Criança de 7 a 12 anos", 0.0, True),
]


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(session):
    app.dependency_overrides[get_session] = lambda: session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def event(session) -> Event:
    today = date.today()
    event = Event(
        name="Olimpíadas RS 2025",
        registration_start=today - timedelta(days=10),
        registration_end=today + timedelta(days=10),
        status="active",
    )
    session.add(event)
    session.commit()
    session.refresh(event)
    return event


@pytest.fixture
def profiles(session, event) -> dict[str, Profile]:
    """One profile per type for `event`, keyed by type code."""
    result: dict[str, Profile] = {}
    for code, name, _, _ in PROFILE_SPECS:
        profile_type = ProfileType(code=code, name=name)
        session.add(profile_type)
        session.flush()
        profile = Profile(
            event_id=event.id, profile_type_id=profile_type.id, name=name
        )
        session.add(profile)
        session.flush()
        result[code] = profile
    session.commit()
    return result


@pytest.fixture
def fees(session, event, profiles) -> dict[str, RegistrationFee]:
    result: dict[str, RegistrationFee] = {}
    for code, _, amount, exempt in PROFILE_SPECS:
        fee = RegistrationFee(
            event_id=event.id,
            profile_id=profiles[code].id,
            amount=amount,
            exempt=exempt,
        )
        session.add(fee)
        result[code] = fee
    session.commit()
    return result


@pytest.fixture
def branch(session) -> Branch:
    branch = Branch(name="Porto Alegre", city="Porto Alegre", state="RS")
    session.add(branch)
    session.commit()
    session.refresh(branch)
    return branch


@pytest.fixture
def user(session, branch) -> User:
    user = User(
        id=uuid.uuid4(),
        email="atleta@example.com",
        full_name="Maria Silva",
        phone="+5551999887766",
        document_type="CPF",
        document_number=VALID_CPF,
        gender="F",
        birth_date=date(1990, 12, 25),
        branch_id=branch.id,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def make_user(session):
    def _make(email: str, full_name: str = "Outro Usuário") -> User:
        user = User(
            id=uuid.uuid4(),
            email=email,
            full_name=full_name,
            phone="+5551988776655",
            document_number=OTHER_VALID_CPF,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make


@pytest.fixture
def grant(session):
    """Assign a profile to a user directly (test setup)."""

    def _grant(user: User, profile: Profile) -> None:
        session.add(
            RoleAssignment(
                user_id=user.id, profile_id=profile.id, event_id=profile.event_id
            )
        )
        session.commit()

    return _grant


def make_token(user_id: uuid.UUID, email: str, expires_in: int = 3600) -> str:
    """Mint a Supabase-like access token signed with the test secret."""
    claims = {
        "sub": str(user_id),
        "email": email,
        "aud": "authenticated",
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
    }
    return jwt.encode(claims, os.environ["SUPABASE_JWT_SECRET"], algorithm="HS256")


def auth_headers(user_id: uuid.UUID, email: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id, email)}"}


@pytest.fixture
def user_headers(user) -> dict[str, str]:
    return auth_headers(user.id, user.email)


@pytest.fixture
def headers_for():
    """Authorization headers for any user: headers_for(some_user)."""
    return lambda u: auth_headers(u.id, u.email)
