"""
Shared pytest fixtures for the loginguard test suite.

Strategy:
- Domain / application tests: pure in-memory, fake verifiers, zero I/O.
- API tests: FastAPI TestClient with a JSON user store in a tmp directory.
  DATABASE_URL is cleared so nothing touches a real database.
"""
import os

import pytest

# ---------------------------------------------------------------------------
# Environment must be set before any loginguard import
# ---------------------------------------------------------------------------
os.environ.pop("DATABASE_URL", None)
os.environ.pop("LOGIN_FAILURE_WINDOW_SECONDS", None)
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production-123456")

from loginguard.domain.user import User
from loginguard.infrastructure.auth.attempt_tracker import AttemptTracker
from loginguard.infrastructure.auth.password import hash_password

ALICE_PASSWORD = "alice-correct-horse"
BOB_PASSWORD = "bob-battery-staple"


def make_user(name="Alice Dev", email="alice@example.com", password=ALICE_PASSWORD, **kwargs) -> User:
    return User(name=name, email=email, password_hash=hash_password(password), **kwargs)


class FakeVerifier:
    """Verifier double: a dict of email -> password, with call recording."""

    def __init__(self, accounts: dict | None = None, error: Exception | None = None):
        self.accounts = accounts or {}
        self.error = error
        self.calls = []

    def verify_credentials(self, identity, secret):
        self.calls.append((identity, secret))
        if self.error is not None:
            raise self.error
        if self.accounts.get(identity) == secret:
            return {"user_id": f"id-{identity}", "email": identity}, True
        return None, False


class AuditRecorder:
    def __init__(self):
        self.events = []

    def __call__(self, action, user_id, email=None, payload=None):
        self.events.append((action, user_id, {"email": email, **(payload or {})}))


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def audit_to_tmp(monkeypatch, tmp_path):
    """Keep audit writes from the API tests out of the project tree."""
    import loginguard.infrastructure.audit as audit_mod
    monkeypatch.setattr(audit_mod, "LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr(audit_mod, "LOG_FILE", tmp_path / "logs" / "audit.log")


@pytest.fixture
def tracker():
    t = AttemptTracker(window_seconds=0)
    yield t
    t.reset()


@pytest.fixture(scope="session")
def alice():
    return make_user()


@pytest.fixture(scope="session")
def bob():
    return make_user(name="Bob Ops", email="Bob@Example.com", password=BOB_PASSWORD)


@pytest.fixture
def user_repo(tmp_path, alice, bob):
    from loginguard.infrastructure.repositories.user_repository import UserRepository
    repo = UserRepository(str(tmp_path / "data" / "users.json"))
    repo.save(alice)
    repo.save(bob)
    return repo


@pytest.fixture
def login_service(tracker, user_repo):
    from loginguard.application.login import LoginService
    from loginguard.infrastructure.auth.credential_verifier import CredentialVerifier
    return LoginService(tracker, CredentialVerifier(user_repo), audit=AuditRecorder())


@pytest.fixture
def test_app(login_service, user_repo):
    """FastAPI app wired with the JSON store in the tmp directory."""
    from fastapi import FastAPI
    from loginguard.api.routes.auth_routes import router as auth_router, init_auth_routes

    app = FastAPI()
    init_auth_routes(login_service, user_repo)
    app.include_router(auth_router)
    return app


@pytest.fixture
def client(test_app):
    from fastapi.testclient import TestClient
    return TestClient(test_app)
