"""Entry point. Wires the user store, tracker and login service into routes.

Persistence strategy:
  - If DATABASE_URL is set  -> SQLAlchemy user store.
  - Otherwise               -> JSON file fallback (development only).
"""
import logging
import os

from dotenv import load_dotenv

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_DIR = os.path.dirname(BASE_DIR)
load_dotenv(os.path.join(PROJECT_DIR, ".env"))

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from loginguard.api.routes.auth_routes import router as auth_router, init_auth_routes
from loginguard.application.login import LoginService
from loginguard.infrastructure.auth.attempt_tracker import AttemptTracker
from loginguard.infrastructure.auth.credential_verifier import CredentialVerifier

DATA_DIR = os.path.join(PROJECT_DIR, "data")
DATABASE_URL = os.environ.get("DATABASE_URL", "")

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
_log = logging.getLogger("loginguard.startup")

app = FastAPI(
    title="loginguard",
    description="Throttled email/password login gate.",
    version="1.0.0",
)

# CORS configuration: read allowed origins from env (comma-separated).
_allowed = os.environ.get("ALLOWED_ORIGINS", "").strip()
if _allowed:
    allow_origins = [o.strip() for o in _allowed.split(",") if o.strip()]
else:
    allow_origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Persistence wiring
# ---------------------------------------------------------------------------

if DATABASE_URL:
    from loginguard.infrastructure.database.connection import init_engine, create_tables
    from loginguard.infrastructure.repositories.sql_user_repository import SqlUserRepository

    user_repo = SqlUserRepository(init_engine())
    create_tables()
    _persistence = "sql"
else:
    from loginguard.infrastructure.repositories.user_repository import UserRepository

    user_repo = UserRepository(data_path=os.path.join(DATA_DIR, "users.json"))
    _persistence = "json"

tracker = AttemptTracker()
login_service = LoginService(tracker, CredentialVerifier(user_repo))
_log.info(
    "Login gate ready (persistence=%s, failure window=%s).",
    _persistence, f"{tracker.window_seconds}s" if tracker.window_seconds else "none",
)

init_auth_routes(login_service, user_repo)
app.include_router(auth_router)


@app.get("/health")
def health():
    result = {
        "status": "online",
        "persistence": _persistence,
        "tracked_identities": len(tracker),
    }
    if DATABASE_URL:
        from loginguard.infrastructure.database.connection import check_health
        result["database"] = "connected" if check_health() else "disconnected"
    return result
