"""Authentication API routes -- login and profile."""
import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from loginguard.domain.errors import InfrastructureFailure, InvalidCredentials, TooManyAttempts
from loginguard.domain.user import normalize_email
from loginguard.infrastructure.auth.dependencies import get_current_user

router = APIRouter(prefix="/api/authentication", tags=["authentication"])

_log = logging.getLogger("loginguard.auth")

_login_service = None
_user_repo = None


def init_auth_routes(login_service, user_repo):
    global _login_service, _user_repo
    _login_service = login_service
    _user_repo = user_repo


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=120)
    password: str = Field(..., min_length=1, max_length=128)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/login")
def api_login(req: LoginRequest):
    """Authenticate by email and password. Returns the subject with a JWT."""
    try:
        return _login_service.login(normalize_email(req.email), req.password).unwrap()
    except TooManyAttempts as exc:
        raise HTTPException(status_code=403, detail=str(exc))
    except InvalidCredentials as exc:
        raise HTTPException(status_code=401, detail=str(exc))
    except InfrastructureFailure:
        raise HTTPException(status_code=503, detail="Authentication service unavailable")


@router.get("/me")
def api_me(current_user: dict = Depends(get_current_user)):
    """Return authenticated user profile."""
    try:
        user = _user_repo.find_by_id(current_user["sub"])
    except InfrastructureFailure:
        _log.error("User store failure while loading profile %s.", current_user["sub"])
        raise HTTPException(status_code=503, detail="Authentication service unavailable")
    if not user:
        raise HTTPException(status_code=404, detail="User not found.")
    if user.email != current_user["email"]:
        raise HTTPException(status_code=401, detail="Token no longer matches this account.")
    return user.to_public_dict()
