"""Session token creation and verification (HS256 JWT)."""
import os
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError

from loginguard.domain.user import User

SECRET_KEY = os.environ.get("JWT_SECRET_KEY")

# A None key would make python-jose sign with the string "None", so every
# token would be forgeable.
if not SECRET_KEY:  # pragma: no cover
    raise RuntimeError(
        "Missing JWT_SECRET_KEY environment variable. "
        "Add JWT_SECRET_KEY=<strong-random-value> to your .env file before starting."
    )

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))


def create_access_token(user_id: str, email: str) -> str:
    """Create a short-lived access token (1 h default)."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "email": email,
        "type": "access",
        "exp": now + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
        "iat": now,
    }
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def issue_session_token(user: User) -> str:
    """Token handed back with a successful login."""
    return create_access_token(user.id, user.email)


def verify_token(token: str) -> dict | None:
    """Decode and validate a JWT. Returns the payload dict or None."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    if payload.get("sub") is None:
        return None
    return payload
