"""FastAPI dependency that turns a login token back into its claims."""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from loginguard.infrastructure.auth.jwt_handler import verify_token

_security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(_security),
) -> dict:
    """Claims of the token issued by a successful login.

    The token must be an access token carrying both ``sub`` (user id) and
    the ``email`` the account logged in with.
    """
    if not credentials:
        raise _unauthorized("Authentication required.")

    claims = verify_token(credentials.credentials)
    if not claims:
        raise _unauthorized("Invalid or expired token.")
    if claims.get("type") != "access":
        raise _unauthorized("Invalid token type. Access token required.")
    if not claims.get("email"):
        raise _unauthorized("Token is not bound to a login email.")

    return claims
