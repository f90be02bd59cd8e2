"""Credential verification against the user store."""
import logging

from loginguard.infrastructure.auth.jwt_handler import issue_session_token
from loginguard.infrastructure.auth.password import (
    burn_password_check,
    is_bcrypt_hash,
    verify_password,
)

_log = logging.getLogger("loginguard.auth")


class CredentialVerifier:
    """Checks an (email, password) pair and builds the login subject.

    Never touches the attempt tracker. Store errors propagate as
    ``InfrastructureFailure`` from the repository.
    """

    def __init__(self, user_repo, token_issuer=issue_session_token):
        self._user_repo = user_repo
        self._issue_token = token_issuer

    def verify_credentials(self, email: str, password: str) -> tuple[dict | None, bool]:
        """Return ``(subject, True)`` on a match and ``(None, False)`` otherwise.

        Unknown email and wrong password take the same path and the same time.
        """
        user = self._user_repo.find_by_email(email)
        if user is None:
            burn_password_check(password)
            return None, False

        if not is_bcrypt_hash(user.password_hash):
            _log.error("User %s has a non-bcrypt password hash; refusing login.", user.id)
            burn_password_check(password)
            return None, False

        if not verify_password(password, user.password_hash):
            return None, False

        if hasattr(self._user_repo, "update_last_login"):
            self._user_repo.update_last_login(user.id)

        subject = {
            "user_id": user.id,
            "email": user.email,
            "name": user.name,
            "token": self._issue_token(user),
        }
        return subject, True
