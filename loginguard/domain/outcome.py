"""Login outcome value object."""
from enum import Enum

from loginguard.domain.errors import InvalidCredentials, TooManyAttempts


class LoginStatus(str, Enum):
    BLOCKED = "blocked"
    REJECTED = "rejected"
    ACCEPTED = "accepted"


class LoginOutcome:
    """Result of one login request: Blocked, Rejected or Accepted(subject)."""

    __slots__ = ("_status", "_identity", "_subject", "_attempts")

    def __init__(self, status: LoginStatus, identity: str, subject=None, attempts: int = 0):
        if status == LoginStatus.ACCEPTED and subject is None:
            raise ValueError("Accepted outcome requires a subject.")
        if status != LoginStatus.ACCEPTED and subject is not None:
            raise ValueError(f"{status.value} outcome cannot carry a subject.")
        self._status = status
        self._identity = identity
        self._subject = subject
        self._attempts = attempts

    @classmethod
    def blocked(cls, identity: str, attempts: int) -> "LoginOutcome":
        return cls(LoginStatus.BLOCKED, identity, attempts=attempts)

    @classmethod
    def rejected(cls, identity: str, attempts: int) -> "LoginOutcome":
        return cls(LoginStatus.REJECTED, identity, attempts=attempts)

    @classmethod
    def accepted(cls, identity: str, subject) -> "LoginOutcome":
        return cls(LoginStatus.ACCEPTED, identity, subject=subject)

    @property
    def status(self) -> LoginStatus:
        return self._status

    @property
    def identity(self) -> str:
        return self._identity

    @property
    def subject(self):
        return self._subject

    @property
    def attempts(self) -> int:
        """Failure count after this request (0 once accepted)."""
        return self._attempts

    @property
    def is_accepted(self) -> bool:
        return self._status == LoginStatus.ACCEPTED

    def unwrap(self):
        """Return the subject, or raise the error matching the outcome."""
        if self._status == LoginStatus.BLOCKED:
            raise TooManyAttempts(self._identity, self._attempts)
        if self._status == LoginStatus.REJECTED:
            raise InvalidCredentials()
        return self._subject

    def __eq__(self, other) -> bool:
        if not isinstance(other, LoginOutcome):
            return NotImplemented
        return (
            self._status == other._status
            and self._identity == other._identity
            and self._subject == other._subject
            and self._attempts == other._attempts
        )

    def __repr__(self) -> str:
        return f"LoginOutcome({self._status.value}, identity={self._identity!r}, attempts={self._attempts})"
