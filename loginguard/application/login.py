"""Use case: decide a login request.

check tracker -> verify credentials -> update tracker -> outcome
"""
import logging

from loginguard.domain.errors import InfrastructureFailure
from loginguard.domain.outcome import LoginOutcome
from loginguard.infrastructure.audit import log_event

MAX_FAILED_ATTEMPTS = 5

_log = logging.getLogger("loginguard.auth")


class LoginService:
    """Sole writer of the attempt tracker.

    ``verifier`` is anything with ``verify_credentials(identity, secret)``
    returning ``(subject, success)``.
    """

    def __init__(self, tracker, verifier, max_attempts: int = MAX_FAILED_ATTEMPTS, audit=log_event):
        self._tracker = tracker
        self._verifier = verifier
        self._max_attempts = max_attempts
        self._audit = audit

    @property
    def tracker(self):
        return self._tracker

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def login(self, identity: str, secret: str) -> LoginOutcome:
        with self._tracker.lock(identity):
            outcome = self._decide(identity, secret)
        self._record(outcome)
        return outcome

    def _decide(self, identity: str, secret: str) -> LoginOutcome:
        attempts = self._tracker.get_failure_count(identity)
        if attempts >= self._max_attempts:
            return LoginOutcome.blocked(identity, attempts)

        try:
            subject, success = self._verifier.verify_credentials(identity, secret)
        except InfrastructureFailure:
            _log.error("Credential store failure while verifying %s.", identity)
            raise
        except Exception as exc:
            _log.exception("Credential verifier crashed for %s.", identity)
            raise InfrastructureFailure(f"Credential verification failed: {type(exc).__name__}") from exc

        if not success:
            return LoginOutcome.rejected(identity, self._tracker.record_failure(identity))

        if subject is None:
            _log.error("Credential verifier reported success without a subject for %s.", identity)
            raise InfrastructureFailure("Credential verification returned no subject")

        self._tracker.clear(identity)
        return LoginOutcome.accepted(identity, subject)

    def _record(self, outcome: LoginOutcome) -> None:
        if outcome.is_accepted:
            _log.info("Login accepted for %s.", outcome.identity)
            subject = outcome.subject
            user_id = subject.get("user_id") if isinstance(subject, dict) else None
        else:
            _log.warning(
                "Login %s for %s (failures=%d).",
                outcome.status.value, outcome.identity, outcome.attempts,
            )
            user_id = None
        try:
            self._audit(
                f"login_{outcome.status.value}",
                user_id,
                email=outcome.identity,
                payload={"failures": outcome.attempts},
            )
        except Exception as exc:  # pragma: no cover
            _log.warning("Audit write failed: %s", exc)
