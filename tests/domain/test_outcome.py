"""Unit tests for LoginOutcome."""
import pytest

from loginguard.domain.errors import InvalidCredentials, TooManyAttempts
from loginguard.domain.outcome import LoginOutcome, LoginStatus


class TestVariants:
    def test_blocked(self):
        o = LoginOutcome.blocked("u1", 5)
        assert o.status == LoginStatus.BLOCKED
        assert o.subject is None
        assert o.attempts == 5
        assert not o.is_accepted

    def test_rejected(self):
        o = LoginOutcome.rejected("u1", 2)
        assert o.status == LoginStatus.REJECTED
        assert o.attempts == 2

    def test_accepted_carries_subject(self):
        o = LoginOutcome.accepted("u1", {"user_id": "x"})
        assert o.is_accepted
        assert o.subject == {"user_id": "x"}
        assert o.attempts == 0

    def test_accepted_requires_subject(self):
        with pytest.raises(ValueError):
            LoginOutcome(LoginStatus.ACCEPTED, "u1")

    def test_rejected_cannot_carry_subject(self):
        with pytest.raises(ValueError):
            LoginOutcome(LoginStatus.REJECTED, "u1", subject={"user_id": "x"})


class TestUnwrap:
    def test_accepted_returns_subject(self):
        assert LoginOutcome.accepted("u1", {"a": 1}).unwrap() == {"a": 1}

    def test_blocked_raises_too_many_attempts(self):
        with pytest.raises(TooManyAttempts) as exc:
            LoginOutcome.blocked("u1", 5).unwrap()
        assert exc.value.attempts == 5
        assert exc.value.identity == "u1"

    def test_rejected_raises_invalid_credentials(self):
        with pytest.raises(InvalidCredentials) as exc:
            LoginOutcome.rejected("u1", 1).unwrap()
        assert str(exc.value) == "Wrong email or password"


class TestEquality:
    def test_equal_outcomes(self):
        assert LoginOutcome.rejected("u1", 1) == LoginOutcome.rejected("u1", 1)

    def test_different_status_not_equal(self):
        assert LoginOutcome.rejected("u1", 5) != LoginOutcome.blocked("u1", 5)
