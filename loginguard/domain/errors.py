"""Authentication error taxonomy.

Transports map these to responses; the login flow itself only raises
``InfrastructureFailure`` and lets ``LoginOutcome.unwrap`` raise the others.
"""


class AuthenticationError(Exception):
    """Base class for every login failure surfaced to a caller."""


class TooManyAttempts(AuthenticationError):
    """Identity is at or above the consecutive-failure ceiling."""

    def __init__(self, identity: str, attempts: int):
        self.identity = identity
        self.attempts = attempts
        super().__init__("Too many failed login attempts")


class InvalidCredentials(AuthenticationError):
    """Unknown identity or wrong secret. Deliberately says nothing about which."""

    def __init__(self):
        super().__init__("Wrong email or password")


class InfrastructureFailure(AuthenticationError):
    """The credential store could not answer. Never counted as a failed login."""

    def __init__(self, reason: str = "Authentication service unavailable"):
        super().__init__(reason)
