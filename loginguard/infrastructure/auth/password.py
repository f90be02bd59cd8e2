"""Password hashing -- bcrypt."""
import bcrypt

BCRYPT_ROUNDS = 12

# Compared against when the identity is unknown so both rejection paths cost
# one bcrypt check.
_DUMMY_HASH = bcrypt.hashpw(b"loginguard-dummy-password", bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def hash_password(plain: str) -> str:
    """Hash a plain-text password with bcrypt."""
    return bcrypt.hashpw(
        plain.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    ).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plain-text password against a bcrypt hash."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def burn_password_check(plain: str) -> None:
    """Spend the time of a real verification without a stored hash."""
    verify_password(plain, _DUMMY_HASH)


def is_bcrypt_hash(hashed: str) -> bool:
    """Return True if the hash string looks like a bcrypt hash."""
    return hashed.startswith("$2b$") or hashed.startswith("$2a$")
