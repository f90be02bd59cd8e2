"""Create (or reset the password of) a login account in the configured store.

Usage: python scripts/create_user.py <email> <name> <password>

Uses DATABASE_URL when set, otherwise data/users.json.
"""
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
from dotenv import load_dotenv

load_dotenv(os.path.join(os.path.dirname(__file__), "..", ".env"))

from loginguard.domain.user import User
from loginguard.infrastructure.auth.password import hash_password


def _open_repo():
    if os.environ.get("DATABASE_URL"):
        from loginguard.infrastructure.database.connection import init_engine, create_tables
        from loginguard.infrastructure.repositories.sql_user_repository import SqlUserRepository

        repo = SqlUserRepository(init_engine())
        create_tables()
        return repo
    from loginguard.infrastructure.repositories.user_repository import UserRepository

    return UserRepository(os.path.join(os.path.dirname(__file__), "..", "data", "users.json"))


def main(argv: list) -> int:
    if len(argv) != 3:
        print(__doc__.strip())
        return 1
    email, name, password = argv
    repo = _open_repo()
    existing = repo.find_by_email(email)
    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        user_id=existing.id if existing else None,
        created_at=existing.created_at if existing else None,
    )
    repo.save(user)
    print(f"{'Updated' if existing else 'Created'} {user.email} (id={user.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
