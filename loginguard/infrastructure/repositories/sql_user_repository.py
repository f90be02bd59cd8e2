"""SQLAlchemy-backed user repository."""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from loginguard.domain.errors import InfrastructureFailure
from loginguard.domain.user import User, normalize_email
from loginguard.infrastructure.database.models import UserModel


def _to_domain(row: UserModel) -> User:
    created_at = row.created_at.isoformat() if row.created_at else None
    return User(
        user_id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
        created_at=created_at,
    )


class SqlUserRepository:
    """User persistence via SQLAlchemy (PostgreSQL in production, SQLite in tests)."""

    def __init__(self, session_factory):
        self._sf = session_factory

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def save(self, user: User) -> None:
        """Insert or update a user record."""
        data = user.to_dict()
        try:
            with self._sf() as session:
                existing = session.get(UserModel, data["id"])
                if existing:
                    existing.name = data["name"]
                    existing.email = data["email"]
                    existing.password_hash = data["password_hash"]
                else:
                    session.add(UserModel(
                        id=data["id"],
                        name=data["name"],
                        email=data["email"],
                        password_hash=data["password_hash"],
                        created_at=_parse_created_at(data.get("created_at")),
                    ))
                session.commit()
        except IntegrityError as exc:
            raise ValueError(f"Email already registered: {data['email']}") from exc
        except SQLAlchemyError as exc:
            raise InfrastructureFailure(f"User store unavailable: {type(exc).__name__}") from exc

    def update_last_login(self, user_id: str) -> None:
        try:
            with self._sf() as session:
                row = session.get(UserModel, user_id)
                if row:
                    row.last_login_at = datetime.now(timezone.utc)
                    session.commit()
        except SQLAlchemyError as exc:
            raise InfrastructureFailure(f"User store unavailable: {type(exc).__name__}") from exc

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def find_by_email(self, email: str) -> Optional[User]:
        target = normalize_email(email)
        try:
            with self._sf() as session:
                row = session.query(UserModel).filter(UserModel.email == target).first()
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            raise InfrastructureFailure(f"User store unavailable: {type(exc).__name__}") from exc

    def find_by_id(self, user_id: str) -> Optional[User]:
        try:
            with self._sf() as session:
                row = session.get(UserModel, user_id)
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            raise InfrastructureFailure(f"User store unavailable: {type(exc).__name__}") from exc


def _parse_created_at(value):
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return datetime.now(timezone.utc)
    return value or datetime.now(timezone.utc)
