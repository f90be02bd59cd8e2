"""User persistence (JSON file + in-memory cache)."""
import json
import os
from typing import Dict, Optional

from loginguard.domain.errors import InfrastructureFailure
from loginguard.domain.user import User, normalize_email


class UserRepository:
    """JSON-backed user storage for development."""

    def __init__(self, data_path: str = "data/users.json"):
        self._data_path = data_path
        self._users: Dict[str, User] = {}
        self._load()

    def save(self, user: User) -> None:
        """Persist user to file."""
        self._users[user.id] = user
        self._persist()

    def find_by_email(self, email: str) -> Optional[User]:
        """Lookup by email (case-insensitive)."""
        target = normalize_email(email)
        for user in self._users.values():
            if user.email == target:
                return user
        return None

    def find_by_id(self, user_id: str) -> Optional[User]:
        """Lookup user by UUID string."""
        return self._users.get(user_id)

    def _persist(self) -> None:
        """Write all users to JSON file."""
        data = {uid: user.to_dict() for uid, user in self._users.items()}
        try:
            directory = os.path.dirname(self._data_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self._data_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as exc:
            raise InfrastructureFailure(f"User store not writable: {exc}") from exc

    def _load(self) -> None:
        """Load users from JSON file. A missing file is an empty store."""
        if not os.path.exists(self._data_path):
            return
        try:
            with open(self._data_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as exc:
            raise InfrastructureFailure(f"User store unreadable: {exc}") from exc
        for uid, udata in data.items():
            self._users[uid] = User(
                user_id=udata["id"],
                name=udata["name"],
                email=udata["email"],
                password_hash=udata["password_hash"],
                created_at=udata.get("created_at"),
            )
