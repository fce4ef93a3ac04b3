"""
Name: In-Memory User Repository

Responsibilities:
  - Store users in process memory for tests and local runs
  - Enforce unique emails like the database constraint does
"""

import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, Optional

from ...exceptions import DuplicateEmailError
from ...users import User, UserRole


class InMemoryUserRepository:
    """R: Dict-backed UserRepository."""

    def __init__(self):
        self._users: Dict[int, User] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return replace(user)
        return None

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return replace(user) if user else None

    def create_user(
        self, *, name: str, email: str, password_hash: str, role: UserRole
    ) -> User:
        with self._lock:
            if any(u.email == email for u in self._users.values()):
                raise DuplicateEmailError(email)
            now = datetime.now(timezone.utc)
            user = User(
                id=self._next_id,
                name=name,
                email=email,
                password_hash=password_hash,
                role=role,
                created_at=now,
                updated_at=now,
            )
            self._users[user.id] = user
            self._next_id += 1
            return replace(user)

    def delete_user(self, user_id: int) -> bool:
        """R: Test helper; the API never deletes users."""
        with self._lock:
            return self._users.pop(user_id, None) is not None
