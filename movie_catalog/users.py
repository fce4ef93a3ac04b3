"""
Name: User Models

Responsibilities:
  - Define user roles and user entity for authentication
  - Keep auth-specific data shapes centralized
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class UserRole(str, Enum):
    """R: Supported staff roles, highest privilege first."""

    MANAGER = "MANAGER"
    TEAMLEADER = "TEAMLEADER"
    FLOORSTAFF = "FLOORSTAFF"


@dataclass
class User:
    """R: User record used by authentication flows."""

    id: int
    name: str
    email: str
    password_hash: str
    role: UserRole
    created_at: datetime | None = None
    updated_at: datetime | None = None
