"""
Name: Role-Based Access Control (RBAC)

Responsibilities:
  - Define the operations that can be performed on movies
  - Map each staff role to its allowed operations
  - Provide a FastAPI dependency that gates routes by operation

Collaborators:
  - users.py: UserRole
  - auth_users.py: require_user (Auth Gate dependency)
  - routes.py: Depends(require_operation(...)) on movie endpoints
  - application.use_cases: is_allowed for service-level enforcement

Constraints:
  - The matrix is a constant; it is not configurable at runtime
  - Unknown roles are denied every operation

Notes:
  - MANAGER: create, read, update, delete
  - TEAMLEADER / FLOORSTAFF: create, read, update
"""

from enum import Enum
from typing import Callable, FrozenSet, Mapping

from fastapi import Depends

from .error_responses import forbidden
from .logger import logger
from .token_codec import TokenClaims
from .users import UserRole


class MovieOperation(str, Enum):
    """Operations on the movie resource."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


_STAFF_OPERATIONS: FrozenSet[MovieOperation] = frozenset(
    {MovieOperation.CREATE, MovieOperation.READ, MovieOperation.UPDATE}
)

ROLE_PERMISSIONS: Mapping[UserRole, FrozenSet[MovieOperation]] = {
    UserRole.MANAGER: frozenset(MovieOperation),
    UserRole.TEAMLEADER: _STAFF_OPERATIONS,
    UserRole.FLOORSTAFF: _STAFF_OPERATIONS,
}


def _coerce_role(role: UserRole | str | None) -> UserRole | None:
    if isinstance(role, UserRole):
        return role
    try:
        return UserRole(role)
    except ValueError:
        return None


def allowed_operations(role: UserRole | str | None) -> FrozenSet[MovieOperation]:
    """R: Operations the role may perform (empty for unknown roles)."""
    user_role = _coerce_role(role)
    if user_role is None:
        return frozenset()
    return ROLE_PERMISSIONS.get(user_role, frozenset())


def is_allowed(role: UserRole | str | None, operation: MovieOperation | str) -> bool:
    """
    R: Check whether a role may perform an operation on movies.

    Total over role x operation: unknown roles and unknown operations
    are always denied.
    """
    try:
        op = MovieOperation(operation)
    except ValueError:
        return False
    return op in allowed_operations(role)


def require_operation(operation: MovieOperation) -> Callable:
    """
    R: FastAPI dependency: authenticated user whose role allows `operation`.

    Raises 401 through the Auth Gate and 403 when the role lacks permission.
    """
    from .auth_users import require_user

    def dependency(claims: TokenClaims = Depends(require_user())) -> TokenClaims:
        if not is_allowed(claims.role, operation):
            logger.warning(
                "Operation denied",
                extra={
                    "user_id": claims.user_id,
                    "role": claims.role,
                    "operation": operation.value,
                },
            )
            raise forbidden(f"Role is not allowed to {operation.value} movies.")
        return claims

    return dependency
