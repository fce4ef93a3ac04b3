"""
Name: Request Context (ContextVars)

Responsibilities:
  - Hold request-scoped values (request id, method, path, user id)
  - Let the logger tag every line with them without parameter passing

Collaborators:
  - middleware.py: sets request id, method and path at request start
  - auth_users.py: sets the user id once the token is verified
  - logger.py: reads the context for log enrichment

Constraints:
  - Values are strings; empty string means "unset"
"""

from contextvars import ContextVar

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
http_method_var: ContextVar[str] = ContextVar("http_method", default="")
http_path_var: ContextVar[str] = ContextVar("http_path", default="")
user_id_var: ContextVar[str] = ContextVar("user_id", default="")

# R: Log field name -> context var
_CONTEXT_FIELDS = (
    ("request_id", request_id_var),
    ("method", http_method_var),
    ("path", http_path_var),
    ("user_id", user_id_var),
)


def get_context_dict() -> dict:
    """R: Current context, set values only."""
    return {field: var.get() for field, var in _CONTEXT_FIELDS if var.get()}


def clear_context() -> None:
    """R: Reset all context vars (called at request end)."""
    for _, var in _CONTEXT_FIELDS:
        var.set("")
