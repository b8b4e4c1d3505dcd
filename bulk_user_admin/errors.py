"""Errors raised by the bulk user admin service.

Each error carries the HTTP status and the machine readable ``code`` the
app-level error handler renders into the standard error envelope.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class BulkUserAdminError(Exception):
    status_code = 500
    code = 'internal_error'
    default_message = 'Internal server error'

    def __init__(self, message: Optional[str] = None, **extra: Any):
        self.message = message or self.default_message
        self.extra: Dict[str, Any] = extra
        super().__init__(self.message)


class NotFound(BulkUserAdminError):
    """A referenced user, role or section does not resolve."""
    status_code = 404
    code = 'not_found'
    default_message = 'Not found'

    def __init__(self, kind: str, ident: Any):
        super().__init__(f"{kind} {ident!r} not found", kind=kind, id=ident)
        self.kind = kind
        self.ident = ident


class InvalidSortField(BulkUserAdminError):
    status_code = 400
    code = 'invalid_sort_field'

    def __init__(self, field: str, allowed=()):
        super().__init__(f"cannot sort by {field!r}", field=field, allowed=sorted(allowed))
        self.field = field


class PersistenceFailure(BulkUserAdminError):
    """The directory rejected a save or delete."""
    status_code = 500
    code = 'persist_failed'
    default_message = 'Persist failed'


class AuthorizationDenied(BulkUserAdminError):
    status_code = 403
    code = 'forbidden'
    default_message = 'Forbidden: insufficient permissions'
