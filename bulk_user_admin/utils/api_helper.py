from __future__ import annotations

from typing import Any, Dict
from flask import jsonify

from bulk_user_admin.errors import BulkUserAdminError


def ok(payload: Dict[str, Any] | None = None, status: int = 200, **extra):
    """Standard success envelope.

    Returns a JSON response: { ok: True, ...payload, ...extra }
    """
    body: Dict[str, Any] = {"ok": True}
    if payload:
        body.update(payload)
    if extra:
        body.update(extra)
    return jsonify(body), status


def error(message: str, status: int = 400, *, code: str | None = None, **extra):
    """Standard error envelope.

    Returns a JSON response: { ok: False, error: message, code?, ...extra }
    """
    body: Dict[str, Any] = {"ok": False, "error": message}
    if code:
        body["code"] = code
    if extra:
        body.update(extra)
    return jsonify(body), status


def error_from(exc: BulkUserAdminError):
    """Render a service error with its own status and code."""
    return error(exc.message, exc.status_code, code=exc.code, **exc.extra)


def bulk_audit_detail(count: int, user_ids) -> str:
    """Audit detail for a bulk action, e.g. 'count=2;ids=3,4,9'."""
    ids = ','.join(str(i) for i in (user_ids or []))
    return f"count={count};ids={ids}"
