import logging
from flask import request, current_app
import orjson

logger = logging.getLogger("security_utils")


def log_structured(event: str, **fields):
    """Emit a structured JSON log line."""
    payload = {"event": event, **fields}
    current_app.logger.info(orjson.dumps(payload, default=str).decode())


def audit_log(event: str, *, user_id=None, target_user_id=None, detail=None):
    """Persist an audit log entry (best-effort).

    The bulk action itself has already been committed by the time this runs,
    so a failure here is logged and never surfaced to the caller.
    """
    from bulk_user_admin.extensions import db
    from bulk_user_admin.models.AuditLog import AuditLog
    try:
        entry = AuditLog(
            event=event,
            user_id=str(user_id) if user_id else None,
            target_user_id=str(target_user_id) if target_user_id else None,
            ip=get_client_ip(),
            detail=detail,
        )
        db.session.add(entry)
        db.session.commit()
    except Exception as e:  # pragma: no cover
        db.session.rollback()
        logger.warning(f"Audit log persist failed: {e}")


def get_client_ip() -> str:
    """Best-effort client IP extraction with basic proxy awareness.

    Trusts only the left-most X-Forwarded-For entry if header is present.
    If not present, falls back to request.remote_addr. For production behind
    known proxies, prefer configuring ProxyFix via PROXY_FIX_NUM.
    """
    xff = request.headers.get('X-Forwarded-For', '')
    if xff:
        first = xff.split(',')[0].strip()
        if first:
            return first
    return request.remote_addr or ''
