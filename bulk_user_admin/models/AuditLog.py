from datetime import datetime, timezone
from bulk_user_admin.extensions import db

# Events written by the bulk endpoints
BULK_USERS_UPDATED = 'bulk_users_updated'
BULK_USERS_DELETED = 'bulk_users_deleted'


class AuditLog(db.Model):
    """One row per bulk administrative action."""
    __tablename__ = 'audit_logs'
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    event = db.Column(db.String(64), nullable=False)
    user_id = db.Column(db.String(64), nullable=True)  # actor
    # set only when the action targeted a single user
    target_user_id = db.Column(db.String(64), nullable=True)
    ip = db.Column(db.String(64), nullable=True)
    detail = db.Column(db.Text, nullable=True)  # count=<n>;ids=<...>
    created_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
