from bulk_user_admin.extensions import db


class Role(db.Model):
    """User type assigned to each account (one role per user)."""
    __tablename__ = 'roles'
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    alias = db.Column(db.String(64), unique=True, nullable=False)
    name = db.Column(db.String(128), nullable=False)

    users = db.relationship("User", back_populates="role")
