from bulk_user_admin.extensions import db


class Section(db.Model):
    __tablename__ = 'sections'
    alias = db.Column(db.String(64), primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    sort_order = db.Column(db.Integer, nullable=False, default=0)
