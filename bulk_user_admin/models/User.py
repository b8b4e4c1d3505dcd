# models/user.py

import logging
from datetime import datetime, timezone
from sqlalchemy.ext.associationproxy import association_proxy
from sqlalchemy import Column, String, Boolean, DateTime, Integer, ForeignKey

from ..extensions import db

logger = logging.getLogger("user_directory")

# --- Constants ---
ROOT_NODE_ID = -1

# --- Association Table for User Sections ---


class UserSection(db.Model):
    __tablename__ = "user_sections"
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), primary_key=True)
    section_alias = db.Column(db.String(64), db.ForeignKey("sections.alias"), primary_key=True)

    user = db.relationship("User", back_populates="section_associations")

# --- User Model ---


class User(db.Model):
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    username = Column(String(125), unique=True)
    email = Column(String(255), unique=True)

    role_id = Column(Integer, ForeignKey('roles.id'), nullable=False)

    is_approved = Column(Boolean, nullable=False, default=True)
    is_locked_out = Column(Boolean, nullable=False, default=False)

    start_content_id = Column(Integer, nullable=False, default=ROOT_NODE_ID)
    start_media_id = Column(Integer, nullable=False, default=ROOT_NODE_ID)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, default=lambda: datetime.now(
        timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # --- Relationships ---
    role = db.relationship("Role", back_populates="users")

    section_associations = db.relationship(
        "UserSection", back_populates="user", cascade="all, delete-orphan",
        order_by="UserSection.section_alias")
    allowed_sections = association_proxy(
        "section_associations", "section_alias",
        creator=lambda alias: UserSection(section_alias=alias))

    # --- Status ---

    @property
    def is_active(self) -> bool:
        return bool(self.is_approved) and not self.is_locked_out

    # --- Sections ---

    def add_allowed_section(self, alias: str):
        if alias in self.allowed_sections:
            return
        self.allowed_sections.append(alias)
        logger.debug(f"User {self.id} granted section {alias}")

    def remove_allowed_section(self, alias: str):
        for assoc in list(self.section_associations):
            if assoc.section_alias == alias:
                self.section_associations.remove(assoc)
                logger.debug(f"User {self.id} revoked section {alias}")

    def __str__(self):
        return f"<User(name='{self.name}', email='{self.email}')>"
