"""SQLAlchemy-backed user directory.

Every mutating call commits on its own; callers get no cross-call
transaction. A rejected commit is rolled back and re-raised as
PersistenceFailure.
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from bulk_user_admin.errors import PersistenceFailure
from bulk_user_admin.models.Role import Role
from bulk_user_admin.models.User import User

logger = logging.getLogger("user_directory")


class UserDirectory:
    def __init__(self, session):
        self.session = session

    def fetch_page(self, page_index: int, page_size: int) -> Tuple[List[User], int]:
        """Return one zero-based page of users (ordered by id) and the directory total."""
        query = self.session.query(User).options(
            selectinload(User.role), selectinload(User.section_associations)
        ).order_by(User.id)
        total = query.count()
        rows = query.offset(page_index * page_size).limit(page_size).all()
        logger.debug("fetch_page(%s, %s) -> %d of %d", page_index, page_size, len(rows), total)
        return rows, total

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def save(self, user: User):
        user_id = user.id
        self.session.add(user)
        self._commit(f"save user {user_id}")
        logger.info("User %s saved", user_id)

    def delete(self, user: User, permanent: bool = True):
        """Delete a user; a non-permanent delete only disables the account."""
        user_id = user.id
        if permanent:
            self.session.delete(user)
        else:
            user.is_approved = False
            user.is_locked_out = True
        self._commit(f"delete user {user_id}")
        logger.info("User %s deleted (permanent=%s)", user_id, permanent)

    def list_roles(self) -> List[Role]:
        return self.session.query(Role).all()

    def find_role_by_id(self, role_id: int) -> Optional[Role]:
        return self.session.get(Role, role_id)

    def _commit(self, what: str):
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("Directory commit failed (%s)", what)
            raise PersistenceFailure(f"{what} failed") from e
