from dataclasses import dataclass
from typing import FrozenSet

from flask_jwt_extended import JWTManager

from bulk_user_admin.errors import AuthorizationDenied
from bulk_user_admin.extensions import db
from bulk_user_admin.models.User import User


@dataclass(frozen=True)
class AdminCapability:
    """Authorization context handed from the HTTP layer into the service."""
    actor_id: str
    sections: FrozenSet[str] = frozenset()

    def allows(self, section: str) -> bool:
        return section in self.sections

    def require(self, section: str):
        if not self.allows(section):
            raise AuthorizationDenied(f"caller {self.actor_id} lacks access to section {section!r}")


def init_jwt_callbacks(jwt: JWTManager):
    @jwt.additional_claims_loader
    def add_claims(identity):  # pragma: no cover
        # Identities are user ids; tolerate the string form used in tokens
        try:
            ident = int(identity)
        except (TypeError, ValueError):
            return {}
        user = db.session.get(User, ident)
        if not user:
            return {}
        return {"sections": list(user.allowed_sections)}
