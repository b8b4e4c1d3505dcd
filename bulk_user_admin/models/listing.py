"""Read-side shapes produced by the listing query (never persisted)."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, List, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class UserListItem:
    id: int
    name: str
    email: str
    role: str
    active: bool

    @classmethod
    def from_user(cls, user) -> "UserListItem":
        return cls(
            id=user.id,
            name=user.name or '',
            email=user.email or '',
            role=user.role.name if user.role is not None else '',
            active=bool(user.is_approved) and not user.is_locked_out,
        )


@dataclass
class PagedResult(Generic[T]):
    total: int
    page: int
    page_size: int
    items: List[T] = field(default_factory=list)

    @property
    def pages(self) -> int:
        return max(1, (self.total + self.page_size - 1) // self.page_size)
