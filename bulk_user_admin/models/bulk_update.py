from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class FieldUpdate(Generic[T]):
    """A requested value together with the flag that says whether to apply it."""
    apply: bool = False
    value: Optional[T] = None


@dataclass(frozen=True)
class BulkUpdateRequest:
    """Shared attribute edits applied to every user in ``user_ids``.

    ``role.value`` is a role id; 0 or None means no role change even when
    ``role.apply`` is set. ``locked_out`` and ``disabled`` carry the
    requested *disabled* state, so ``disabled.value=True`` clears the
    approval flag.
    """
    user_ids: List[int] = field(default_factory=list)
    role: FieldUpdate[int] = field(default_factory=FieldUpdate)
    locked_out: FieldUpdate[bool] = field(default_factory=FieldUpdate)
    disabled: FieldUpdate[bool] = field(default_factory=FieldUpdate)
    start_content_node: FieldUpdate[int] = field(default_factory=FieldUpdate)
    start_media_node: FieldUpdate[int] = field(default_factory=FieldUpdate)
    sections: FieldUpdate[List[str]] = field(default_factory=FieldUpdate)

    @property
    def role_id(self) -> int:
        return self.role.value or 0
