"""Bulk user administration over a UserDirectory and a SectionRegistry.

Listing pulls a single directory page of ``fetch_size`` users, filters and
sorts it in memory, and reports the filtered count. Directories larger than
``fetch_size`` are only searched within that first page.

Bulk update and delete walk the requested ids in order, persist each user
independently, and stop at the first failure. Users handled before the
failure stay persisted.
"""
import logging
from typing import Any, Callable, Dict, List

from bulk_user_admin.errors import InvalidSortField, NotFound
from bulk_user_admin.models.bulk_update import BulkUpdateRequest
from bulk_user_admin.models.enumerations import ActivityStatus, OrderDirection
from bulk_user_admin.models.listing import PagedResult, UserListItem

logger = logging.getLogger("bulk_users")

DEFAULT_FETCH_SIZE = 1000
DEFAULT_SORT_FIELD = 'Name'
DEFAULT_SECTION = 'users'


def _text_key(attr: str) -> Callable[[UserListItem], str]:
    return lambda item: (getattr(item, attr) or '').casefold()


SORT_KEYS: Dict[str, Callable[[UserListItem], Any]] = {
    'id': lambda item: item.id,
    'name': _text_key('name'),
    'email': _text_key('email'),
    'role': _text_key('role'),
    'active': lambda item: item.active,
}

SORT_ALIASES = {
    'usertype': 'role',
    'rolename': 'role',
}


def sort_key_for(field: str) -> Callable[[UserListItem], Any]:
    """Resolve a sort field name ('Name', 'email', 'role_name', ...) to its key."""
    norm = (field or '').replace('_', '').strip().lower()
    norm = SORT_ALIASES.get(norm, norm)
    try:
        return SORT_KEYS[norm]
    except KeyError:
        raise InvalidSortField(field, allowed=SORT_KEYS) from None


def matches_filter(item: UserListItem, term: str) -> bool:
    """Substring match on name/email/role, or exact match on Active/Inactive."""
    needle = term.casefold()
    if any(needle in (value or '').casefold() for value in (item.name, item.email, item.role)):
        return True
    status = ActivityStatus.ACTIVE if item.active else ActivityStatus.INACTIVE
    return needle == status.value.casefold()


def diff_user(user, request: BulkUpdateRequest, role) -> Dict[str, Any]:
    """Field changes ``request`` would make to ``user``.

    Only fields whose apply flag is set and whose requested value differs
    from the current one appear in the result. ``role`` is the resolved
    target role or None.
    """
    changes: Dict[str, Any] = {}

    if request.role.apply and role is not None and (user.role is None or user.role.id != role.id):
        changes['role'] = role

    if request.locked_out.apply and bool(user.is_locked_out) != bool(request.locked_out.value):
        changes['is_locked_out'] = bool(request.locked_out.value)

    approved = not request.disabled.value
    if request.disabled.apply and bool(user.is_approved) != approved:
        changes['is_approved'] = approved

    if request.start_content_node.apply and user.start_content_id != request.start_content_node.value:
        changes['start_content_id'] = request.start_content_node.value

    if request.start_media_node.apply and user.start_media_id != request.start_media_node.value:
        changes['start_media_id'] = request.start_media_node.value

    if request.sections.apply:
        current = set(user.allowed_sections)
        wanted = set(request.sections.value or [])
        if current != wanted:
            changes['allowed_sections'] = (current - wanted, wanted - current)

    return changes


def apply_changes(user, changes: Dict[str, Any]):
    for name, value in changes.items():
        if name == 'allowed_sections':
            removed, added = value
            for alias in sorted(removed):
                user.remove_allowed_section(alias)
            for alias in sorted(added):
                user.add_allowed_section(alias)
        else:
            setattr(user, name, value)


class UserAdministrationQueryService:
    def __init__(self, directory, sections, fetch_size: int = DEFAULT_FETCH_SIZE,
                 admin_section: str = DEFAULT_SECTION):
        if fetch_size <= 0:
            raise ValueError(f"fetch_size must be positive, got {fetch_size}")
        self.directory = directory
        self.sections = sections
        self.fetch_size = fetch_size
        self.admin_section = admin_section

    # --- Listing ---

    def list_users(self, capability, page: int = 0, sort_field: str = DEFAULT_SORT_FIELD,
                   sort_direction: OrderDirection = OrderDirection.ASCENDING,
                   filter_text: str = '') -> PagedResult:
        capability.require(self.admin_section)
        key = sort_key_for(sort_field)

        users, _upstream_total = self.directory.fetch_page(page, self.fetch_size)
        items = [UserListItem.from_user(u) for u in users]

        if filter_text and filter_text.strip():
            items = [item for item in items if matches_filter(item, filter_text)]

        items.sort(key=key, reverse=sort_direction == OrderDirection.DESCENDING)
        logger.debug("list_users page=%s sort=%s %s filter=%r -> %d",
                     page, sort_field, sort_direction.value, filter_text, len(items))
        return PagedResult(total=len(items), page=page, page_size=self.fetch_size, items=items)

    def list_roles(self, capability) -> List:
        capability.require(self.admin_section)
        return sorted(self.directory.list_roles(), key=lambda r: r.name)

    def list_sections(self, capability) -> List:
        capability.require(self.admin_section)
        return sorted(self.sections.list_sections(), key=lambda s: s.sort_order)

    # --- Bulk mutation ---

    def update_users(self, capability, request: BulkUpdateRequest) -> int:
        """Apply ``request`` to every listed user; returns how many were saved."""
        capability.require(self.admin_section)
        role = self._resolve_role(request)
        if request.sections.apply:
            self._check_sections(request.sections.value or [])

        saved = 0
        for user_id in request.user_ids:
            user = self._get_user(user_id)
            changes = diff_user(user, request, role)
            if not changes:
                continue
            apply_changes(user, changes)
            self.directory.save(user)
            saved += 1
            logger.info("User %s updated: %s", user_id, ', '.join(sorted(changes)))
        return saved

    def delete_users(self, capability, request: BulkUpdateRequest) -> int:
        capability.require(self.admin_section)
        deleted = 0
        for user_id in request.user_ids:
            user = self._get_user(user_id)
            self.directory.delete(user, permanent=True)
            deleted += 1
            logger.info("User %s deleted", user_id)
        return deleted

    def _get_user(self, user_id):
        user = self.directory.find_by_id(user_id)
        if user is None:
            raise NotFound('user', user_id)
        return user

    def _resolve_role(self, request: BulkUpdateRequest):
        if request.role_id <= 0:
            return None
        role = self.directory.find_role_by_id(request.role_id)
        if role is None and request.role.apply:
            raise NotFound('role', request.role_id)
        return role

    def _check_sections(self, aliases):
        for alias in aliases:
            if self.sections.find_section(alias) is None:
                raise NotFound('section', alias)
