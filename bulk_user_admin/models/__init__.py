from .enumerations import OrderDirection, ActivityStatus

from .Role import Role
from .Section import Section
from .User import User, UserSection
from .AuditLog import AuditLog

from .listing import UserListItem, PagedResult
from .bulk_update import FieldUpdate, BulkUpdateRequest
