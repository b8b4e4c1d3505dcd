from .user_directory import UserDirectory
from .section_registry import SectionRegistry
from .bulk_user_admin_service import UserAdministrationQueryService
