# enums.py
from enum import Enum


class OrderDirection(str, Enum):
    ASCENDING = 'asc'
    DESCENDING = 'desc'

    @classmethod
    def parse(cls, value: str) -> "OrderDirection":
        """Accept 'asc'/'desc' as well as the long 'Ascending'/'Descending' forms."""
        key = (value or '').strip().lower()
        if key in ('asc', 'ascending'):
            return cls.ASCENDING
        if key in ('desc', 'descending'):
            return cls.DESCENDING
        raise ValueError(f"unknown sort direction: {value!r}")


class ActivityStatus(str, Enum):
    ACTIVE = 'Active'
    INACTIVE = 'Inactive'


# Sections and roles created by `flask seed-directory` (alias, name)
DEFAULT_SECTIONS = [
    ('content', 'Content'),
    ('media', 'Media'),
    ('settings', 'Settings'),
    ('developer', 'Developer'),
    ('users', 'Users'),
    ('member', 'Members'),
    ('translation', 'Translation'),
]

DEFAULT_ROLES = [
    ('administrators', 'Administrators'),
    ('editor', 'Editor'),
    ('writer', 'Writer'),
    ('translator', 'Translator'),
]
