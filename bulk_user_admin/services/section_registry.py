from typing import List, Optional

from bulk_user_admin.models.Section import Section


class SectionRegistry:
    """Read-only registry of the functional areas a user may be granted."""

    def __init__(self, session):
        self.session = session

    def list_sections(self) -> List[Section]:
        return self.session.query(Section).all()

    def find_section(self, alias: str) -> Optional[Section]:
        return self.session.get(Section, alias)
