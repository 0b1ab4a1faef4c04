"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime


from .role import ROLE_ADMIN, Role


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    role: Role
    name: str
    email: str
    password: str
    created_at: datetime | None = None
    is_active: bool = True
    deleted: bool = False

    def has_role(self, alias: str) -> bool:
        """Return ``True`` when the user's role alias matches ``alias``."""

        return self.role.alias.lower() == alias.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(ROLE_ADMIN)

    def can_receive_notifications(self) -> bool:
        return self.is_active and not self.deleted


__all__ = ["User"]
