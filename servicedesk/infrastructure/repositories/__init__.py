"""Repository implementations for infrastructure layer."""

from .role_repository import RoleRepository
from .user_repository import UserRepository
from .notification_repository import DEFAULT_LIST_LIMIT, NotificationRepository

__all__ = [
    "RoleRepository",
    "UserRepository",
    "NotificationRepository",
    "DEFAULT_LIST_LIMIT",
]
