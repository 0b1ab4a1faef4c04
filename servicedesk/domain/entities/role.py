"""Domain entity representing a user role."""

from dataclasses import dataclass

ROLE_ADMIN = "admin"
ROLE_SUPERVISOR = "supervisor"
ROLE_TECHNICIAN = "technician"
ROLE_AGENT = "agent"


@dataclass
class Role:
    """A role assigned to a user; notification policies address roles by alias."""

    id: int
    name: str
    alias: str


__all__ = ["Role", "ROLE_ADMIN", "ROLE_SUPERVISOR", "ROLE_TECHNICIAN", "ROLE_AGENT"]
