"""SQLAlchemy model for user roles."""

from sqlalchemy import Column, Integer, String

from servicedesk.infrastructure.database import Base


class RoleModel(Base):
    """Role used to address notifications, e.g. ``admin`` or ``supervisor``."""

    __tablename__ = "role"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False, unique=True)
    alias = Column(String(50), nullable=False, unique=True, index=True)


__all__ = ["RoleModel"]
