"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.sql import expression
from sqlalchemy.orm import relationship

from servicedesk.infrastructure.database import Base
from servicedesk.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_user_read", "user_id", "read"),
        Index("ix_notification_user_created", "user_id", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    type = Column(String(120), nullable=False)
    title = Column(String(120), nullable=False)
    message = Column(Text, nullable=False)
    read = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    read_at = Column(DateTime(), nullable=True)

    user = relationship("UserModel", lazy="joined")


__all__ = ["NotificationModel"]
