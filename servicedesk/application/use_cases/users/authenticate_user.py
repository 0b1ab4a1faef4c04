"""Sign-in check for users of the notification API."""

import logging
from enum import Enum, auto

from sqlalchemy.orm import Session

from servicedesk.domain.entities import User
from servicedesk.infrastructure.repositories import UserRepository
from servicedesk.infrastructure.security import verify_password

logger = logging.getLogger(__name__)


class AuthenticationStatus(Enum):
    SUCCESS = auto()
    INVALID_CREDENTIALS = auto()
    INACTIVE = auto()


def authenticate_user(
    session: Session, email: str, password: str
) -> tuple[User | None, AuthenticationStatus]:
    """Check ``email`` and ``password``.

    Deleted accounts are invisible to the lookup and therefore report invalid
    credentials; inactive accounts are returned so callers can tell them apart.
    """

    user = UserRepository(session).get_by_email(email.strip())
    if user is None or not verify_password(password, user.password):
        return None, AuthenticationStatus.INVALID_CREDENTIALS
    if not user.can_receive_notifications():
        logger.info("Sign-in refused for inactive user %s", user.id)
        return user, AuthenticationStatus.INACTIVE
    return user, AuthenticationStatus.SUCCESS
