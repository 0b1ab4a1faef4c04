"""Use case for creating users that can receive notifications."""

from sqlalchemy.orm import Session

from servicedesk.domain.entities import User
from servicedesk.infrastructure.repositories import RoleRepository, UserRepository
from servicedesk.infrastructure.security import get_password_hash
from servicedesk.utils import now_in_app_naive_datetime


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    role_alias: str,
    is_active: bool = True,
) -> User:
    """Create a user with the role ``role_alias``, creating the role if needed."""

    repository = UserRepository(session)
    if repository.get_by_email(email):
        msg = "Email address is already registered"
        raise ValueError(msg)

    role = RoleRepository(session).get_or_create(
        name=role_alias.capitalize(), alias=role_alias
    )
    user = User(
        id=None,
        role=role,
        name=name,
        email=email,
        password=get_password_hash(password),
        created_at=now_in_app_naive_datetime(),
        is_active=is_active,
    )
    return repository.create(user)
