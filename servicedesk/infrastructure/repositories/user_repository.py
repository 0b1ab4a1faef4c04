"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from servicedesk.domain.entities import Role, User
from servicedesk.infrastructure.models import RoleModel, UserModel


class UserRepository:
    """Provide user lookups and the recipient directory used for fan-out."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_email(self, email: str) -> User | None:
        model = self._get_model(email=email)
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel()
        model.role_id = user.role.id
        model.name = user.name
        model.email = user.email
        model.password = user.password
        if user.created_at is not None:
            model.created_at = user.created_at
        model.is_active = user.is_active
        model.deleted = user.deleted
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        if model.role is None:
            self.session.refresh(model, attribute_names=["role"])
        return self._to_entity(model)

    def list_ids_by_role_alias(self, alias: str) -> list[int]:
        query = (
            self._active_ids_query()
            .join(RoleModel, UserModel.role_id == RoleModel.id)
            .filter(func.lower(RoleModel.alias) == alias.lower())
            .order_by(UserModel.id)
        )
        return [user_id for (user_id,) in query.all()]

    def list_active_ids(self) -> list[int]:
        query = self._active_ids_query().order_by(UserModel.id)
        return [user_id for (user_id,) in query.all()]

    def filter_active_ids(self, user_ids: Iterable[int]) -> set[int]:
        """Return the subset of ``user_ids`` that can still receive notifications."""

        unique_ids = {int(user_id) for user_id in user_ids}
        if not unique_ids:
            return set()
        query = self._active_ids_query().filter(UserModel.id.in_(unique_ids))
        return {user_id for (user_id,) in query.all()}

    def _active_ids_query(self):
        return (
            self.session.query(UserModel.id)
            .filter(UserModel.deleted.is_(False))
            .filter(UserModel.is_active.is_(True))
        )

    def _get_model(self, **filters) -> UserModel | None:
        query = (
            self.session.query(UserModel)
            .options(joinedload(UserModel.role))
            .filter(UserModel.deleted.is_(False))
        )
        return query.filter_by(**filters).first()

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            role=UserRepository._role_to_entity(model.role),
            name=model.name,
            email=model.email,
            password=model.password,
            created_at=model.created_at,
            is_active=model.is_active,
            deleted=model.deleted,
        )

    @staticmethod
    def _role_to_entity(model_role) -> Role:
        if model_role is None:
            msg = "User role is not set"
            raise ValueError(msg)
        return Role(id=model_role.id, name=model_role.name, alias=model_role.alias)


__all__ = ["UserRepository"]
