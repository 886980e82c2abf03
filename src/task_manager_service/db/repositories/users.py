"""Repository for users."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from task_manager_service.db.models import UserModel
from task_manager_service.db.repositories.base import SqlRepo, parse_id
from task_manager_service.domain.errors import AppError
from task_manager_service.domain.models import User


def _to_user(row: UserModel) -> User:
    return User(id=row.id, username=row.username, password_hash=row.password_hash, role=row.role)


class UserRepo(SqlRepo):
    async def create_user(self, user: User) -> User:
        row = UserModel(username=user.username, password_hash=user.password_hash, role=user.role)
        async with self._store_op("Error creating user"):
            self._session.add(row)
            try:
                await self._session.commit()
            except IntegrityError as exc:
                # unique index on username
                await self._session.rollback()
                raise AppError.bad_request("username already exists") from exc
            await self._session.refresh(row)
        return _to_user(row)

    async def update_user(self, user_id: str, user: User) -> None:
        uid = parse_id(user_id)
        async with self._store_op("Error updating user"):
            row = await self._session.get(UserModel, uid)
            if row is None:
                raise AppError.not_found("User not found")
            row.username = user.username
            row.password_hash = user.password_hash
            row.role = user.role
            await self._session.commit()

    async def find_by_username(self, username: str) -> User:
        async with self._store_op("Error retrieving user"):
            result = await self._session.execute(
                select(UserModel).where(UserModel.username == username)
            )
            row = result.scalars().first()
        if row is None:
            raise AppError.not_found("User not found")
        return _to_user(row)

    async def count_users(self) -> int:
        async with self._store_op("Error counting users"):
            result = await self._session.execute(select(func.count()).select_from(UserModel))
            return result.scalar_one()
