# src/transflow/infrastructure/persistence/repositories/_user_repo.py
"""用户仓库的 SQLAlchemy 实现。"""

from __future__ import annotations

from sqlalchemy import select

from transflow.core.types import PermissionLevel, User
from transflow.core.uow import IUserRepository
from transflow.infrastructure.db._schema import UserRow

from ._base_repo import BaseRepository


class SqlAlchemyUserRepository(BaseRepository, IUserRepository):
    entity_name = "用户"

    async def add(
        self,
        *,
        email: str,
        name: str,
        permission_level: PermissionLevel,
        api_token_sha256: str | None = None,
    ) -> User:
        row = UserRow(
            email=email,
            name=name,
            permission_level=permission_level,
            api_token_sha256=api_token_sha256,
        )
        self._session.add(row)
        await self._flush()
        return User.from_orm_model(row)

    async def get(self, user_id: str) -> User | None:
        row = await self._session.get(UserRow, user_id)
        return User.from_orm_model(row) if row else None

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(UserRow).where(UserRow.email == email)
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        return User.from_orm_model(row) if row else None

    async def get_by_token_hash(self, token_sha256: str) -> User | None:
        stmt = select(UserRow).where(UserRow.api_token_sha256 == token_sha256)
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        return User.from_orm_model(row) if row else None

    async def set_permission_level(
        self, user_id: str, level: PermissionLevel
    ) -> User:
        row = await self._apply(UserRow, user_id, {"permission_level": level})
        return User.from_orm_model(row)
