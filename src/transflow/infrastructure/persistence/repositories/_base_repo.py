# src/transflow/infrastructure/persistence/repositories/_base_repo.py
from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from sqlalchemy.exc import IntegrityError

from transflow.core.exceptions import ConflictError, NotFoundError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

RowT = TypeVar("RowT")


class BaseRepository:
    """所有 SQLAlchemy 仓库的基类。"""

    # 子类覆盖，用于 NotFound / Conflict 消息
    entity_name: str = "实体"

    def __init__(self, session: "AsyncSession"):
        self._session = session

    async def _flush(self) -> None:
        """刷新挂起的变更；唯一约束冲突转换为 ConflictError。"""
        try:
            await self._session.flush()
        except IntegrityError as e:
            raise ConflictError(f"{self.entity_name}违反唯一性约束。") from e

    async def _require(self, model: type[RowT], entity_id: str) -> RowT:
        row = await self._session.get(model, entity_id)
        if row is None:
            raise NotFoundError(f"{self.entity_name}不存在: {entity_id}")
        return row

    async def _apply(self, model: type[RowT], entity_id: str, fields: dict[str, Any]) -> RowT:
        row = await self._require(model, entity_id)
        for name, value in fields.items():
            setattr(row, name, value)
        await self._flush()
        return row
