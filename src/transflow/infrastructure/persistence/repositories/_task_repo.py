# src/transflow/infrastructure/persistence/repositories/_task_repo.py
"""翻译任务仓库的 SQLAlchemy 实现。"""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select

from transflow.core.types import TaskStatus, TranslationTask
from transflow.core.uow import ITaskRepository
from transflow.infrastructure.db._schema import TaskRow

from ._base_repo import BaseRepository


class SqlAlchemyTaskRepository(BaseRepository, ITaskRepository):
    entity_name = "翻译任务"

    async def add(
        self, *, document_id: str, translator_id: str, assigned_by: str | None
    ) -> TranslationTask:
        row = TaskRow(
            document_id=document_id,
            translator_id=translator_id,
            assigned_by=assigned_by,
        )
        self._session.add(row)
        await self._flush()
        return TranslationTask.from_orm_model(row)

    async def get(self, task_id: str) -> TranslationTask | None:
        row = await self._session.get(TaskRow, task_id)
        return TranslationTask.from_orm_model(row) if row else None

    async def get_by_document_and_translator(
        self, document_id: str, translator_id: str
    ) -> TranslationTask | None:
        stmt = select(TaskRow).where(
            TaskRow.document_id == document_id,
            TaskRow.translator_id == translator_id,
        )
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        return TranslationTask.from_orm_model(row) if row else None

    async def list(
        self,
        *,
        translator_id: str | None = None,
        document_id: str | None = None,
        status: TaskStatus | None = None,
    ) -> list[TranslationTask]:
        stmt = select(TaskRow)
        if translator_id is not None:
            stmt = stmt.where(TaskRow.translator_id == translator_id)
        if document_id is not None:
            stmt = stmt.where(TaskRow.document_id == document_id)
        if status is not None:
            stmt = stmt.where(TaskRow.status == status)
        stmt = stmt.order_by(TaskRow.created_at)
        rows = (await self._session.execute(stmt)).scalars().all()
        return [TranslationTask.from_orm_model(r) for r in rows]

    async def update(self, task_id: str, **fields: Any) -> TranslationTask:
        row = await self._apply(TaskRow, task_id, fields)
        return TranslationTask.from_orm_model(row)

    async def count_by_document_and_status(
        self, document_id: str, status: TaskStatus
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(TaskRow)
            .where(TaskRow.document_id == document_id, TaskRow.status == status)
        )
        return int((await self._session.execute(stmt)).scalar_one())
