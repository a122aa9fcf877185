# src/transflow/application/services/_task_coordinator.py
"""翻译任务的创建、状态迁移与向文档状态的级联。"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

import structlog

from transflow.core.exceptions import ConflictError, NotFoundError
from transflow.core.types import DocumentStatus, Principal, TaskStatus, TranslationTask
from transflow.domain.workflow import (
    ensure_admin,
    ensure_task_owner,
    ensure_task_status,
    status_after_abandon,
)

if TYPE_CHECKING:
    from transflow.infrastructure.uow import UowFactory

    from ._document_lifecycle import DocumentLifecycleService
    from ._document_scope import DocumentScope

logger = structlog.get_logger(__name__)


class TaskCoordinatorService:
    def __init__(
        self,
        uow_factory: UowFactory,
        scope: DocumentScope,
        lifecycle: DocumentLifecycleService,
    ):
        self._uow_factory = uow_factory
        self._scope = scope
        self._lifecycle = lifecycle

    async def create_task(
        self,
        document_id: str,
        translator_id: str | None = None,
        *,
        actor: Principal,
        assign: bool = False,
    ) -> TranslationTask:
        """
        创建翻译任务。

        未指定译者时默认为调用者本人（自领）。为他人创建，或显式 `assign=True`，
        需要管理员权限，并记录调用者为指派人。同一 (文档, 译者) 组合只能有一个
        任务，已放弃的任务同样占位。
        """
        translator_id = translator_id or actor.id
        assigned_by: str | None = None
        if assign or translator_id != actor.id:
            ensure_admin(actor, "指派翻译任务")
            assigned_by = actor.id

        async with self._uow_factory() as uow:
            if await uow.documents.get(document_id) is None:
                raise NotFoundError(f"文档不存在: {document_id}")
            if await uow.users.get(translator_id) is None:
                raise NotFoundError(f"译者不存在: {translator_id}")
            existing = await uow.tasks.get_by_document_and_translator(
                document_id, translator_id
            )
            if existing is not None:
                raise ConflictError(
                    f"该译者在此文档上已有任务（状态: {existing.status.value}）。"
                )
            task = await uow.tasks.add(
                document_id=document_id,
                translator_id=translator_id,
                assigned_by=assigned_by,
            )

        logger.info(
            "翻译任务已创建",
            task_id=task.id,
            document_id=document_id,
            translator_id=translator_id,
            assigned_by=assigned_by,
        )
        return task

    async def start_task(self, task_id: str, caller_id: str) -> TranslationTask:
        document_id = await self._resolve_document_id(task_id)
        async with self._scope.open(document_id) as (uow, _document):
            task = await self._reload(uow, task_id)
            ensure_task_owner(task, caller_id, "开始")
            ensure_task_status(task, TaskStatus.AVAILABLE, "开始")
            now = _utcnow()
            task = await uow.tasks.update(
                task_id,
                status=TaskStatus.IN_PROGRESS,
                started_at=now,
                last_activity_at=now,
            )
            await self._lifecycle.set_status(uow, document_id, DocumentStatus.IN_TRANSLATION)
        logger.info("翻译任务已开始", task_id=task_id, document_id=document_id)
        return task

    async def submit_task(self, task_id: str, caller_id: str) -> TranslationTask:
        document_id = await self._resolve_document_id(task_id)
        async with self._scope.open(document_id) as (uow, _document):
            task = await self._reload(uow, task_id)
            ensure_task_owner(task, caller_id, "提交")
            ensure_task_status(task, TaskStatus.IN_PROGRESS, "提交")
            now = _utcnow()
            task = await uow.tasks.update(
                task_id,
                status=TaskStatus.SUBMITTED,
                submitted_at=now,
                last_activity_at=now,
            )
            await self._lifecycle.set_status(uow, document_id, DocumentStatus.PENDING_REVIEW)
        logger.info("翻译任务已提交", task_id=task_id, document_id=document_id)
        return task

    async def abandon_task(self, task_id: str, caller_id: str) -> TranslationTask:
        """放弃任务。任意状态均可放弃；只有在没有其他进行中任务时才把文档退回待翻译。"""
        document_id = await self._resolve_document_id(task_id)
        async with self._scope.open(document_id) as (uow, _document):
            task = await self._reload(uow, task_id)
            ensure_task_owner(task, caller_id, "放弃")
            task = await uow.tasks.update(
                task_id, status=TaskStatus.ABANDONED, last_activity_at=_utcnow()
            )
            active = await uow.tasks.count_by_document_and_status(
                document_id, TaskStatus.IN_PROGRESS
            )
            new_status = status_after_abandon(active)
            if new_status is not None:
                await self._lifecycle.set_status(uow, document_id, new_status)
        logger.info(
            "翻译任务已放弃",
            task_id=task_id,
            document_id=document_id,
            remaining_in_progress=active,
        )
        return task

    async def touch_activity(self, task_id: str, caller_id: str) -> TranslationTask:
        """刷新任务的最近活动时间，不级联。"""
        async with self._uow_factory() as uow:
            task = await self._reload(uow, task_id)
            ensure_task_owner(task, caller_id, "更新")
            return await uow.tasks.update(task_id, last_activity_at=_utcnow())

    # ---------------- 查询 ----------------

    async def get_task(self, task_id: str) -> TranslationTask:
        async with self._uow_factory() as uow:
            return await self._reload(uow, task_id)

    async def list_tasks(
        self,
        *,
        translator_id: str | None = None,
        document_id: str | None = None,
        status: TaskStatus | None = None,
    ) -> list[TranslationTask]:
        async with self._uow_factory() as uow:
            return await uow.tasks.list(
                translator_id=translator_id, document_id=document_id, status=status
            )

    async def my_tasks(
        self, caller_id: str, status: TaskStatus | None = None
    ) -> list[TranslationTask]:
        return await self.list_tasks(translator_id=caller_id, status=status)

    # ---------------- 内部辅助 ----------------

    async def _resolve_document_id(self, task_id: str) -> str:
        async with self._uow_factory() as uow:
            task = await self._reload(uow, task_id)
        return task.document_id

    @staticmethod
    async def _reload(uow, task_id: str) -> TranslationTask:
        task = await uow.tasks.get(task_id)
        if task is None:
            raise NotFoundError(f"翻译任务不存在: {task_id}")
        return task


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)
