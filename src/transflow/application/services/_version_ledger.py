# src/transflow/application/services/_version_ledger.py
"""文档版本账本：只追加的版本、当前版本指针与唯一的最终版本标记。"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from transflow.core.exceptions import ForbiddenError, InvalidStateError, NotFoundError
from transflow.core.types import DocumentVersion, Principal, TaskStatus, VersionType
from transflow.domain.versioning import coerce_version_type, next_version_number

if TYPE_CHECKING:
    from transflow.core.uow import IUnitOfWork
    from transflow.infrastructure.uow import UowFactory

    from ._document_scope import DocumentScope

logger = structlog.get_logger(__name__)


class VersionLedgerService:
    def __init__(self, uow_factory: UowFactory, scope: DocumentScope):
        self._uow_factory = uow_factory
        self._scope = scope

    async def create_version(
        self,
        document_id: str,
        version_type: VersionType | str,
        content: str,
        is_final_requested: bool = False,
        *,
        actor: Principal,
    ) -> DocumentVersion:
        vtype = coerce_version_type(version_type)
        async with self._scope.open(document_id) as (uow, _document):
            await self._ensure_may_write(uow, document_id, actor)

            latest = await uow.versions.get_latest(document_id)
            number = next_version_number(vtype, latest.version_number if latest else None)

            if is_final_requested:
                await uow.versions.clear_final(document_id)
            version = await uow.versions.add(
                document_id=document_id,
                version_number=number,
                version_type=vtype,
                content=content,
                is_final=is_final_requested,
                created_by=actor.id,
            )
            await uow.documents.set_current_version(document_id, version.id)

        logger.info(
            "版本已创建",
            document_id=document_id,
            version_id=version.id,
            version_number=number,
            version_type=vtype.value,
            is_final=is_final_requested,
        )
        return version

    async def set_current_version(
        self, document_id: str, version_id: str, *, actor: Principal
    ) -> DocumentVersion:
        """只移动当前版本指针，不改变任何版本的 is_final。"""
        async with self._scope.open(document_id) as (uow, _document):
            version = await self._version_of(uow, document_id, version_id)
            await uow.documents.set_current_version(document_id, version.id)
        logger.info(
            "当前版本已切换",
            document_id=document_id,
            version_id=version_id,
            actor=actor.id,
        )
        return version

    async def mark_final(
        self, uow: IUnitOfWork, document_id: str, version_id: str
    ) -> DocumentVersion:
        """
        [内部契约] 由审校通过时在调用方的工作单元内调用。

        先清除文档上其他版本的最终标记，再设置给定版本，并把当前版本指针指向它。
        """
        version = await self._version_of(uow, document_id, version_id)
        cleared = await uow.versions.clear_final(document_id)
        version = await uow.versions.mark_final(version.id)
        await uow.documents.set_current_version(document_id, version.id)
        logger.debug(
            "最终版本已标记",
            document_id=document_id,
            version_id=version_id,
            cleared=cleared,
        )
        return version

    # ---------------- 查询 ----------------

    async def list_versions(self, document_id: str) -> list[DocumentVersion]:
        async with self._uow_factory() as uow:
            await self._require_document(uow, document_id)
            return await uow.versions.list_by_document(document_id)

    async def get_version(
        self, version_id: str, document_id: str | None = None
    ) -> DocumentVersion:
        async with self._uow_factory() as uow:
            version = await uow.versions.get(version_id)
        if version is None or (document_id is not None and version.document_id != document_id):
            raise NotFoundError(f"版本不存在: {version_id}")
        return version

    async def get_current_version(self, document_id: str) -> DocumentVersion:
        """返回当前版本指针指向的版本；指针为空时退回到最新版本。"""
        async with self._uow_factory() as uow:
            document = await self._require_document(uow, document_id)
            version = None
            if document.current_version_id:
                version = await uow.versions.get(document.current_version_id)
            if version is None:
                version = await uow.versions.get_latest(document_id)
        if version is None:
            raise NotFoundError(f"文档尚无任何版本: {document_id}")
        return version

    async def get_latest_version(self, document_id: str) -> DocumentVersion:
        async with self._uow_factory() as uow:
            await self._require_document(uow, document_id)
            version = await uow.versions.get_latest(document_id)
        if version is None:
            raise NotFoundError(f"文档尚无任何版本: {document_id}")
        return version

    async def get_final_version(self, document_id: str) -> DocumentVersion:
        async with self._uow_factory() as uow:
            await self._require_document(uow, document_id)
            version = await uow.versions.get_final(document_id)
        if version is None:
            raise NotFoundError(f"文档尚无最终版本: {document_id}")
        return version

    async def get_version_by_number(
        self, document_id: str, version_number: int
    ) -> DocumentVersion:
        async with self._uow_factory() as uow:
            await self._require_document(uow, document_id)
            version = await uow.versions.get_by_number(document_id, version_number)
        if version is None:
            raise NotFoundError(f"版本号不存在: {document_id}#{version_number}")
        return version

    # ---------------- 内部辅助 ----------------

    @staticmethod
    async def _require_document(uow: IUnitOfWork, document_id: str):
        document = await uow.documents.get(document_id)
        if document is None:
            raise NotFoundError(f"文档不存在: {document_id}")
        return document

    @staticmethod
    async def _version_of(
        uow: IUnitOfWork, document_id: str, version_id: str
    ) -> DocumentVersion:
        version = await uow.versions.get(version_id)
        if version is None:
            raise NotFoundError(f"版本不存在: {version_id}")
        if version.document_id != document_id:
            raise InvalidStateError(f"版本 {version_id} 不属于文档 {document_id}。")
        return version

    @staticmethod
    async def _ensure_may_write(
        uow: IUnitOfWork, document_id: str, actor: Principal
    ) -> None:
        """管理员，或在该文档上持有进行中任务的译者，才可以写入新版本。"""
        if actor.is_admin_or_above:
            return
        task = await uow.tasks.get_by_document_and_translator(document_id, actor.id)
        if task is None or task.status is not TaskStatus.IN_PROGRESS:
            raise ForbiddenError("只有管理员或该文档进行中任务的译者可以创建版本。")
