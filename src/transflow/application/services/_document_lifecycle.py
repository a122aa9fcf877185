# src/transflow/application/services/_document_lifecycle.py
"""文档生命周期：状态变更的唯一入口，以及文档的创建、更新与查询。"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from transflow.core.exceptions import InvalidStateError, NotFoundError
from transflow.core.types import Document, DocumentStatus, Principal
from transflow.domain.workflow import ensure_admin

if TYPE_CHECKING:
    from transflow.config import TransflowConfig
    from transflow.core.uow import IUnitOfWork
    from transflow.infrastructure.uow import UowFactory

logger = structlog.get_logger(__name__)

# update_document 允许修改的字段；status 永远不在其中
_UPDATABLE_FIELDS = (
    "title",
    "original_url",
    "source_lang",
    "target_lang",
    "category_id",
    "estimated_length",
)


class DocumentLifecycleService:
    def __init__(self, uow_factory: UowFactory, config: TransflowConfig):
        self._uow_factory = uow_factory
        self._config = config

    async def set_status(
        self, uow: IUnitOfWork, document_id: str, new_status: DocumentStatus
    ) -> None:
        """
        修改文档状态的唯一契约。

        只由版本、任务、审校三个组件在它们自己的工作单元内调用。
        不校验状态迁移，后写者生效。
        """
        if not isinstance(new_status, DocumentStatus):
            raise InvalidStateError(f"非法的文档状态: {new_status!r}")
        current = await uow.documents.get(document_id)
        if current is None:
            raise NotFoundError(f"文档不存在: {document_id}")
        await uow.documents.set_status(document_id, new_status)
        logger.info(
            "文档状态变更",
            document_id=document_id,
            from_status=current.status.value,
            to_status=new_status.value,
        )

    async def create_document(
        self,
        actor: Principal,
        *,
        title: str,
        original_url: str,
        source_lang: str | None = None,
        target_lang: str | None = None,
        category_id: str | None = None,
        estimated_length: int | None = None,
    ) -> Document:
        ensure_admin(actor, "创建文档")
        source_lang = source_lang or self._config.default_source_lang
        target_lang = target_lang or self._config.default_target_lang
        if not source_lang or not target_lang:
            raise InvalidStateError("创建文档必须指定源语言和目标语言。")

        async with self._uow_factory() as uow:
            document = await uow.documents.add(
                title=title,
                original_url=original_url,
                source_lang=source_lang,
                target_lang=target_lang,
                created_by=actor.id,
                category_id=category_id,
                estimated_length=estimated_length,
            )
        logger.info("文档已创建", document_id=document.id, actor=actor.id)
        return document

    async def update_document(
        self, actor: Principal, document_id: str, **changes: Any
    ) -> Document:
        """部分更新文档元数据。值为 None 的字段保持不变。"""
        ensure_admin(actor, "修改文档")
        unknown = set(changes) - set(_UPDATABLE_FIELDS)
        if unknown:
            raise InvalidStateError(f"不可修改的文档字段: {', '.join(sorted(unknown))}")
        fields = {k: v for k, v in changes.items() if v is not None}

        async with self._uow_factory() as uow:
            if await uow.documents.get(document_id) is None:
                raise NotFoundError(f"文档不存在: {document_id}")
            document = await uow.documents.update(
                document_id, **fields, last_modified_by=actor.id
            )
        logger.info(
            "文档已更新", document_id=document_id, fields=sorted(fields), actor=actor.id
        )
        return document

    async def get_document(self, document_id: str) -> Document:
        async with self._uow_factory() as uow:
            document = await uow.documents.get(document_id)
        if document is None:
            raise NotFoundError(f"文档不存在: {document_id}")
        return document

    async def list_documents(
        self,
        *,
        status: DocumentStatus | None = None,
        category_id: str | None = None,
        created_by: str | None = None,
    ) -> list[Document]:
        async with self._uow_factory() as uow:
            return await uow.documents.list(
                status=status, category_id=category_id, created_by=created_by
            )
