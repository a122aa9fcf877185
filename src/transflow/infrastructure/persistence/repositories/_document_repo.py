# src/transflow/infrastructure/persistence/repositories/_document_repo.py
"""文档仓库的 SQLAlchemy 实现。"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select

from transflow.core.types import Document, DocumentStatus
from transflow.core.uow import IDocumentRepository
from transflow.infrastructure.db._schema import DocumentRow

from ._base_repo import BaseRepository


class SqlAlchemyDocumentRepository(BaseRepository, IDocumentRepository):
    entity_name = "文档"

    async def add(
        self,
        *,
        title: str,
        original_url: str,
        source_lang: str,
        target_lang: str,
        created_by: str,
        category_id: str | None = None,
        estimated_length: int | None = None,
    ) -> Document:
        row = DocumentRow(
            title=title,
            original_url=original_url,
            source_lang=source_lang,
            target_lang=target_lang,
            created_by=created_by,
            category_id=category_id,
            estimated_length=estimated_length,
        )
        self._session.add(row)
        await self._flush()
        return Document.from_orm_model(row)

    async def get(self, document_id: str) -> Document | None:
        row = await self._session.get(DocumentRow, document_id)
        return Document.from_orm_model(row) if row else None

    async def get_for_update(self, document_id: str) -> Document | None:
        stmt = (
            select(DocumentRow)
            .where(DocumentRow.id == document_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        return Document.from_orm_model(row) if row else None

    async def list(
        self,
        *,
        status: DocumentStatus | None = None,
        category_id: str | None = None,
        created_by: str | None = None,
    ) -> list[Document]:
        stmt = select(DocumentRow)
        if status is not None:
            stmt = stmt.where(DocumentRow.status == status)
        if category_id is not None:
            stmt = stmt.where(DocumentRow.category_id == category_id)
        if created_by is not None:
            stmt = stmt.where(DocumentRow.created_by == created_by)
        stmt = stmt.order_by(DocumentRow.created_at)
        rows = (await self._session.execute(stmt)).scalars().all()
        return [Document.from_orm_model(r) for r in rows]

    async def update(self, document_id: str, **fields: Any) -> Document:
        if "status" in fields:
            raise ValueError("文档状态只能通过 set_status 修改。")
        row = await self._apply(DocumentRow, document_id, fields)
        return Document.from_orm_model(row)

    async def set_status(self, document_id: str, status: DocumentStatus) -> None:
        await self._apply(DocumentRow, document_id, {"status": status})

    async def set_current_version(self, document_id: str, version_id: str) -> None:
        await self._apply(DocumentRow, document_id, {"current_version_id": version_id})
