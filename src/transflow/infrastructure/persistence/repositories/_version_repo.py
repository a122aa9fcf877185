# src/transflow/infrastructure/persistence/repositories/_version_repo.py
"""文档版本仓库的 SQLAlchemy 实现。版本行只追加，唯一可变字段是 is_final。"""

from __future__ import annotations

from sqlalchemy import select

from transflow.core.types import DocumentVersion, VersionType
from transflow.core.uow import IVersionRepository
from transflow.infrastructure.db._schema import VersionRow

from ._base_repo import BaseRepository


class SqlAlchemyVersionRepository(BaseRepository, IVersionRepository):
    entity_name = "版本"

    async def add(
        self,
        *,
        document_id: str,
        version_number: int,
        version_type: VersionType,
        content: str,
        is_final: bool,
        created_by: str,
    ) -> DocumentVersion:
        row = VersionRow(
            document_id=document_id,
            version_number=version_number,
            version_type=version_type,
            content=content,
            created_by=created_by,
            is_final=is_final,
        )
        self._session.add(row)
        await self._flush()
        return DocumentVersion.from_orm_model(row)

    async def get(self, version_id: str) -> DocumentVersion | None:
        row = await self._session.get(VersionRow, version_id)
        return DocumentVersion.from_orm_model(row) if row else None

    async def list_by_document(self, document_id: str) -> list[DocumentVersion]:
        stmt = (
            select(VersionRow)
            .where(VersionRow.document_id == document_id)
            .order_by(VersionRow.version_number, VersionRow.created_at)
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [DocumentVersion.from_orm_model(r) for r in rows]

    async def get_latest(self, document_id: str) -> DocumentVersion | None:
        stmt = (
            select(VersionRow)
            .where(VersionRow.document_id == document_id)
            .order_by(VersionRow.version_number.desc(), VersionRow.created_at.desc())
            .limit(1)
        )
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        return DocumentVersion.from_orm_model(row) if row else None

    async def get_final(self, document_id: str) -> DocumentVersion | None:
        stmt = select(VersionRow).where(
            VersionRow.document_id == document_id, VersionRow.is_final.is_(True)
        )
        row = (await self._session.execute(stmt)).scalars().first()
        return DocumentVersion.from_orm_model(row) if row else None

    async def get_by_number(
        self, document_id: str, version_number: int
    ) -> DocumentVersion | None:
        # 版本号不唯一（FINAL 复用最高号），取最近创建的一条
        stmt = (
            select(VersionRow)
            .where(
                VersionRow.document_id == document_id,
                VersionRow.version_number == version_number,
            )
            .order_by(VersionRow.created_at.desc())
            .limit(1)
        )
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        return DocumentVersion.from_orm_model(row) if row else None

    async def clear_final(self, document_id: str) -> int:
        stmt = select(VersionRow).where(
            VersionRow.document_id == document_id, VersionRow.is_final.is_(True)
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        for row in rows:
            row.is_final = False
        # 必须先落库清除，才能在部分唯一索引下设置新的最终版本
        await self._flush()
        return len(rows)

    async def mark_final(self, version_id: str) -> DocumentVersion:
        row = await self._apply(VersionRow, version_id, {"is_final": True})
        return DocumentVersion.from_orm_model(row)
