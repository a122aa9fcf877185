# src/transflow/infrastructure/persistence/repositories/_review_repo.py
"""审校仓库的 SQLAlchemy 实现。"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select

from transflow.core.types import Review, ReviewStatus
from transflow.core.uow import IReviewRepository
from transflow.infrastructure.db._schema import ReviewRow

from ._base_repo import BaseRepository


class SqlAlchemyReviewRepository(BaseRepository, IReviewRepository):
    entity_name = "审校"

    async def add(
        self,
        *,
        document_id: str,
        document_version_id: str,
        reviewer_id: str,
        comment: str | None,
        checklist: dict[str, bool],
        is_complete: bool,
    ) -> Review:
        row = ReviewRow(
            document_id=document_id,
            document_version_id=document_version_id,
            reviewer_id=reviewer_id,
            comment=comment,
            checklist=dict(checklist),
            is_complete=is_complete,
        )
        self._session.add(row)
        await self._flush()
        return Review.from_orm_model(row)

    async def get(self, review_id: str) -> Review | None:
        row = await self._session.get(ReviewRow, review_id)
        return Review.from_orm_model(row) if row else None

    async def get_by_document_and_version(
        self, document_id: str, version_id: str
    ) -> Review | None:
        stmt = select(ReviewRow).where(
            ReviewRow.document_id == document_id,
            ReviewRow.document_version_id == version_id,
        )
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        return Review.from_orm_model(row) if row else None

    async def list(
        self,
        *,
        document_id: str | None = None,
        version_id: str | None = None,
        reviewer_id: str | None = None,
        status: ReviewStatus | None = None,
    ) -> list[Review]:
        stmt = select(ReviewRow)
        if document_id is not None:
            stmt = stmt.where(ReviewRow.document_id == document_id)
        if version_id is not None:
            stmt = stmt.where(ReviewRow.document_version_id == version_id)
        if reviewer_id is not None:
            stmt = stmt.where(ReviewRow.reviewer_id == reviewer_id)
        if status is not None:
            stmt = stmt.where(ReviewRow.status == status)
        stmt = stmt.order_by(ReviewRow.created_at)
        rows = (await self._session.execute(stmt)).scalars().all()
        return [Review.from_orm_model(r) for r in rows]

    async def update(self, review_id: str, **fields: Any) -> Review:
        if "checklist" in fields and fields["checklist"] is not None:
            # JSON 列不追踪原地修改，总是赋新对象
            fields["checklist"] = dict(fields["checklist"])
        row = await self._apply(ReviewRow, review_id, fields)
        return Review.from_orm_model(row)
