# src/transflow/infrastructure/persistence/repositories/_term_repo.py
"""术语表仓库的 SQLAlchemy 实现。"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select

from transflow.core.types import Term
from transflow.core.uow import ITermRepository
from transflow.infrastructure.db._schema import TermRow

from ._base_repo import BaseRepository


class SqlAlchemyTermRepository(BaseRepository, ITermRepository):
    entity_name = "术语"

    async def add(
        self,
        *,
        source_term: str,
        target_term: str,
        source_lang: str,
        target_lang: str,
        created_by: str,
        description: str | None = None,
    ) -> Term:
        row = TermRow(
            source_term=source_term,
            target_term=target_term,
            source_lang=source_lang,
            target_lang=target_lang,
            created_by=created_by,
            description=description,
        )
        self._session.add(row)
        await self._flush()
        return Term.from_orm_model(row)

    async def get(self, term_id: str) -> Term | None:
        row = await self._session.get(TermRow, term_id)
        return Term.from_orm_model(row) if row else None

    async def find(
        self, source_term: str, source_lang: str, target_lang: str
    ) -> Term | None:
        stmt = select(TermRow).where(
            TermRow.source_term == source_term,
            TermRow.source_lang == source_lang,
            TermRow.target_lang == target_lang,
        )
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        return Term.from_orm_model(row) if row else None

    async def list(
        self, *, source_lang: str | None = None, target_lang: str | None = None
    ) -> list[Term]:
        stmt = select(TermRow)
        if source_lang is not None:
            stmt = stmt.where(TermRow.source_lang == source_lang)
        if target_lang is not None:
            stmt = stmt.where(TermRow.target_lang == target_lang)
        stmt = stmt.order_by(TermRow.source_term)
        rows = (await self._session.execute(stmt)).scalars().all()
        return [Term.from_orm_model(r) for r in rows]

    async def update(self, term_id: str, **fields: Any) -> Term:
        row = await self._apply(TermRow, term_id, fields)
        return Term.from_orm_model(row)

    async def delete(self, term_id: str) -> None:
        row = await self._require(TermRow, term_id)
        await self._session.delete(row)
        await self._flush()
