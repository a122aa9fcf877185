# src/transflow/application/services/_term_dictionary.py
"""术语表服务。"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from transflow.core.exceptions import ConflictError, NotFoundError
from transflow.core.types import Principal, Term
from transflow.domain.workflow import ensure_admin

if TYPE_CHECKING:
    from transflow.infrastructure.uow import UowFactory

logger = structlog.get_logger(__name__)


class TermDictionaryService:
    def __init__(self, uow_factory: UowFactory):
        self._uow_factory = uow_factory

    async def create_term(
        self,
        actor: Principal,
        *,
        source_term: str,
        target_term: str,
        source_lang: str,
        target_lang: str,
        description: str | None = None,
    ) -> Term:
        ensure_admin(actor, "添加术语")
        async with self._uow_factory() as uow:
            if await uow.terms.find(source_term, source_lang, target_lang):
                raise ConflictError(
                    f"术语已存在: {source_term} ({source_lang} -> {target_lang})"
                )
            term = await uow.terms.add(
                source_term=source_term,
                target_term=target_term,
                source_lang=source_lang,
                target_lang=target_lang,
                created_by=actor.id,
                description=description,
            )
        logger.info("术语已添加", term_id=term.id, source_term=source_term)
        return term

    async def update_term(
        self,
        actor: Principal,
        term_id: str,
        *,
        source_term: str | None = None,
        target_term: str | None = None,
        description: str | None = None,
    ) -> Term:
        ensure_admin(actor, "修改术语")
        fields: dict[str, Any] = {}
        if source_term is not None:
            fields["source_term"] = source_term
        if target_term is not None:
            fields["target_term"] = target_term
        if description is not None:
            fields["description"] = description

        async with self._uow_factory() as uow:
            term = await uow.terms.get(term_id)
            if term is None:
                raise NotFoundError(f"术语不存在: {term_id}")
            if source_term is not None and source_term != term.source_term:
                clash = await uow.terms.find(source_term, term.source_lang, term.target_lang)
                if clash is not None and clash.id != term_id:
                    raise ConflictError(
                        f"术语已存在: {source_term} ({term.source_lang} -> {term.target_lang})"
                    )
            if fields:
                term = await uow.terms.update(term_id, **fields)
        logger.info("术语已修改", term_id=term_id, fields=sorted(fields))
        return term

    async def delete_term(self, actor: Principal, term_id: str) -> None:
        ensure_admin(actor, "删除术语")
        async with self._uow_factory() as uow:
            await uow.terms.delete(term_id)
        logger.info("术语已删除", term_id=term_id)

    async def get_term(self, term_id: str) -> Term:
        async with self._uow_factory() as uow:
            term = await uow.terms.get(term_id)
        if term is None:
            raise NotFoundError(f"术语不存在: {term_id}")
        return term

    async def list_terms(
        self, *, source_lang: str | None = None, target_lang: str | None = None
    ) -> list[Term]:
        async with self._uow_factory() as uow:
            return await uow.terms.list(source_lang=source_lang, target_lang=target_lang)

    async def lookup(self, source_term: str, source_lang: str, target_lang: str) -> Term:
        async with self._uow_factory() as uow:
            term = await uow.terms.find(source_term, source_lang, target_lang)
        if term is None:
            raise NotFoundError(f"未找到术语: {source_term} ({source_lang} -> {target_lang})")
        return term
