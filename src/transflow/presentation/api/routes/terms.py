# src/transflow/presentation/api/routes/terms.py
"""术语表路由。"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Response, status

from transflow.core.types import Term

from ..deps import CoordinatorDep, PrincipalDep
from ..schemas import TermCreate, TermUpdate, changes_of

router = APIRouter(prefix="/api/terms", tags=["terms"])


@router.post("", response_model=Term, status_code=status.HTTP_201_CREATED)
async def create_term(body: TermCreate, coordinator: CoordinatorDep, principal: PrincipalDep):
    return await coordinator.create_term(principal, **body.model_dump())


@router.get("", response_model=list[Term])
async def list_terms(
    coordinator: CoordinatorDep,
    principal: PrincipalDep,
    source_lang: Optional[str] = None,
    target_lang: Optional[str] = None,
):
    return await coordinator.list_terms(source_lang=source_lang, target_lang=target_lang)


@router.get("/search", response_model=Term)
async def search_term(
    source_term: str,
    source_lang: str,
    target_lang: str,
    coordinator: CoordinatorDep,
    principal: PrincipalDep,
):
    return await coordinator.lookup_term(source_term, source_lang, target_lang)


@router.get("/{term_id}", response_model=Term)
async def get_term(term_id: str, coordinator: CoordinatorDep, principal: PrincipalDep):
    return await coordinator.get_term(term_id)


@router.put("/{term_id}", response_model=Term)
async def update_term(
    term_id: str, body: TermUpdate, coordinator: CoordinatorDep, principal: PrincipalDep
):
    return await coordinator.update_term(principal, term_id, **changes_of(body))


@router.delete("/{term_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_term(term_id: str, coordinator: CoordinatorDep, principal: PrincipalDep):
    await coordinator.delete_term(principal, term_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
