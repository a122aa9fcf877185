# src/transflow/presentation/api/routes/documents.py
"""文档路由：创建、列表、查看与修改元数据。"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, status

from transflow.core.types import Document, DocumentStatus

from ..deps import CoordinatorDep, PrincipalDep
from ..schemas import DocumentCreate, DocumentUpdate, changes_of

router = APIRouter(prefix="/api/documents", tags=["documents"])


@router.post("", response_model=Document, status_code=status.HTTP_201_CREATED)
async def create_document(
    body: DocumentCreate, coordinator: CoordinatorDep, principal: PrincipalDep
):
    return await coordinator.create_document(principal, **body.model_dump())


@router.get("", response_model=list[Document])
async def list_documents(
    coordinator: CoordinatorDep,
    principal: PrincipalDep,
    status: Optional[DocumentStatus] = None,
    category_id: Optional[str] = None,
    created_by: Optional[str] = None,
):
    return await coordinator.list_documents(
        status=status, category_id=category_id, created_by=created_by
    )


@router.get("/{document_id}", response_model=Document)
async def get_document(
    document_id: str, coordinator: CoordinatorDep, principal: PrincipalDep
):
    return await coordinator.get_document(document_id)


@router.put("/{document_id}", response_model=Document)
async def update_document(
    document_id: str,
    body: DocumentUpdate,
    coordinator: CoordinatorDep,
    principal: PrincipalDep,
):
    return await coordinator.update_document(principal, document_id, **changes_of(body))
