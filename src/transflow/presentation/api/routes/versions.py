# src/transflow/presentation/api/routes/versions.py
"""文档版本路由。固定路径必须声明在 `/{version_id}` 之前。"""

from __future__ import annotations

from fastapi import APIRouter, status

from transflow.core.types import DocumentVersion

from ..deps import CoordinatorDep, PrincipalDep
from ..schemas import VersionCreate

router = APIRouter(prefix="/api/documents/{document_id}/versions", tags=["versions"])


@router.post("", response_model=DocumentVersion, status_code=status.HTTP_201_CREATED)
async def create_version(
    document_id: str,
    body: VersionCreate,
    coordinator: CoordinatorDep,
    principal: PrincipalDep,
):
    return await coordinator.create_version(
        document_id, body.version_type, body.content, body.is_final, actor=principal
    )


@router.get("", response_model=list[DocumentVersion])
async def list_versions(
    document_id: str, coordinator: CoordinatorDep, principal: PrincipalDep
):
    return await coordinator.list_versions(document_id)


@router.get("/current", response_model=DocumentVersion)
async def current_version(
    document_id: str, coordinator: CoordinatorDep, principal: PrincipalDep
):
    return await coordinator.get_current_version(document_id)


@router.get("/latest", response_model=DocumentVersion)
async def latest_version(
    document_id: str, coordinator: CoordinatorDep, principal: PrincipalDep
):
    return await coordinator.get_latest_version(document_id)


@router.get("/final", response_model=DocumentVersion)
async def final_version(
    document_id: str, coordinator: CoordinatorDep, principal: PrincipalDep
):
    return await coordinator.get_final_version(document_id)


@router.get("/number/{version_number}", response_model=DocumentVersion)
async def version_by_number(
    document_id: str,
    version_number: int,
    coordinator: CoordinatorDep,
    principal: PrincipalDep,
):
    return await coordinator.get_version_by_number(document_id, version_number)


@router.get("/{version_id}", response_model=DocumentVersion)
async def get_version(
    document_id: str,
    version_id: str,
    coordinator: CoordinatorDep,
    principal: PrincipalDep,
):
    return await coordinator.get_version(version_id, document_id)


@router.put("/{version_id}/set-current", response_model=DocumentVersion)
async def set_current_version(
    document_id: str,
    version_id: str,
    coordinator: CoordinatorDep,
    principal: PrincipalDep,
):
    return await coordinator.set_current_version(document_id, version_id, actor=principal)
