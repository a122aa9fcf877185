# src/transflow/presentation/api/routes/reviews.py
"""审校路由：创建、查询、编辑、批准、驳回与发布。"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, status

from transflow.core.types import Review, ReviewStatus

from ..deps import CoordinatorDep, PrincipalDep
from ..schemas import ReviewCreate, ReviewUpdate, changes_of

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.post("", response_model=Review, status_code=status.HTTP_201_CREATED)
async def create_review(body: ReviewCreate, coordinator: CoordinatorDep, principal: PrincipalDep):
    return await coordinator.create_review(
        body.document_id,
        body.version_id,
        reviewer_id=principal.id,
        comment=body.comment,
        checklist=body.checklist,
        is_complete=body.is_complete,
    )


@router.get("", response_model=list[Review])
async def list_reviews(
    coordinator: CoordinatorDep,
    principal: PrincipalDep,
    document_id: Optional[str] = None,
    version_id: Optional[str] = None,
    reviewer_id: Optional[str] = None,
    status: Optional[ReviewStatus] = None,
):
    return await coordinator.list_reviews(
        document_id=document_id,
        version_id=version_id,
        reviewer_id=reviewer_id,
        status=status,
    )


@router.get("/{review_id}", response_model=Review)
async def get_review(review_id: str, coordinator: CoordinatorDep, principal: PrincipalDep):
    return await coordinator.get_review(review_id)


@router.put("/{review_id}", response_model=Review)
async def update_review(
    review_id: str,
    body: ReviewUpdate,
    coordinator: CoordinatorDep,
    principal: PrincipalDep,
):
    return await coordinator.update_review(review_id, principal.id, **changes_of(body))


@router.post("/{review_id}/approve", response_model=Review)
async def approve_review(review_id: str, coordinator: CoordinatorDep, principal: PrincipalDep):
    return await coordinator.approve_review(review_id, principal.id)


@router.post("/{review_id}/reject", response_model=Review)
async def reject_review(review_id: str, coordinator: CoordinatorDep, principal: PrincipalDep):
    return await coordinator.reject_review(review_id, principal.id)


@router.post("/{review_id}/publish", response_model=Review)
async def publish_review(review_id: str, coordinator: CoordinatorDep, principal: PrincipalDep):
    return await coordinator.publish_review(review_id, principal.id)
