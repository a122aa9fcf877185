# src/transflow/application/services/_review_workflow.py
"""审校工作流：创建、通过、驳回、发布与编辑审校，并级联到版本账本和文档状态。"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import structlog

from transflow.core.exceptions import ConflictError, InvalidStateError, NotFoundError
from transflow.core.types import DocumentStatus, Review, ReviewStatus
from transflow.domain.workflow import (
    ensure_review_status,
    ensure_reviewer,
    status_after_approval,
)

if TYPE_CHECKING:
    from transflow.core.uow import IUnitOfWork
    from transflow.infrastructure.uow import UowFactory

    from ._document_lifecycle import DocumentLifecycleService
    from ._document_scope import DocumentScope
    from ._version_ledger import VersionLedgerService

logger = structlog.get_logger(__name__)


class ReviewWorkflowService:
    def __init__(
        self,
        uow_factory: UowFactory,
        scope: DocumentScope,
        lifecycle: DocumentLifecycleService,
        ledger: VersionLedgerService,
    ):
        self._uow_factory = uow_factory
        self._scope = scope
        self._lifecycle = lifecycle
        self._ledger = ledger

    async def create_review(
        self,
        document_id: str,
        version_id: str,
        *,
        reviewer_id: str,
        comment: str | None = None,
        checklist: dict[str, bool] | None = None,
        is_complete: bool = False,
    ) -> Review:
        async with self._uow_factory() as uow:
            if await uow.documents.get(document_id) is None:
                raise NotFoundError(f"文档不存在: {document_id}")
            version = await uow.versions.get(version_id)
            if version is None:
                raise NotFoundError(f"版本不存在: {version_id}")
            if version.document_id != document_id:
                raise InvalidStateError(f"版本 {version_id} 不属于文档 {document_id}。")
            if await uow.reviews.get_by_document_and_version(document_id, version_id):
                raise ConflictError("该版本已有审校记录。")
            review = await uow.reviews.add(
                document_id=document_id,
                document_version_id=version_id,
                reviewer_id=reviewer_id,
                comment=comment,
                checklist=checklist or {},
                is_complete=is_complete,
            )
        logger.info(
            "审校已创建",
            review_id=review.id,
            document_id=document_id,
            version_id=version_id,
            reviewer_id=reviewer_id,
        )
        return review

    async def approve_review(self, review_id: str, caller_id: str) -> Review:
        """
        通过审校：标记被审版本为最终版本，文档按完整性标记进入
        APPROVED（完整）或 PENDING_TRANSLATION（部分）。
        """
        document_id = await self._resolve_document_id(review_id)
        async with self._scope.open(document_id) as (uow, _document):
            review = await self._reload(uow, review_id)
            ensure_reviewer(review, caller_id, "通过")
            ensure_review_status(review, ReviewStatus.PENDING, "通过")
            now = _utcnow()
            review = await uow.reviews.update(
                review_id,
                status=ReviewStatus.APPROVED,
                reviewed_at=now,
                final_approval_at=now,
            )
            await self._ledger.mark_final(uow, document_id, review.document_version_id)
            await self._lifecycle.set_status(
                uow, document_id, status_after_approval(review.is_complete)
            )
        logger.info(
            "审校已通过",
            review_id=review_id,
            document_id=document_id,
            is_complete=review.is_complete,
        )
        return review

    async def reject_review(self, review_id: str, caller_id: str) -> Review:
        document_id = await self._resolve_document_id(review_id)
        async with self._scope.open(document_id) as (uow, _document):
            review = await self._reload(uow, review_id)
            ensure_reviewer(review, caller_id, "驳回")
            ensure_review_status(review, ReviewStatus.PENDING, "驳回")
            review = await uow.reviews.update(
                review_id, status=ReviewStatus.REJECTED, reviewed_at=_utcnow()
            )
            await self._lifecycle.set_status(uow, document_id, DocumentStatus.IN_TRANSLATION)
        logger.info("审校已驳回", review_id=review_id, document_id=document_id)
        return review

    async def publish_review(self, review_id: str, caller_id: str) -> Review:
        document_id = await self._resolve_document_id(review_id)
        async with self._scope.open(document_id) as (uow, _document):
            review = await self._reload(uow, review_id)
            ensure_reviewer(review, caller_id, "发布")
            ensure_review_status(review, ReviewStatus.APPROVED, "发布")
            review = await uow.reviews.update(review_id, published_at=_utcnow())
            await self._lifecycle.set_status(uow, document_id, DocumentStatus.PUBLISHED)
        logger.info("审校已发布", review_id=review_id, document_id=document_id)
        return review

    async def update_review(
        self,
        review_id: str,
        caller_id: str,
        *,
        comment: str | None = None,
        checklist: dict[str, bool] | None = None,
        is_complete: bool | None = None,
    ) -> Review:
        """编辑待审校记录；只修改显式提供的字段。"""
        fields: dict[str, Any] = {}
        if comment is not None:
            fields["comment"] = comment
        if checklist is not None:
            fields["checklist"] = checklist
        if is_complete is not None:
            fields["is_complete"] = is_complete

        document_id = await self._resolve_document_id(review_id)
        async with self._scope.open(document_id) as (uow, _document):
            review = await self._reload(uow, review_id)
            ensure_reviewer(review, caller_id, "编辑")
            ensure_review_status(review, ReviewStatus.PENDING, "编辑")
            if fields:
                review = await uow.reviews.update(review_id, **fields)
        logger.debug("审校已编辑", review_id=review_id, fields=sorted(fields))
        return review

    # ---------------- 查询 ----------------

    async def get_review(self, review_id: str) -> Review:
        async with self._uow_factory() as uow:
            return await self._reload(uow, review_id)

    async def list_reviews(
        self,
        *,
        document_id: str | None = None,
        version_id: str | None = None,
        reviewer_id: str | None = None,
        status: ReviewStatus | None = None,
    ) -> list[Review]:
        async with self._uow_factory() as uow:
            return await uow.reviews.list(
                document_id=document_id,
                version_id=version_id,
                reviewer_id=reviewer_id,
                status=status,
            )

    # ---------------- 内部辅助 ----------------

    async def _resolve_document_id(self, review_id: str) -> str:
        async with self._uow_factory() as uow:
            review = await self._reload(uow, review_id)
        return review.document_id

    @staticmethod
    async def _reload(uow: IUnitOfWork, review_id: str) -> Review:
        review = await uow.reviews.get(review_id)
        if review is None:
            raise NotFoundError(f"审校不存在: {review_id}")
        return review


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)
