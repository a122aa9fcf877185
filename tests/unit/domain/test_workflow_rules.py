# tests/unit/domain/test_workflow_rules.py
"""
测试任务/审校状态机守卫与派生的文档状态。
"""

import pytest

from transflow.core.exceptions import ForbiddenError, InvalidStateError
from transflow.core.types import (
    DocumentStatus,
    PermissionLevel,
    Principal,
    Review,
    ReviewStatus,
    TaskStatus,
    TranslationTask,
)
from transflow.domain.workflow import (
    ensure_admin,
    ensure_review_status,
    ensure_reviewer,
    ensure_task_owner,
    ensure_task_status,
    status_after_abandon,
    status_after_approval,
)


def _task(**overrides) -> TranslationTask:
    data = {
        "id": "t1",
        "document_id": "d1",
        "translator_id": "alice",
        "status": TaskStatus.AVAILABLE,
    }
    data.update(overrides)
    return TranslationTask(**data)


def _review(**overrides) -> Review:
    data = {
        "id": "r1",
        "document_id": "d1",
        "document_version_id": "v1",
        "reviewer_id": "rita",
        "status": ReviewStatus.PENDING,
    }
    data.update(overrides)
    return Review(**data)


class TestDerivedDocumentStatus:
    def test_complete_approval_advances_document(self):
        assert status_after_approval(True) is DocumentStatus.APPROVED

    def test_partial_approval_returns_to_translation_queue(self):
        assert status_after_approval(False) is DocumentStatus.PENDING_TRANSLATION

    def test_abandon_downgrades_only_without_active_siblings(self):
        assert status_after_abandon(0) is DocumentStatus.PENDING_TRANSLATION
        assert status_after_abandon(1) is None
        assert status_after_abandon(3) is None


class TestGuards:
    @pytest.mark.parametrize(
        "level", [PermissionLevel.ADMIN, PermissionLevel.SUPER_ADMIN]
    )
    def test_admin_levels_pass(self, level):
        ensure_admin(Principal(id="u", level=level), "创建文档")

    def test_contributor_is_forbidden(self):
        with pytest.raises(ForbiddenError, match="只有管理员"):
            ensure_admin(Principal(id="u"), "创建文档")

    def test_task_owner(self):
        ensure_task_owner(_task(), "alice", "开始")
        with pytest.raises(ForbiddenError):
            ensure_task_owner(_task(), "mallory", "开始")

    def test_task_status(self):
        ensure_task_status(_task(), TaskStatus.AVAILABLE, "开始")
        with pytest.raises(InvalidStateError, match="IN_PROGRESS"):
            ensure_task_status(
                _task(status=TaskStatus.IN_PROGRESS), TaskStatus.AVAILABLE, "开始"
            )

    def test_reviewer_and_review_status(self):
        ensure_reviewer(_review(), "rita", "通过")
        with pytest.raises(ForbiddenError):
            ensure_reviewer(_review(), "alice", "通过")
        with pytest.raises(InvalidStateError):
            ensure_review_status(
                _review(status=ReviewStatus.APPROVED), ReviewStatus.PENDING, "通过"
            )

    def test_self_assigned_task(self):
        assert _task().is_self_assigned
        assert not _task(assigned_by="admin").is_self_assigned
