# src/transflow/domain/workflow.py
"""
任务与审校状态机的守卫规则，以及由它们派生的文档状态。

这些函数不触碰持久化，只在违反规则时抛出业务异常；
应用服务负责在同一个工作单元内调用它们并执行级联。
"""

from __future__ import annotations

from transflow.core.exceptions import ForbiddenError, InvalidStateError
from transflow.core.types import (
    DocumentStatus,
    Principal,
    Review,
    ReviewStatus,
    TaskStatus,
    TranslationTask,
)


def ensure_admin(actor: Principal, action: str) -> None:
    if not actor.is_admin_or_above:
        raise ForbiddenError(f"只有管理员可以{action}。")


def ensure_task_owner(task: TranslationTask, caller_id: str, action: str) -> None:
    if task.translator_id != caller_id:
        raise ForbiddenError(f"只能{action}本人的翻译任务。")


def ensure_task_status(
    task: TranslationTask, expected: TaskStatus, action: str
) -> None:
    if task.status is not expected:
        raise InvalidStateError(
            f"任务当前状态不允许{action}。当前状态: {task.status.value}"
        )


def ensure_reviewer(review: Review, caller_id: str, action: str) -> None:
    if review.reviewer_id != caller_id:
        raise ForbiddenError(f"只能{action}本人的审校。")


def ensure_review_status(
    review: Review, expected: ReviewStatus, action: str
) -> None:
    if review.status is not expected:
        raise InvalidStateError(
            f"审校当前状态不允许{action}。当前状态: {review.status.value}"
        )


def status_after_approval(is_complete: bool) -> DocumentStatus:
    """
    审校通过后文档的去向由完整性标记决定：
    完整译文进入 APPROVED，部分译文回到待翻译队列等待下一位译者。
    """
    return DocumentStatus.APPROVED if is_complete else DocumentStatus.PENDING_TRANSLATION


def status_after_abandon(active_siblings: int) -> DocumentStatus | None:
    """仍有其他进行中的任务时不降级文档，返回 None。"""
    return DocumentStatus.PENDING_TRANSLATION if active_siblings == 0 else None
