# src/transflow/application/coordinator.py
"""
Transflow 应用服务总协调器。
这是一个高级门面，将调用委托给具体的应用服务；HTTP API 与 CLI 只依赖它。
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from transflow.core.types import (
        Document,
        DocumentStatus,
        DocumentVersion,
        PermissionLevel,
        Principal,
        Review,
        ReviewStatus,
        TaskStatus,
        Term,
        TranslationTask,
        User,
        VersionType,
    )

    from .services import (
        DocumentLifecycleService,
        ReviewWorkflowService,
        TaskCoordinatorService,
        TermDictionaryService,
        UserDirectoryService,
        VersionLedgerService,
    )


class WorkflowCoordinator:
    """高级门面，接收已初始化的服务实例。"""

    def __init__(
        self,
        documents: DocumentLifecycleService,
        versions: VersionLedgerService,
        tasks: TaskCoordinatorService,
        reviews: ReviewWorkflowService,
        terms: TermDictionaryService,
        users: UserDirectoryService,
    ):
        self.documents = documents
        self.versions = versions
        self.tasks = tasks
        self.reviews = reviews
        self.terms = terms
        self.users = users

    # ---------------- 文档 ----------------

    async def create_document(self, actor: Principal, **fields: Any) -> Document:
        """创建文档（管理员），初始状态为 DRAFT。"""
        return await self.documents.create_document(actor, **fields)

    async def update_document(
        self, actor: Principal, document_id: str, **changes: Any
    ) -> Document:
        return await self.documents.update_document(actor, document_id, **changes)

    async def get_document(self, document_id: str) -> Document:
        return await self.documents.get_document(document_id)

    async def list_documents(
        self,
        *,
        status: DocumentStatus | None = None,
        category_id: str | None = None,
        created_by: str | None = None,
    ) -> list[Document]:
        return await self.documents.list_documents(
            status=status, category_id=category_id, created_by=created_by
        )

    # ---------------- 版本 ----------------

    async def create_version(
        self,
        document_id: str,
        version_type: VersionType | str,
        content: str,
        is_final_requested: bool = False,
        *,
        actor: Principal,
    ) -> DocumentVersion:
        """追加新版本，并把当前版本指针指向它。"""
        return await self.versions.create_version(
            document_id, version_type, content, is_final_requested, actor=actor
        )

    async def set_current_version(
        self, document_id: str, version_id: str, *, actor: Principal
    ) -> DocumentVersion:
        return await self.versions.set_current_version(document_id, version_id, actor=actor)

    async def list_versions(self, document_id: str) -> list[DocumentVersion]:
        return await self.versions.list_versions(document_id)

    async def get_version(
        self, version_id: str, document_id: str | None = None
    ) -> DocumentVersion:
        return await self.versions.get_version(version_id, document_id)

    async def get_current_version(self, document_id: str) -> DocumentVersion:
        return await self.versions.get_current_version(document_id)

    async def get_latest_version(self, document_id: str) -> DocumentVersion:
        return await self.versions.get_latest_version(document_id)

    async def get_final_version(self, document_id: str) -> DocumentVersion:
        return await self.versions.get_final_version(document_id)

    async def get_version_by_number(
        self, document_id: str, version_number: int
    ) -> DocumentVersion:
        return await self.versions.get_version_by_number(document_id, version_number)

    # ---------------- 任务 ----------------

    async def create_task(
        self,
        document_id: str,
        translator_id: str | None = None,
        *,
        actor: Principal,
        assign: bool = False,
    ) -> TranslationTask:
        return await self.tasks.create_task(
            document_id, translator_id, actor=actor, assign=assign
        )

    async def start_task(self, task_id: str, caller_id: str) -> TranslationTask:
        return await self.tasks.start_task(task_id, caller_id)

    async def submit_task(self, task_id: str, caller_id: str) -> TranslationTask:
        return await self.tasks.submit_task(task_id, caller_id)

    async def abandon_task(self, task_id: str, caller_id: str) -> TranslationTask:
        return await self.tasks.abandon_task(task_id, caller_id)

    async def touch_activity(self, task_id: str, caller_id: str) -> TranslationTask:
        return await self.tasks.touch_activity(task_id, caller_id)

    async def get_task(self, task_id: str) -> TranslationTask:
        return await self.tasks.get_task(task_id)

    async def list_tasks(
        self,
        *,
        translator_id: str | None = None,
        document_id: str | None = None,
        status: TaskStatus | None = None,
    ) -> list[TranslationTask]:
        return await self.tasks.list_tasks(
            translator_id=translator_id, document_id=document_id, status=status
        )

    async def my_tasks(
        self, caller_id: str, status: TaskStatus | None = None
    ) -> list[TranslationTask]:
        return await self.tasks.my_tasks(caller_id, status)

    # ---------------- 审校 ----------------

    async def create_review(
        self, document_id: str, version_id: str, *, reviewer_id: str, **fields: Any
    ) -> Review:
        return await self.reviews.create_review(
            document_id, version_id, reviewer_id=reviewer_id, **fields
        )

    async def approve_review(self, review_id: str, caller_id: str) -> Review:
        return await self.reviews.approve_review(review_id, caller_id)

    async def reject_review(self, review_id: str, caller_id: str) -> Review:
        return await self.reviews.reject_review(review_id, caller_id)

    async def publish_review(self, review_id: str, caller_id: str) -> Review:
        return await self.reviews.publish_review(review_id, caller_id)

    async def update_review(self, review_id: str, caller_id: str, **fields: Any) -> Review:
        return await self.reviews.update_review(review_id, caller_id, **fields)

    async def get_review(self, review_id: str) -> Review:
        return await self.reviews.get_review(review_id)

    async def list_reviews(
        self,
        *,
        document_id: str | None = None,
        version_id: str | None = None,
        reviewer_id: str | None = None,
        status: ReviewStatus | None = None,
    ) -> list[Review]:
        return await self.reviews.list_reviews(
            document_id=document_id,
            version_id=version_id,
            reviewer_id=reviewer_id,
            status=status,
        )

    # ---------------- 术语 ----------------

    async def create_term(self, actor: Principal, **fields: Any) -> Term:
        return await self.terms.create_term(actor, **fields)

    async def update_term(self, actor: Principal, term_id: str, **fields: Any) -> Term:
        return await self.terms.update_term(actor, term_id, **fields)

    async def delete_term(self, actor: Principal, term_id: str) -> None:
        await self.terms.delete_term(actor, term_id)

    async def get_term(self, term_id: str) -> Term:
        return await self.terms.get_term(term_id)

    async def list_terms(
        self, *, source_lang: str | None = None, target_lang: str | None = None
    ) -> list[Term]:
        return await self.terms.list_terms(source_lang=source_lang, target_lang=target_lang)

    async def lookup_term(
        self, source_term: str, source_lang: str, target_lang: str
    ) -> Term:
        return await self.terms.lookup(source_term, source_lang, target_lang)

    # ---------------- 用户 ----------------

    async def register_user(
        self, email: str, name: str, level: PermissionLevel
    ) -> tuple[User, str]:
        """注册用户，返回 (用户, 一次性明文令牌)。"""
        return await self.users.register_user(email, name, level)

    async def change_role(
        self,
        actor: Principal,
        level: PermissionLevel,
        *,
        user_id: str | None = None,
        email: str | None = None,
    ) -> User:
        return await self.users.change_role(actor, level, user_id=user_id, email=email)

    async def get_user(self, user_id: str) -> User:
        return await self.users.get_user(user_id)
