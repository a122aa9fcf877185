# src/transflow/core/uow.py
"""
工作单元 (Unit of Work) 与仓库的抽象契约。

一个 UoW 对应一次全有或全无的业务动作：`async with uow_factory() as uow:`
正常退出时提交，异常退出时回滚。应用服务只依赖这里的协议。
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .types import (
        Document,
        DocumentStatus,
        DocumentVersion,
        PermissionLevel,
        Review,
        ReviewStatus,
        TaskStatus,
        Term,
        TranslationTask,
        User,
        VersionType,
    )


class IDocumentRepository(Protocol):
    async def add(
        self,
        *,
        title: str,
        original_url: str,
        source_lang: str,
        target_lang: str,
        created_by: str,
        category_id: str | None = None,
        estimated_length: int | None = None,
    ) -> Document: ...

    async def get(self, document_id: str) -> Document | None: ...

    async def get_for_update(self, document_id: str) -> Document | None:
        """读取文档行并加行锁（PostgreSQL 上为 SELECT ... FOR UPDATE）。"""
        ...

    async def list(
        self,
        *,
        status: DocumentStatus | None = None,
        category_id: str | None = None,
        created_by: str | None = None,
    ) -> list[Document]: ...

    async def update(self, document_id: str, **fields: Any) -> Document: ...

    async def set_status(self, document_id: str, status: DocumentStatus) -> None: ...

    async def set_current_version(self, document_id: str, version_id: str) -> None: ...


class IVersionRepository(Protocol):
    async def add(
        self,
        *,
        document_id: str,
        version_number: int,
        version_type: VersionType,
        content: str,
        is_final: bool,
        created_by: str,
    ) -> DocumentVersion: ...

    async def get(self, version_id: str) -> DocumentVersion | None: ...

    async def list_by_document(self, document_id: str) -> list[DocumentVersion]: ...

    async def get_latest(self, document_id: str) -> DocumentVersion | None: ...

    async def get_final(self, document_id: str) -> DocumentVersion | None: ...

    async def get_by_number(
        self, document_id: str, version_number: int
    ) -> DocumentVersion | None: ...

    async def clear_final(self, document_id: str) -> int:
        """清除文档上的最终版本标记，返回受影响的行数（0 或 1）。"""
        ...

    async def mark_final(self, version_id: str) -> DocumentVersion: ...


class ITaskRepository(Protocol):
    async def add(
        self, *, document_id: str, translator_id: str, assigned_by: str | None
    ) -> TranslationTask: ...

    async def get(self, task_id: str) -> TranslationTask | None: ...

    async def get_by_document_and_translator(
        self, document_id: str, translator_id: str
    ) -> TranslationTask | None: ...

    async def list(
        self,
        *,
        translator_id: str | None = None,
        document_id: str | None = None,
        status: TaskStatus | None = None,
    ) -> list[TranslationTask]: ...

    async def update(self, task_id: str, **fields: Any) -> TranslationTask: ...

    async def count_by_document_and_status(
        self, document_id: str, status: TaskStatus
    ) -> int: ...


class IReviewRepository(Protocol):
    async def add(
        self,
        *,
        document_id: str,
        document_version_id: str,
        reviewer_id: str,
        comment: str | None,
        checklist: dict[str, bool],
        is_complete: bool,
    ) -> Review: ...

    async def get(self, review_id: str) -> Review | None: ...

    async def get_by_document_and_version(
        self, document_id: str, version_id: str
    ) -> Review | None: ...

    async def list(
        self,
        *,
        document_id: str | None = None,
        version_id: str | None = None,
        reviewer_id: str | None = None,
        status: ReviewStatus | None = None,
    ) -> list[Review]: ...

    async def update(self, review_id: str, **fields: Any) -> Review: ...


class ITermRepository(Protocol):
    async def add(
        self,
        *,
        source_term: str,
        target_term: str,
        source_lang: str,
        target_lang: str,
        created_by: str,
        description: str | None = None,
    ) -> Term: ...

    async def get(self, term_id: str) -> Term | None: ...

    async def find(
        self, source_term: str, source_lang: str, target_lang: str
    ) -> Term | None: ...

    async def list(
        self, *, source_lang: str | None = None, target_lang: str | None = None
    ) -> list[Term]: ...

    async def update(self, term_id: str, **fields: Any) -> Term: ...

    async def delete(self, term_id: str) -> None: ...


class IUserRepository(Protocol):
    async def add(
        self,
        *,
        email: str,
        name: str,
        permission_level: PermissionLevel,
        api_token_sha256: str | None = None,
    ) -> User: ...

    async def get(self, user_id: str) -> User | None: ...

    async def get_by_email(self, email: str) -> User | None: ...

    async def get_by_token_hash(self, token_sha256: str) -> User | None: ...

    async def set_permission_level(
        self, user_id: str, level: PermissionLevel
    ) -> User: ...


class IUnitOfWork(Protocol):
    documents: IDocumentRepository
    versions: IVersionRepository
    tasks: ITaskRepository
    reviews: IReviewRepository
    terms: ITermRepository
    users: IUserRepository

    async def __aenter__(self) -> "IUnitOfWork": ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
