# src/transflow/core/types.py
"""
本模块定义了 Transflow 工作流引擎的核心数据类型。
这些类型是系统各层之间数据交换的契约：仓库返回它们，服务和 API 消费它们。
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DocumentStatus(str, Enum):
    """文档在翻译流水线中的状态，只能经由 DocumentLifecycle.set_status 改写。"""

    DRAFT = "DRAFT"
    PENDING_TRANSLATION = "PENDING_TRANSLATION"
    IN_TRANSLATION = "IN_TRANSLATION"
    PENDING_REVIEW = "PENDING_REVIEW"
    APPROVED = "APPROVED"
    PUBLISHED = "PUBLISHED"


class VersionType(str, Enum):
    """版本类型，同时决定版本号的分配规则。"""

    ORIGINAL = "ORIGINAL"
    AI_DRAFT = "AI_DRAFT"
    MANUAL_TRANSLATION = "MANUAL_TRANSLATION"
    FINAL = "FINAL"


class TaskStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    IN_PROGRESS = "IN_PROGRESS"
    SUBMITTED = "SUBMITTED"
    ABANDONED = "ABANDONED"


class ReviewStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class PermissionLevel(str, Enum):
    """权限级别。引擎只区分“管理员及以上”和普通贡献者。"""

    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    CONTRIBUTOR = "CONTRIBUTOR"

    @property
    def is_admin_or_above(self) -> bool:
        return self in (PermissionLevel.SUPER_ADMIN, PermissionLevel.ADMIN)

    @classmethod
    def from_role_level(cls, role_level: int) -> "PermissionLevel":
        """兼容旧系统的数字角色级别（1=最高管理员，2=管理员，3=贡献者）。"""
        mapping = {1: cls.SUPER_ADMIN, 2: cls.ADMIN, 3: cls.CONTRIBUTOR}
        try:
            return mapping[role_level]
        except KeyError:
            raise ValueError(f"角色级别必须是 1、2、3 之一，实际为 {role_level}") from None


class Principal(BaseModel):
    """由 IdentityProvider 返回的调用者身份。"""

    model_config = ConfigDict(frozen=True)

    id: str
    level: PermissionLevel = PermissionLevel.CONTRIBUTOR

    @property
    def is_admin_or_above(self) -> bool:
        return self.level.is_admin_or_above


class _OrmDTO(BaseModel):
    """所有以 ORM 实例为来源的 DTO 的基类。"""

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_orm_model(cls, orm_obj: Any):
        """[防腐层] 从 SQLAlchemy ORM 实例安全地创建 DTO。"""
        return cls.model_validate(orm_obj, from_attributes=True)


class User(_OrmDTO):
    id: str
    email: str
    name: str
    permission_level: PermissionLevel
    created_at: datetime | None = None


class Document(_OrmDTO):
    """文档记录的 DTO。"""

    id: str
    title: str
    original_url: str
    source_lang: str
    target_lang: str
    status: DocumentStatus
    created_by: str
    category_id: str | None = None
    current_version_id: str | None = None
    estimated_length: int | None = None
    last_modified_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class DocumentVersion(_OrmDTO):
    """文档版本的 DTO。版本是只追加的不可变快照。"""

    id: str
    document_id: str
    version_number: int
    version_type: VersionType
    content: str
    is_final: bool
    created_by: str
    created_at: datetime | None = None


class TranslationTask(_OrmDTO):
    id: str
    document_id: str
    translator_id: str
    status: TaskStatus
    assigned_by: str | None = None
    started_at: datetime | None = None
    submitted_at: datetime | None = None
    last_activity_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_self_assigned(self) -> bool:
        return self.assigned_by is None


class Review(_OrmDTO):
    id: str
    document_id: str
    document_version_id: str
    reviewer_id: str
    status: ReviewStatus
    comment: str | None = None
    checklist: dict[str, bool] = Field(default_factory=dict)
    is_complete: bool = False
    reviewed_at: datetime | None = None
    final_approval_at: datetime | None = None
    published_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_published(self) -> bool:
        return self.published_at is not None


class Term(_OrmDTO):
    """术语表条目的 DTO。"""

    id: str
    source_term: str
    target_term: str
    source_lang: str
    target_lang: str
    created_by: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
