# src/transflow/infrastructure/db/_schema.py
"""
定义了与 Alembic 迁移完全对应的 SQLAlchemy ORM 模型。

约定：
- 主键为字符串 UUID，由 Python 端生成；
- 时间戳由 Python 端写入（包括 onupdate），避免提交后属性过期触发异步懒加载；
- 不声明 relationship，跨实体读取一律经由仓库显式查询。
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    TypeDecorator,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from transflow.core.types import (
    DocumentStatus,
    PermissionLevel,
    ReviewStatus,
    TaskStatus,
    VersionType,
)

from .base import Base

json_type = JSON().with_variant(JSONB(), "postgresql")


def _uuid() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    始终以 UTC aware datetime 进出数据库。

    SQLite 不保存时区，读回的值是 naive 的；这里统一补上 UTC，
    写入前把其他时区的值换算成 UTC。
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(
        self, value: datetime | None, dialect: Any
    ) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(
        self, value: datetime | None, dialect: Any
    ) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


def _enum(enum_cls: type, name: str) -> Enum:
    return Enum(enum_cls, name=name, native_enum=False, length=32, validate_strings=True)


class UserRow(Base):
    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True)
    name: Mapped[str] = mapped_column(String(255))
    permission_level: Mapped[PermissionLevel] = mapped_column(
        _enum(PermissionLevel, "permission_level")
    )
    api_token_sha256: Mapped[str | None] = mapped_column(
        String(64), unique=True, nullable=True, default=None
    )
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default_factory=_uuid)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default_factory=_utcnow, init=False
    )


class DocumentRow(Base):
    __tablename__ = "documents"

    title: Mapped[str] = mapped_column(String(255))
    original_url: Mapped[str] = mapped_column(String(500))
    source_lang: Mapped[str] = mapped_column(String(16))
    target_lang: Mapped[str] = mapped_column(String(16))
    created_by: Mapped[str] = mapped_column(ForeignKey("users.id"))
    status: Mapped[DocumentStatus] = mapped_column(
        _enum(DocumentStatus, "document_status"), default=DocumentStatus.DRAFT
    )
    category_id: Mapped[str | None] = mapped_column(
        String(64), nullable=True, default=None, index=True
    )
    # 弱引用：不建外键，避免与 document_versions 形成环
    current_version_id: Mapped[str | None] = mapped_column(
        String(36), nullable=True, default=None
    )
    estimated_length: Mapped[int | None] = mapped_column(
        Integer, nullable=True, default=None
    )
    last_modified_by: Mapped[str | None] = mapped_column(
        ForeignKey("users.id"), nullable=True, default=None
    )
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default_factory=_uuid)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default_factory=_utcnow, init=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default_factory=_utcnow, onupdate=_utcnow, init=False
    )

    __table_args__ = (Index("ix_documents_status", "status"),)


class VersionRow(Base):
    __tablename__ = "document_versions"

    document_id: Mapped[str] = mapped_column(
        ForeignKey("documents.id", ondelete="CASCADE")
    )
    version_number: Mapped[int] = mapped_column(Integer)
    version_type: Mapped[VersionType] = mapped_column(_enum(VersionType, "version_type"))
    content: Mapped[str] = mapped_column(Text)
    created_by: Mapped[str] = mapped_column(ForeignKey("users.id"))
    is_final: Mapped[bool] = mapped_column(Boolean, default=False)
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default_factory=_uuid)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default_factory=_utcnow, init=False
    )

    __table_args__ = (
        Index("ix_document_versions_document_number", "document_id", "version_number"),
        # 每个文档至多一个最终版本
        Index(
            "uq_document_versions_single_final",
            "document_id",
            unique=True,
            sqlite_where=text("is_final = 1"),
            postgresql_where=text("is_final IS TRUE"),
        ),
    )


class TaskRow(Base):
    __tablename__ = "translation_tasks"

    document_id: Mapped[str] = mapped_column(
        ForeignKey("documents.id", ondelete="CASCADE")
    )
    translator_id: Mapped[str] = mapped_column(ForeignKey("users.id"))
    assigned_by: Mapped[str | None] = mapped_column(
        ForeignKey("users.id"), nullable=True, default=None
    )
    status: Mapped[TaskStatus] = mapped_column(
        _enum(TaskStatus, "task_status"), default=TaskStatus.AVAILABLE
    )
    started_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(), nullable=True, default=None
    )
    submitted_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(), nullable=True, default=None
    )
    last_activity_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(), nullable=True, default=None
    )
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default_factory=_uuid)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default_factory=_utcnow, init=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default_factory=_utcnow, onupdate=_utcnow, init=False
    )

    __table_args__ = (
        UniqueConstraint(
            "document_id", "translator_id", name="uq_translation_tasks_document_translator"
        ),
        Index("ix_translation_tasks_document_status", "document_id", "status"),
    )


class ReviewRow(Base):
    __tablename__ = "reviews"

    document_id: Mapped[str] = mapped_column(
        ForeignKey("documents.id", ondelete="CASCADE")
    )
    document_version_id: Mapped[str] = mapped_column(
        ForeignKey("document_versions.id", ondelete="CASCADE")
    )
    reviewer_id: Mapped[str] = mapped_column(ForeignKey("users.id"))
    status: Mapped[ReviewStatus] = mapped_column(
        _enum(ReviewStatus, "review_status"), default=ReviewStatus.PENDING
    )
    comment: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    checklist: Mapped[dict[str, Any]] = mapped_column(json_type, default_factory=dict)
    is_complete: Mapped[bool] = mapped_column(Boolean, default=False)
    reviewed_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(), nullable=True, default=None
    )
    final_approval_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(), nullable=True, default=None
    )
    published_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(), nullable=True, default=None
    )
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default_factory=_uuid)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default_factory=_utcnow, init=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default_factory=_utcnow, onupdate=_utcnow, init=False
    )

    __table_args__ = (
        UniqueConstraint(
            "document_id", "document_version_id", name="uq_reviews_document_version"
        ),
    )


class TermRow(Base):
    __tablename__ = "terms"

    source_term: Mapped[str] = mapped_column(String(255))
    target_term: Mapped[str] = mapped_column(String(255))
    source_lang: Mapped[str] = mapped_column(String(16))
    target_lang: Mapped[str] = mapped_column(String(16))
    created_by: Mapped[str] = mapped_column(ForeignKey("users.id"))
    description: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default_factory=_uuid)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default_factory=_utcnow, init=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default_factory=_utcnow, onupdate=_utcnow, init=False
    )

    __table_args__ = (
        UniqueConstraint(
            "source_term", "source_lang", "target_lang", name="uq_terms_source_langs"
        ),
    )


__all__ = [
    "Base",
    "DocumentRow",
    "ReviewRow",
    "TaskRow",
    "TermRow",
    "UserRow",
    "VersionRow",
]
