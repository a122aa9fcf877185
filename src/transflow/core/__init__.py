# src/transflow/core/__init__.py
"""
Transflow 核心契约：类型、异常、外部协作方接口与 UoW 协议。
"""

from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    DatabaseError,
    ForbiddenError,
    InvalidStateError,
    LockAcquisitionError,
    NotFoundError,
    TransflowError,
    WorkflowError,
)
from .types import (
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

__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "ConflictError",
    "DatabaseError",
    "ForbiddenError",
    "InvalidStateError",
    "LockAcquisitionError",
    "NotFoundError",
    "TransflowError",
    "WorkflowError",
    "Document",
    "DocumentStatus",
    "DocumentVersion",
    "PermissionLevel",
    "Principal",
    "Review",
    "ReviewStatus",
    "TaskStatus",
    "Term",
    "TranslationTask",
    "User",
    "VersionType",
]
