# src/transflow/application/services/__init__.py
"""
应用服务层。

本模块包含所有具体的业务用例实现，每个服务对应一个组件。
"""

from ._document_lifecycle import DocumentLifecycleService
from ._document_scope import DocumentScope
from ._review_workflow import ReviewWorkflowService
from ._task_coordinator import TaskCoordinatorService
from ._term_dictionary import TermDictionaryService
from ._user_directory import UserDirectoryService
from ._version_ledger import VersionLedgerService

__all__ = [
    "DocumentLifecycleService",
    "DocumentScope",
    "ReviewWorkflowService",
    "TaskCoordinatorService",
    "TermDictionaryService",
    "UserDirectoryService",
    "VersionLedgerService",
]
