# src/transflow/infrastructure/persistence/repositories/__init__.py
"""
本包包含了所有 SQLAlchemy 仓库的具体实现，每个聚合一个仓库。
"""

from ._document_repo import SqlAlchemyDocumentRepository
from ._review_repo import SqlAlchemyReviewRepository
from ._task_repo import SqlAlchemyTaskRepository
from ._term_repo import SqlAlchemyTermRepository
from ._user_repo import SqlAlchemyUserRepository
from ._version_repo import SqlAlchemyVersionRepository

__all__ = [
    "SqlAlchemyDocumentRepository",
    "SqlAlchemyReviewRepository",
    "SqlAlchemyTaskRepository",
    "SqlAlchemyTermRepository",
    "SqlAlchemyUserRepository",
    "SqlAlchemyVersionRepository",
]
