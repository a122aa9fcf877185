# src/transflow/presentation/api/routes/__init__.py
"""API 路由模块，每个资源一个 APIRouter。"""

from . import admin, documents, health, reviews, tasks, terms, users, versions

ALL_ROUTERS = (
    health.router,
    documents.router,
    versions.router,
    tasks.router,
    reviews.router,
    terms.router,
    users.router,
    admin.router,
)

__all__ = ["ALL_ROUTERS"]
