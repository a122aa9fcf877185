# src/transflow/presentation/api/__init__.py
"""基于 FastAPI 的 HTTP 接口。"""

from .app import create_app

__all__ = ["create_app"]
