# src/transflow/observability/__init__.py
"""可观测性：日志配置。"""

from .logging_config import setup_logging

__all__ = ["setup_logging"]
