# src/transflow/infrastructure/persistence/__init__.py
"""持久化实现：基于 SQLAlchemy 的仓库。"""
