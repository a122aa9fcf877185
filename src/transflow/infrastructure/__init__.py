# src/transflow/infrastructure/__init__.py
"""基础设施层：数据库、仓库、工作单元、锁与身份提供者。"""
