# src/transflow/presentation/__init__.py
"""表示层：HTTP API 与命令行。"""
