# src/transflow/presentation/cli/_shared_options.py
"""
CLI 共享参数定义。
使用 typing.Annotated 为可复用的选项提供统一的帮助文本与短名称。
"""

from __future__ import annotations

from typing import Annotated

import typer

from transflow.core.types import PermissionLevel

LEVEL_OPTION = Annotated[
    PermissionLevel,
    typer.Option("--level", "-l", case_sensitive=False, help="权限级别。"),
]

FORCE_OPTION = Annotated[
    bool, typer.Option("--force", help="迁移失败时，强制使用 ORM 建表兜底。")
]
