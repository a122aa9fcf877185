# src/transflow/presentation/cli/commands/users.py
"""
用户管理命令：注册用户并签发令牌、修改角色。
"""

from __future__ import annotations

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.panel import Panel

from transflow.core.exceptions import TransflowError
from transflow.core.types import PermissionLevel

from .._shared_options import LEVEL_OPTION
from .._state import CLISharedState
from .._utils import CLI_PRINCIPAL, get_coordinator, run_async

app = typer.Typer(help="用户与权限管理。", no_args_is_help=True)
console = Console()


@app.command("add")
def users_add(
    ctx: typer.Context,
    email: Annotated[str, typer.Argument(help="用户邮箱（唯一）。")],
    name: Annotated[str, typer.Argument(help="显示名称。")],
    level: LEVEL_OPTION = PermissionLevel.CONTRIBUTOR,
) -> None:
    """注册新用户。API 令牌只显示这一次。"""
    state: CLISharedState = ctx.obj

    async def _run():
        async with get_coordinator(state) as coordinator:
            return await coordinator.register_user(email, name, level)

    try:
        user, token = run_async(_run())
    except TransflowError as e:
        console.print(f"[bold red]❌ 注册失败: {e}[/bold red]")
        raise typer.Exit(code=1)

    console.print(
        Panel(
            f"用户 ID : {user.id}\n级别    : {user.permission_level.value}\n"
            f"API 令牌: [bold]{token}[/bold]",
            title="✅ 用户已注册",
            subtitle="令牌不会再次显示",
            border_style="green",
        )
    )


@app.command("set-role")
def users_set_role(
    ctx: typer.Context,
    level: LEVEL_OPTION,
    user_id: Annotated[Optional[str], typer.Option("--id", help="用户 ID。")] = None,
    email: Annotated[Optional[str], typer.Option("--email", help="用户邮箱。")] = None,
) -> None:
    """按用户 ID 或邮箱修改权限级别。"""
    state: CLISharedState = ctx.obj

    async def _run():
        async with get_coordinator(state) as coordinator:
            return await coordinator.change_role(
                CLI_PRINCIPAL, level, user_id=user_id, email=email
            )

    try:
        user = run_async(_run())
    except TransflowError as e:
        console.print(f"[bold red]❌ 修改角色失败: {e}[/bold red]")
        raise typer.Exit(code=1)
    console.print(
        f"[green]✅ {user.email} 的权限级别已改为 {user.permission_level.value}[/green]"
    )
